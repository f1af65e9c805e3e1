"""Tests for rfms_trip.crediting — per-minute credited activity."""

from __future__ import annotations

import math
from datetime import timedelta

import pytest

from rfms_trip.boundaries import resolve_boundaries
from rfms_trip.crediting import WindowScanner, credit_minutes, credit_window, filtered_work_minutes
from rfms_trip.models import DriverState
from rfms_trip.normalize import normalize_events
from rfms_trip.segmenter import segment_driver_states
from tests.conftest import T0

D, W, R, A, U = (
    DriverState.DRIVE,
    DriverState.WORK,
    DriverState.REST,
    DriverState.AVAILABLE,
    DriverState.UNKNOWN,
)


def _credit(events, **kwargs):
    trip = normalize_events(events)
    return credit_minutes(trip, resolve_boundaries(trip), **kwargs)


class TestCreditWindow:
    def test_majority_drive(self):
        assert credit_window({D: 31, W: 29}, W) is D

    def test_majority_work(self):
        assert credit_window({D: 10, W: 20, R: 30}, R) is W

    def test_tie_prefers_end_of_window_state(self):
        assert credit_window({D: 30, W: 30}, W) is W
        assert credit_window({D: 30, W: 30}, D) is D

    def test_tie_ending_in_other_state_defaults_to_drive(self):
        assert credit_window({D: 30, W: 30}, R) is D

    def test_other_state_with_most_seconds(self):
        assert credit_window({R: 20, A: 35, U: 5}, A) is A

    def test_other_state_below_threshold_still_credited_without_drive_or_work(self):
        assert credit_window({R: 5, U: 55}, U) is R

    def test_other_state_tie_follows_state_order(self):
        assert credit_window({R: 30, A: 30}, A) is R

    def test_only_unknown(self):
        assert credit_window({U: 60}, U) is U
        assert credit_window({}, U) is U


class TestWindowScanner:
    def test_tie_window_ending_in_work(self, make_event):
        trip = normalize_events([make_event(0, "ENGINE_ON", "DRIVE"), make_event(30, "TIMER", "WORK")])
        seconds, end_state = WindowScanner(trip, T0).window_seconds(T0 + timedelta(seconds=60))
        assert seconds[D] == 30.0
        assert seconds[W] == 30.0
        assert end_state is W
        assert credit_window(seconds, end_state) is W

    def test_event_on_window_end_belongs_to_next_window(self, make_event):
        trip = normalize_events([make_event(0, "ENGINE_ON", "DRIVE"), make_event(60, "TIMER", "REST")])
        scanner = WindowScanner(trip, T0)
        first, first_end = scanner.window_seconds(T0 + timedelta(seconds=60))
        second, second_end = scanner.window_seconds(T0 + timedelta(seconds=120))
        assert (first[D], first_end) == (60.0, D)
        assert (second[R], second_end) == (60.0, R)

    def test_windows_add_up_to_exact_durations(self, make_event):
        events = [
            make_event(0, "ENGINE_ON", "DRIVE"),
            make_event(45, "TIMER", "WORK"),
            make_event(130, "TIMER", "REST"),
            make_event(200, "TIMER", "DRIVE"),
            make_event(250, "ENGINE_OFF", "REST"),
        ]
        trip = normalize_events(events)
        bounds = resolve_boundaries(trip)
        scanner = WindowScanner(trip, bounds.start)
        totals = dict.fromkeys(DriverState, 0.0)
        for end_s in (60, 120, 180, 240, 250):
            seconds, _ = scanner.window_seconds(T0 + timedelta(seconds=end_s))
            for state, value in seconds.items():
                totals[state] += value
        activity = segment_driver_states(trip, bounds)
        for state in DriverState:
            assert totals[state] == pytest.approx(activity.seconds(state))


class TestCreditMinutes:
    def test_scenario(self, scenario_events):
        credited = _credit(scenario_events)
        assert credited.drive == 30
        assert credited.rest == 30
        assert credited.total == 60

    @pytest.mark.parametrize("span", [1, 59, 60, 61, 125, 3599.5])
    def test_total_is_started_minutes(self, make_event, span):
        credited = _credit([make_event(0, "ENGINE_ON", "DRIVE"), make_event(span, "ENGINE_OFF", "REST")])
        assert credited.total == math.ceil(span / 60)
        assert len(credited.timeline) == credited.total

    def test_tie_ending_in_rest_defaults_to_drive(self, make_event):
        credited = _credit([
            make_event(0, "ENGINE_ON", "DRIVE"),
            make_event(20, "TIMER", "WORK"),
            make_event(40, "TIMER", "REST"),
            make_event(60, "ENGINE_OFF", "REST"),
        ])
        assert credited.timeline == (D,)

    def test_truncated_last_window(self, make_event):
        credited = _credit([
            make_event(0, "ENGINE_ON", "DRIVE"),
            make_event(60, "TIMER", "REST"),
            make_event(70, "ENGINE_OFF", "REST"),
        ])
        # 10 s of REST in the last window is enough without DRIVE or WORK
        assert credited.timeline == (D, R)

    def test_filtered_work_runs(self, make_event):
        credited = _credit([
            make_event(0, "ENGINE_ON", "WORK"),
            make_event(60, "TIMER", "DRIVE"),
            make_event(120, "TIMER", "WORK"),
            make_event(300, "ENGINE_OFF", "REST"),
        ])
        assert credited.timeline == (W, D, W, W, W)
        assert credited.work == 4
        assert credited.work_filtered == 3

    def test_custom_run_length(self, make_event):
        credited = _credit(
            [make_event(0, "ENGINE_ON", "WORK"), make_event(120, "ENGINE_OFF", "REST")],
            min_work_run_minutes=3,
        )
        assert credited.work == 2
        assert credited.work_filtered == 0

    def test_empty(self):
        trip = normalize_events([])
        assert credit_minutes(trip, resolve_boundaries(trip)).total == 0


class TestFilteredWorkMinutes:
    def test_isolated_minutes_excluded(self):
        assert filtered_work_minutes((W, D, W, R, W, W), 2) == 2

    def test_trailing_run_counted(self):
        assert filtered_work_minutes((D, W, W, W), 2) == 3

    def test_no_work(self):
        assert filtered_work_minutes((D, R, U), 2) == 0
