"""Tests for rfms_trip.segmenter — exact per-state durations."""

from __future__ import annotations

from datetime import timedelta

import pytest

from rfms_trip.boundaries import TripBoundaries, resolve_boundaries
from rfms_trip.models import DriverState
from rfms_trip.normalize import normalize_events
from rfms_trip.segmenter import segment_driver_states, state_at
from tests.conftest import T0


def _segment(events, **kwargs):
    trip = normalize_events(events)
    return segment_driver_states(trip, resolve_boundaries(trip), **kwargs)


class TestSegmentDriverStates:
    def test_scenario_drive_then_rest(self, scenario_events):
        activity = _segment(scenario_events)
        assert activity.drive == pytest.approx(1800.0)
        assert activity.rest == pytest.approx(1800.0)
        assert activity.total == pytest.approx(3600.0)

    def test_time_belongs_to_previous_state(self, make_event):
        events = [
            make_event(0, "ENGINE_ON"),
            make_event(1800, "TIMER", "DRIVE"),
            make_event(3600, "ENGINE_OFF", "REST"),
        ]
        activity = _segment(events)
        assert activity.unknown == 1800.0
        assert activity.drive == 1800.0
        assert activity.rest == 0.0

    def test_short_work_blips_excluded_from_filtered(self, make_event):
        events = [
            make_event(0, "ENGINE_ON", "WORK"),
            make_event(30, "TIMER", "DRIVE"),
            make_event(600, "TIMER", "WORK"),
            make_event(700, "TIMER", "DRIVE"),
            make_event(1000, "ENGINE_OFF", "DRIVE"),
        ]
        activity = _segment(events)
        assert activity.work == 130.0
        assert activity.work_filtered == 100.0
        assert activity.drive == 870.0

    def test_work_segment_of_exactly_threshold_not_filtered(self, make_event):
        events = [
            make_event(0, "ENGINE_ON", "WORK"),
            make_event(60, "TIMER", "DRIVE"),
            make_event(120, "ENGINE_OFF", "DRIVE"),
        ]
        activity = _segment(events)
        assert activity.work == 60.0
        assert activity.work_filtered == 0.0

    def test_consecutive_work_events_form_one_segment(self, make_event):
        events = [
            make_event(0, "ENGINE_ON", "WORK"),
            make_event(40, "TIMER", "WORK"),
            make_event(80, "TIMER", "REST"),
            make_event(200, "ENGINE_OFF", "REST"),
        ]
        assert _segment(events).work_filtered == 80.0

    def test_trailing_work_segment_runs_to_end(self, make_event):
        events = [
            make_event(0, "ENGINE_ON", "DRIVE"),
            make_event(3000, "TIMER", "WORK"),
            make_event(3600, "ENGINE_OFF", "WORK"),
        ]
        activity = _segment(events)
        assert activity.work == 600.0
        assert activity.work_filtered == 600.0

    def test_custom_threshold(self, make_event):
        events = [
            make_event(0, "ENGINE_ON", "WORK"),
            make_event(45, "TIMER", "DRIVE"),
            make_event(100, "ENGINE_OFF", "DRIVE"),
        ]
        assert _segment(events, min_work_segment_seconds=30.0).work_filtered == 45.0

    def test_clipped_to_boundaries(self, make_event):
        events = [
            make_event(-300, "TIMER", "REST"),
            make_event(0, "ENGINE_ON", "DRIVE"),
            make_event(600, "ENGINE_OFF", "REST"),
            make_event(900, "TIMER", "WORK"),
        ]
        activity = _segment(events)
        assert activity.drive == 600.0
        assert activity.rest == 0.0
        assert activity.work == 0.0
        assert activity.total == 600.0

    def test_unmapped_state_is_unknown(self, make_event):
        events = [make_event(0, "ENGINE_ON", "SLEEPING"), make_event(60, "ENGINE_OFF")]
        assert _segment(events).unknown == 60.0

    def test_sum_matches_span_with_fractional_seconds(self, make_event):
        events = [
            make_event(0, "ENGINE_ON", "DRIVE"),
            make_event(12.5, "TIMER", "AVAILABLE"),
            make_event(70.25, "TIMER", "NOT_AVAILABLE"),
            make_event(99.75, "ENGINE_OFF", "ERROR"),
        ]
        activity = _segment(events)
        assert activity.total == pytest.approx(99.75)
        assert activity.available == pytest.approx(57.75)
        assert activity.not_available == pytest.approx(29.5)

    def test_empty_and_missing_boundaries(self, make_event):
        empty = normalize_events([])
        assert segment_driver_states(empty, None).total == 0.0
        trip = normalize_events([make_event(0, "ENGINE_ON", "DRIVE")])
        assert segment_driver_states(trip, None).total == 0.0
        zero_span = TripBoundaries(start=T0, end=T0)
        assert segment_driver_states(trip, zero_span).total == 0.0


class TestStateAt:
    def test_last_event_at_or_before(self, make_event):
        trip = normalize_events([
            make_event(0, "TIMER", "REST"),
            make_event(10, "TIMER", "DRIVE"),
            make_event(20, "TIMER", "WORK"),
        ])
        assert state_at(trip, T0 + timedelta(seconds=10)) == (DriverState.DRIVE, 2)
        assert state_at(trip, T0 + timedelta(seconds=15)) == (DriverState.DRIVE, 2)

    def test_before_first_event_uses_first_state(self, make_event):
        trip = normalize_events([make_event(10, "TIMER", "WORK")])
        assert state_at(trip, T0) == (DriverState.WORK, 0)
