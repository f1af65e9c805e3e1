"""Per-minute credited driver activity.

The trip span is cut into 60-second windows starting at the trip start
(the last one truncated at the trip end). Each window is credited to one
state:

1. DRIVE if it holds more DRIVE than WORK seconds.
2. WORK if it holds more WORK than DRIVE seconds.
3. On a non-zero DRIVE/WORK tie, the state active at the end of the window
   when that is DRIVE or WORK, otherwise DRIVE.
4. Without DRIVE/WORK time, the other state with the most seconds, if it
   has at least the minimum (58 s) or simply any seconds at all.
5. UNKNOWN otherwise.
"""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta

from rfms_trip.boundaries import TripBoundaries
from rfms_trip.models.driver_state import OTHER_STATES, DriverState
from rfms_trip.models.metrics import CreditedMinutes
from rfms_trip.normalize import TripEvents
from rfms_trip.segmenter import state_at

MINUTE = timedelta(seconds=60)
DEFAULT_MIN_OTHER_STATE_SECONDS = 58.0
DEFAULT_MIN_WORK_RUN_MINUTES = 2


class WindowScanner:
    """Forward-only scan of the events over consecutive time windows.

    The event cursor only moves forward, so scanning all windows of a trip
    is linear in the number of events plus windows.
    """

    def __init__(self, events: TripEvents, start: datetime) -> None:
        self._events = events
        self._state, self._index = state_at(events, start)
        self._pointer = start

    def window_seconds(self, window_end: datetime) -> tuple[dict[DriverState, float], DriverState]:
        """Seconds per state from the previous window end up to *window_end*.

        Also returns the state in effect during the last instant of the
        window, i.e. after every event strictly before *window_end*.
        """
        seconds = dict.fromkeys(DriverState, 0.0)
        events = self._events

        while self._index < len(events) and events[self._index].timestamp < window_end:
            event = events[self._index]
            if event.timestamp > self._pointer:
                seconds[self._state] += (event.timestamp - self._pointer).total_seconds()
                self._pointer = event.timestamp
            self._state = event.driver_state
            self._index += 1

        if window_end > self._pointer:
            seconds[self._state] += (window_end - self._pointer).total_seconds()
            self._pointer = window_end
        return seconds, self._state


def credit_window(
    seconds: dict[DriverState, float],
    end_state: DriverState,
    min_other_state_seconds: float = DEFAULT_MIN_OTHER_STATE_SECONDS,
) -> DriverState:
    """Pick the credited state for one window."""
    drive = seconds.get(DriverState.DRIVE, 0.0)
    work = seconds.get(DriverState.WORK, 0.0)

    if drive > work:
        return DriverState.DRIVE
    if work > drive:
        return DriverState.WORK
    if drive > 0:
        if end_state in (DriverState.DRIVE, DriverState.WORK):
            return end_state
        return DriverState.DRIVE

    best_state: DriverState | None = None
    best = 0.0
    for state in OTHER_STATES:
        if seconds.get(state, 0.0) > best:
            best_state, best = state, seconds[state]

    if best_state is not None and (
        best >= min_other_state_seconds or (drive == 0 and work == 0)
    ):
        return best_state
    return DriverState.UNKNOWN


def filtered_work_minutes(timeline: tuple[DriverState, ...], min_run: int) -> int:
    """Minutes in runs of consecutive WORK credits at least *min_run* long."""
    total = 0
    for state, run in itertools.groupby(timeline):
        if state is DriverState.WORK:
            length = sum(1 for _ in run)
            if length >= min_run:
                total += length
    return total


def credit_minutes(
    events: TripEvents,
    boundaries: TripBoundaries | None,
    min_other_state_seconds: float = DEFAULT_MIN_OTHER_STATE_SECONDS,
    min_work_run_minutes: int = DEFAULT_MIN_WORK_RUN_MINUTES,
) -> CreditedMinutes:
    """Credit one state to every started minute of the trip."""
    if events.is_empty or boundaries is None or boundaries.end <= boundaries.start:
        return CreditedMinutes()

    scanner = WindowScanner(events, boundaries.start)
    timeline: list[DriverState] = []

    window_start = boundaries.start
    while window_start < boundaries.end:
        window_end = min(window_start + MINUTE, boundaries.end)
        seconds, end_state = scanner.window_seconds(window_end)
        timeline.append(credit_window(seconds, end_state, min_other_state_seconds))
        window_start = window_end

    counts = {state: timeline.count(state) for state in DriverState}
    return CreditedMinutes(
        **{state.value.lower(): counts[state] for state in DriverState},
        work_filtered=filtered_work_minutes(tuple(timeline), min_work_run_minutes),
        timeline=tuple(timeline),
    )
