"""Exact time spent in each driver state between trip start and end."""

from __future__ import annotations

from datetime import datetime

from rfms_trip.boundaries import TripBoundaries
from rfms_trip.models.driver_state import DriverState
from rfms_trip.models.metrics import ActivityDurations
from rfms_trip.normalize import TripEvents

DEFAULT_MIN_WORK_SEGMENT_SECONDS = 60.0


def state_at(events: TripEvents, moment: datetime) -> tuple[DriverState, int]:
    """State in effect at *moment* and the index of the first later event.

    The state is the one reported by the last event at or before *moment*;
    if every event is later, the first event's state is used.
    """
    index = 0
    while index < len(events) and events[index].timestamp <= moment:
        index += 1
    if index:
        return events[index - 1].driver_state, index
    if events.is_empty:
        return DriverState.UNKNOWN, 0
    return events[0].driver_state, 0


def segment_driver_states(
    events: TripEvents,
    boundaries: TripBoundaries | None,
    min_work_segment_seconds: float = DEFAULT_MIN_WORK_SEGMENT_SECONDS,
) -> ActivityDurations:
    """Accumulate exact seconds per driver state over ``[start, end]``.

    Each event's state holds until the next event (a step function), so
    the time between two events belongs to the earlier one. Contiguous
    WORK time also counts as filtered work when the segment lasts longer
    than *min_work_segment_seconds*. The per-state seconds always sum to
    the trip span.
    """
    if events.is_empty or boundaries is None or boundaries.end <= boundaries.start:
        return ActivityDurations()

    start, end = boundaries.start, boundaries.end
    seconds = dict.fromkeys(DriverState, 0.0)
    work_filtered = 0.0

    state, index = state_at(events, start)
    cursor = start
    work_since = start if state is DriverState.WORK else None

    def close_work_segment(until: datetime) -> None:
        nonlocal work_filtered, work_since
        if work_since is not None:
            segment = (until - work_since).total_seconds()
            if segment > min_work_segment_seconds:
                work_filtered += segment
            work_since = None

    for event in events[index:]:
        if event.timestamp >= end:
            break
        seconds[state] += (event.timestamp - cursor).total_seconds()
        cursor = event.timestamp

        new_state = event.driver_state
        if state is DriverState.WORK and new_state is not DriverState.WORK:
            close_work_segment(cursor)
        elif new_state is DriverState.WORK and state is not DriverState.WORK:
            work_since = cursor
        state = new_state

    seconds[state] += (end - cursor).total_seconds()
    if state is DriverState.WORK:
        close_work_segment(end)

    return ActivityDurations.from_state_seconds(seconds, work_filtered=work_filtered)
