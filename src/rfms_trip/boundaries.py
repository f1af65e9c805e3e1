"""Trip start/end resolution from engine markers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from rfms_trip.models.driver_state import TriggerType
from rfms_trip.normalize import TripEvents


@dataclass(frozen=True)
class TripBoundaries:
    start: datetime
    end: datetime

    @property
    def duration_seconds(self) -> float:
        return (self.end - self.start).total_seconds()


def resolve_boundaries(events: TripEvents) -> TripBoundaries | None:
    """Return the trip span, or None when there are no events.

    Start is the first ENGINE_ON event, else the first event. End is the
    last ENGINE_OFF event, else the last event. An ENGINE_OFF that sorts
    before the resolved start is ignored in favour of the last event.
    """
    if events.is_empty:
        return None

    start = next(
        (e.timestamp for e in events if e.trigger == TriggerType.ENGINE_ON),
        events[0].timestamp,
    )
    end = next(
        (e.timestamp for e in reversed(events) if e.trigger == TriggerType.ENGINE_OFF),
        events[-1].timestamp,
    )
    if end < start:
        end = max(start, events[-1].timestamp)
    return TripBoundaries(start=start, end=end)
