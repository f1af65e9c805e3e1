"""Ordering of one trip's telemetry events."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, replace
from typing import overload

from rfms_trip.exceptions import NoDataError
from rfms_trip.models.event import TelemetryEvent


@dataclass(frozen=True)
class TripEvents(Sequence[TelemetryEvent]):
    """Immutable, timestamp-ordered events of a single trip."""

    events: tuple[TelemetryEvent, ...]
    trip_id: str = ""

    @overload
    def __getitem__(self, index: int) -> TelemetryEvent: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[TelemetryEvent, ...]: ...

    def __getitem__(self, index: int | slice) -> TelemetryEvent | tuple[TelemetryEvent, ...]:
        return self.events[index]

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[TelemetryEvent]:
        return iter(self.events)

    def __repr__(self) -> str:
        return f"TripEvents(trip_id={self.trip_id!r}, n={len(self.events)})"

    @property
    def is_empty(self) -> bool:
        return not self.events

    @property
    def first(self) -> TelemetryEvent | None:
        return self.events[0] if self.events else None

    @property
    def last(self) -> TelemetryEvent | None:
        return self.events[-1] if self.events else None

    def require_events(self) -> TripEvents:
        """Return self, or raise NoDataError if there are no events."""
        if not self.events:
            raise NoDataError(f"No telemetry events for trip {self.trip_id!r}")
        return self


def normalize_events(events: Iterable[TelemetryEvent], trip_id: str = "") -> TripEvents:
    """Sort events ascending by timestamp, keeping input order for equal timestamps."""
    if isinstance(events, TripEvents):
        if trip_id and trip_id != events.trip_id:
            return replace(events, trip_id=trip_id)
        return events
    return TripEvents(events=tuple(sorted(events, key=lambda e: e.timestamp)), trip_id=trip_id)
