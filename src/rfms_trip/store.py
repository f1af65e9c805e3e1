"""Persistence interface for the trip batch, plus an in-memory implementation."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime

from rfms_trip.models import DriveTimeTotals, TelemetryEvent, TripMetrics


@dataclass(frozen=True)
class TripRef:
    """A closed trip waiting for calculation."""

    trip_id: str
    vin: str
    start: datetime
    end: datetime


class TripStore(ABC):
    """Source-agnostic interface for trip reads and result writes."""

    @abstractmethod
    def pending_trips(self) -> list[TripRef]: ...

    @abstractmethod
    def get_events(self, trip: TripRef) -> list[TelemetryEvent]: ...

    @abstractmethod
    def save_trip_metrics(self, metrics: TripMetrics) -> None: ...

    @abstractmethod
    def add_drive_times(self, totals: DriveTimeTotals) -> None: ...

    @abstractmethod
    def mark_calculated(self, trip_id: str, note: str | None = None) -> None: ...


class InMemoryTripStore(TripStore):
    """Thread-safe store keeping trips, events and results in dictionaries."""

    def __init__(
        self,
        trips: Iterable[TripRef] = (),
        events: Iterable[TelemetryEvent] = (),
    ) -> None:
        self._lock = threading.Lock()
        self._trips: dict[str, TripRef] = {}
        self._events: dict[str, list[TelemetryEvent]] = defaultdict(list)
        self._metrics: dict[str, TripMetrics] = {}
        self._notes: dict[str, str | None] = {}
        self._drive_times: dict[tuple[str, date], DriveTimeTotals] = {}
        for trip in trips:
            self.add_trip(trip)
        self.add_events(events)

    def add_trip(self, trip: TripRef) -> None:
        with self._lock:
            self._trips[trip.trip_id] = trip

    def add_events(self, events: Iterable[TelemetryEvent]) -> None:
        with self._lock:
            for event in events:
                self._events[event.vin or ""].append(event)

    def pending_trips(self) -> list[TripRef]:
        """Uncalculated trips with a positive span, oldest first."""
        with self._lock:
            pending = [
                trip for trip in self._trips.values()
                if trip.trip_id not in self._notes and trip.start < trip.end
            ]
        return sorted(pending, key=lambda t: t.start)

    def get_events(self, trip: TripRef) -> list[TelemetryEvent]:
        with self._lock:
            events = [
                e for e in self._events.get(trip.vin, [])
                if trip.start <= e.timestamp <= trip.end
            ]
        return sorted(events, key=lambda e: e.timestamp)

    def save_trip_metrics(self, metrics: TripMetrics) -> None:
        with self._lock:
            self._metrics[metrics.trip_id] = metrics

    def add_drive_times(self, totals: DriveTimeTotals) -> None:
        """Insert the totals, or add them to the row already stored for that driver and day."""
        with self._lock:
            existing = self._drive_times.get(totals.key)
            self._drive_times[totals.key] = existing + totals if existing is not None else totals

    def mark_calculated(self, trip_id: str, note: str | None = None) -> None:
        with self._lock:
            self._notes[trip_id] = note

    def get_metrics(self, trip_id: str) -> TripMetrics | None:
        with self._lock:
            return self._metrics.get(trip_id)

    def get_note(self, trip_id: str) -> str | None:
        with self._lock:
            return self._notes.get(trip_id)

    def is_calculated(self, trip_id: str) -> bool:
        with self._lock:
            return trip_id in self._notes

    def get_drive_times(self, driver_id: str, drive_date: date) -> DriveTimeTotals | None:
        with self._lock:
            return self._drive_times.get((driver_id, drive_date))
