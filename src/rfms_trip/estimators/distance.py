"""Distance estimators: odometer delta and GNSS track integration."""

from __future__ import annotations

import math

from rfms_trip.diagnostics import IssueCollector
from rfms_trip.exceptions import DataQualityWarning
from rfms_trip.models.driver_state import TriggerType
from rfms_trip.normalize import TripEvents

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometres."""
    lat1_rad, lat2_rad = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def start_odometer_m(events: TripEvents) -> float | None:
    """Odometer of the last ENGINE_ON event that reports one, else the first event's."""
    start = None
    for event in events:
        if event.trigger == TriggerType.ENGINE_ON and event.odometer_m is not None:
            start = event.odometer_m
    if start is None and events.first is not None:
        start = events.first.odometer_m
    return start


def distance_km(events: TripEvents, issues: IssueCollector | None = None) -> float:
    """Driven distance from the odometer delta, or 0 if the counters are unusable."""
    if events.is_empty:
        return 0.0

    start = start_odometer_m(events)
    end = events.last.odometer_m  # type: ignore[union-attr]

    if start is not None and end is not None and end >= start:
        return (end - start) / 1000.0

    if issues is not None:
        issues.warn(
            DataQualityWarning, "distance",
            "Could not determine valid start/end odometer for distance",
            start_odo=start, end_odo=end,
        )
    return 0.0


def gps_distance_km(events: TripEvents) -> float:
    """Sum of great-circle hops between consecutive distinct GNSS positions."""
    total = 0.0
    previous: tuple[float, float] | None = None

    for event in events:
        current = event.position
        if current is None:
            continue
        if previous is not None and current != previous:
            total += haversine_km(previous[0], previous[1], current[0], current[1])
        previous = current

    return total
