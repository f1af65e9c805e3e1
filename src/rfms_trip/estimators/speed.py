"""Speed estimators."""

from __future__ import annotations

from rfms_trip.models.driver_state import INTERVAL_TRIGGERS
from rfms_trip.normalize import TripEvents


def top_speed_kmh(events: TripEvents) -> float:
    """Highest wheel-based speed (tachograph speed where wheel-based is absent)."""
    top = max((e.speed_kmh for e in events if e.speed_kmh is not None), default=0.0)
    return max(top, 0.0)


def moving_duration_seconds(events: TripEvents) -> float:
    """Seconds with wheel-based speed above zero, summed over interval events."""
    return sum(
        e.duration_speed_over_zero_s
        for e in events
        if e.trigger in INTERVAL_TRIGGERS and e.duration_speed_over_zero_s is not None
    )


def average_moving_speed_kmh(distance_km: float, moving_seconds: float) -> float:
    """Average speed while moving, or 0 if distance or moving time is zero."""
    if distance_km > 0 and moving_seconds > 0:
        return distance_km / (moving_seconds / 3600.0)
    return 0.0
