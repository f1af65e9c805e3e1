"""Trip calculation service: runs every estimator over one trip's events."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import timezone
from typing import Any, TypeVar

from rfms_trip.boundaries import TripBoundaries, resolve_boundaries
from rfms_trip.config import TripCalcSettings
from rfms_trip.crediting import credit_minutes
from rfms_trip.diagnostics import IssueCollector
from rfms_trip.estimators import (
    average_consumption_l_per_100km,
    average_moving_speed_kmh,
    co2_kg,
    count_tell_tales,
    distance_km,
    driving_behavior,
    fuel_used_liters,
    gps_distance_km,
    moving_duration_seconds,
    top_speed_kmh,
)
from rfms_trip.exceptions import NoDataError, TripProcessingError
from rfms_trip.formatters import format_duration
from rfms_trip.log import log_calculation
from rfms_trip.models import (
    ActivityDurations,
    CreditedMinutes,
    DriveTimeTotals,
    DrivingBehavior,
    TelemetryEvent,
    TellTaleCounts,
    TripMetrics,
)
from rfms_trip.normalize import TripEvents, normalize_events
from rfms_trip.segmenter import segment_driver_states

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TripCalculator:
    """Computes the metrics of one trip at a time.

    Each metric is computed in isolation: an unexpected failure in one of
    them is logged, recorded as an issue and leaves that metric at zero,
    unless ``settings.fail_fast`` is set.
    """

    def __init__(self, settings: TripCalcSettings | None = None) -> None:
        self._settings = settings if settings is not None else TripCalcSettings()

    @property
    def settings(self) -> TripCalcSettings:
        return self._settings

    @log_calculation
    def distance(self, events: TripEvents, issues: IssueCollector | None = None) -> float:
        """Odometer distance in km."""
        return distance_km(events, issues)

    @log_calculation
    def gps_distance(self, events: TripEvents) -> float:
        """GNSS track length in km."""
        return gps_distance_km(events)

    @log_calculation
    def fuel_used(self, events: TripEvents, issues: IssueCollector | None = None) -> float:
        """Fuel used in litres."""
        return fuel_used_liters(events, issues)

    @log_calculation
    def top_speed(self, events: TripEvents) -> float:
        return top_speed_kmh(events)

    @log_calculation
    def moving_duration(self, events: TripEvents) -> float:
        return moving_duration_seconds(events)

    @log_calculation
    def tell_tales(self, events: TripEvents) -> TellTaleCounts:
        return count_tell_tales(events)

    @log_calculation
    def activity(self, events: TripEvents, boundaries: TripBoundaries | None) -> ActivityDurations:
        """Exact seconds per driver state."""
        return segment_driver_states(
            events, boundaries, self._settings.min_work_segment_seconds,
        )

    @log_calculation
    def credited(self, events: TripEvents, boundaries: TripBoundaries | None) -> CreditedMinutes:
        """Credited minutes per driver state."""
        return credit_minutes(
            events,
            boundaries,
            min_other_state_seconds=self._settings.min_other_state_seconds,
            min_work_run_minutes=self._settings.min_work_run_minutes,
        )

    @log_calculation
    def behavior(
        self,
        events: TripEvents,
        activity: ActivityDurations | None = None,
        issues: IssueCollector | None = None,
    ) -> DrivingBehavior:
        return driving_behavior(events, activity, issues)

    def _guarded(
        self,
        issues: IssueCollector,
        metric: str,
        default: T,
        fn: Callable[..., T],
        *args: Any,
    ) -> T:
        """Run one metric computation, isolating unexpected failures."""
        try:
            return fn(*args)
        except Exception as exc:
            if self._settings.fail_fast:
                raise TripProcessingError(issues.trip_id, metric, str(exc)) from exc
            issues.error(TripProcessingError, metric, f"{type(exc).__name__}: {exc}")
            return default

    @log_calculation
    def calculate(
        self,
        trip_id: str,
        events: Iterable[TelemetryEvent],
        driver_id: str | None = None,
    ) -> TripMetrics:
        """Compute every metric of one trip.

        An empty event set yields zeroed metrics carrying a NoDataError issue.
        """
        trip_events = normalize_events(events, trip_id)
        issues = IssueCollector(trip_id)

        if trip_events.is_empty:
            issues.warn(NoDataError, "events", "No telemetry events for trip")
            return TripMetrics.empty(trip_id, issues.issues)

        bounds = resolve_boundaries(trip_events)
        first, last = trip_events[0], trip_events[-1]

        distance = self._guarded(issues, "distance", 0.0, self.distance, trip_events, issues)
        gps_distance = self._guarded(issues, "gps_distance", 0.0, self.gps_distance, trip_events)
        fuel = self._guarded(issues, "fuel_used", 0.0, self.fuel_used, trip_events, issues)
        top_speed = self._guarded(issues, "top_speed", 0.0, self.top_speed, trip_events)
        moving = self._guarded(issues, "moving_duration", 0.0, self.moving_duration, trip_events)
        tell_tales = self._guarded(
            issues, "tell_tales", TellTaleCounts(), self.tell_tales, trip_events,
        )
        activity = self._guarded(
            issues, "activity", ActivityDurations(), self.activity, trip_events, bounds,
        )
        credited = self._guarded(
            issues, "credited_minutes", CreditedMinutes(), self.credited, trip_events, bounds,
        )
        behavior = self._guarded(
            issues, "behavior", DrivingBehavior(), self.behavior, trip_events, activity, issues,
        )

        duration = bounds.duration_seconds if bounds is not None else 0.0
        trip_driver = driver_id or next((e.driver_id for e in trip_events if e.driver_id), None)

        metrics = TripMetrics(
            trip_id=trip_id,
            vin=next((e.vin for e in trip_events if e.vin), None),
            driver_id=trip_driver,
            event_count=len(trip_events),
            start_time=bounds.start if bounds is not None else None,
            end_time=bounds.end if bounds is not None else None,
            duration_seconds=duration,
            duration_formatted=format_duration(duration),
            distance_km=distance,
            gps_distance_km=gps_distance,
            fuel_used_liters=fuel,
            avg_fuel_consumption_l_per_100km=average_consumption_l_per_100km(fuel, distance),
            co2_kg=co2_kg(fuel, self._settings.co2_kg_per_liter),
            top_speed_kmh=top_speed,
            avg_moving_speed_kmh=average_moving_speed_kmh(distance, moving),
            activity=activity,
            credited=credited,
            tell_tales=tell_tales,
            behavior=behavior,
            start_odometer_m=first.odometer_m,
            end_odometer_m=last.odometer_m,
            start_fuel_level_pct=first.fuel_level_pct,
            end_fuel_level_pct=last.fuel_level_pct,
            issues=issues.issues,
        )
        logger.info(
            "Trip %s: %d events, %.3f km, %.3f l, %s",
            trip_id, metrics.event_count, metrics.distance_km,
            metrics.fuel_used_liters, metrics.duration_formatted,
        )
        return metrics


def calculate_trip(
    trip_id: str,
    events: Iterable[TelemetryEvent],
    driver_id: str | None = None,
    settings: TripCalcSettings | None = None,
) -> TripMetrics:
    """Convenience wrapper around ``TripCalculator(settings).calculate``."""
    return TripCalculator(settings).calculate(trip_id, events, driver_id)


def drive_time_totals(metrics: TripMetrics) -> DriveTimeTotals | None:
    """Cumulative driver-time update for the day the trip started (UTC).

    Returns None when the trip has no driver or no start time.
    """
    if not metrics.driver_id or metrics.start_time is None:
        return None
    activity = metrics.activity
    return DriveTimeTotals(
        driver_id=metrics.driver_id,
        drive_date=metrics.start_time.astimezone(timezone.utc).date(),
        drive_s=activity.drive,
        work_s=activity.work_filtered,
        available_s=activity.available,
        rest_s=activity.rest,
    )
