"""Driving-style figures accumulated from interval and class data."""

from __future__ import annotations

from rfms_trip.diagnostics import IssueCollector
from rfms_trip.exceptions import DataQualityWarning
from rfms_trip.models.driver_state import INTERVAL_TRIGGERS
from rfms_trip.models.event import AccelerationInterval
from rfms_trip.models.metrics import ActivityDurations, DrivingBehavior
from rfms_trip.normalize import TripEvents

HARSH_ACCELERATION_MS2 = 2.5
HARSH_MIN_SECONDS = 0.5
HIGH_ACCELERATION_MS2 = 3.0
HIGH_MIN_SECONDS = 0.3
COASTING_LABEL = "DRIVING_WITHOUT_TORQUE"


def count_harsh_events(
    intervals: tuple[AccelerationInterval, ...],
    threshold: float,
    min_seconds: float,
) -> tuple[int, int]:
    """Return (accelerations, brakings) among bands that start beyond +/- threshold."""
    accelerations = brakings = 0
    for interval in intervals:
        if interval.seconds <= min_seconds:
            continue
        if interval.from_ >= threshold:
            accelerations += 1
        elif interval.from_ <= -threshold:
            brakings += 1
    return accelerations, brakings


def _add(total: float, value: float | None) -> float:
    return total + value if value is not None else total


def driving_behavior(
    events: TripEvents,
    activity: ActivityDurations | None = None,
    issues: IssueCollector | None = None,
) -> DrivingBehavior:
    """Accumulate idle, cruise, PTO, brake, harsh-event and coasting figures.

    Idle time is the sum of ``duration_speed_zero_s``. When no event reports
    that field, raw WORK seconds from *activity* stand in for it.
    """
    figures = dict.fromkeys(DrivingBehavior.model_fields, 0.0)
    idle_found = False
    brake_count = harsh_acc = harsh_brake = 0

    for event in events:
        # accumulated values cover the preceding interval only on these triggers
        if event.trigger not in INTERVAL_TRIGGERS:
            continue

        if event.duration_speed_zero_s is not None:
            idle_found = True
        figures["idle_seconds"] = _add(figures["idle_seconds"], event.duration_speed_zero_s)
        figures["idle_fuel_ml"] = _add(figures["idle_fuel_ml"], event.fuel_speed_zero_ml)
        figures["moving_seconds"] = _add(figures["moving_seconds"], event.duration_speed_over_zero_s)
        figures["moving_fuel_ml"] = _add(figures["moving_fuel_ml"], event.fuel_speed_over_zero_ml)
        figures["cruise_control_distance_m"] = _add(
            figures["cruise_control_distance_m"], event.cruise_control_distance_m,
        )
        figures["cruise_control_seconds"] = _add(
            figures["cruise_control_seconds"], event.cruise_control_duration_s,
        )
        figures["cruise_control_fuel_ml"] = _add(
            figures["cruise_control_fuel_ml"], event.cruise_control_fuel_ml,
        )
        figures["brake_pedal_distance_m"] = _add(
            figures["brake_pedal_distance_m"], event.brake_pedal_distance_speed_over_zero_m,
        )
        if event.brake_pedal_count_speed_over_zero is not None:
            brake_count += event.brake_pedal_count_speed_over_zero

        for pto in event.pto_intervals:
            figures["pto_active_seconds"] += pto.seconds
            figures["pto_fuel_ml"] += pto.millilitres

        acc, brk = count_harsh_events(
            event.acceleration_intervals, HARSH_ACCELERATION_MS2, HARSH_MIN_SECONDS,
        )
        high_acc, high_brk = count_harsh_events(
            event.high_acceleration_intervals, HIGH_ACCELERATION_MS2, HIGH_MIN_SECONDS,
        )
        harsh_acc += acc + high_acc
        harsh_brake += brk + high_brk

        for coast in event.coasting_intervals:
            if coast.label == COASTING_LABEL:
                figures["coasting_seconds"] += coast.seconds

    if not idle_found and not events.is_empty:
        fallback = activity.work if activity is not None else 0.0
        if issues is not None:
            issues.warn(
                DataQualityWarning, "idle_time",
                "durationWheelbasedSpeedZero never reported, using raw WORK time",
                fallback_s=fallback,
            )
        figures["idle_seconds"] = fallback

    figures["brake_pedal_count"] = brake_count
    figures["harsh_acceleration_events"] = harsh_acc
    figures["harsh_braking_events"] = harsh_brake
    return DrivingBehavior(**figures)
