"""Trip-level result models handed to the persistence layer."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from rfms_trip.models.driver_state import DriverState


class TripIssue(BaseModel):
    """A non-fatal condition met while computing one metric."""

    model_config = ConfigDict(frozen=True)

    category: str
    metric: str
    message: str


class ActivityDurations(BaseModel):
    """Exact seconds spent in each driver state between trip start and end.

    ``work`` is the raw WORK time; ``work_filtered`` only counts WORK
    segments longer than the configured minimum.
    """

    model_config = ConfigDict(frozen=True)

    drive: float = 0.0
    work: float = 0.0
    rest: float = 0.0
    available: float = 0.0
    not_available: float = 0.0
    error: float = 0.0
    unknown: float = 0.0
    work_filtered: float = 0.0

    @classmethod
    def from_state_seconds(
        cls, seconds: dict[DriverState, float], work_filtered: float = 0.0,
    ) -> ActivityDurations:
        return cls(
            **{state.value.lower(): seconds.get(state, 0.0) for state in DriverState},
            work_filtered=work_filtered,
        )

    def seconds(self, state: DriverState) -> float:
        return getattr(self, state.value.lower())

    @property
    def total(self) -> float:
        """Sum over all seven states (raw work, not filtered)."""
        return sum(self.seconds(state) for state in DriverState)


class CreditedMinutes(BaseModel):
    """One credited state per started minute of the trip."""

    model_config = ConfigDict(frozen=True)

    drive: int = 0
    work: int = 0
    rest: int = 0
    available: int = 0
    not_available: int = 0
    error: int = 0
    unknown: int = 0
    work_filtered: int = 0
    timeline: tuple[DriverState, ...] = ()

    def minutes(self, state: DriverState) -> int:
        return getattr(self, state.value.lower())

    @property
    def total(self) -> int:
        return sum(self.minutes(state) for state in DriverState)


class TellTaleCounts(BaseModel):
    """Distinct warning lights seen during the trip, by highest severity."""

    model_config = ConfigDict(frozen=True)

    red: int = 0
    yellow: int = 0


class DrivingBehavior(BaseModel):
    """Accumulated driving-style figures for the trip."""

    model_config = ConfigDict(frozen=True)

    idle_seconds: float = 0.0
    idle_fuel_ml: float = 0.0
    moving_seconds: float = 0.0
    moving_fuel_ml: float = 0.0
    cruise_control_distance_m: float = 0.0
    cruise_control_seconds: float = 0.0
    cruise_control_fuel_ml: float = 0.0
    pto_active_seconds: float = 0.0
    pto_fuel_ml: float = 0.0
    brake_pedal_count: int = 0
    brake_pedal_distance_m: float = 0.0
    harsh_acceleration_events: int = 0
    harsh_braking_events: int = 0
    coasting_seconds: float = 0.0


class DriveTimeTotals(BaseModel):
    """Cumulative per-driver, per-day seconds; adding two totals accumulates."""

    model_config = ConfigDict(frozen=True)

    driver_id: str
    drive_date: date
    drive_s: float = 0.0
    work_s: float = 0.0
    available_s: float = 0.0
    rest_s: float = 0.0

    @property
    def key(self) -> tuple[str, date]:
        return (self.driver_id, self.drive_date)

    def __add__(self, other: DriveTimeTotals) -> DriveTimeTotals:
        if not isinstance(other, DriveTimeTotals):
            return NotImplemented
        if other.key != self.key:
            raise ValueError(f"Cannot add drive times for {other.key} to {self.key}")
        return self.model_copy(
            update={
                "drive_s": self.drive_s + other.drive_s,
                "work_s": self.work_s + other.work_s,
                "available_s": self.available_s + other.available_s,
                "rest_s": self.rest_s + other.rest_s,
            },
        )


class TripMetrics(BaseModel):
    """Everything derived from one trip's telemetry."""

    model_config = ConfigDict(frozen=True)

    trip_id: str
    vin: str | None = None
    driver_id: str | None = None
    event_count: int = 0

    start_time: datetime | None = None
    end_time: datetime | None = None
    duration_seconds: float = 0.0
    duration_formatted: str = "00:00:00"

    distance_km: float = 0.0
    gps_distance_km: float = 0.0
    fuel_used_liters: float = 0.0
    avg_fuel_consumption_l_per_100km: float = 0.0
    co2_kg: float = 0.0
    top_speed_kmh: float = 0.0
    avg_moving_speed_kmh: float = 0.0

    activity: ActivityDurations = ActivityDurations()
    credited: CreditedMinutes = CreditedMinutes()
    tell_tales: TellTaleCounts = TellTaleCounts()
    behavior: DrivingBehavior = DrivingBehavior()

    start_odometer_m: float | None = None
    end_odometer_m: float | None = None
    start_fuel_level_pct: float | None = None
    end_fuel_level_pct: float | None = None

    issues: tuple[TripIssue, ...] = ()

    @classmethod
    def empty(cls, trip_id: str, issues: tuple[TripIssue, ...] = ()) -> TripMetrics:
        """Zeroed result for a trip without usable telemetry."""
        return cls(trip_id=trip_id, issues=issues)

    @property
    def has_red_tell_tale(self) -> bool:
        return self.tell_tales.red > 0

    def to_record(self) -> dict[str, Any]:
        """Flat, rounded mapping of the figures that get stored per trip."""
        return {
            "trip_id": self.trip_id,
            "vin": self.vin,
            "driver_id": self.driver_id,
            "distance_km": round(self.distance_km, 3),
            "gps_distance_km": round(self.gps_distance_km, 3),
            "duration": self.duration_formatted,
            "fuel_used_l": round(self.fuel_used_liters, 3),
            "fuel_usage_l_per_100km": round(self.avg_fuel_consumption_l_per_100km, 2),
            "co2_kg": round(self.co2_kg, 3),
            "drive_time_s": self.activity.drive,
            "idle_time_s": self.behavior.idle_seconds,
            "cruise_control_duration_s": self.behavior.cruise_control_seconds,
            "cruise_control_distance_m": self.behavior.cruise_control_distance_m,
            "cruise_control_fuel_ml": self.behavior.cruise_control_fuel_ml,
            "moving_duration_s": self.behavior.moving_seconds,
            "idle_fuel_ml": self.behavior.idle_fuel_ml,
            "moving_fuel_ml": self.behavior.moving_fuel_ml,
            "brake_pedal_count": self.behavior.brake_pedal_count,
            "brake_pedal_distance_m": self.behavior.brake_pedal_distance_m,
            "avg_driving_speed_kmh": round(self.avg_moving_speed_kmh, 3),
            "top_speed_kmh": round(self.top_speed_kmh, 2),
            "red_tell_tale": 1 if self.has_red_tell_tale else 0,
            "start_odometer_m": self.start_odometer_m,
            "end_odometer_m": self.end_odometer_m,
            "start_fuel_level_pct": self.start_fuel_level_pct,
            "end_fuel_level_pct": self.end_fuel_level_pct,
        }
