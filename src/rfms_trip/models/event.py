"""Vehicle status telemetry event model."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rfms_trip.models.driver_state import DriverState, TriggerType


class PtoInterval(BaseModel):
    """Power take-off activity accumulated since the previous message."""

    model_config = ConfigDict(frozen=True)

    label: str | None = None
    seconds: float = 0.0
    millilitres: float = 0.0


class AccelerationInterval(BaseModel):
    """Time spent in one acceleration band (m/s2)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: float = Field(default=0.0, alias="from")
    to: float | None = None
    seconds: float = 0.0


class CoastingInterval(BaseModel):
    """Driving-without-torque class entry."""

    model_config = ConfigDict(frozen=True)

    label: str | None = None
    seconds: float = 0.0
    meters: float = 0.0


class TellTale(BaseModel):
    """Warning light with its reported state (RED, YELLOW, GREEN, OFF...)."""

    model_config = ConfigDict(frozen=True)

    name: str
    state: str

    @field_validator("state", mode="before")
    @classmethod
    def _upper_state(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value


class TelemetryEvent(BaseModel):
    """One vehicle status sample belonging to a single trip."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    trigger: TriggerType = TriggerType.OTHER

    vin: str | None = None
    driver_id: str | None = None
    driver_state: DriverState = DriverState.UNKNOWN

    # Lifetime counters
    odometer_m: float | None = None
    total_fuel_used_ml: float | None = None
    fuel_level_pct: float | None = None

    # Interval values since the previous message
    fuel_speed_zero_ml: float | None = None
    fuel_speed_over_zero_ml: float | None = None
    duration_speed_zero_s: float | None = None
    duration_speed_over_zero_s: float | None = None
    cruise_control_distance_m: float | None = None
    cruise_control_duration_s: float | None = None
    cruise_control_fuel_ml: float | None = None
    brake_pedal_count_speed_over_zero: int | None = None
    brake_pedal_distance_speed_over_zero_m: float | None = None

    # Snapshot values
    wheel_based_speed_kmh: float | None = None
    tachograph_speed_kmh: float | None = None
    latitude: float | None = None
    longitude: float | None = None

    pto_intervals: tuple[PtoInterval, ...] = ()
    acceleration_intervals: tuple[AccelerationInterval, ...] = ()
    high_acceleration_intervals: tuple[AccelerationInterval, ...] = ()
    coasting_intervals: tuple[CoastingInterval, ...] = ()
    tell_tales: tuple[TellTale, ...] = ()

    @field_validator("timestamp")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_validator("trigger", mode="before")
    @classmethod
    def _parse_trigger(cls, value: object) -> TriggerType:
        return TriggerType.parse(value)

    @field_validator("driver_state", mode="before")
    @classmethod
    def _parse_state(cls, value: object) -> DriverState:
        return DriverState.parse(value)

    @field_validator("driver_id", mode="before")
    @classmethod
    def _blank_driver_id(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def speed_kmh(self) -> float | None:
        """Wheel-based speed, falling back to tachograph speed."""
        if self.wheel_based_speed_kmh is not None:
            return self.wheel_based_speed_kmh
        return self.tachograph_speed_kmh

    @property
    def position(self) -> tuple[float, float] | None:
        """(latitude, longitude), or None if either is missing."""
        if self.latitude is None or self.longitude is None:
            return None
        return (self.latitude, self.longitude)
