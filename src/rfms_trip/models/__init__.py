"""Trip telemetry and result models."""

from rfms_trip.models.driver_state import INTERVAL_TRIGGERS, OTHER_STATES, DriverState, TriggerType
from rfms_trip.models.event import (
    AccelerationInterval,
    CoastingInterval,
    PtoInterval,
    TelemetryEvent,
    TellTale,
)
from rfms_trip.models.metrics import (
    ActivityDurations,
    CreditedMinutes,
    DrivingBehavior,
    DriveTimeTotals,
    TellTaleCounts,
    TripIssue,
    TripMetrics,
)

__all__ = [
    "INTERVAL_TRIGGERS",
    "OTHER_STATES",
    "AccelerationInterval",
    "ActivityDurations",
    "CoastingInterval",
    "CreditedMinutes",
    "DriverState",
    "DrivingBehavior",
    "DriveTimeTotals",
    "PtoInterval",
    "TelemetryEvent",
    "TellTale",
    "TellTaleCounts",
    "TriggerType",
    "TripIssue",
    "TripMetrics",
]
