"""rfms-trip — Trip metrics and driver activity from rFMS vehicle-status telemetry."""

from rfms_trip.batch import BatchSummary, process_trips, run_pending_trips
from rfms_trip.boundaries import TripBoundaries, resolve_boundaries
from rfms_trip.calculator import TripCalculator, calculate_trip, drive_time_totals
from rfms_trip.config import TripCalcSettings
from rfms_trip.crediting import credit_minutes, credit_window
from rfms_trip.exceptions import (
    DataQualityWarning,
    MalformedRecordError,
    MalformedRecordWarning,
    NoDataError,
    TripCalcError,
    TripCalcWarning,
    TripProcessingError,
)
from rfms_trip.log import configure_logging
from rfms_trip.mapping import from_rfms_status, from_rfms_statuses
from rfms_trip.models import DriverState, TelemetryEvent, TriggerType, TripMetrics
from rfms_trip.normalize import TripEvents, normalize_events
from rfms_trip.segmenter import segment_driver_states
from rfms_trip.store import InMemoryTripStore, TripRef, TripStore

__all__ = [
    "BatchSummary",
    "DataQualityWarning",
    "DriverState",
    "InMemoryTripStore",
    "MalformedRecordError",
    "MalformedRecordWarning",
    "NoDataError",
    "TelemetryEvent",
    "TriggerType",
    "TripBoundaries",
    "TripCalcError",
    "TripCalcSettings",
    "TripCalcWarning",
    "TripCalculator",
    "TripEvents",
    "TripMetrics",
    "TripProcessingError",
    "TripRef",
    "TripStore",
    "calculate_trip",
    "configure_logging",
    "credit_minutes",
    "credit_window",
    "drive_time_totals",
    "from_rfms_status",
    "from_rfms_statuses",
    "normalize_events",
    "process_trips",
    "run_pending_trips",
    "resolve_boundaries",
    "segment_driver_states",
]

__version__ = "0.1.0"
