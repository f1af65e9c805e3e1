"""Error and warning taxonomy for trip calculation."""

from __future__ import annotations


class TripCalcError(Exception):
    """Base exception for all trip calculation errors."""


class NoDataError(TripCalcError):
    """Raised when a trip has no telemetry events to work with."""


class MalformedRecordError(TripCalcError):
    """Raised when a raw status record cannot be turned into an event."""


class TripProcessingError(TripCalcError):
    """Raised when computing one metric of a trip fails unexpectedly."""

    def __init__(self, trip_id: str, metric: str, message: str) -> None:
        self.trip_id = trip_id
        self.metric = metric
        self.message = message
        super().__init__(f"trip {trip_id}: {metric}: {message}")


class TripCalcWarning(UserWarning):
    """Base category for non-fatal trip calculation conditions."""


class DataQualityWarning(TripCalcWarning):
    """Inconsistent counters or missing fields; a fallback value was used."""


class MalformedRecordWarning(DataQualityWarning):
    """A single field or record could not be parsed and was skipped."""
