"""Batch driver: calculates pending trips one at a time."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from rfms_trip.calculator import TripCalculator, drive_time_totals
from rfms_trip.config import TripCalcSettings
from rfms_trip.log import configure_logging, log_batch_call
from rfms_trip.store import TripRef, TripStore

logger = logging.getLogger(__name__)

NO_DATA_NOTE = "No rFMS data"
MAX_NOTE_LENGTH = 255


@dataclass(frozen=True)
class BatchSummary:
    attempted: int = 0
    processed: int = 0
    no_data: int = 0
    failed: int = 0


def process_trip(store: TripStore, calculator: TripCalculator, trip: TripRef) -> bool:
    """Calculate and store one trip. Returns False when it had no events."""
    events = store.get_events(trip)
    if not events:
        logger.warning("Trip %s (%s): no telemetry in window", trip.trip_id, trip.vin)
        store.mark_calculated(trip.trip_id, NO_DATA_NOTE)
        return False

    metrics = calculator.calculate(trip.trip_id, events)
    store.save_trip_metrics(metrics)
    totals = drive_time_totals(metrics)
    if totals is not None:
        # metrics are saved by now, so the trip still counts as calculated
        try:
            store.add_drive_times(totals)
        except Exception:
            logger.exception(
                "Trip %s: drive times for driver %s on %s not stored",
                trip.trip_id, totals.driver_id, totals.drive_date,
            )
    store.mark_calculated(trip.trip_id)
    return True


@log_batch_call
def process_trips(
    store: TripStore,
    trips: Iterable[TripRef] | None = None,
    settings: TripCalcSettings | None = None,
) -> BatchSummary:
    """Process *trips* (default: the store's pending trips) independently.

    A trip that raises is marked with the error note and the batch goes on.
    """
    calculator = TripCalculator(settings)
    todo = list(trips) if trips is not None else store.pending_trips()
    logger.info("Trips to be calculated: %d", len(todo))

    attempted = processed = no_data = failed = 0
    for trip in todo:
        attempted += 1
        try:
            if process_trip(store, calculator, trip):
                processed += 1
            else:
                no_data += 1
        except Exception as exc:
            failed += 1
            logger.exception("Error processing trip %s", trip.trip_id)
            store.mark_calculated(trip.trip_id, f"Error: {exc}"[:MAX_NOTE_LENGTH])

    return BatchSummary(attempted=attempted, processed=processed, no_data=no_data, failed=failed)


def run_pending_trips(store: TripStore, settings: TripCalcSettings | None = None) -> BatchSummary:
    """Scheduled-job entry point: set up logging from *settings*, then process pending trips."""
    settings = settings if settings is not None else TripCalcSettings()
    configure_logging(settings.log_file, settings.log_level)
    return process_trips(store, settings=settings)
