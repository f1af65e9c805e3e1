"""Fuel use, consumption and CO2 estimators."""

from __future__ import annotations

import logging

from rfms_trip.diagnostics import IssueCollector
from rfms_trip.exceptions import DataQualityWarning
from rfms_trip.models.driver_state import INTERVAL_TRIGGERS, TriggerType
from rfms_trip.normalize import TripEvents

logger = logging.getLogger(__name__)

DEFAULT_CO2_KG_PER_LITER = 2.65

_START_COUNTER_TRIGGERS = frozenset({TriggerType.ENGINE_ON, TriggerType.TIMER})
_END_COUNTER_TRIGGERS = frozenset({TriggerType.ENGINE_OFF, TriggerType.TIMER})


def interval_fuel_ml(events: TripEvents) -> tuple[float, bool]:
    """Sum interval fuel (stationary, moving and PTO) over interval-carrying events.

    Returns (total_ml, found) where *found* tells whether any interval fuel
    field was reported at all.
    """
    total = 0.0
    found = False
    for event in events:
        if event.trigger not in INTERVAL_TRIGGERS:
            continue
        for value in (event.fuel_speed_zero_ml, event.fuel_speed_over_zero_ml):
            if value is not None:
                found = True
                total += value
        for pto in event.pto_intervals:
            found = True
            total += pto.millilitres
    return total, found


def lifetime_fuel_delta_ml(
    events: TripEvents, issues: IssueCollector | None = None,
) -> float | None:
    """Lifetime fuel counter delta between the first and last relevant events.

    Returns None when either end is missing or the counter went backwards.
    """
    start = next(
        (
            e.total_fuel_used_ml for e in events
            if e.trigger in _START_COUNTER_TRIGGERS and e.total_fuel_used_ml is not None
        ),
        None,
    )
    end = next(
        (
            e.total_fuel_used_ml for e in reversed(events)
            if e.trigger in _END_COUNTER_TRIGGERS and e.total_fuel_used_ml is not None
        ),
        None,
    )

    if start is None or end is None:
        if issues is not None:
            issues.warn(
                DataQualityWarning, "fuel_used",
                "Could not determine start and/or end lifetime fuel values",
                start_fuel_ml=start, end_fuel_ml=end,
            )
        return None
    if end < start:
        if issues is not None:
            issues.warn(
                DataQualityWarning, "fuel_used",
                "End lifetime fuel is less than start lifetime fuel",
                start_fuel_ml=start, end_fuel_ml=end,
            )
        return None
    return end - start


def fuel_used_liters(events: TripEvents, issues: IssueCollector | None = None) -> float:
    """Fuel used during the trip in litres.

    Interval fuel fields are preferred; when they are absent or sum to zero
    the lifetime ``engineTotalFuelUsed`` counter delta is used instead.
    """
    if events.is_empty:
        return 0.0

    total_ml, found = interval_fuel_ml(events)
    if found and total_ml > 0:
        logger.debug("Trip %s: fuel from interval data: %.1f ml", events.trip_id, total_ml)
        return total_ml / 1000.0

    logger.debug(
        "Trip %s: interval fuel data missing or zero, falling back to lifetime counter",
        events.trip_id,
    )
    delta_ml = lifetime_fuel_delta_ml(events, issues)
    if delta_ml is None:
        return 0.0
    return delta_ml / 1000.0


def average_consumption_l_per_100km(fuel_liters: float, distance_km: float) -> float:
    """Litres per 100 km, or 0 when no distance was driven."""
    if distance_km > 0 and fuel_liters >= 0:
        return fuel_liters / distance_km * 100.0
    return 0.0


def co2_kg(fuel_liters: float, kg_per_liter: float = DEFAULT_CO2_KG_PER_LITER) -> float:
    """CO2 emitted for the given fuel volume."""
    return fuel_liters * kg_per_liter if fuel_liters > 0 else 0.0
