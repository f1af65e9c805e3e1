"""Mapping of rFMS vehicle-status records to telemetry events.

Accepts both the nested rFMS 3 ``vehicleStatus`` JSON and the flat row
layout used by the vehicle-status store (``GNSS_latitude``, JSON-encoded
class arrays, a single ``tellTale``/``tellTale_State`` pair).
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from rfms_trip.diagnostics import IssueCollector
from rfms_trip.exceptions import MalformedRecordError, MalformedRecordWarning
from rfms_trip.models.event import (
    AccelerationInterval,
    CoastingInterval,
    PtoInterval,
    TelemetryEvent,
    TellTale,
)

# rFMS spells accumulated fields "Wheelbase"; older stores use "Wheelbased"
_FLOAT_FIELDS: dict[str, tuple[str, ...]] = {
    "odometer_m": ("hrTotalVehicleDistance",),
    "total_fuel_used_ml": ("engineTotalFuelUsed",),
    "fuel_level_pct": ("fuelLevel1",),
    "fuel_speed_zero_ml": ("fuelWheelbasedSpeedZero", "fuelWheelbaseSpeedZero"),
    "fuel_speed_over_zero_ml": ("fuelWheelbasedSpeedOverZero", "fuelWheelbaseSpeedOverZero"),
    "duration_speed_zero_s": ("durationWheelbasedSpeedZero", "durationWheelbaseSpeedZero"),
    "duration_speed_over_zero_s": ("durationWheelbasedSpeedOverZero", "durationWheelbaseSpeedOverZero"),
    "cruise_control_distance_m": ("distanceCruiseControlActive",),
    "cruise_control_duration_s": ("durationCruiseControlActive",),
    "cruise_control_fuel_ml": ("fuelConsumptionDuringCruiseActive",),
    "brake_pedal_distance_speed_over_zero_m": ("distanceBrakePedalActiveSpeedOverZero",),
    "wheel_based_speed_kmh": ("wheelBasedSpeed",),
    "tachograph_speed_kmh": ("tachographSpeed",),
    "latitude": ("GNSS_latitude", "latitude"),
    "longitude": ("GNSS_longitude", "longitude"),
}

_NESTED_SECTIONS = ("snapshotData", "accumulatedData", "uptimeData")

# Tachograph card number inside driverIdentification, after the issuing-state prefix
DRIVER_ID_SLICE = slice(3, 17)


def _to_float(value: object) -> float:
    """Convert a numeric value or numeric string to a finite float."""
    if isinstance(value, bool):
        raise ValueError(f"boolean is not a number: {value!r}")
    result = float(value)  # type: ignore[arg-type]
    if not math.isfinite(result):
        raise ValueError(f"non-finite number: {value!r}")
    return result


def _flatten(record: Mapping[str, Any]) -> dict[str, Any]:
    """Lift nested rFMS sections to the top level next to the flat keys."""
    flat: dict[str, Any] = dict(record)
    for section in _NESTED_SECTIONS:
        nested = record.get(section)
        if isinstance(nested, Mapping):
            for key, value in nested.items():
                flat.setdefault(key, value)
    gnss = flat.get("gnssPosition")
    if isinstance(gnss, Mapping):
        flat.setdefault("latitude", gnss.get("latitude"))
        flat.setdefault("longitude", gnss.get("longitude"))
    return flat


def _text(
    value: object, field: str, issues: IssueCollector | None,
) -> str | None:
    """Return a stripped string; integers are accepted as their decimal form."""
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if issues is not None:
        issues.warn(MalformedRecordWarning, field, "Non-text field skipped", value=value)
    return None


def _lookup(flat: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = flat.get(key)
        if value is not None and value != "":
            return value
    return None


def parse_timestamp(value: object) -> datetime:
    """Parse an ISO 8601 / SQL datetime; naive values are left for the model to mark UTC."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise MalformedRecordError(f"Unparseable timestamp {value!r}") from exc
    raise MalformedRecordError(f"Missing or invalid timestamp {value!r}")


def extract_driver_id(value: object) -> str | None:
    """Return the normalized driver identifier from a ``driver1Id`` field.

    The nested form carries the full tachograph identification; the card
    number is the part after the three-character issuing-state prefix.
    A plain string is assumed to be normalized already.
    """
    if isinstance(value, Mapping):
        tacho = value.get("tachoDriverIdentification")
        if isinstance(tacho, Mapping):
            ident = tacho.get("driverIdentification")
            if isinstance(ident, str) and ident:
                return ident[DRIVER_ID_SLICE] or None
        return None
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _trigger_label(value: object) -> object:
    if isinstance(value, Mapping):
        return value.get("triggerType")
    return value


def _decode_list(
    value: object, key: str, issues: IssueCollector | None,
) -> list[Mapping[str, Any]]:
    """Return a list of dict entries from a JSON string or a list."""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            if issues is not None:
                issues.warn(MalformedRecordWarning, key, "Invalid JSON payload; entries skipped")
            return []
    if isinstance(value, Mapping):
        value = [value]
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, Mapping)]


def _entry_float(entry: Mapping[str, Any], key: str, default: float = 0.0) -> float:
    try:
        return _to_float(entry.get(key, default))
    except (TypeError, ValueError):
        return default


def _pto_intervals(flat: Mapping[str, Any], issues: IssueCollector | None) -> tuple[PtoInterval, ...]:
    return tuple(
        PtoInterval(
            label=_text(entry.get("label"), "ptoActiveClass", issues),
            seconds=_entry_float(entry, "seconds"),
            millilitres=_entry_float(entry, "milliLitres"),
        )
        for entry in _decode_list(flat.get("ptoActiveClass"), "ptoActiveClass", issues)
    )


def _acceleration_intervals(
    flat: Mapping[str, Any], key: str, issues: IssueCollector | None,
) -> tuple[AccelerationInterval, ...]:
    intervals = []
    for entry in _decode_list(flat.get(key), key, issues):
        to_value = entry.get("to")
        try:
            to = _to_float(to_value) if to_value is not None else None
        except (TypeError, ValueError):
            to = None
        intervals.append(
            AccelerationInterval(
                from_=_entry_float(entry, "from"),
                to=to,
                seconds=_entry_float(entry, "seconds"),
            ),
        )
    return tuple(intervals)


def _coasting_intervals(
    flat: Mapping[str, Any], issues: IssueCollector | None,
) -> tuple[CoastingInterval, ...]:
    return tuple(
        CoastingInterval(
            label=_text(entry.get("label"), "drivingWithoutTorqueClass", issues),
            seconds=_entry_float(entry, "seconds"),
            meters=_entry_float(entry, "meters"),
        )
        for entry in _decode_list(flat.get("drivingWithoutTorqueClass"), "drivingWithoutTorqueClass", issues)
    )


def _tell_tales(flat: Mapping[str, Any], issues: IssueCollector | None) -> tuple[TellTale, ...]:
    entries = _decode_list(flat.get("tellTaleInfo"), "tellTaleInfo", issues)
    if not entries and flat.get("tellTale") and flat.get("tellTale_State"):
        entries = [{"tellTale": flat["tellTale"], "state": flat["tellTale_State"]}]
    return tuple(
        TellTale(name=str(entry["tellTale"]), state=str(entry["state"]))
        for entry in entries
        if entry.get("tellTale") and entry.get("state")
    )


def from_rfms_status(
    record: Mapping[str, Any],
    issues: IssueCollector | None = None,
) -> TelemetryEvent:
    """Build a TelemetryEvent from one rFMS vehicle-status record.

    Args:
        record: Nested rFMS 3 status JSON or a flat status row.
        issues: Collector for fields that had to be skipped.

    Raises:
        MalformedRecordError: If the record has no usable ``createdDateTime``.
    """
    flat = _flatten(record)
    timestamp = parse_timestamp(flat.get("createdDateTime"))

    values: dict[str, Any] = {}
    for field, keys in _FLOAT_FIELDS.items():
        raw = _lookup(flat, keys)
        if raw is None:
            continue
        try:
            values[field] = _to_float(raw)
        except (TypeError, ValueError):
            if issues is not None:
                issues.warn(
                    MalformedRecordWarning, field, "Unparseable numeric field skipped",
                    value=raw, timestamp=timestamp.isoformat(),
                )

    brake_raw = _lookup(flat, ("brakePedalCounterSpeedOverZero",))
    if brake_raw is not None:
        try:
            values["brake_pedal_count_speed_over_zero"] = int(_to_float(brake_raw))
        except (TypeError, ValueError):
            if issues is not None:
                issues.warn(
                    MalformedRecordWarning, "brake_pedal_count_speed_over_zero",
                    "Unparseable numeric field skipped", value=brake_raw,
                )

    return TelemetryEvent(
        timestamp=timestamp,
        trigger=_trigger_label(flat.get("triggerType")),
        vin=_text(flat.get("vin"), "vin", issues),
        driver_id=extract_driver_id(flat.get("driver1Id")),
        driver_state=flat.get("driver1WorkingState"),
        pto_intervals=_pto_intervals(flat, issues),
        acceleration_intervals=_acceleration_intervals(flat, "accelerationClass", issues),
        high_acceleration_intervals=_acceleration_intervals(flat, "highAccelerationClass", issues),
        coasting_intervals=_coasting_intervals(flat, issues),
        tell_tales=_tell_tales(flat, issues),
        **values,
    )


def from_rfms_statuses(
    records: Iterable[Mapping[str, Any]],
    issues: IssueCollector | None = None,
) -> list[TelemetryEvent]:
    """Map a batch of records, skipping those that cannot form an event."""
    events: list[TelemetryEvent] = []
    for index, record in enumerate(records):
        try:
            events.append(from_rfms_status(record, issues))
        except MalformedRecordError as exc:
            if issues is not None:
                issues.warn(MalformedRecordWarning, "timestamp", f"Record skipped: {exc}", index=index)
        except ValidationError as exc:
            if issues is not None:
                issues.warn(
                    MalformedRecordWarning, "record",
                    f"Record skipped: {exc.error_count()} invalid field(s)", index=index,
                )
    return events
