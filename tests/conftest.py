"""Shared test fixtures and sample rFMS vehicle-status records."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from rfms_trip.models import TelemetryEvent

T0 = datetime(2024, 5, 6, 8, 0, 0, tzinfo=timezone.utc)
VIN = "YS2R4X20005399401"


SAMPLE_NESTED_STATUS = {
    "vin": VIN,
    "triggerType": {"triggerType": "TIMER", "context": "RFMS"},
    "createdDateTime": "2024-05-06T08:30:00Z",
    "receivedDateTime": "2024-05-06T08:30:02Z",
    "hrTotalVehicleDistance": 1050000,
    "engineTotalFuelUsed": 250500,
    "driver1Id": {
        "tachoDriverIdentification": {
            "driverIdentification": "NLD12345678901234",
            "cardIssuingMemberState": "NL",
        },
    },
    "accumulatedData": {
        "durationWheelbaseSpeedOverZero": 1700,
        "durationWheelbaseSpeedZero": 100,
        "fuelWheelbaseSpeedOverZero": 14000,
        "fuelWheelbaseSpeedZero": 400,
        "distanceCruiseControlActive": 30000,
        "durationCruiseControlActive": 1100,
        "fuelConsumptionDuringCruiseActive": 9000,
        "brakePedalCounterSpeedOverZero": 12,
        "distanceBrakePedalActiveSpeedOverZero": 350,
        "ptoActiveClass": [{"label": "WHEELBASED_SPEED_ZERO", "seconds": 60, "milliLitres": 100}],
        "accelerationClass": [
            {"from": -3.0, "to": -2.5, "seconds": 1.0},
            {"from": 2.5, "to": 3.0, "seconds": 0.8},
            {"from": 0.0, "to": 0.5, "seconds": 1500},
        ],
        "highAccelerationClass": [{"from": 3.0, "to": 3.5, "seconds": 0.4}],
        "drivingWithoutTorqueClass": [
            {"label": "DRIVING_WITHOUT_TORQUE", "seconds": 120, "meters": 2500},
        ],
    },
    "snapshotData": {
        "gnssPosition": {"latitude": 52.0907, "longitude": 5.1214, "heading": 90},
        "wheelBasedSpeed": 82.5,
        "tachographSpeed": 82.0,
        "fuelLevel1": 64.4,
        "driver1WorkingState": "DRIVE",
    },
    "uptimeData": {
        "tellTaleInfo": [
            {"tellTale": "ENGINE_OIL", "state": "YELLOW"},
            {"tellTale": "BRAKE_FAILURE", "state": "OFF"},
        ],
    },
}

SAMPLE_FLAT_STATUS = {
    "vin": VIN,
    "triggerType": "ENGINE_OFF",
    "createdDateTime": "2024-05-06 09:00:00",
    "hrTotalVehicleDistance": "1100000",
    "engineTotalFuelUsed": "251000",
    "fuelLevel1": "61.0",
    "driver1Id": "12345678901234",
    "driver1WorkingState": "REST",
    "GNSS_latitude": "52.3702",
    "GNSS_longitude": "4.8952",
    "wheelBasedSpeed": "0",
    "fuelWheelbasedSpeedZero": "50",
    "fuelWheelbasedSpeedOverZero": "0",
    "ptoActiveClass": '[{"label": "WHEELBASED_SPEED_ZERO", "seconds": 30, "milliLitres": 40}]',
    "accelerationClass": "",
    "tellTale": "ENGINE_OIL",
    "tellTale_State": "RED",
}


def _make_event(
    offset_s: float,
    trigger: str = "TIMER",
    state: str | None = None,
    **fields,
) -> TelemetryEvent:
    """Build an event *offset_s* seconds after T0."""
    return TelemetryEvent(
        timestamp=T0 + timedelta(seconds=offset_s),
        trigger=trigger,
        driver_state=state,
        vin=fields.pop("vin", VIN),
        **fields,
    )


@pytest.fixture
def make_event():
    """Factory fixture: make_event(offset_s, trigger="TIMER", state=None, **fields)."""
    return _make_event


@pytest.fixture
def scenario_events() -> list[TelemetryEvent]:
    """One-hour trip: 30 min DRIVE then 30 min REST, 100 km on the odometer."""
    return [
        _make_event(0, "ENGINE_ON", "DRIVE", odometer_m=1_000_000, total_fuel_used_ml=250_000,
                    fuel_level_pct=70.0, driver_id="12345678901234"),
        _make_event(1800, "TIMER", "REST", odometer_m=1_050_000, total_fuel_used_ml=265_000,
                    wheel_based_speed_kmh=95.0),
        _make_event(3600, "ENGINE_OFF", "REST", odometer_m=1_100_000, total_fuel_used_ml=280_000,
                    fuel_level_pct=62.0),
    ]
