"""Basic usage examples for the rFMS trip calculator."""

from datetime import datetime, timezone

from rfms_trip import (
    InMemoryTripStore,
    TripCalcSettings,
    TripRef,
    calculate_trip,
    from_rfms_statuses,
    run_pending_trips,
)
from rfms_trip.diagnostics import IssueCollector
from rfms_trip.formatters import format_minutes

VIN = "YS2R4X20005399401"

STATUSES = [
    {
        "vin": VIN,
        "triggerType": {"triggerType": "ENGINE_ON"},
        "createdDateTime": "2024-05-06T08:00:00Z",
        "hrTotalVehicleDistance": 1_000_000,
        "engineTotalFuelUsed": 250_000,
        "driver1Id": {"tachoDriverIdentification": {"driverIdentification": "NLD12345678901234"}},
        "snapshotData": {"driver1WorkingState": "WORK", "fuelLevel1": 70.0},
    },
    {
        "vin": VIN,
        "triggerType": {"triggerType": "TIMER"},
        "createdDateTime": "2024-05-06T08:05:00Z",
        "hrTotalVehicleDistance": 1_001_000,
        "snapshotData": {"driver1WorkingState": "DRIVE", "wheelBasedSpeed": 42.0},
    },
    {
        "vin": VIN,
        "triggerType": {"triggerType": "TIMER"},
        "createdDateTime": "2024-05-06T08:35:00Z",
        "hrTotalVehicleDistance": 1_045_000,
        "engineTotalFuelUsed": 264_000,
        "snapshotData": {
            "driver1WorkingState": "REST",
            "wheelBasedSpeed": 88.5,
            "gnssPosition": {"latitude": 52.37, "longitude": 4.89},
        },
        "uptimeData": {"tellTaleInfo": [{"tellTale": "ENGINE_OIL", "state": "YELLOW"}]},
    },
    {
        "vin": VIN,
        "triggerType": {"triggerType": "ENGINE_OFF"},
        "createdDateTime": "2024-05-06T09:00:00Z",
        "hrTotalVehicleDistance": 1_046_000,
        "engineTotalFuelUsed": 265_000,
        "snapshotData": {
            "driver1WorkingState": "REST",
            "fuelLevel1": 66.0,
            "gnssPosition": {"latitude": 52.09, "longitude": 5.12},
        },
    },
]


def main() -> None:
    settings = TripCalcSettings(co2_kg_per_liter=2.64)

    # Map raw rFMS records and calculate one trip
    print("=== Single trip ===")
    issues = IssueCollector("T-1001")
    events = from_rfms_statuses(STATUSES, issues)
    metrics = calculate_trip("T-1001", events, settings=settings)
    print(f"  Duration:     {metrics.duration_formatted}")
    print(f"  Distance:     {metrics.distance_km:.1f} km (GPS {metrics.gps_distance_km:.1f} km)")
    print(f"  Fuel:         {metrics.fuel_used_liters:.1f} l "
          f"({metrics.avg_fuel_consumption_l_per_100km:.1f} l/100km, {metrics.co2_kg:.1f} kg CO2)")
    print(f"  Top speed:    {metrics.top_speed_kmh:.1f} km/h")
    print(f"  Tell-tales:   {metrics.tell_tales.red} red, {metrics.tell_tales.yellow} yellow")

    print("\n=== Driver activity ===")
    credited = metrics.credited
    print(f"  Drive: {format_minutes(credited.drive)}  Work: {format_minutes(credited.work)}  "
          f"Rest: {format_minutes(credited.rest)}  Unknown: {format_minutes(credited.unknown)}")
    for issue in metrics.issues:
        print(f"  ! {issue.category} [{issue.metric}] {issue.message}")

    # Run the batch; logging follows RFMS_TRIP_LOG_LEVEL and RFMS_TRIP_LOG_FILE
    print("\n=== Batch ===")
    trip = TripRef(
        trip_id="T-1001",
        vin=VIN,
        start=datetime(2024, 5, 6, 8, 0, tzinfo=timezone.utc),
        end=datetime(2024, 5, 6, 9, 0, tzinfo=timezone.utc),
    )
    store = InMemoryTripStore(trips=[trip], events=events)
    summary = run_pending_trips(store, settings)
    print(f"  {summary}")
    print(f"  Stored record: {store.get_metrics('T-1001').to_record()}")


if __name__ == "__main__":
    main()
