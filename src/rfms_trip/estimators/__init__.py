"""Trip metric estimators: pure functions over one trip's normalized events."""

from .behavior import count_harsh_events, driving_behavior
from .distance import distance_km, gps_distance_km, haversine_km, start_odometer_m
from .fuel import (
    DEFAULT_CO2_KG_PER_LITER,
    average_consumption_l_per_100km,
    co2_kg,
    fuel_used_liters,
    interval_fuel_ml,
    lifetime_fuel_delta_ml,
)
from .speed import average_moving_speed_kmh, moving_duration_seconds, top_speed_kmh
from .tell_tales import count_tell_tales

__all__ = [
    "DEFAULT_CO2_KG_PER_LITER",
    "average_consumption_l_per_100km",
    "average_moving_speed_kmh",
    "co2_kg",
    "count_harsh_events",
    "count_tell_tales",
    "distance_km",
    "driving_behavior",
    "fuel_used_liters",
    "gps_distance_km",
    "haversine_km",
    "interval_fuel_ml",
    "lifetime_fuel_delta_ml",
    "moving_duration_seconds",
    "start_odometer_m",
    "top_speed_kmh",
]
