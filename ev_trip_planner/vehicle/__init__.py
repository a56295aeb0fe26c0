"""vehicle – locations, vehicle characteristics, presets and the battery model."""

from .vehicle import (
    DEFAULT_PRESET_ID,
    VEHICLE_PRESETS,
    Location,
    Vehicle,
    VehiclePreset,
    energy_at_percent,
    estimate_range_km,
    get_vehicle_preset,
    list_vehicle_presets,
)
from .battery import BatteryLevel, BatteryState, evaluate_battery, required_energy_kwh

__all__ = [
    "DEFAULT_PRESET_ID", "VEHICLE_PRESETS", "Location", "Vehicle", "VehiclePreset",
    "energy_at_percent", "estimate_range_km", "get_vehicle_preset", "list_vehicle_presets",
    "BatteryLevel", "BatteryState", "evaluate_battery", "required_energy_kwh",
]
