"""
Vehicle Module
Locations, vehicle battery characteristics and the vehicle preset registry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from ev_trip_planner.geo.geo_utils import LatLon


@dataclass(frozen=True)
class Location:
    """A WGS-84 coordinate with an optional display name."""
    latitude: float
    longitude: float
    name: Optional[str] = None

    def as_tuple(self) -> LatLon:
        return (self.latitude, self.longitude)

    @classmethod
    def from_tuple(cls, point: LatLon, name: Optional[str] = None) -> "Location":
        return cls(latitude=point[0], longitude=point[1], name=name)


@dataclass(frozen=True)
class Vehicle:
    """
    Electric vehicle battery characteristics at the start of a trip.
    """
    battery_capacity_kwh: float = 135.0     # Rivian R1T pack
    efficiency_kwh_per_km: float = 0.18     # Average EV consumption
    current_battery_percent: float = 80.0   # State of charge (0-100)

    def __post_init__(self):
        if self.battery_capacity_kwh <= 0:
            raise ValueError(
                f"battery_capacity_kwh must be positive, got {self.battery_capacity_kwh}."
            )
        if self.efficiency_kwh_per_km <= 0:
            raise ValueError(
                f"efficiency_kwh_per_km must be positive, got {self.efficiency_kwh_per_km}."
            )
        if not 0.0 <= self.current_battery_percent <= 100.0:
            raise ValueError(
                f"current_battery_percent must be within 0-100, got {self.current_battery_percent}."
            )

    @property
    def current_energy_kwh(self) -> float:
        """Energy available right now."""
        return energy_at_percent(self.battery_capacity_kwh, self.current_battery_percent)

    @property
    def remaining_range_km(self) -> float:
        """Naive range on the current charge."""
        return estimate_range_km(self.current_energy_kwh, self.efficiency_kwh_per_km)


def energy_at_percent(capacity_kwh: float, percent: float) -> float:
    """Energy held by a pack of ``capacity_kwh`` at ``percent`` state of charge."""
    return capacity_kwh * (percent / 100.0)


def estimate_range_km(energy_kwh: float, efficiency_kwh_per_km: float) -> float:
    """Estimate remaining range at given consumption rate."""
    if efficiency_kwh_per_km <= 0:
        return float('inf')
    return energy_kwh / efficiency_kwh_per_km


@dataclass(frozen=True)
class VehiclePreset:
    """A known vehicle model used to pre-fill battery characteristics."""
    id: str
    display_name: str
    manufacturer: str
    model: str
    battery_capacity_kwh: float
    efficiency_kwh_per_km: float

    @property
    def range_km(self) -> float:
        """Range of a typical 80 % charge."""
        return self.battery_capacity_kwh * 0.8 / self.efficiency_kwh_per_km

    def to_vehicle(self, current_battery_percent: float = 80.0) -> Vehicle:
        return Vehicle(
            battery_capacity_kwh=self.battery_capacity_kwh,
            efficiency_kwh_per_km=self.efficiency_kwh_per_km,
            current_battery_percent=current_battery_percent,
        )


# ---------------------------------------------------------------------------
# Vehicle registry
# ---------------------------------------------------------------------------

VEHICLE_PRESETS: Dict[str, VehiclePreset] = {
    p.id: p for p in [
        VehiclePreset("rivian_r1t", "Rivian R1T", "Rivian", "R1T", 135.0, 0.18),
        VehiclePreset("rivian_r1s", "Rivian R1S", "Rivian", "R1S", 135.0, 0.19),
        VehiclePreset("tesla_model3", "Tesla Model 3", "Tesla", "Model 3", 75.0, 0.14),
        VehiclePreset("tesla_modely", "Tesla Model Y", "Tesla", "Model Y", 75.0, 0.16),
        VehiclePreset("tesla_models", "Tesla Model S", "Tesla", "Model S", 100.0, 0.17),
        VehiclePreset("ford_mache", "Ford Mustang Mach-E", "Ford", "Mustang Mach-E", 88.0, 0.17),
        VehiclePreset("chevy_bolt", "Chevrolet Bolt EV", "Chevrolet", "Bolt EV", 65.0, 0.15),
        VehiclePreset("hyundai_ioniq6", "Hyundai IONIQ 6", "Hyundai", "IONIQ 6", 77.4, 0.14),
        VehiclePreset("kia_ev6", "Kia EV6", "Kia", "EV6", 77.4, 0.15),
        VehiclePreset("porsche_taycan", "Porsche Taycan", "Porsche", "Taycan", 93.4, 0.20),
    ]
}

DEFAULT_PRESET_ID = "rivian_r1t"


def list_vehicle_presets() -> List[VehiclePreset]:
    """Presets in registry order."""
    return list(VEHICLE_PRESETS.values())


def get_vehicle_preset(preset_id: str) -> VehiclePreset:
    """Look up a preset by id, raising ``ValueError`` with the known ids."""
    try:
        return VEHICLE_PRESETS[preset_id]
    except KeyError:
        known = ", ".join(sorted(VEHICLE_PRESETS))
        raise ValueError(f"Unknown vehicle preset '{preset_id}'. Known presets: {known}.") from None
