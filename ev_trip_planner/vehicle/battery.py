"""
Battery / energy model.

Turns a vehicle's state of charge (and optionally a route) into the
numbers the planner and the UI rely on: current energy, naive range,
whether the destination is reachable, the energy deficit and a naive
estimate of how many charges the trip needs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from .vehicle import Vehicle, energy_at_percent, estimate_range_km

if TYPE_CHECKING:
    from ev_trip_planner.routing.route import Route

# Each charge in the naive estimate restores this share of full capacity
ENERGY_PER_CHARGE_FRACTION = 0.80


class BatteryLevel(Enum):
    """Coarse state-of-charge bucket used for colour coding."""
    HIGH = auto()       # >= 60 %
    MEDIUM = auto()     # 30-59 %
    LOW = auto()        # 15-29 %
    CRITICAL = auto()   # < 15 %


@dataclass(frozen=True)
class BatteryState:
    """
    Battery status for a vehicle, optionally against a planned route.

    Route-specific fields are ``None`` (or 0 / False) when no route was
    supplied.  ``can_reach_destination`` is only meaningful when
    ``required_energy_kwh`` is set.
    """
    battery_capacity_kwh: float
    current_battery_percent: float
    efficiency_kwh_per_km: float
    current_energy_kwh: float
    remaining_range_km: float
    required_energy_kwh: Optional[float] = None
    route_distance_km: Optional[float] = None
    can_reach_destination: bool = False
    energy_deficit_kwh: Optional[float] = None
    number_of_charges_needed: int = 0
    percentage_used_for_route: Optional[float] = None

    @property
    def has_route(self) -> bool:
        return self.required_energy_kwh is not None

    @property
    def battery_level(self) -> BatteryLevel:
        if self.current_battery_percent >= 60:
            return BatteryLevel.HIGH
        if self.current_battery_percent >= 30:
            return BatteryLevel.MEDIUM
        if self.current_battery_percent >= 15:
            return BatteryLevel.LOW
        return BatteryLevel.CRITICAL


def required_energy_kwh(route: Route, vehicle: Vehicle) -> float:
    """Energy needed to drive the whole route."""
    return route.distance_km * vehicle.efficiency_kwh_per_km


def evaluate_battery(vehicle: Vehicle, route: Optional[Route] = None) -> BatteryState:
    """
    Compute the battery state of ``vehicle``, optionally against ``route``.

    Pure function: no I/O, deterministic for identical inputs.
    """
    current_energy = energy_at_percent(
        vehicle.battery_capacity_kwh, vehicle.current_battery_percent
    )
    remaining_range = estimate_range_km(current_energy, vehicle.efficiency_kwh_per_km)

    base = dict(
        battery_capacity_kwh=vehicle.battery_capacity_kwh,
        current_battery_percent=vehicle.current_battery_percent,
        efficiency_kwh_per_km=vehicle.efficiency_kwh_per_km,
        current_energy_kwh=current_energy,
        remaining_range_km=remaining_range,
    )

    if route is None:
        return BatteryState(**base)

    required = required_energy_kwh(route, vehicle)
    percentage_used = required / vehicle.battery_capacity_kwh * 100.0

    if current_energy >= required:
        return BatteryState(
            **base,
            required_energy_kwh=required,
            route_distance_km=route.distance_km,
            can_reach_destination=True,
            percentage_used_for_route=percentage_used,
        )

    deficit = required - current_energy
    energy_per_charge = vehicle.battery_capacity_kwh * ENERGY_PER_CHARGE_FRACTION
    return BatteryState(
        **base,
        required_energy_kwh=required,
        route_distance_km=route.distance_km,
        can_reach_destination=False,
        energy_deficit_kwh=deficit,
        number_of_charges_needed=math.ceil(deficit / energy_per_charge),
        percentage_used_for_route=percentage_used,
    )
