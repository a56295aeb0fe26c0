"""
Display strings for routes, chargers, battery states and plans.

Kept apart from the models so the planning core stays UI-agnostic.
"""

from __future__ import annotations

from typing import List, Optional

from ev_trip_planner.charging.charger import Charger
from ev_trip_planner.planning.planner import ChargingPlan, ChargingStop
from ev_trip_planner.routing.route import Route
from ev_trip_planner.vehicle.battery import BatteryState
from ev_trip_planner.vehicle.vehicle import VehiclePreset


def format_minutes(minutes: int) -> str:
    """``45 min`` below an hour, ``2h 5min`` above."""
    if minutes < 60:
        return f"{minutes} min"
    return f"{minutes // 60}h {minutes % 60}min"


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


# -- route -------------------------------------------------------------------

def route_distance_text(route: Route) -> str:
    return f"{route.distance_km:.1f} km"


def route_duration_text(route: Route) -> str:
    return f"{route.duration_minutes} min"


# -- battery -----------------------------------------------------------------

def battery_percent_text(state: BatteryState) -> str:
    return f"{int(state.current_battery_percent)}%"


def remaining_range_text(state: BatteryState) -> str:
    return f"{state.remaining_range_km:.0f} km"


def current_energy_text(state: BatteryState) -> str:
    return f"{state.current_energy_kwh:.1f} kWh"


def required_energy_text(state: BatteryState) -> Optional[str]:
    if state.required_energy_kwh is None:
        return None
    return f"{state.required_energy_kwh:.1f} kWh"


def battery_warning_message(state: BatteryState) -> Optional[str]:
    """Warning for an unreachable destination, else None."""
    if state.can_reach_destination or state.required_energy_kwh is None:
        return None
    n = state.number_of_charges_needed
    return f"Need {n} charging {_plural(n, 'stop', 'stops')} to reach destination"


# -- chargers ----------------------------------------------------------------

def charger_power_text(charger: Charger) -> str:
    if charger.power_kw >= 1:
        return f"{int(charger.power_kw)} kW"
    return f"{int(charger.power_kw * 1000)} W"


def charger_distance_text(charger: Charger) -> Optional[str]:
    if charger.distance_km is None:
        return None
    return f"{charger.distance_km:.1f} km away"


def charger_connector_text(charger: Charger) -> str:
    return ", ".join(charger.connector_types)


def charger_ports_text(charger: Charger) -> str:
    n = charger.number_of_points
    return f"{n} {_plural(n, 'port', 'ports')}"


# -- plans -------------------------------------------------------------------

def stop_arrival_text(stop: ChargingStop) -> str:
    return f"Arrive: {int(stop.arrival_battery_percent)}%"


def stop_charge_time_text(stop: ChargingStop) -> str:
    return f"{stop.estimated_charge_time_minutes}min charge"


def stop_distance_text(stop: ChargingStop) -> str:
    return f"{stop.distance_from_start_km:.0f} km from start"


def plan_summary_lines(plan: ChargingPlan) -> List[str]:
    """Multi-line, human-readable plan summary."""
    if not plan.needs_charging:
        lines = ["No charging needed"]
    else:
        lines = [f"{len(plan.stops)} charging {_plural(len(plan.stops), 'stop', 'stops')}:"]
        for stop in plan.stops:
            lines.append(
                f"  {stop.stop_number}. {stop.charger.name} ({charger_power_text(stop.charger)}) "
                f"- {stop_distance_text(stop)}, {stop_arrival_text(stop)}, "
                f"{stop_charge_time_text(stop)}"
            )
    lines.append(f"Charging time : {format_minutes(plan.total_charging_time_minutes)}")
    lines.append(f"Trip time     : {format_minutes(plan.total_trip_time_minutes)} "
                 f"(driving {format_minutes(plan.route_duration_minutes)})")
    if not plan.reaches_destination:
        lines.append("Warning: no suitable chargers found to complete the trip")
    return lines


# -- presets -----------------------------------------------------------------

def preset_range_text(preset: VehiclePreset) -> str:
    return f"~{int(preset.range_km)} km range"


def preset_specs_text(preset: VehiclePreset) -> str:
    return f"{preset.battery_capacity_kwh}kWh • {preset.efficiency_kwh_per_km}kWh/km"
