"""reporting – display strings and tabular export of plans."""

from .formatting import (
    battery_percent_text,
    battery_warning_message,
    charger_connector_text,
    charger_distance_text,
    charger_ports_text,
    charger_power_text,
    current_energy_text,
    format_minutes,
    plan_summary_lines,
    preset_range_text,
    preset_specs_text,
    remaining_range_text,
    required_energy_text,
    route_distance_text,
    route_duration_text,
    stop_arrival_text,
    stop_charge_time_text,
    stop_distance_text,
)
from .export import PLAN_COLUMNS, plan_to_frame, save_plan_csv

__all__ = [
    "battery_percent_text", "battery_warning_message", "charger_connector_text",
    "charger_distance_text", "charger_ports_text", "charger_power_text",
    "current_energy_text", "format_minutes", "plan_summary_lines", "preset_range_text",
    "preset_specs_text", "remaining_range_text", "required_energy_text",
    "route_distance_text", "route_duration_text", "stop_arrival_text",
    "stop_charge_time_text", "stop_distance_text",
    "PLAN_COLUMNS", "plan_to_frame", "save_plan_csv",
]
