"""Tabular export of charging plans."""

from __future__ import annotations

from pathlib import Path
from typing import Union

import pandas as pd

from ev_trip_planner.planning.planner import ChargingPlan

PLAN_COLUMNS = [
    "stop_number",
    "charger_id",
    "charger_name",
    "latitude",
    "longitude",
    "power_kw",
    "connector_types",
    "number_of_points",
    "distance_from_start_km",
    "arrival_battery_percent",
    "target_battery_percent",
    "charge_time_minutes",
    "selection",
]


def plan_to_frame(plan: ChargingPlan) -> pd.DataFrame:
    """One row per stop, in stop order.  An empty plan gives an empty frame with the same columns."""
    rows = [{
        "stop_number": s.stop_number,
        "charger_id": s.charger.id,
        "charger_name": s.charger.name,
        "latitude": s.charger.location.latitude,
        "longitude": s.charger.location.longitude,
        "power_kw": s.charger.power_kw,
        "connector_types": ", ".join(s.charger.connector_types),
        "number_of_points": s.charger.number_of_points,
        "distance_from_start_km": round(s.distance_from_start_km, 2),
        "arrival_battery_percent": round(s.arrival_battery_percent, 1),
        "target_battery_percent": s.target_battery_percent,
        "charge_time_minutes": s.estimated_charge_time_minutes,
        "selection": s.selection.name.lower(),
    } for s in plan.stops]
    return pd.DataFrame(rows, columns=PLAN_COLUMNS)


def save_plan_csv(plan: ChargingPlan, path: Union[str, Path]) -> Path:
    """Write ``plan_to_frame(plan)`` to ``path`` (parent directories are created)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    plan_to_frame(plan).to_csv(path, index=False)
    return path
