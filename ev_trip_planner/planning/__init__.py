"""planning – charger projection, corridor discovery, greedy stop planner and trip orchestration."""

from .projector import (
    MAX_CORRIDOR_DISTANCE_M,
    ProjectedCharger,
    project_chargers,
    project_onto_route,
)
from .discovery import ChargerDiscovery, deduplicate_chargers, points_per_interval
from .planner import (
    CHARGE_TO_PERCENT,
    MAX_PLANNING_ITERATIONS,
    ChargingPlan,
    ChargingStop,
    ChargingStopPlanner,
    SearchWindow,
    StopSelection,
    build_charging_stop,
    charge_time_minutes,
    plan_charging_stops,
    score_candidate,
)
from .trip import TripPlanner, TripPlanResult

__all__ = [
    # Projection
    "MAX_CORRIDOR_DISTANCE_M", "ProjectedCharger", "project_chargers", "project_onto_route",
    # Discovery
    "ChargerDiscovery", "deduplicate_chargers", "points_per_interval",
    # Planner
    "CHARGE_TO_PERCENT", "MAX_PLANNING_ITERATIONS", "ChargingPlan", "ChargingStop",
    "ChargingStopPlanner", "SearchWindow", "StopSelection", "build_charging_stop",
    "charge_time_minutes", "plan_charging_stops", "score_candidate",
    # Orchestration
    "TripPlanner", "TripPlanResult",
]
