"""
EV Trip Planner
===============
Charging-stop planning for electric-vehicle road trips: battery-state
evaluation, charger discovery along a route corridor, and a greedy
charging-stop planner.

Package layout
--------------
ev_trip_planner/
    geo/        – haversine distance, nearest-node search, polyline codec
    vehicle/    – locations, vehicle characteristics, presets, battery model
    charging/   – charger model and power classes
    routing/    – route model, Directions API client
    data/       – charger directory client (Open Charge Map)
    planning/   – projection, corridor discovery, stop planner, trip orchestration
    reporting/  – display strings and CSV export
    config.py   – API keys and search parameters from the environment
"""

from .vehicle import BatteryState, Location, Vehicle, VehiclePreset, evaluate_battery
from .charging import Charger
from .routing import DirectionsClient, Route, RoutingError
from .data import ChargerDirectoryError, OpenChargeMapClient
from .planning import (
    ChargerDiscovery,
    ChargingPlan,
    ChargingStop,
    ChargingStopPlanner,
    TripPlanner,
    TripPlanResult,
)
from .config import PlannerConfig

__all__ = [
    "BatteryState", "Location", "Vehicle", "VehiclePreset", "evaluate_battery",
    "Charger",
    "DirectionsClient", "Route", "RoutingError",
    "ChargerDirectoryError", "OpenChargeMapClient",
    "ChargerDiscovery", "ChargingPlan", "ChargingStop", "ChargingStopPlanner",
    "TripPlanner", "TripPlanResult",
    "PlannerConfig",
]
