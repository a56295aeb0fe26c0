"""
Trip planner: the main user-facing class.

Typical usage::

    from ev_trip_planner import PlannerConfig, TripPlanner, Location, Vehicle

    planner = TripPlanner.from_config(PlannerConfig.from_env())
    result = planner.plan_trip(
        Location(37.7749, -122.4194, "San Francisco"),
        "Los Angeles, CA",
        Vehicle(battery_capacity_kwh=75.0, efficiency_kwh_per_km=0.16,
                current_battery_percent=60.0),
    )
    for stop in result.plan.stops:
        print(stop.stop_number, stop.charger.name, stop.distance_from_start_km)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from ev_trip_planner.charging.charger import Charger
from ev_trip_planner.data.ocm_client import ChargerDirectory, OpenChargeMapClient
from ev_trip_planner.routing.directions_client import DirectionsClient
from ev_trip_planner.routing.route import Route
from ev_trip_planner.vehicle.battery import BatteryState, evaluate_battery
from ev_trip_planner.vehicle.vehicle import Location, Vehicle

from .discovery import ChargerDiscovery
from .planner import ChargingPlan, ChargingStopPlanner

if TYPE_CHECKING:
    from ev_trip_planner.config import PlannerConfig


@dataclass
class TripPlanResult:
    """Everything computed for one trip."""
    route: Route
    battery_state: BatteryState
    plan: ChargingPlan
    chargers: List[Charger] = field(default_factory=list)   # Discovered candidates

    @property
    def charger_search_performed(self) -> bool:
        return not self.battery_state.can_reach_destination


class TripPlanner:
    """
    Orchestrates routing, the battery model, charger discovery and stop planning.

    Steps:
      1. Fetch the route (``RoutingError`` propagates to the caller)
      2. Evaluate the battery against the route
      3. If the destination is out of range, discover chargers along the route
      4. Plan charging stops

    Pass either ``directory`` (searched with default discovery settings)
    or a fully configured ``discovery``, not both.
    """

    def __init__(
        self,
        directions: DirectionsClient,
        directory: Optional[ChargerDirectory] = None,
        discovery: Optional[ChargerDiscovery] = None,
        planner: Optional[ChargingStopPlanner] = None,
    ) -> None:
        if (directory is None) == (discovery is None):
            raise ValueError("TripPlanner needs exactly one of 'directory' or 'discovery'.")
        self.directions = directions
        self.discovery = discovery if discovery is not None else ChargerDiscovery(directory)
        self.planner = planner or ChargingStopPlanner()

    @classmethod
    def from_config(cls, config: PlannerConfig) -> "TripPlanner":
        directions = DirectionsClient(config.maps_api_key, timeout_sec=config.request_timeout_sec)
        directory = OpenChargeMapClient(
            config.ocm_api_key,
            timeout_sec=config.request_timeout_sec,
            use_cache=config.use_cache,
            cache_dir=config.cache_dir,
        )
        discovery = ChargerDiscovery(
            directory,
            search_interval_km=config.search_interval_km,
            search_radius_km=config.search_radius_km,
            max_results_per_point=config.max_results_per_point,
            default_radius_km=config.default_radius_km,
            default_max_results=config.default_max_results,
            max_workers=config.max_workers,
        )
        return cls(directions, discovery=discovery)

    def plan_trip(self, origin: Location, destination: str, vehicle: Vehicle) -> TripPlanResult:
        route = self.directions.get_route(origin, destination)
        return self.plan_route(origin, route, vehicle)

    def plan_route(self, origin: Location, route: Route, vehicle: Vehicle) -> TripPlanResult:
        """Plan an already-known route (steps 2-4)."""
        battery_state = evaluate_battery(vehicle, route)

        chargers: List[Charger] = []
        if not battery_state.can_reach_destination:
            chargers = self.discovery.discover(origin, route)

        plan = self.planner.plan(route, vehicle, chargers)
        return TripPlanResult(route=route, battery_state=battery_state, plan=plan, chargers=chargers)
