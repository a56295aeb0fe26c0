"""
Charging-stop planner.

A single greedy forward pass over the route.  At each step the vehicle's
range defines a search window (70 %-90 % of range ahead); the best charger
in the window is chosen by a power/proximity score.  If the window is
empty, the most powerful charger still within range is taken instead.
Every stop charges to 80 %.  There is no backtracking and no global
optimisation over trip time or stop count.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Sequence, Set

from ev_trip_planner.charging.charger import Charger
from ev_trip_planner.routing.route import Route
from ev_trip_planner.vehicle.vehicle import Vehicle, energy_at_percent, estimate_range_km

from .projector import ProjectedCharger, project_chargers

CHARGE_TO_PERCENT = 80.0
START_LOOKING_AT_FRACTION = 0.70     # Window opens after 70 % of range
MUST_STOP_BY_FRACTION = 0.90         # ... and closes at 90 %, leaving a 10 % margin
IDEAL_STOP_FRACTION = 0.90
POWER_WEIGHT = 0.6
PROXIMITY_WEIGHT = 0.4
MIN_ARRIVAL_PERCENT = 1.0
DEFAULT_CHARGE_MINUTES = 60          # Used when charger power is unknown
MAX_PLANNING_ITERATIONS = 10


class StopSelection(Enum):
    """How a stop was chosen."""
    WINDOW = auto()      # Best score inside the 70-90 % range window
    FALLBACK = auto()    # Most powerful charger still within range


@dataclass(frozen=True)
class ChargingStop:
    """One planned charging stop."""
    charger: Charger
    stop_number: int                    # 1-based
    arrival_battery_percent: float
    estimated_charge_time_minutes: int
    distance_from_start_km: float
    target_battery_percent: float = CHARGE_TO_PERCENT
    selection: StopSelection = StopSelection.WINDOW


@dataclass(frozen=True)
class ChargingPlan:
    """Ordered charging stops for a route.  No stops means no charging is needed."""
    stops: List[ChargingStop]
    total_charging_time_minutes: int
    total_trip_time_minutes: int
    route_duration_minutes: int
    reaches_destination: bool = True

    @property
    def needs_charging(self) -> bool:
        return len(self.stops) > 0


@dataclass(frozen=True)
class SearchWindow:
    """Range window for one planning iteration, all in km from route start."""
    look_start_km: float
    look_end_km: float
    ideal_stop_km: float

    @property
    def width_km(self) -> float:
        return self.look_end_km - self.look_start_km

    def contains(self, distance_km: float) -> bool:
        return self.look_start_km <= distance_km <= self.look_end_km

    @classmethod
    def for_range(cls, position_km: float, range_km: float) -> "SearchWindow":
        return cls(
            look_start_km=position_km + range_km * START_LOOKING_AT_FRACTION,
            look_end_km=position_km + range_km * MUST_STOP_BY_FRACTION,
            ideal_stop_km=position_km + range_km * IDEAL_STOP_FRACTION,
        )


# ---------------------------------------------------------------------------
# Scoring and stop arithmetic
# ---------------------------------------------------------------------------

def score_candidate(candidate: ProjectedCharger, window: SearchWindow, max_power_kw: float) -> float:
    """
    Weighted power/proximity score in [0, 100].

    Power is relative to the strongest charger in the window; proximity is
    how close the charger sits to the ideal stop, relative to window width.
    """
    if max_power_kw > 0:
        power_score = candidate.charger.power_kw / max_power_kw * 100.0
    else:
        power_score = 0.0

    width = window.width_km
    deviation = abs(candidate.distance_from_start_km - window.ideal_stop_km)
    if width > 0:
        proximity_score = (width - deviation) / width * 100.0
    else:
        proximity_score = 100.0

    return POWER_WEIGHT * power_score + PROXIMITY_WEIGHT * proximity_score


def charge_time_minutes(energy_kwh: float, power_kw: float) -> int:
    """Minutes to add ``energy_kwh`` at ``power_kw``, rounded up."""
    rate_kwh_per_min = power_kw / 60.0
    if rate_kwh_per_min <= 0:
        return DEFAULT_CHARGE_MINUTES
    return int(math.ceil(energy_kwh / rate_kwh_per_min))


def build_charging_stop(
    candidate: ProjectedCharger,
    stop_number: int,
    current_position_km: float,
    current_battery_percent: float,
    vehicle: Vehicle,
    selection: StopSelection = StopSelection.WINDOW,
) -> ChargingStop:
    """Arrival state and charge duration for stopping at ``candidate``."""
    capacity = vehicle.battery_capacity_kwh
    stop_km = candidate.distance_from_start_km

    energy_used = (stop_km - current_position_km) * vehicle.efficiency_kwh_per_km
    energy_at_arrival = energy_at_percent(capacity, current_battery_percent) - energy_used
    arrival_percent = max(MIN_ARRIVAL_PERCENT, energy_at_arrival / capacity * 100.0)

    target_energy = energy_at_percent(capacity, CHARGE_TO_PERCENT)
    energy_to_add = max(0.0, target_energy - max(0.0, energy_at_arrival))

    return ChargingStop(
        charger=candidate.charger,
        stop_number=stop_number,
        arrival_battery_percent=arrival_percent,
        estimated_charge_time_minutes=charge_time_minutes(energy_to_add, candidate.charger.power_kw),
        distance_from_start_km=stop_km,
        target_battery_percent=CHARGE_TO_PERCENT,
        selection=selection,
    )


# ---------------------------------------------------------------------------
# Planner
# ---------------------------------------------------------------------------

@dataclass
class _PlannerState:
    position_km: float
    battery_percent: float
    stops: List[ChargingStop] = field(default_factory=list)
    selected_ids: Set[str] = field(default_factory=set)


class ChargingStopPlanner:
    """
    Greedy charging-stop planner.

    Stateless between calls: each ``plan`` invocation only reads its
    arguments, so one instance can be shared freely.
    """

    def __init__(self, max_iterations: int = MAX_PLANNING_ITERATIONS):
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {max_iterations}.")
        self.max_iterations = max_iterations

    def plan(self, route: Route, vehicle: Vehicle, available_chargers: Sequence[Charger]) -> ChargingPlan:
        """
        Choose charging stops so ``vehicle`` can complete ``route``.

        Returns an empty plan when the current charge already covers the
        route.  When no usable charger is found the plan is returned as far
        as it got, with ``reaches_destination`` False.
        """
        route_km = route.distance_km
        required = route_km * vehicle.efficiency_kwh_per_km
        if vehicle.current_energy_kwh >= required:
            return ChargingPlan(
                stops=[],
                total_charging_time_minutes=0,
                total_trip_time_minutes=route.duration_minutes,
                route_duration_minutes=route.duration_minutes,
                reaches_destination=True,
            )

        candidates = project_chargers(available_chargers, route.decode_points(), route_km)
        state = _PlannerState(position_km=0.0, battery_percent=vehicle.current_battery_percent)

        attempts = self.max_iterations
        while state.position_km < route_km and attempts > 0:
            attempts -= 1

            range_km = self._range_km(vehicle, state.battery_percent)
            if range_km >= route_km - state.position_km:
                break

            window = SearchWindow.for_range(state.position_km, range_km)
            choice = self.find_best_in_window(candidates, window, state.selected_ids)
            selection = StopSelection.WINDOW
            if choice is None:
                choice = self.find_fallback(candidates, state.position_km, range_km, state.selected_ids)
                selection = StopSelection.FALLBACK
            if choice is None:
                break

            stop = build_charging_stop(
                choice,
                stop_number=len(state.stops) + 1,
                current_position_km=state.position_km,
                current_battery_percent=state.battery_percent,
                vehicle=vehicle,
                selection=selection,
            )
            state.stops.append(stop)
            state.selected_ids.add(choice.charger.id)
            state.position_km = choice.distance_from_start_km
            state.battery_percent = CHARGE_TO_PERCENT

        total_charging = sum(s.estimated_charge_time_minutes for s in state.stops)
        reaches = self._range_km(vehicle, state.battery_percent) >= route_km - state.position_km
        return ChargingPlan(
            stops=state.stops,
            total_charging_time_minutes=total_charging,
            total_trip_time_minutes=route.duration_minutes + total_charging,
            route_duration_minutes=route.duration_minutes,
            reaches_destination=reaches,
        )

    # ------------------------------------------------------------------
    # Candidate selection
    # ------------------------------------------------------------------

    @staticmethod
    def find_best_in_window(
        candidates: Sequence[ProjectedCharger],
        window: SearchWindow,
        selected_ids: Set[str],
    ) -> Optional[ProjectedCharger]:
        """
        Highest-scoring unselected charger inside ``window``.

        Ties: higher power, then closer to the ideal stop, then closer to
        the route start, then smaller charger id.
        """
        in_window = [c for c in candidates
                     if window.contains(c.distance_from_start_km) and c.charger.id not in selected_ids]
        if not in_window:
            return None

        max_power = max(c.charger.power_kw for c in in_window)
        return min(in_window, key=lambda c: (
            -score_candidate(c, window, max_power),
            -c.charger.power_kw,
            abs(c.distance_from_start_km - window.ideal_stop_km),
            c.distance_from_start_km,
            c.charger.id,
        ))

    @staticmethod
    def find_fallback(
        candidates: Sequence[ProjectedCharger],
        position_km: float,
        range_km: float,
        selected_ids: Set[str],
    ) -> Optional[ProjectedCharger]:
        """Most powerful unselected charger ahead of us and within range."""
        reachable = [c for c in candidates
                     if position_km < c.distance_from_start_km <= position_km + range_km
                     and c.charger.id not in selected_ids]
        if not reachable:
            return None
        return min(reachable, key=lambda c: (-c.charger.power_kw, c.distance_from_start_km, c.charger.id))

    @staticmethod
    def _range_km(vehicle: Vehicle, battery_percent: float) -> float:
        energy = energy_at_percent(vehicle.battery_capacity_kwh, battery_percent)
        return estimate_range_km(energy, vehicle.efficiency_kwh_per_km)


def plan_charging_stops(route: Route, vehicle: Vehicle, available_chargers: Sequence[Charger]) -> ChargingPlan:
    """Plan with the default planner."""
    return ChargingStopPlanner().plan(route, vehicle, available_chargers)
