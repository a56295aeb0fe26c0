"""
Route-corridor charger discovery.

Decides where along a route to query the charger directory and merges the
answers.  Search points are the trip start, then route nodes roughly every
``search_interval_km``, then the final route node.  A failing search point
is skipped with a warning; the remaining points still contribute.
"""

from __future__ import annotations

import math
import warnings
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from ev_trip_planner.charging.charger import Charger
from ev_trip_planner.data.ocm_client import ChargerDirectory, ChargerDirectoryError
from ev_trip_planner.routing.route import Route
from ev_trip_planner.vehicle.vehicle import Location

SEARCH_INTERVAL_KM = 100.0
SEARCH_RADIUS_KM = 25
MAX_RESULTS_PER_POINT = 10
DEFAULT_RADIUS_KM = 25
DEFAULT_MAX_RESULTS = 20


def deduplicate_chargers(chargers: Iterable[Charger]) -> List[Charger]:
    """Keep the first charger seen for each id, preserving order."""
    seen_ids = set()
    unique: List[Charger] = []
    for charger in chargers:
        if charger.id in seen_ids:
            continue
        seen_ids.add(charger.id)
        unique.append(charger)
    return unique


def points_per_interval(total_points: int, total_km: float,
                        interval_km: float = SEARCH_INTERVAL_KM) -> int:
    """
    Number of route nodes between consecutive search points.

    Zero or unknown route length means the whole polyline is one interval.
    Otherwise never less than 1, so stepping through the nodes terminates.
    """
    if not total_km or total_km <= 0:
        return total_points
    # round half up
    return max(1, int(math.floor(interval_km / total_km * total_points + 0.5)))


class ChargerDiscovery:
    """
    Query a charger directory along a route corridor.

    Args:
        directory: Any object implementing ``get_chargers_near``.
        search_interval_km: Target spacing of search points along the route.
        search_radius_km: Radius of each along-route query.
        max_results_per_point: Result cap of each along-route query.
        default_radius_km: Radius of the single query used without a route.
        default_max_results: Result cap of the single query used without a route.
        max_workers: Parallel queries; 1 runs them sequentially.
    """

    def __init__(
        self,
        directory: ChargerDirectory,
        search_interval_km: float = SEARCH_INTERVAL_KM,
        search_radius_km: float = SEARCH_RADIUS_KM,
        max_results_per_point: int = MAX_RESULTS_PER_POINT,
        default_radius_km: float = DEFAULT_RADIUS_KM,
        default_max_results: int = DEFAULT_MAX_RESULTS,
        max_workers: int = 1,
    ) -> None:
        if search_interval_km <= 0:
            raise ValueError(f"search_interval_km must be positive, got {search_interval_km}.")
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}.")
        self.directory = directory
        self.search_interval_km = search_interval_km
        self.search_radius_km = search_radius_km
        self.max_results_per_point = max_results_per_point
        self.default_radius_km = default_radius_km
        self.default_max_results = default_max_results
        self.max_workers = max_workers

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def discover(self, current_location: Location, route: Optional[Route] = None) -> List[Charger]:
        """
        Find chargers for a trip, deduplicated by charger id.

        Without a route a single query is made around ``current_location``.
        With a route every search point from ``search_points`` is queried.
        """
        if route is None:
            return self._query(current_location, self.default_radius_km, self.default_max_results)

        points = self.search_points(current_location, route)
        if self.max_workers > 1 and len(points) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                # map() yields in submission order, keeping first-seen dedup stable
                results = list(pool.map(self._query_along_route, points))
        else:
            results = [self._query_along_route(p) for p in points]

        return deduplicate_chargers(c for batch in results for c in batch)

    def search_points(self, current_location: Location, route: Route) -> List[Location]:
        """
        Query points for ``route``: the trip start, every
        ``points_per_interval``-th node before the last one, then the last node.
        """
        route_points = route.decode_points()
        total_points = len(route_points)
        step = points_per_interval(total_points, route.distance_km, self.search_interval_km)

        points = [current_location]
        if step > 0:
            for index in range(step, total_points - 1, step):
                points.append(Location.from_tuple(route_points[index]))
        if route_points:
            points.append(Location.from_tuple(route_points[-1]))
        return points

    # ------------------------------------------------------------------
    # Directory queries
    # ------------------------------------------------------------------

    def _query_along_route(self, point: Location) -> List[Charger]:
        return self._query(point, self.search_radius_km, self.max_results_per_point)

    def _query(self, point: Location, radius_km: float, max_results: int) -> List[Charger]:
        """One directory query; a failure counts as zero results."""
        try:
            return list(self.directory.get_chargers_near(
                point, radius_km=radius_km, max_results=max_results
            ))
        except ChargerDirectoryError as exc:
            warnings.warn(
                f"Charger search at ({point.latitude:.5f}, {point.longitude:.5f}) failed: {exc}",
                RuntimeWarning,
            )
            return []
