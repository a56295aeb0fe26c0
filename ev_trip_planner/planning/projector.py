"""
Charger-to-route projection.

Maps a charger onto a scalar "km from route start" using the nearest
polyline node.  The position is interpolated by node index
(``index / node_count * route_km``), not by cumulative arc length; the
planner's search windows are built on this proportional mapping.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ev_trip_planner.charging.charger import Charger
from ev_trip_planner.geo.geo_utils import LatLon, nearest_point_index

# Chargers farther than this from every route node are off-corridor
MAX_CORRIDOR_DISTANCE_M = 30_000.0


@dataclass(frozen=True)
class ProjectedCharger:
    """A charger together with its position along the route."""
    charger: Charger
    distance_from_start_km: float
    offset_from_route_m: float


def project_onto_route(
    charger: Charger,
    route_points: Sequence[LatLon],
    total_route_km: float,
) -> Optional[float]:
    """
    Position of ``charger`` along the route in km, or None when rejected.

    Rejects every charger when ``route_points`` is empty, and any charger
    whose nearest node lies more than 30 km away.
    """
    projected = _project(charger, route_points, total_route_km)
    return projected.distance_from_start_km if projected is not None else None


def project_chargers(
    chargers: Sequence[Charger],
    route_points: Sequence[LatLon],
    total_route_km: float,
) -> List[ProjectedCharger]:
    """
    Project every charger, drop rejects, and sort by distance from start.

    ``route_points`` must already be decoded; decode once per planning run.
    The sort is stable, so chargers at the same position keep input order.
    """
    projected = [p for p in (_project(c, route_points, total_route_km) for c in chargers)
                 if p is not None]
    projected.sort(key=lambda p: p.distance_from_start_km)
    return projected


def _project(
    charger: Charger,
    route_points: Sequence[LatLon],
    total_route_km: float,
) -> Optional[ProjectedCharger]:
    if len(route_points) == 0:
        return None

    index, offset_m = nearest_point_index(charger.location.as_tuple(), route_points)
    if offset_m > MAX_CORRIDOR_DISTANCE_M:
        return None

    fraction_along_route = index / len(route_points)
    return ProjectedCharger(
        charger=charger,
        distance_from_start_km=fraction_along_route * total_route_km,
        offset_from_route_m=offset_m,
    )
