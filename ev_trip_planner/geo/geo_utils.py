"""
Geographic utilities for route and charger geometry.

All distance calculations use the haversine formula on a sphere of
radius 6 371 000 m.  Encoded polylines follow Google's polyline
algorithm (1e-5 degree precision) and are handled by the ``polyline``
package.
"""

from __future__ import annotations

import math
import warnings
from typing import List, Sequence, Tuple

import numpy as np
import polyline

# Type alias for a geographic coordinate pair (latitude, longitude) in decimal degrees
LatLon = Tuple[float, float]

EARTH_RADIUS_M = 6_371_000.0
POLYLINE_PRECISION = 5


def haversine_m(point_a: LatLon, point_b: LatLon) -> float:
    """
    Compute the great-circle distance in metres between two (lat, lon) points.

    Args:
        point_a: (latitude, longitude) in decimal degrees
        point_b: (latitude, longitude) in decimal degrees

    Returns:
        Distance in metres.
    """
    lat1, lon1 = math.radians(point_a[0]), math.radians(point_a[1])
    lat2, lon2 = math.radians(point_b[0]), math.radians(point_b[1])

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    c = 2 * math.asin(math.sqrt(min(1.0, a)))
    return EARTH_RADIUS_M * c


def haversine_km(point_a: LatLon, point_b: LatLon) -> float:
    """Great-circle distance in kilometres."""
    return haversine_m(point_a, point_b) / 1000.0


def distances_to_points_m(point: LatLon, nodes: Sequence[LatLon]) -> np.ndarray:
    """
    Vectorised haversine distance from ``point`` to every node, in metres.

    Returns an empty array when ``nodes`` is empty.
    """
    if len(nodes) == 0:
        return np.empty(0, dtype=float)

    coords = np.radians(np.asarray(nodes, dtype=float))
    lat1 = math.radians(point[0])
    lon1 = math.radians(point[1])

    dlat = coords[:, 0] - lat1
    dlon = coords[:, 1] - lon1

    a = np.sin(dlat / 2) ** 2 + math.cos(lat1) * np.cos(coords[:, 0]) * np.sin(dlon / 2) ** 2
    c = 2 * np.arcsin(np.sqrt(np.minimum(1.0, a)))
    return EARTH_RADIUS_M * c


def nearest_point_index(point: LatLon, nodes: Sequence[LatLon]) -> Tuple[int, float]:
    """
    Find the polyline node closest to ``point``.

    Brute-force scan over every node; ties resolve to the lowest index.

    Args:
        point: (lat, lon) of the point to locate.
        nodes: Ordered polyline nodes.

    Returns:
        ``(index, distance_m)`` of the nearest node.

    Raises:
        ValueError: if ``nodes`` is empty.
    """
    if len(nodes) == 0:
        raise ValueError("nearest_point_index() requires at least one polyline node.")

    distances = distances_to_points_m(point, nodes)
    # argmin returns the first occurrence of the minimum
    index = int(np.argmin(distances))
    return index, float(distances[index])


def decode_polyline(encoded: str) -> List[LatLon]:
    """
    Decode an encoded polyline string into ``(lat, lon)`` pairs.

    An empty string yields an empty list.  A malformed string also yields
    an empty list (with a ``RuntimeWarning``) so callers can degrade to
    "no geometry" instead of failing.
    """
    if not encoded:
        return []
    try:
        return [(float(lat), float(lon))
                for lat, lon in polyline.decode(encoded, POLYLINE_PRECISION)]
    except (IndexError, ValueError, TypeError) as exc:
        warnings.warn(f"Could not decode route polyline: {exc}", RuntimeWarning)
        return []


def encode_polyline(nodes: Sequence[LatLon]) -> str:
    """Encode ``(lat, lon)`` pairs as a polyline string (1e-5 precision)."""
    return polyline.encode([(lat, lon) for lat, lon in nodes], POLYLINE_PRECISION)
