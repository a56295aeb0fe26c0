"""geo – great-circle distance, nearest-node search and the polyline codec."""

from .geo_utils import (
    EARTH_RADIUS_M,
    LatLon,
    decode_polyline,
    distances_to_points_m,
    encode_polyline,
    haversine_km,
    haversine_m,
    nearest_point_index,
)

__all__ = [
    "EARTH_RADIUS_M",
    "LatLon",
    "decode_polyline",
    "distances_to_points_m",
    "encode_polyline",
    "haversine_km",
    "haversine_m",
    "nearest_point_index",
]
