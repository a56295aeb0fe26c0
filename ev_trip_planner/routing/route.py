"""Route model returned by the routing service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ev_trip_planner.geo.geo_utils import LatLon, decode_polyline
from ev_trip_planner.vehicle.vehicle import Location


@dataclass(frozen=True)
class Route:
    """A single driving route between two locations."""
    distance_meters: float
    duration_seconds: float
    polyline_points: str            # Encoded polyline of the whole route
    start_location: Location
    end_location: Location

    def __post_init__(self):
        if self.distance_meters < 0:
            raise ValueError(f"distance_meters must be >= 0, got {self.distance_meters}.")
        if self.duration_seconds < 0:
            raise ValueError(f"duration_seconds must be >= 0, got {self.duration_seconds}.")

    @property
    def distance_km(self) -> float:
        return self.distance_meters / 1000.0

    @property
    def duration_minutes(self) -> int:
        return int(self.duration_seconds // 60)

    def decode_points(self) -> List[LatLon]:
        """Decode the route polyline.  Callers should decode once per run."""
        return decode_polyline(self.polyline_points)
