"""
Shared pytest fixtures for the EV Trip Planner test suite.

Synthetic routes run east along the equator with one polyline node every
0.009 degrees of longitude (about 1 km), so node ``i`` projects to
``i / n_points * distance_km`` from the start.
"""

import pytest

from ev_trip_planner.charging.charger import Charger
from ev_trip_planner.geo.geo_utils import encode_polyline
from ev_trip_planner.routing.route import Route
from ev_trip_planner.vehicle.vehicle import Location, Vehicle

NODE_SPACING_DEG = 0.009


def equator_points(n_points):
    return [(0.0, round(i * NODE_SPACING_DEG, 5)) for i in range(n_points)]


@pytest.fixture
def default_vehicle():
    """A 135 kWh vehicle at 80 % using 0.18 kWh/km: 108 kWh, 600 km range."""
    return Vehicle(battery_capacity_kwh=135.0, efficiency_kwh_per_km=0.18, current_battery_percent=80.0)


@pytest.fixture
def origin():
    return Location(latitude=0.0, longitude=0.0, name="Start")


@pytest.fixture
def make_route():
    """Factory for straight equator routes."""
    def _make(distance_km=1000.0, n_points=None, duration_minutes=600, polyline=None):
        if polyline is None:
            if n_points is None:
                n_points = int(distance_km) + 1
            polyline = encode_polyline(equator_points(n_points)) if n_points else ""
        last_lon = round(max((n_points or 1) - 1, 0) * NODE_SPACING_DEG, 5)
        return Route(
            distance_meters=distance_km * 1000.0,
            duration_seconds=duration_minutes * 60,
            polyline_points=polyline,
            start_location=Location(0.0, 0.0),
            end_location=Location(0.0, last_lon, name="Destination"),
        )
    return _make


@pytest.fixture
def charger_at():
    """Factory for chargers sitting on equator node ``index``."""
    def _make(index, power_kw=150.0, charger_id=None, latitude=0.0, **kwargs):
        return Charger(
            id=charger_id or f"c{index}",
            name=f"Station {index}",
            location=Location(latitude, round(index * NODE_SPACING_DEG, 5)),
            power_kw=power_kw,
            **kwargs,
        )
    return _make
