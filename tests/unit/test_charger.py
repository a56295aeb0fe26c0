"""
Unit tests for the Charger model and Open Charge Map station parsing.

Covers:
- Charger: connector normalisation, port fallback, power validation, power_level
- parse_station(): skipped stations, power/ports/labels aggregation, name fallback
"""

import pytest

from ev_trip_planner.charging.charger import (
    UNKNOWN_CONNECTOR,
    Charger,
    PowerLevel,
    normalize_connector_types,
)
from ev_trip_planner.data.ocm_client import DEFAULT_STATION_NAME, parse_station
from ev_trip_planner.vehicle.vehicle import Location

HERE = Location(47.0, 8.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_charger(**kwargs):
    defaults = dict(id="1", name="Test", location=HERE)
    defaults.update(kwargs)
    return Charger(**defaults)


def make_connection(title="CCS (Type 2)", power_kw=150.0, quantity=None):
    conn = {"ConnectionType": {"Title": title} if title is not None else None, "PowerKW": power_kw}
    if quantity is not None:
        conn["Quantity"] = quantity
    return conn


def make_poi(poi_id=101, connections=None, title="Highway Plaza", lat=47.0, lon=8.0, distance=3.2):
    address = {"Title": title, "Latitude": lat, "Longitude": lon}
    if distance is not None:
        address["Distance"] = distance
    return {
        "ID": poi_id,
        "AddressInfo": address,
        "Connections": [make_connection()] if connections is None else connections,
    }


# ---------------------------------------------------------------------------
# Charger
# ---------------------------------------------------------------------------

class TestChargerNormalisation:
    def test_connector_labels_are_distinct_and_ordered(self):
        charger = make_charger(connector_types=("CCS", "Type 2", "CCS"))
        assert charger.connector_types == ("CCS", "Type 2")

    def test_blank_labels_dropped(self):
        charger = make_charger(connector_types=("", "  ", "CHAdeMO"))
        assert charger.connector_types == ("CHAdeMO",)

    def test_no_labels_falls_back_to_unknown(self):
        assert make_charger(connector_types=()).connector_types == (UNKNOWN_CONNECTOR,)

    def test_normalize_skips_none(self):
        assert normalize_connector_types([None, " CCS "]) == ("CCS",)

    def test_zero_ports_fall_back_to_connector_count(self):
        charger = make_charger(connector_types=("CCS", "Type 2"), number_of_points=0)
        assert charger.number_of_points == 2

    def test_negative_power_rejected(self):
        with pytest.raises(ValueError):
            make_charger(power_kw=-1.0)

    def test_chargers_are_hashable(self):
        assert len({make_charger(), make_charger()}) == 1


class TestPowerLevel:
    @pytest.mark.parametrize("power,level", [
        (0.0, PowerLevel.STANDARD),
        (22.0, PowerLevel.STANDARD),
        (50.0, PowerLevel.FAST),
        (149.9, PowerLevel.FAST),
        (150.0, PowerLevel.ULTRA_FAST),
        (350.0, PowerLevel.ULTRA_FAST),
    ])
    def test_thresholds(self, power, level):
        assert make_charger(power_kw=power).power_level is level


# ---------------------------------------------------------------------------
# parse_station
# ---------------------------------------------------------------------------

class TestParseStation:
    def test_basic_station(self):
        charger = parse_station(make_poi())
        assert charger.id == "101"
        assert charger.name == "Highway Plaza"
        assert charger.location.as_tuple() == (47.0, 8.0)
        assert charger.power_kw == 150.0
        assert charger.connector_types == ("CCS (Type 2)",)
        assert charger.number_of_points == 1
        assert charger.distance_km == pytest.approx(3.2)

    def test_no_connections_is_skipped(self):
        assert parse_station(make_poi(connections=[])) is None

    def test_missing_coordinates_is_skipped(self):
        assert parse_station(make_poi(lat=None)) is None

    def test_power_is_max_over_connections(self):
        poi = make_poi(connections=[
            make_connection(power_kw=50.0),
            make_connection(power_kw=350.0),
            make_connection(power_kw=None),
        ])
        assert parse_station(poi).power_kw == 350.0

    def test_unknown_power_is_zero(self):
        poi = make_poi(connections=[make_connection(power_kw=None)])
        assert parse_station(poi).power_kw == 0.0

    def test_ports_sum_quantities(self):
        poi = make_poi(connections=[
            make_connection(quantity=4),
            make_connection(title="CHAdeMO", quantity=2),
        ])
        charger = parse_station(poi)
        assert charger.number_of_points == 6
        assert charger.connector_types == ("CCS (Type 2)", "CHAdeMO")

    def test_ports_fall_back_to_connection_count(self):
        poi = make_poi(connections=[make_connection(), make_connection(title="Type 2")])
        assert parse_station(poi).number_of_points == 2

    def test_missing_titles_give_unknown_connector(self):
        poi = make_poi(connections=[make_connection(title=None)])
        assert parse_station(poi).connector_types == (UNKNOWN_CONNECTOR,)

    def test_missing_name_uses_default(self):
        assert parse_station(make_poi(title=None)).name == DEFAULT_STATION_NAME

    def test_missing_distance_is_none(self):
        assert parse_station(make_poi(distance=None)).distance_km is None
