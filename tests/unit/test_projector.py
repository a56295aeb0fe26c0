"""
Unit tests for charger-to-route projection.

Covers:
- project_onto_route(): index-proportional position, corridor limit, empty polyline
- project_chargers(): rejects dropped, ascending order, stable for equal positions
"""

import pytest

from ev_trip_planner.planning.projector import (
    MAX_CORRIDOR_DISTANCE_M,
    project_chargers,
    project_onto_route,
)

# Straight equator route, one node per ~1 km
POINTS = [(0.0, round(i * 0.009, 5)) for i in range(1001)]


class TestProjectOntoRoute:
    def test_position_is_index_proportional(self, charger_at):
        assert project_onto_route(charger_at(550), POINTS, 1000.0) == pytest.approx(550 / 1001 * 1000)

    def test_first_node_is_zero(self, charger_at):
        assert project_onto_route(charger_at(0), POINTS, 1000.0) == 0.0

    def test_nearby_charger_accepted(self, charger_at):
        # ~22 km north of node 300
        assert project_onto_route(charger_at(300, latitude=0.2), POINTS, 1000.0) is not None

    def test_off_corridor_charger_rejected(self, charger_at):
        # ~55 km north of node 300
        assert project_onto_route(charger_at(300, latitude=0.5), POINTS, 1000.0) is None

    def test_empty_polyline_rejects_everything(self, charger_at):
        assert project_onto_route(charger_at(10), [], 1000.0) is None

    def test_corridor_limit_is_30_km(self):
        assert MAX_CORRIDOR_DISTANCE_M == 30_000.0


class TestProjectChargers:
    def test_sorted_and_filtered(self, charger_at):
        chargers = [charger_at(800), charger_at(200, latitude=0.5), charger_at(100)]
        projected = project_chargers(chargers, POINTS, 1000.0)
        assert [p.charger.id for p in projected] == ["c100", "c800"]
        assert projected[0].distance_from_start_km < projected[1].distance_from_start_km

    def test_offset_is_reported(self, charger_at):
        projected = project_chargers([charger_at(400, latitude=0.1)], POINTS, 1000.0)
        assert projected[0].offset_from_route_m == pytest.approx(11_119.5, abs=1.0)

    def test_equal_positions_keep_input_order(self, charger_at):
        chargers = [charger_at(500, charger_id="b"), charger_at(500, charger_id="a")]
        assert [p.charger.id for p in project_chargers(chargers, POINTS, 1000.0)] == ["b", "a"]

    def test_no_points_gives_empty(self, charger_at):
        assert project_chargers([charger_at(1)], [], 100.0) == []
