"""
Unit tests for OpenChargeMapClient.

The HTTP session is replaced by a fake so no network access is needed.

Covers:
- get_chargers_near(): query parameters, parsing, distance ordering
- Error mapping: transport failure, HTTP error, bad JSON, non-list body
- Malformed station records skipped with a warning, including during route discovery
- Disk cache: second identical query served from cache, key excludes the API key
"""

import pytest
import requests

from ev_trip_planner.data.ocm_client import ChargerDirectoryError, OpenChargeMapClient
from ev_trip_planner.planning.discovery import ChargerDiscovery
from ev_trip_planner.vehicle.vehicle import Location

HERE = Location(47.0, 8.0)


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeResponse:
    def __init__(self, payload=None, status_code=200, json_error=None):
        self.payload = payload
        self.status_code = status_code
        self.json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self.json_error is not None:
            raise self.json_error
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def make_poi(poi_id, distance):
    return {
        "ID": poi_id,
        "AddressInfo": {"Title": f"Site {poi_id}", "Latitude": 47.0, "Longitude": 8.0,
                        "Distance": distance},
        "Connections": [{"ConnectionType": {"Title": "CCS"}, "PowerKW": 150}],
    }


def make_client(session, **kwargs):
    client = OpenChargeMapClient(api_key="secret", **kwargs)
    client._session = session
    return client


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

class TestGetChargersNear:
    def test_query_parameters(self):
        session = FakeSession(FakeResponse([]))
        make_client(session, timeout_sec=7).get_chargers_near(HERE, radius_km=25, max_results=10)

        call = session.calls[0]
        assert call["timeout"] == 7
        params = call["params"]
        assert params["latitude"] == 47.0
        assert params["longitude"] == 8.0
        assert params["distance"] == 25
        assert params["distanceunit"] == "km"
        assert params["maxresults"] == 10
        assert params["key"] == "secret"

    def test_default_radius_and_limit(self):
        session = FakeSession(FakeResponse([]))
        make_client(session).get_chargers_near(HERE)
        params = session.calls[0]["params"]
        assert params["distance"] == 50
        assert params["maxresults"] == 20

    def test_sorted_by_distance_with_unknown_last(self):
        pois = [make_poi(1, 9.0), make_poi(2, None), make_poi(3, 1.5)]
        session = FakeSession(FakeResponse(pois))
        chargers = make_client(session).get_chargers_near(HERE)
        assert [c.id for c in chargers] == ["3", "1", "2"]

    def test_unusable_stations_are_skipped(self):
        broken = make_poi(4, 2.0)
        broken["Connections"] = []
        session = FakeSession(FakeResponse([broken, make_poi(5, 3.0)]))
        assert [c.id for c in make_client(session).get_chargers_near(HERE)] == ["5"]


class TestErrors:
    def test_transport_failure(self):
        session = FakeSession(error=requests.exceptions.ConnectionError("offline"))
        with pytest.raises(ChargerDirectoryError, match="Could not load charging stations"):
            make_client(session).get_chargers_near(HERE)

    def test_http_error(self):
        session = FakeSession(FakeResponse([], status_code=503))
        with pytest.raises(ChargerDirectoryError):
            make_client(session).get_chargers_near(HERE)

    def test_bad_json(self):
        session = FakeSession(FakeResponse(json_error=ValueError("Expecting value")))
        with pytest.raises(ChargerDirectoryError, match="bad JSON"):
            make_client(session).get_chargers_near(HERE)

    def test_non_list_body(self):
        session = FakeSession(FakeResponse({"error": "invalid key"}))
        with pytest.raises(ChargerDirectoryError, match="expected a JSON list"):
            make_client(session).get_chargers_near(HERE)


class TestMalformedStations:
    def test_non_numeric_power_is_skipped(self):
        bad = make_poi(1, 1.0)
        bad["Connections"] = [{"PowerKW": "n/a"}]
        session = FakeSession(FakeResponse([bad, make_poi(2, 2.0)]))

        with pytest.warns(RuntimeWarning, match="malformed charging station 1"):
            chargers = make_client(session).get_chargers_near(HERE)
        assert [c.id for c in chargers] == ["2"]

    def test_negative_power_is_skipped(self):
        bad = make_poi(1, 1.0)
        bad["Connections"] = [{"ConnectionType": {"Title": "CCS"}, "PowerKW": -7}]
        session = FakeSession(FakeResponse([bad]))

        with pytest.warns(RuntimeWarning):
            assert make_client(session).get_chargers_near(HERE) == []

    def test_non_object_item_is_skipped(self):
        session = FakeSession(FakeResponse(["garbage", make_poi(3, 1.0)]))
        with pytest.warns(RuntimeWarning):
            assert [c.id for c in make_client(session).get_chargers_near(HERE)] == ["3"]

    def test_bad_station_does_not_abort_route_search(self, origin, make_route):
        bad = make_poi(1, 1.0)
        bad["Connections"] = [{"PowerKW": "n/a"}]

        class ByLocationSession(FakeSession):
            def get(self, url, params=None, timeout=None):
                self.calls.append({"url": url, "params": params, "timeout": timeout})
                at_start = (params["latitude"], params["longitude"]) == (0.0, 0.0)
                return FakeResponse([bad] if at_start else [make_poi(2, 2.0)])

        session = ByLocationSession()
        discovery = ChargerDiscovery(make_client(session))
        with pytest.warns(RuntimeWarning, match="malformed"):
            chargers = discovery.discover(origin, make_route(300.0))

        assert [c.id for c in chargers] == ["2"]
        assert len(session.calls) == 4


class TestCache:
    def test_second_query_served_from_cache(self, tmp_path):
        session = FakeSession(FakeResponse([make_poi(1, 1.0)]))
        client = make_client(session, use_cache=True, cache_dir=str(tmp_path))

        first = client.get_chargers_near(HERE)
        second = client.get_chargers_near(HERE)

        assert len(session.calls) == 1
        assert first == second
        assert len(list(tmp_path.glob("poi_*.json"))) == 1

    def test_cache_key_ignores_api_key(self, tmp_path):
        make_client(FakeSession(FakeResponse([make_poi(1, 1.0)])),
                    use_cache=True, cache_dir=str(tmp_path)).get_chargers_near(HERE)

        other_session = FakeSession(FakeResponse([]))
        other = OpenChargeMapClient(api_key="another", use_cache=True, cache_dir=str(tmp_path))
        other._session = other_session
        assert [c.id for c in other.get_chargers_near(HERE)] == ["1"]
        assert other_session.calls == []

    def test_cache_disabled_by_default(self, tmp_path):
        session = FakeSession(FakeResponse([]))
        client = make_client(session, cache_dir=str(tmp_path / "unused"))
        client.get_chargers_near(HERE)
        client.get_chargers_near(HERE)
        assert len(session.calls) == 2
        assert not (tmp_path / "unused").exists()
