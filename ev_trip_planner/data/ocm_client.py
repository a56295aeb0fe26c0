"""
Open Charge Map API client for charger discovery.

Fetches charging stations around a point and converts them into ``Charger``
objects.  Responses can optionally be cached to disk as JSON files keyed by
a hash of the request (the API key is never part of the key).
"""

from __future__ import annotations

import hashlib
import json
import warnings
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

import requests

from ev_trip_planner.charging.charger import Charger
from ev_trip_planner.vehicle.vehicle import Location

OCM_POI_URL = "https://api.openchargemap.io/v3/poi/"

_USER_AGENT = "ev-trip-planner/1.0"

DEFAULT_STATION_NAME = "Charging Station"


class ChargerDirectoryError(Exception):
    """A charger directory query failed."""


class ChargerDirectory(Protocol):
    """Anything that can list chargers around a point."""

    def get_chargers_near(
        self,
        location: Location,
        radius_km: float = ...,
        max_results: int = ...,
    ) -> List[Charger]:
        ...


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class OpenChargeMapClient:
    """
    Client for the Open Charge Map ``poi`` endpoint.

    Args:
        api_key: Open Charge Map API key.
        timeout_sec: HTTP request timeout in seconds.
        use_cache: If True, responses are read from and written to ``cache_dir``.
        cache_dir: Directory for JSON cache files.
        base_url: POI endpoint (overridable for mirrors and tests).
    """

    DEFAULT_CACHE_DIR = "data/cache/ocm"
    DEFAULT_TIMEOUT_SEC = 15
    DEFAULT_RADIUS_KM = 50
    DEFAULT_MAX_RESULTS = 20

    def __init__(
        self,
        api_key: str,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        use_cache: bool = False,
        cache_dir: str = DEFAULT_CACHE_DIR,
        base_url: str = OCM_POI_URL,
    ) -> None:
        self.api_key = api_key
        self.timeout_sec = timeout_sec
        self.use_cache = use_cache
        self.cache_dir = Path(cache_dir)
        self.base_url = base_url
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": _USER_AGENT, "Accept": "application/json"})

        if self.use_cache:
            try:
                self.cache_dir.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                warnings.warn(
                    f"Charger cache directory '{cache_dir}' could not be created: {exc}. "
                    "Caching disabled for this session.",
                    RuntimeWarning,
                )
                self.use_cache = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_chargers_near(
        self,
        location: Location,
        radius_km: float = DEFAULT_RADIUS_KM,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> List[Charger]:
        """
        List charging stations within ``radius_km`` of ``location``.

        Stations without connection data are skipped, and so are malformed
        station records (with a ``RuntimeWarning``).  The result is sorted
        by the distance the directory reports (stations without one last).

        Raises:
            ChargerDirectoryError: on transport, HTTP or JSON failure.
        """
        params = {
            "output": "json",
            "latitude": location.latitude,
            "longitude": location.longitude,
            "distance": radius_km,
            "distanceunit": "km",
            "maxresults": max_results,
            "compact": "true",
            "verbose": "false",
        }
        items = self._execute_query(params)

        chargers: List[Charger] = []
        for item in items:
            try:
                charger = parse_station(item)
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                station_id = item.get("ID") if isinstance(item, dict) else None
                warnings.warn(f"Skipping malformed charging station {station_id!r}: {exc}", RuntimeWarning)
                continue
            if charger is not None:
                chargers.append(charger)
        chargers.sort(key=lambda c: c.distance_km if c.distance_km is not None else float("inf"))
        return chargers

    # ------------------------------------------------------------------
    # HTTP execution with caching
    # ------------------------------------------------------------------

    def _execute_query(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        cache_key = f"poi_{self._hash(json.dumps(params, sort_keys=True))}"
        if self.use_cache:
            cached = self._load_from_cache(cache_key)
            if cached is not None:
                return cached

        data = self._http_get({**params, "key": self.api_key})
        self._save_to_cache(cache_key, data)
        return data

    def _http_get(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """GET the POI endpoint and return the parsed JSON list."""
        try:
            response = self._session.get(self.base_url, params=params, timeout=self.timeout_sec)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as exc:
            raise ChargerDirectoryError(
                f"Could not load charging stations. Please try again. ({exc})"
            ) from exc
        except ValueError as exc:
            raise ChargerDirectoryError(
                f"Could not load charging stations. Please try again. (bad JSON: {exc})"
            ) from exc

        if not isinstance(data, list):
            raise ChargerDirectoryError(
                "Could not load charging stations. Please try again. "
                f"(expected a JSON list, got {type(data).__name__})"
            )
        return data

    # ------------------------------------------------------------------
    # Cache helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _hash(text: str) -> str:
        """SHA-256 hex digest of a string (used as cache filename)."""
        return hashlib.sha256(text.encode("utf-8")).hexdigest()[:16]

    def _cache_path(self, cache_key: str) -> Path:
        return self.cache_dir / f"{cache_key}.json"

    def _load_from_cache(self, cache_key: str) -> Optional[List[Dict[str, Any]]]:
        """Load a cached JSON response. Returns None on cache miss or read error."""
        path = self._cache_path(cache_key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError):
            return None

    def _save_to_cache(self, cache_key: str, data: List[Dict[str, Any]]) -> None:
        """Write an API response to the disk cache."""
        if not self.use_cache:
            return
        path = self._cache_path(cache_key)
        try:
            with path.open("w", encoding="utf-8") as f:
                json.dump(data, f)
        except OSError as exc:
            warnings.warn(f"Could not write charger cache file '{path}': {exc}", RuntimeWarning)


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------

def parse_station(item: Dict[str, Any]) -> Optional[Charger]:
    """
    Convert one Open Charge Map POI into a ``Charger``.

    Returns None when the station has no connections or no usable
    coordinates.  Power is the maximum over all connections; ports are the
    summed quantities, falling back to the number of connections.
    """
    connections = item.get("Connections") or []
    if not connections:
        return None

    address = item.get("AddressInfo") or {}
    lat = address.get("Latitude")
    lon = address.get("Longitude")
    if lat is None or lon is None or item.get("ID") is None:
        return None

    powers = [float(c["PowerKW"]) for c in connections if c.get("PowerKW") is not None]
    labels = [(c.get("ConnectionType") or {}).get("Title") for c in connections]
    total_ports = sum(int(c["Quantity"]) for c in connections if c.get("Quantity") is not None)
    if total_ports <= 0:
        total_ports = len(connections)

    distance = address.get("Distance")
    return Charger(
        id=str(item["ID"]),
        name=address.get("Title") or DEFAULT_STATION_NAME,
        location=Location(latitude=float(lat), longitude=float(lon)),
        power_kw=max(powers) if powers else 0.0,
        connector_types=tuple(labels),
        number_of_points=total_ports,
        distance_km=float(distance) if distance is not None else None,
    )
