"""
Google Directions API client.

Resolves an origin coordinate and a destination (address or "lat,lng")
into a single driving ``Route``.  Every failure is surfaced as a
``RoutingError`` whose message is suitable for showing to the user.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from ev_trip_planner.vehicle.vehicle import Location

from .route import Route

DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"

_USER_AGENT = "ev-trip-planner/1.0"

# Directions API status -> user-facing reason
STATUS_MESSAGES: Dict[str, str] = {
    "ZERO_RESULTS": "No route found to destination",
    "NOT_FOUND": "Destination not found",
    "INVALID_REQUEST": "Invalid request. Please check your destination",
    "REQUEST_DENIED": "API request denied. Please check API key",
    "OVER_QUERY_LIMIT": "API query limit exceeded. Please try again later",
}


class RoutingError(Exception):
    """A route could not be calculated.  ``status`` is the API status, if any."""

    def __init__(self, message: str, status: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status = status


def message_for_status(status: str) -> str:
    return STATUS_MESSAGES.get(status, f"Could not calculate route. Status: {status}")


class DirectionsClient:
    """
    Client for the Google Directions API.

    Args:
        api_key: Google Maps API key.
        timeout_sec: HTTP request timeout in seconds.
        base_url: Directions endpoint (overridable for proxies and tests).
    """

    DEFAULT_TIMEOUT_SEC = 15

    def __init__(
        self,
        api_key: str,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        base_url: str = DIRECTIONS_URL,
    ) -> None:
        self.api_key = api_key
        self.timeout_sec = timeout_sec
        self.base_url = base_url
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": _USER_AGENT})

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_route(self, origin: Location, destination: str, mode: str = "driving") -> Route:
        """
        Calculate the route from ``origin`` to ``destination``.

        Args:
            origin: Starting location, sent as "lat,lng".
            destination: Destination address or "lat,lng" string.
            mode: Travel mode (driving, walking, bicycling, transit).

        Returns:
            The first leg of the first route returned.

        Raises:
            RoutingError: on a blank destination, a non-OK status, a
                malformed response or a transport failure.
        """
        destination = (destination or "").strip()
        if not destination:
            raise RoutingError("Please enter a destination")

        data = self._http_get({
            "origin": f"{origin.latitude},{origin.longitude}",
            "destination": destination,
            "mode": mode,
            "key": self.api_key,
        })

        status = data.get("status", "")
        if status != "OK":
            raise RoutingError(message_for_status(status), status=status)

        return self._parse_route(data, origin, destination)

    # ------------------------------------------------------------------
    # Response parsing
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_route(data: Dict[str, Any], origin: Location, destination: str) -> Route:
        routes = data.get("routes") or []
        if not routes:
            raise RoutingError("No routes found in response", status="OK")
        legs = routes[0].get("legs") or []
        if not legs:
            raise RoutingError("No legs found in route", status="OK")

        leg = legs[0]
        try:
            return Route(
                distance_meters=float(leg["distance"]["value"]),
                duration_seconds=float(leg["duration"]["value"]),
                polyline_points=routes[0].get("overview_polyline", {}).get("points", ""),
                start_location=Location(
                    latitude=float(leg["start_location"]["lat"]),
                    longitude=float(leg["start_location"]["lng"]),
                    name=origin.name,
                ),
                end_location=Location(
                    latitude=float(leg["end_location"]["lat"]),
                    longitude=float(leg["end_location"]["lng"]),
                    name=destination,
                ),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise RoutingError("Could not calculate route. Please try again", status="OK") from exc

    # ------------------------------------------------------------------
    # HTTP execution
    # ------------------------------------------------------------------

    def _http_get(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """GET the Directions endpoint and return parsed JSON."""
        try:
            response = self._session.get(self.base_url, params=params, timeout=self.timeout_sec)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as exc:
            raise RoutingError("Could not calculate route. Please try again") from exc
        except ValueError as exc:
            raise RoutingError("Could not calculate route. Please try again") from exc
        if not isinstance(data, dict):
            raise RoutingError("Could not calculate route. Please try again")
        return data
