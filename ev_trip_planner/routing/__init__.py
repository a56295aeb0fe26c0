"""routing – route model and the Directions API client."""

from .route import Route
from .directions_client import DIRECTIONS_URL, DirectionsClient, RoutingError, message_for_status

__all__ = ["Route", "DIRECTIONS_URL", "DirectionsClient", "RoutingError", "message_for_status"]
