"""charging – charging station model and power classes."""

from .charger import UNKNOWN_CONNECTOR, Charger, PowerLevel, normalize_connector_types

__all__ = ["UNKNOWN_CONNECTOR", "Charger", "PowerLevel", "normalize_connector_types"]
