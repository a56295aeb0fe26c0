"""data – charger directory client (Open Charge Map)."""

from .ocm_client import (
    OCM_POI_URL,
    ChargerDirectory,
    ChargerDirectoryError,
    OpenChargeMapClient,
    parse_station,
)

__all__ = [
    "OCM_POI_URL",
    "ChargerDirectory",
    "ChargerDirectoryError",
    "OpenChargeMapClient",
    "parse_station",
]
