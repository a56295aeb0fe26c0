"""Configuration: API keys and charger-search parameters, loadable from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from ev_trip_planner.data.ocm_client import OpenChargeMapClient
from ev_trip_planner.planning.discovery import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_RADIUS_KM,
    MAX_RESULTS_PER_POINT,
    SEARCH_INTERVAL_KM,
    SEARCH_RADIUS_KM,
)

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class PlannerConfig:
    """Everything the trip planner needs besides the trip itself."""
    maps_api_key: str = ""
    ocm_api_key: str = ""
    request_timeout_sec: float = 15.0
    use_cache: bool = False
    cache_dir: str = OpenChargeMapClient.DEFAULT_CACHE_DIR
    search_interval_km: float = SEARCH_INTERVAL_KM
    search_radius_km: float = SEARCH_RADIUS_KM
    max_results_per_point: int = MAX_RESULTS_PER_POINT
    default_radius_km: float = DEFAULT_RADIUS_KM
    default_max_results: int = DEFAULT_MAX_RESULTS
    max_workers: int = 1

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "PlannerConfig":
        """
        Build a config from environment variables (after loading ``env_file``
        or a ``.env`` in the working directory, if present).

        Variables: GOOGLE_MAPS_API_KEY, OPENCHARGEMAP_API_KEY,
        EV_PLANNER_TIMEOUT_SEC, EV_PLANNER_USE_CACHE, EV_PLANNER_CACHE_DIR,
        EV_PLANNER_MAX_WORKERS.
        """
        load_dotenv(env_file or find_dotenv(usecwd=True))
        return cls(
            maps_api_key=os.getenv("GOOGLE_MAPS_API_KEY", ""),
            ocm_api_key=os.getenv("OPENCHARGEMAP_API_KEY", ""),
            request_timeout_sec=_env_number("EV_PLANNER_TIMEOUT_SEC", 15.0, float),
            use_cache=os.getenv("EV_PLANNER_USE_CACHE", "").strip().lower() in _TRUE_VALUES,
            cache_dir=os.getenv("EV_PLANNER_CACHE_DIR", OpenChargeMapClient.DEFAULT_CACHE_DIR),
            max_workers=_env_number("EV_PLANNER_MAX_WORKERS", 1, int),
        )


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be a number, got '{raw}'.") from None
