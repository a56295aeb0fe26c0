"""
Charger model.

A charging station as reported by the charger directory, normalised so the
planner can rely on a few invariants: connector labels are distinct and
non-empty, and every station has at least one port.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Sequence, Tuple

from ev_trip_planner.vehicle.vehicle import Location

UNKNOWN_CONNECTOR = "Unknown"


class PowerLevel(Enum):
    """Charger speed class."""
    STANDARD = auto()     # < 50 kW
    FAST = auto()         # 50-149 kW
    ULTRA_FAST = auto()   # >= 150 kW


def normalize_connector_types(labels: Sequence[Optional[str]]) -> Tuple[str, ...]:
    """Distinct, non-blank connector labels in first-seen order."""
    seen = []
    for label in labels:
        if label is None:
            continue
        label = label.strip()
        if label and label not in seen:
            seen.append(label)
    return tuple(seen) if seen else (UNKNOWN_CONNECTOR,)


@dataclass(frozen=True)
class Charger:
    """A charging station.  ``id`` is the only identity used for deduplication."""
    id: str
    name: str
    location: Location
    power_kw: float = 0.0
    connector_types: Tuple[str, ...] = field(default=(UNKNOWN_CONNECTOR,))
    number_of_points: int = 1
    distance_km: Optional[float] = None     # From the directory query point

    def __post_init__(self):
        if self.power_kw < 0:
            raise ValueError(f"power_kw must be >= 0, got {self.power_kw}.")
        # Frozen dataclass: normalise through object.__setattr__
        connectors = normalize_connector_types(self.connector_types)
        object.__setattr__(self, "connector_types", connectors)
        if self.number_of_points < 1:
            object.__setattr__(self, "number_of_points", len(connectors))

    @property
    def power_level(self) -> PowerLevel:
        if self.power_kw >= 150:
            return PowerLevel.ULTRA_FAST
        if self.power_kw >= 50:
            return PowerLevel.FAST
        return PowerLevel.STANDARD
