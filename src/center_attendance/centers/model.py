from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_RADIUS_M


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Center:
    """Domain entity: an educational center with its geofence."""

    center_id: int
    name: str
    latitude: float
    longitude: float
    radius_m: float = DEFAULT_RADIUS_M
    address: Optional[str] = None
