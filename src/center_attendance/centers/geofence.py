"""Geofence checks for attendance marking.

Distances use the haversine great-circle formula on a spherical Earth
(R = 6,371,000 m), which is accurate well below a meter at center scale.
"""

from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt

from ..core.constants import EARTH_RADIUS_M
from .model import Center, Coordinate


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in meters between two (lat, lon) points given in degrees."""
    phi1 = radians(lat1)
    phi2 = radians(lat2)
    d_phi = radians(lat2 - lat1)
    d_lambda = radians(lon2 - lon1)

    a = sin(d_phi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(d_lambda / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_M * c


class GeofenceChecker:
    def distance_to(self, center: Center, coordinate: Coordinate) -> float:
        return haversine_distance(center.latitude, center.longitude, coordinate.latitude, coordinate.longitude)

    def is_within_radius(self, center: Center, coordinate: Coordinate) -> bool:
        # Inclusive at exactly radius_m.
        return self.distance_to(center, coordinate) <= center.radius_m
