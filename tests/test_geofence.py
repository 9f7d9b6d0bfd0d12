import pytest

from center_attendance.centers.geofence import GeofenceChecker, haversine_distance
from center_attendance.centers.model import Center, Coordinate


def test_haversine_known_distance():
    # One degree of latitude on the 6,371 km sphere.
    assert haversine_distance(0.0, 0.0, 1.0, 0.0) == pytest.approx(111_194.9, abs=1.0)
    assert haversine_distance(30.038, 31.211, 30.038, 31.211) == 0.0


def test_radius_boundary_is_inclusive():
    checker = GeofenceChecker()
    point = Coordinate(30.0382, 31.2110)
    distance = haversine_distance(30.0380, 31.2110, point.latitude, point.longitude)

    exact = Center(center_id=1, name="A", latitude=30.0380, longitude=31.2110, radius_m=distance)
    tight = Center(center_id=1, name="A", latitude=30.0380, longitude=31.2110, radius_m=distance - 1)

    assert checker.is_within_radius(exact, point) is True
    assert checker.is_within_radius(tight, point) is False


def test_far_point_is_out_of_range():
    checker = GeofenceChecker()
    center = Center(center_id=1, name="A", latitude=30.0380, longitude=31.2110, radius_m=30)

    assert checker.distance_to(center, Coordinate(30.0390, 31.2110)) > 100
    assert checker.is_within_radius(center, Coordinate(30.0390, 31.2110)) is False
