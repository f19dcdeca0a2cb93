"""
Tests for spherical geodesy and the local projection.
"""

import math
import unittest

import numpy as np

from config import EARTH_RADIUS_M
from geodesy import (
    bearing, centroid, destination, distance, from_local, project_points, rotate_points, to_local,
    unproject_points,
)
from models import GeoPoint


class TestGreatCircle(unittest.TestCase):
    """Test bearing, distance and destination."""

    def test_distance_same_point_is_zero(self):
        for point in (GeoPoint(0, 0), GeoPoint(47.3769, 8.5417), GeoPoint(-33.86, 151.21)):
            self.assertEqual(distance(point, point), 0.0)

    def test_one_degree_of_latitude(self):
        d = distance(GeoPoint(10.0, 20.0), GeoPoint(11.0, 20.0))
        self.assertAlmostEqual(d, EARTH_RADIUS_M * math.pi / 180, places=6)

    def test_destination_round_trip(self):
        origin = GeoPoint(45.0, 7.0)
        for d, b in ((1234.5, 37.0), (50.0, 270.0), (20000.0, 181.5), (5.0, 0.0)):
            target = destination(origin, d, b)
            self.assertAlmostEqual(distance(origin, target), d, delta=1e-3)
            self.assertAlmostEqual(bearing(origin, target), b, delta=1e-6)

    def test_bearing_cardinal_directions(self):
        origin = GeoPoint(0.0, 0.0)
        self.assertAlmostEqual(bearing(origin, GeoPoint(1.0, 0.0)), 0.0)
        self.assertAlmostEqual(bearing(origin, GeoPoint(0.0, 1.0)), 90.0)
        self.assertAlmostEqual(bearing(origin, GeoPoint(-1.0, 0.0)), 180.0)
        self.assertAlmostEqual(bearing(origin, GeoPoint(0.0, -1.0)), 270.0)

    def test_bearing_range(self):
        b = bearing(GeoPoint(10.0, 10.0), GeoPoint(10.5, 9.5))
        self.assertGreaterEqual(b, 0.0)
        self.assertLess(b, 360.0)

    def test_reverse_bearing_differs_by_180(self):
        a = GeoPoint(47.0, 8.0)
        b = destination(a, 800.0, 63.0)
        diff = (bearing(a, b) - bearing(b, a)) % 360
        self.assertAlmostEqual(diff, 180.0, delta=0.05)


class TestLocalProjection(unittest.TestCase):
    """Test the equirectangular local frame."""

    def setUp(self):
        self.center = GeoPoint(60.0, 10.0)

    def test_center_maps_to_origin(self):
        x, y = to_local(self.center, self.center)
        self.assertEqual((x, y), (0.0, 0.0))

    def test_round_trip(self):
        point = GeoPoint(60.003, 10.004)
        back = from_local(to_local(point, self.center), self.center)
        self.assertAlmostEqual(back.lat, point.lat, places=10)
        self.assertAlmostEqual(back.lng, point.lng, places=10)

    def test_longitude_shrinks_with_latitude(self):
        x, _ = to_local(GeoPoint(60.0, 10.001), self.center)
        _, y = to_local(GeoPoint(60.001, 10.0), self.center)
        self.assertAlmostEqual(x / y, math.cos(math.radians(60.0)), places=9)

    def test_vectorised_matches_scalar(self):
        points = [GeoPoint(60.001, 10.002), GeoPoint(59.999, 9.998)]
        xy = project_points(points, self.center)
        for row, point in zip(xy, points):
            x, y = to_local(point, self.center)
            self.assertAlmostEqual(row[0], x, places=6)
            self.assertAlmostEqual(row[1], y, places=6)
        back = unproject_points(xy, self.center)
        self.assertAlmostEqual(back[0].lat, points[0].lat, places=10)
        self.assertAlmostEqual(back[1].lng, points[1].lng, places=10)

    def test_rotation_is_clockwise(self):
        rotated = rotate_points([(0.0, 1.0)], 90)
        np.testing.assert_allclose(rotated, [[1.0, 0.0]], atol=1e-12)

    def test_rotation_inverse(self):
        xy = np.array([[3.0, -4.0], [10.0, 2.5]])
        np.testing.assert_allclose(rotate_points(rotate_points(xy, -33.0), 33.0), xy, atol=1e-9)

    def test_centroid_ignores_closing_vertex(self):
        ring = [GeoPoint(0, 0), GeoPoint(0, 2), GeoPoint(2, 2), GeoPoint(2, 0)]
        self.assertEqual(centroid(ring), centroid(ring + [ring[0]]))
        self.assertEqual(centroid(ring), GeoPoint(1.0, 1.0))


if __name__ == '__main__':
    unittest.main()
