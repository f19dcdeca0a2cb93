"""
Tests for drawing conversion and area bounds.
"""

import unittest

from geodesy import distance
from map_utils import calculate_area_bounds, circle_to_polygon, drawing_to_points
from models import GeoPoint


class TestDrawingToPoints(unittest.TestCase):

    def test_polygon_drops_closing_vertex(self):
        geometry = {
            "type": "Polygon",
            "coordinates": [[[18.40, -33.90], [18.41, -33.90], [18.41, -33.91], [18.40, -33.90]]],
        }
        self.assertEqual(drawing_to_points(geometry), [
            GeoPoint(-33.90, 18.40), GeoPoint(-33.90, 18.41), GeoPoint(-33.91, 18.41),
        ])

    def test_linestring_swaps_axes(self):
        geometry = {"type": "LineString", "coordinates": [[8.5, 47.3], [8.6, 47.4]]}
        self.assertEqual(drawing_to_points(geometry), [GeoPoint(47.3, 8.5), GeoPoint(47.4, 8.6)])

    def test_circle_becomes_polygon(self):
        geometry = {"type": "Point", "coordinates": [8.5, 47.3], "radius": 120}
        points = drawing_to_points(geometry)
        self.assertEqual(len(points), 36)
        for point in points:
            self.assertAlmostEqual(distance(GeoPoint(47.3, 8.5), point), 120, delta=1e-3)

    def test_unsupported_geometry(self):
        self.assertEqual(drawing_to_points({"type": "Point", "coordinates": [8.5, 47.3]}), [])
        self.assertEqual(drawing_to_points({"type": "MultiPolygon", "coordinates": []}), [])
        self.assertEqual(drawing_to_points(None), [])

    def test_circle_segments(self):
        self.assertEqual(len(circle_to_polygon(GeoPoint(0, 0), 50, segments=12)), 12)


class TestAreaBounds(unittest.TestCase):

    def test_bounds(self):
        points = [GeoPoint(10.0, 20.0), GeoPoint(10.01, 20.0), GeoPoint(10.0, 20.02)]
        bounds = calculate_area_bounds(points)
        self.assertEqual((bounds["min_lat"], bounds["max_lat"]), (10.0, 10.01))
        self.assertEqual((bounds["min_lon"], bounds["max_lon"]), (20.0, 20.02))
        self.assertAlmostEqual(bounds["center_lat"], 10.005)
        self.assertAlmostEqual(bounds["height"], distance(GeoPoint(10.0, 20.0), GeoPoint(10.01, 20.0)))
        self.assertGreater(bounds["width"], bounds["height"])

    def test_empty(self):
        self.assertIsNone(calculate_area_bounds([]))


if __name__ == '__main__':
    unittest.main()
