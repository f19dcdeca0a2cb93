"""
Tests for the mission data model.
"""

import unittest

from models import Action, ActionType, FlightSettings, GeoPoint, HomePoint, Route, Waypoint


class TestAction(unittest.TestCase):

    def test_codes_match_litchi(self):
        self.assertEqual(int(ActionType.NONE), -1)
        self.assertEqual(int(ActionType.STAY), 0)
        self.assertEqual(int(ActionType.PHOTO), 1)
        self.assertEqual(int(ActionType.START_RECORDING), 2)
        self.assertEqual(int(ActionType.STOP_RECORDING), 3)
        self.assertEqual(int(ActionType.ROTATE), 5)

    def test_from_code(self):
        self.assertEqual(Action.from_code(5, 90), Action.rotate(90))
        self.assertEqual(Action.from_code(0, 2.5), Action.stay(2.5))
        self.assertEqual(Action.from_code("1", 123), Action.photo())
        self.assertEqual(Action.from_code(-1), Action.none())

    def test_unknown_code_is_rejected(self):
        with self.assertRaises(ValueError):
            Action.from_code(4)

    def test_default_is_no_action(self):
        self.assertEqual(Waypoint(id=1, latitude=0, longitude=0).actions, (Action.none(), Action.none()))


class TestWaypoint(unittest.TestCase):

    def test_photo_triggers_are_exclusive(self):
        wp = Waypoint(id=1, latitude=1.0, longitude=2.0)
        with self.assertRaises(ValueError):
            wp.with_photo_interval(seconds=2, meters=10)

        timed = wp.with_photo_interval(seconds=2)
        self.assertEqual((timed.photo_time_interval, timed.photo_dist_interval), (2, -1))
        spaced = timed.with_photo_interval(meters=15)
        self.assertEqual((spaced.photo_time_interval, spaced.photo_dist_interval), (-1, 15))
        self.assertEqual(wp.photo_time_interval, -1)

    def test_point(self):
        self.assertEqual(Waypoint(id=1, latitude=1.0, longitude=2.0).point, GeoPoint(1.0, 2.0))


class TestRoute(unittest.TestCase):

    def make_route(self, **kwargs):
        waypoints = [Waypoint(id=i, latitude=0, longitude=i * 0.001) for i in (1, 2, 3)]
        return Route(id="r1", name="Test", waypoints=waypoints, home_point=HomePoint(0, 0), **kwargs)

    def test_plain_route_has_no_polygon(self):
        route = self.make_route()
        self.assertFalse(route.is_coverage)
        self.assertEqual(route.next_waypoint_id(), 4)

    def test_polygon_is_stored_as_tuple(self):
        polygon = [GeoPoint(0, 0), GeoPoint(0, 1), GeoPoint(1, 1)]
        route = self.make_route(original_polygon=polygon)
        self.assertTrue(route.is_coverage)
        self.assertEqual(route.original_polygon, tuple(polygon))

    def test_polygon_can_be_set_once(self):
        route = self.make_route()
        route.original_polygon = [GeoPoint(0, 0), GeoPoint(0, 1), GeoPoint(1, 1)]
        with self.assertRaises(AttributeError):
            route.original_polygon = [GeoPoint(5, 5), GeoPoint(5, 6), GeoPoint(6, 6)]

    def test_polygon_cannot_be_cleared(self):
        polygon = [GeoPoint(0, 0), GeoPoint(0, 1), GeoPoint(1, 1)]
        route = self.make_route(original_polygon=polygon)
        with self.assertRaises(AttributeError):
            route.original_polygon = None
        with self.assertRaises(AttributeError):
            route.original_polygon = [GeoPoint(5, 5), GeoPoint(5, 6), GeoPoint(6, 6)]
        self.assertEqual(route.original_polygon, tuple(polygon))

    def test_unset_polygon_may_stay_none(self):
        route = self.make_route()
        route.original_polygon = None
        self.assertIsNone(route.original_polygon)

    def test_degenerate_polygon_is_rejected(self):
        with self.assertRaises(ValueError):
            self.make_route(original_polygon=[GeoPoint(0, 0), GeoPoint(0, 1)])

    def test_duplicate_ids_are_rejected(self):
        waypoints = [Waypoint(id=1, latitude=0, longitude=0), Waypoint(id=1, latitude=1, longitude=1)]
        with self.assertRaises(ValueError):
            Route(id="r", name="dup", waypoints=waypoints, home_point=HomePoint(0, 0))

    def test_empty_route_ids_start_at_one(self):
        route = Route(id="r", name="empty", waypoints=[], home_point=HomePoint(0, 0))
        self.assertEqual(route.next_waypoint_id(), 1)


class TestFlightSettings(unittest.TestCase):

    def test_speed_conversion(self):
        self.assertAlmostEqual(FlightSettings(speed_kmh=36).speed_ms, 10.0)
        self.assertAlmostEqual(FlightSettings().speed_ms, 15 / 3.6)


if __name__ == '__main__':
    unittest.main()
