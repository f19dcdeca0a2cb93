import unittest

from models import GeoPoint
from utils import create_flight_path_plot


class TestFlightPathPlot(unittest.TestCase):

    def test_traces(self):
        path = [GeoPoint(0, 0), GeoPoint(0, 0.001), GeoPoint(0.001, 0.001)]
        self.assertEqual(len(create_flight_path_plot(path).data), 3)
        fig = create_flight_path_plot(path, polygon=path)
        self.assertEqual([t.name for t in fig.data], ['Survey Area', 'Flight Path', 'Start', 'End'])

    def test_empty_path(self):
        self.assertEqual(len(create_flight_path_plot([]).data), 0)


if __name__ == '__main__':
    unittest.main()
