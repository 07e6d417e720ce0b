"""
Tests for geographic placement of tracks.
"""

import unittest
from groundtrack.geo import GeoPoint, track_to_geopoints
from groundtrack.models import TurnParameters
from groundtrack.simulator import simulate_turn_to_time
from groundtrack.unit import Degree, NauticalMile


class TestGeoPoint(unittest.TestCase):
    """Test GeoPoint class."""

    def setUp(self):
        self.start = GeoPoint.from_deg(37.5665, 126.9780)

    def test_from_deg_round_trip(self):
        lat, lon = self.start.to_deg()
        self.assertAlmostEqual(lat, 37.5665)
        self.assertAlmostEqual(lon, 126.9780)

    def test_forward_north(self):
        """Test one NM north moves about one arc-minute of latitude."""
        north = self.start.forward(Degree(0), NauticalMile(1))
        lat, lon = north.to_deg()
        self.assertAlmostEqual(lat - 37.5665, 1 / 60, delta=1e-4)
        self.assertAlmostEqual(lon, 126.9780, places=6)

    def test_distance_to(self):
        east = self.start.forward(Degree(90), NauticalMile(2))
        self.assertAlmostEqual(self.start.distance_to(east).to(NauticalMile), 2.0, places=6)


class TestTrackToGeoPoints(unittest.TestCase):
    """Test track_to_geopoints function."""

    def test_straight_north(self):
        origin = GeoPoint.from_deg(37.5665, 126.9780)
        params = TurnParameters(ktas=180, roll_rate=3, initial_bank=0, max_bank=0, initial_heading=0)
        track = simulate_turn_to_time(params, duration=60)

        points = track_to_geopoints(track, origin)
        self.assertEqual(len(points), len(track))
        self.assertEqual(points[0].to_deg(), origin.to_deg())
        self.assertAlmostEqual(origin.distance_to(points[-1]).to(NauticalMile), 3.0, places=4)
        self.assertGreater(points[-1].to_deg()[0], origin.to_deg()[0])

    def test_right_turn_moves_east(self):
        origin = GeoPoint.from_deg(0.0, 0.0)
        params = TurnParameters(ktas=150, roll_rate=3, initial_bank=0, max_bank=30, initial_heading=0)
        track = simulate_turn_to_time(params, duration=60, dt=0.5)

        last = track_to_geopoints(track, origin)[-1]
        self.assertGreater(last.to_deg()[1], 0.0)


if __name__ == '__main__':
    unittest.main()
