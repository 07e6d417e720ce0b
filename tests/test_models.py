"""
Tests for turn simulation models.
"""

import unittest
from groundtrack.models import (
    HeadingTurnResult,
    TrackPoint,
    TurnParameters,
    TurnPhase,
    normalize_heading,
)


def make_point(time=0.0, heading=90.0, gs_x=150.0, gs_y=0.0, phase=TurnPhase.HOLD):
    return TrackPoint(
        time=time, x=0.0, y=0.0, heading=heading, bank_angle=30.0,
        ground_speed_x=gs_x, ground_speed_y=gs_y, phase=phase,
        expected_roll_out_heading=heading,
    )


class TestNormalizeHeading(unittest.TestCase):
    """Test heading normalization."""

    def test_in_range_unchanged(self):
        self.assertEqual(normalize_heading(45.0), 45.0)

    def test_wraps_above_360(self):
        self.assertAlmostEqual(normalize_heading(370.0), 10.0)

    def test_wraps_negative(self):
        self.assertAlmostEqual(normalize_heading(-10.0), 350.0)

    def test_360_is_zero(self):
        """Test that a full circle maps to north, never to 360."""
        self.assertEqual(normalize_heading(360.0), 0.0)
        self.assertLess(normalize_heading(-1e-17), 360.0)


class TestTurnParameters(unittest.TestCase):
    """Test TurnParameters class."""

    def test_headings_normalized(self):
        """Test that headings are normalized on creation."""
        params = TurnParameters(ktas=150, roll_rate=3, initial_bank=0, max_bank=30,
                                initial_heading=-90, wind_direction=450, wind_speed=10)
        self.assertAlmostEqual(params.initial_heading, 270.0)
        self.assertAlmostEqual(params.wind_direction, 90.0)

    def test_turn_direction(self):
        """Test turn direction follows the sign of the target bank."""
        right = TurnParameters(ktas=150, roll_rate=3, initial_bank=0, max_bank=30, initial_heading=0)
        left = right.with_max_bank(-30)
        level = right.with_max_bank(0)
        self.assertEqual(right.turn_direction, 1)
        self.assertEqual(left.turn_direction, -1)
        self.assertEqual(level.turn_direction, 0)

    def test_with_max_bank_keeps_other_fields(self):
        params = TurnParameters(ktas=120, roll_rate=5, initial_bank=10, max_bank=30,
                                initial_heading=45, wind_direction=270, wind_speed=20)
        reduced = params.with_max_bank(12)
        self.assertEqual(reduced.max_bank, 12)
        self.assertEqual(reduced.ktas, 120)
        self.assertEqual(reduced.wind_speed, 20)
        self.assertEqual(params.max_bank, 30)

    def test_frozen(self):
        params = TurnParameters(ktas=150, roll_rate=3, initial_bank=0, max_bank=30, initial_heading=0)
        with self.assertRaises(AttributeError):
            params.ktas = 200


class TestTrackPoint(unittest.TestCase):
    """Test TrackPoint class."""

    def test_ground_speed(self):
        """Test ground speed magnitude from components."""
        point = make_point(gs_x=100.0, gs_y=100.0)
        self.assertAlmostEqual(point.ground_speed, 141.42, places=2)

    def test_ground_track(self):
        self.assertAlmostEqual(make_point(gs_x=150.0, gs_y=0.0).ground_track, 90.0)
        self.assertAlmostEqual(make_point(gs_x=-150.0, gs_y=0.0).ground_track, 270.0)

    def test_to_dict(self):
        """Test conversion to a flat dictionary."""
        data = make_point(time=2.5, phase=TurnPhase.ROLL_OUT).to_dict()
        self.assertEqual(data["time"], 2.5)
        self.assertEqual(data["phase"], "roll_out")
        self.assertIn("expected_roll_out_heading", data)


class TestHeadingTurnResult(unittest.TestCase):
    """Test HeadingTurnResult class."""

    def test_get_summary(self):
        """Test getting summary of a turn result."""
        track = [make_point(time=0.0, heading=0.0), make_point(time=10.0, heading=88.0)]
        result = HeadingTurnResult(
            track=track,
            roll_out_heading=70.0,
            roll_out_heading_change=20.0,
            effective_max_bank=30.0,
            required_heading_change=90.0,
            termination_reason="wings level",
        )

        summary = result.get_summary()
        self.assertEqual(summary["points"], 2)
        self.assertEqual(summary["duration"], 10.0)
        self.assertEqual(summary["final_heading"], 88.0)
        self.assertFalse(summary["terminated_early"])
        self.assertIs(result.final_point, track[-1])


if __name__ == '__main__':
    unittest.main()
