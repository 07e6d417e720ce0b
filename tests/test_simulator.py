"""
Tests for the turn simulation drivers.
"""

import unittest
from math import hypot
from groundtrack.config import SimulationConfig
from groundtrack.models import TurnParameters, TurnPhase
from groundtrack.simulator import (
    TurnValidationError,
    calculate_turn_phases,
    simulate_turn_to_heading,
    simulate_turn_to_time,
    validate_heading_change,
)
from groundtrack.utils import heading_delta


def make_params(**overrides):
    values = dict(ktas=150, roll_rate=3, initial_bank=0, max_bank=30, initial_heading=0,
                  wind_direction=0, wind_speed=0)
    values.update(overrides)
    return TurnParameters(**values)


def total_heading_change(track):
    return sum(heading_delta(prev.heading, cur.heading) for prev, cur in zip(track, track[1:]))


def point_at(track, time):
    return next(p for p in track if abs(p.time - time) < 1e-6)


class TestSimulateToTime(unittest.TestCase):
    """Test simulate_turn_to_time function."""

    def test_initial_point(self):
        """Test the first point reflects the inputs exactly."""
        track = simulate_turn_to_time(make_params(initial_heading=90), duration=5)
        first = track[0]
        self.assertEqual(first.time, 0.0)
        self.assertEqual(first.x, 0.0)
        self.assertEqual(first.y, 0.0)
        self.assertEqual(first.heading, 90.0)
        self.assertEqual(first.bank_angle, 0.0)
        self.assertAlmostEqual(first.ground_speed_x, 150.0)
        self.assertAlmostEqual(first.ground_speed_y, 0.0)
        self.assertEqual(first.expected_roll_out_heading, 90.0)
        self.assertEqual(first.phase, TurnPhase.ROLL_IN)

    def test_initial_point_with_wind(self):
        track = simulate_turn_to_time(
            make_params(initial_heading=90, wind_direction=270, wind_speed=20), duration=5
        )
        self.assertAlmostEqual(track[0].ground_speed_x, 170.0)

    def test_zero_duration(self):
        track = simulate_turn_to_time(make_params(), duration=0)
        self.assertEqual(len(track), 1)

    def test_ends_on_duration(self):
        """Test that the final step is shortened to land on the duration."""
        track = simulate_turn_to_time(make_params(), duration=10.25, dt=1.0)
        self.assertAlmostEqual(track[-1].time, 10.25)
        self.assertEqual(len(track), 12)
        times = [p.time for p in track]
        self.assertEqual(times, sorted(times))

    def test_straight_north(self):
        """Test straight flight at 180 kt covers 3 NM in a minute."""
        track = simulate_turn_to_time(make_params(ktas=180, max_bank=0), duration=60)
        last = track[-1]
        self.assertAlmostEqual(last.x, 0.0, places=6)
        self.assertAlmostEqual(last.y, 3.0, places=6)
        self.assertAlmostEqual(last.heading, 0.0)

    def test_westerly_drift(self):
        params = make_params(ktas=180, max_bank=0, wind_direction=270, wind_speed=20)
        last = simulate_turn_to_time(params, duration=60)[-1]
        self.assertGreater(last.x, 0.2)
        self.assertLess(last.x, 0.5)

    def test_right_turn(self):
        track = simulate_turn_to_time(make_params(), duration=60, dt=0.5)
        self.assertGreater(total_heading_change(track), 180)
        self.assertGreater(track[len(track) // 2].bank_angle, 0)

    def test_left_turn(self):
        track = simulate_turn_to_time(make_params(max_bank=-30, initial_heading=180), duration=60, dt=0.5)
        self.assertLess(track[-1].bank_angle, 0)
        self.assertLess(total_heading_change(track), -180)

    def test_turn_rate(self):
        """Test a steady 30 degree bank at 150 kt turns about 42 degrees in 10 s."""
        params = make_params(roll_rate=100, initial_bank=30)
        track = simulate_turn_to_time(params, duration=10, dt=0.1)
        self.assertAlmostEqual(track[-1].heading, 42, delta=2)

    def test_roll_in_dynamics(self):
        track = simulate_turn_to_time(make_params(), duration=20, dt=1.0)
        self.assertAlmostEqual(point_at(track, 5).bank_angle, 15, delta=3)
        self.assertAlmostEqual(point_at(track, 10).bank_angle, 30, delta=1)
        self.assertAlmostEqual(point_at(track, 15).bank_angle, 30, delta=1)
        self.assertEqual(point_at(track, 15).phase, TurnPhase.HOLD)

    def test_bank_never_exceeds_target(self):
        track = simulate_turn_to_time(make_params(roll_rate=7), duration=20, dt=1.0)
        self.assertTrue(all(0 <= p.bank_angle <= 30 for p in track))

    def test_initial_bank(self):
        track = simulate_turn_to_time(make_params(initial_bank=15), duration=10, dt=1.0)
        self.assertEqual(track[0].bank_angle, 15)
        self.assertAlmostEqual(point_at(track, 5).bank_angle, 30, delta=1)

    def test_wind_during_turn(self):
        """Test that a 30 kt westerly shifts every point east by the wind drift alone."""
        calm = simulate_turn_to_time(make_params(initial_bank=30), duration=30, dt=0.5)
        windy = simulate_turn_to_time(
            make_params(initial_bank=30, wind_direction=270, wind_speed=30), duration=30, dt=0.5
        )
        self.assertEqual(len(calm), len(windy))
        for c, w in zip(calm, windy):
            self.assertAlmostEqual(w.time, c.time)
            self.assertAlmostEqual(w.heading, c.heading, places=9)
            self.assertAlmostEqual(w.bank_angle, c.bank_angle, places=9)
            self.assertAlmostEqual(w.x - c.x, 30 * c.time / 3600, places=6)
            self.assertAlmostEqual(w.y, c.y, places=6)

    def test_step_consistency(self):
        """Test coarse and fine steps agree."""
        coarse = simulate_turn_to_time(make_params(), duration=30, dt=1.0)[-1]
        fine = simulate_turn_to_time(make_params(), duration=30, dt=0.1)[-1]
        self.assertAlmostEqual(coarse.heading, fine.heading, delta=2)
        self.assertAlmostEqual(coarse.x, fine.x, delta=0.1)
        self.assertAlmostEqual(coarse.y, fine.y, delta=0.1)

    def test_invalid_inputs(self):
        with self.assertRaises(TurnValidationError):
            simulate_turn_to_time(make_params(ktas=0), duration=10)
        with self.assertRaises(TurnValidationError):
            simulate_turn_to_time(make_params(roll_rate=0), duration=10)
        with self.assertRaises(TurnValidationError):
            simulate_turn_to_time(make_params(), duration=10, dt=0)
        with self.assertRaises(TurnValidationError):
            simulate_turn_to_time(make_params(max_bank=95), duration=10)
        with self.assertRaises(TurnValidationError):
            simulate_turn_to_time(make_params(wind_speed=-5), duration=10)
        with self.assertRaises(TurnValidationError):
            simulate_turn_to_time(make_params(), duration=-1)

    def test_validation_error_is_value_error(self):
        with self.assertRaises(ValueError):
            simulate_turn_to_time(make_params(ktas=-150), duration=10)


class TestSimulateToHeading(unittest.TestCase):
    """Test simulate_turn_to_heading function."""

    def test_right_turn(self):
        """Test a 90 degree right turn rolls out near 70 and captures 90."""
        result = simulate_turn_to_heading(make_params(), target_heading=90, dt=0.5)
        self.assertGreater(result.roll_out_heading_change, 0)
        self.assertGreater(result.roll_out_heading, 0)
        self.assertLess(result.roll_out_heading, 90)
        self.assertAlmostEqual(result.roll_out_heading, 70, delta=1)
        self.assertLess(abs(heading_delta(result.final_point.heading, 90)), 3)
        self.assertLess(abs(result.final_point.bank_angle), 0.5)
        self.assertFalse(result.terminated_early)
        self.assertEqual(result.termination_reason, "wings level")

    def test_left_turn(self):
        params = make_params(max_bank=-30, initial_heading=90)
        result = simulate_turn_to_heading(params, target_heading=0, dt=0.5)
        self.assertGreater(result.roll_out_heading, 0)
        self.assertLess(result.roll_out_heading, 90)
        self.assertLess(abs(heading_delta(result.final_point.heading, 0)), 3)

    def test_crossing_north(self):
        result = simulate_turn_to_heading(make_params(initial_heading=350), target_heading=20, dt=0.5)
        self.assertLess(abs(heading_delta(result.final_point.heading, 20)), 10)
        self.assertLess(result.effective_max_bank, 30)

    def test_short_turn_rolls_out_to_level(self):
        """Test a fast roll through a short turn finishes the roll-out at the default step."""
        params = make_params(roll_rate=10, max_bank=60, initial_heading=350)
        result = simulate_turn_to_heading(params, target_heading=20)
        last = result.final_point
        self.assertLess(abs(last.bank_angle), 0.5)
        self.assertEqual(last.phase, TurnPhase.ROLL_OUT)
        self.assertLess(abs(heading_delta(last.heading, 20)), 3)
        self.assertFalse(result.terminated_early)
        self.assertEqual(result.termination_reason, "wings level")

    def test_coarse_step_rolls_out_to_level(self):
        params = make_params(ktas=400, roll_rate=10, max_bank=60, initial_bank=15)
        result = simulate_turn_to_heading(params, target_heading=20, dt=1.0)
        self.assertLess(abs(result.final_point.bank_angle), 0.5)
        self.assertEqual(result.termination_reason, "wings level")

    def test_opposite_initial_bank(self):
        """Test a turn started in a left bank is not flown at a reduced right bank."""
        params = make_params(ktas=60, roll_rate=10, initial_bank=-20, max_bank=20)
        result = simulate_turn_to_heading(params, target_heading=15, dt=0.5)
        self.assertAlmostEqual(result.effective_max_bank, 20)
        self.assertGreaterEqual(result.track[1].bank_angle, 0)
        self.assertLess(abs(result.final_point.bank_angle), 0.5)
        self.assertLess(abs(heading_delta(result.final_point.heading, 15)), 3)

    def test_mirrored_turns(self):
        """Test that left and right turns are mirror images in still air."""
        right = simulate_turn_to_heading(make_params(), target_heading=90, dt=0.5)
        left = simulate_turn_to_heading(make_params(max_bank=-30), target_heading=270, dt=0.5)
        self.assertEqual(len(right.track), len(left.track))
        for r, l in zip(right.track, left.track):
            self.assertAlmostEqual(r.x, -l.x, places=6)
            self.assertAlmostEqual(r.y, l.y, places=6)
            self.assertAlmostEqual(r.bank_angle, -l.bank_angle, places=6)

    def test_phase_order(self):
        result = simulate_turn_to_heading(make_params(), target_heading=180, dt=0.5)
        phases = [p.phase for p in result.track]
        self.assertIn(TurnPhase.ROLL_IN, phases)
        self.assertIn(TurnPhase.HOLD, phases)
        self.assertIn(TurnPhase.ROLL_OUT, phases)

        last_roll_in = max(i for i, phase in enumerate(phases) if phase is TurnPhase.ROLL_IN)
        first_hold = phases.index(TurnPhase.HOLD)
        first_roll_out = phases.index(TurnPhase.ROLL_OUT)
        self.assertLess(last_roll_in, first_hold)
        self.assertLess(first_hold, first_roll_out)

    def test_full_circle(self):
        """Test a 359 degree turn ends close to where it started."""
        params = make_params(roll_rate=10, initial_bank=30)
        result = simulate_turn_to_heading(params, target_heading=359, dt=0.2)
        last = result.final_point
        self.assertLess(hypot(last.x, last.y), 0.2)

    def test_metadata(self):
        result = simulate_turn_to_heading(make_params(), target_heading=90, dt=0.5)
        self.assertIn("estimated_phases", result.metadata)
        self.assertIn("roll_in_heading_change", result.metadata)
        self.assertAlmostEqual(result.metadata["accumulated_heading_change"], 90, delta=3)

    def test_zero_bank_rejected(self):
        with self.assertRaises(TurnValidationError):
            simulate_turn_to_heading(make_params(max_bank=0), target_heading=90)

    def test_same_heading_rejected(self):
        with self.assertRaises(TurnValidationError):
            simulate_turn_to_heading(make_params(initial_heading=90), target_heading=90)

    def test_too_long_rejected(self):
        """Test that a turn exceeding the time ceiling is rejected before simulating."""
        with self.assertRaises(TurnValidationError):
            simulate_turn_to_heading(make_params(ktas=500, max_bank=1), target_heading=180)

    def test_stalled_heading(self):
        """Test a run whose steps barely move the heading stops with a partial track."""
        with self.assertLogs("groundtrack.simulator", level="WARNING"):
            result = simulate_turn_to_heading(make_params(initial_bank=30), target_heading=90, dt=0.001)
        self.assertTrue(result.terminated_early)
        self.assertEqual(result.termination_reason, "heading progress stalled")
        self.assertEqual(len(result.track), 21)

    def test_custom_config(self):
        config = SimulationConfig(min_heading_change=5.0)
        with self.assertRaises(TurnValidationError):
            simulate_turn_to_heading(make_params(), target_heading=3, config=config)


class TestTurnPhases(unittest.TestCase):
    """Test phase timing estimates."""

    def test_phase_times(self):
        phases = calculate_turn_phases(90, make_params())
        self.assertAlmostEqual(phases.roll_in_time, 10.0)
        self.assertAlmostEqual(phases.roll_out_time, 10.0)
        self.assertAlmostEqual(phases.total_time,
                               phases.roll_in_time + phases.sustained_time + phases.roll_out_time)

    def test_roll_in_time_from_opposite_bank(self):
        phases = calculate_turn_phases(90, make_params(initial_bank=-20))
        self.assertAlmostEqual(phases.roll_in_time, 10.0)
        phases = calculate_turn_phases(90, make_params(initial_bank=15))
        self.assertAlmostEqual(phases.roll_in_time, 5.0)

    def test_validate_heading_change(self):
        phases = validate_heading_change(90, make_params())
        self.assertLess(phases.total_time, 300)
        with self.assertRaises(TurnValidationError):
            validate_heading_change(0.05, make_params())


if __name__ == '__main__':
    unittest.main()
