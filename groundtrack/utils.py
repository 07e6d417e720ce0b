"""
Stateless turn utilities for instantaneous read-outs.

None of these run a simulation; they are cheap enough to call on every UI
update.
"""

from math import atan2, degrees, hypot, inf, radians, tan

from .config import FEET_PER_NM, GRAVITY_FT_S2, KNOT_TO_FT_PER_S, ROLL_OUT_SUBSTEPS
from .kinematics import calculate_turn_rate
from .models import normalize_heading
from .rollout import calculate_roll_out_heading_change


def calculate_turn_radius(bank_angle: float, ktas: float) -> float:
    """
    Radius of a coordinated turn, ``v^2 / (g * tan(bank))``.

    Args:
        bank_angle: Bank angle in degrees (either sign)
        ktas: True airspeed in knots

    Returns:
        Radius in nautical miles; ``inf`` at zero bank
    """
    tan_bank = abs(tan(radians(bank_angle)))
    if tan_bank == 0:
        return inf
    speed_fps = ktas * KNOT_TO_FT_PER_S
    return speed_fps ** 2 / (GRAVITY_FT_S2 * tan_bank) / FEET_PER_NM


def calculate_ground_speed_magnitude(ground_speed_x: float, ground_speed_y: float) -> float:
    """Ground speed in knots from east/north components."""
    return hypot(ground_speed_x, ground_speed_y)


def calculate_ground_track_angle(ground_speed_x: float, ground_speed_y: float) -> float:
    """Ground track in degrees [0, 360) from east/north components; 0 when stationary."""
    if ground_speed_x == 0 and ground_speed_y == 0:
        return 0.0
    return normalize_heading(degrees(atan2(ground_speed_x, ground_speed_y)))


def predict_roll_out_heading(current_heading: float, current_bank: float, roll_rate: float,
                             ktas: float, steps: int = ROLL_OUT_SUBSTEPS) -> float:
    """
    Heading the aircraft settles on if roll-out starts now.

    Args:
        current_heading: Heading in degrees
        current_bank: Bank in degrees, right positive
        roll_rate: Roll rate in deg/s
        ktas: True airspeed in knots

    Returns:
        Predicted heading in [0, 360)
    """
    change = calculate_roll_out_heading_change(current_bank, roll_rate, ktas, steps)
    return normalize_heading(current_heading + change)


def heading_delta(previous: float, current: float) -> float:
    """Signed heading change from ``previous`` to ``current`` folded into (-180, 180]."""
    delta = current - previous
    if delta > 180.0:
        delta -= 360.0
    elif delta <= -180.0:
        delta += 360.0
    return delta


__all__ = [
    "calculate_turn_radius",
    "calculate_turn_rate",
    "calculate_ground_speed_magnitude",
    "calculate_ground_track_angle",
    "calculate_roll_out_heading_change",
    "predict_roll_out_heading",
    "heading_delta",
    "normalize_heading",
]
