"""
Kinematic model of a coordinated turn.

Maps the current state and turn parameters to instantaneous rates of change.
Position rates are in knots, heading and bank rates in deg/s.
"""

from dataclasses import dataclass
from math import cos, radians, sin, tan
from typing import Tuple

from .config import TURN_RATE_CONSTANT
from .models import TurnParameters, TurnState


@dataclass
class Derivatives:
    """Rates of change of the state vector."""

    dx: float  # east ground speed, kt
    dy: float  # north ground speed, kt
    dheading: float  # deg/s
    dbank: float  # deg/s

    def __iter__(self):
        return iter((self.dx, self.dy, self.dheading, self.dbank))


def calculate_turn_rate(bank_angle: float, ktas: float) -> float:
    """
    Turn rate of a coordinated turn.

    Args:
        bank_angle: Bank angle in degrees, right positive
        ktas: True airspeed in knots

    Returns:
        Heading rate in deg/s; positive for a right turn, 0 when airspeed is not positive
    """
    if ktas <= 0:
        return 0.0
    return TURN_RATE_CONSTANT * tan(radians(bank_angle)) / ktas


def wind_components(wind_direction: float, wind_speed: float) -> Tuple[float, float]:
    """
    East/north components of the wind vector.

    ``wind_direction`` is where the wind blows from, so the returned vector
    points the reciprocal way: a westerly (270) pushes east.
    """
    to_rad = radians(wind_direction + 180.0)
    return wind_speed * sin(to_rad), wind_speed * cos(to_rad)


def air_velocity(heading: float, ktas: float) -> Tuple[float, float]:
    """East/north components of the airspeed vector along ``heading``."""
    hdg_rad = radians(heading)
    return ktas * sin(hdg_rad), ktas * cos(hdg_rad)


def ground_velocity(heading: float, params: TurnParameters) -> Tuple[float, float]:
    """Ground-speed components: airspeed along heading plus wind."""
    air_east, air_north = air_velocity(heading, params.ktas)
    wind_east, wind_north = wind_components(params.wind_direction, params.wind_speed)
    return air_east + wind_east, air_north + wind_north


def compute_derivatives(state: TurnState, params: TurnParameters, bank_rate: float) -> Derivatives:
    """
    Instantaneous rates for ``state``.

    Args:
        state: Current position, heading and bank
        params: Turn parameters (airspeed and wind)
        bank_rate: Bank rate in deg/s decided by the phase controller

    Returns:
        Derivatives with position rates in knots and angle rates in deg/s
    """
    gs_east, gs_north = ground_velocity(state.heading, params)
    return Derivatives(
        dx=gs_east,
        dy=gs_north,
        dheading=calculate_turn_rate(state.bank_angle, params.ktas),
        dbank=bank_rate,
    )
