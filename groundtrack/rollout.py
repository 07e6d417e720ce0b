"""Roll-out timing for turns to a target heading.

Turn rate grows with ``tan(bank)``, so the heading swept while the bank angle
changes linearly has no closed form. It is computed here by forward
sub-integration: the roll interval is split into a fixed number of sub-steps,
the turn rate is evaluated at each sub-step's (midpoint) bank angle and
``|rate| * dt`` is accumulated.

From those budgets :func:`plan_roll_out` derives

* the heading change still needed when roll-out must begin,
* a reduced target bank for turns too short to ever reach the configured one,
* the absolute heading at which to start rolling out.
"""

from dataclasses import dataclass
from math import copysign, sqrt

import numpy as np

from .config import MIN_EFFECTIVE_BANK_DEG, ROLL_OUT_SUBSTEPS, TURN_RATE_CONSTANT
from .models import TurnParameters, normalize_heading


@dataclass
class RollOutPlan:
    """Pre-computed roll-out timing for one turn.

    Attributes:
        required_heading_change: Absolute heading change of the turn (deg).
        effective_max_bank: Target bank actually flown (possibly reduced).
        roll_in_heading_change: Heading swept rolling from initial to target bank.
        roll_out_heading_change: Heading swept rolling from target bank to level.
        roll_out_heading: Heading at which roll-out must begin.
        turn_direction: +1 right, -1 left.
        reduced: True when the target bank was reduced for a short turn.
    """

    required_heading_change: float
    effective_max_bank: float
    roll_in_heading_change: float
    roll_out_heading_change: float
    roll_out_heading: float
    turn_direction: int
    reduced: bool = False


def _swept_heading(start_bank: float, end_bank: float, roll_rate: float, ktas: float,
                   steps: int = ROLL_OUT_SUBSTEPS) -> float:
    """Heading magnitude swept while bank moves linearly from start to end."""
    if roll_rate <= 0 or ktas <= 0 or start_bank == end_bank:
        return 0.0
    duration = abs(end_bank - start_bank) / roll_rate
    sub_dt = duration / steps
    fractions = (np.arange(steps) + 0.5) / steps
    banks = start_bank + (end_bank - start_bank) * fractions
    rates = np.abs(TURN_RATE_CONSTANT * np.tan(np.radians(banks)) / ktas)
    return float(rates.sum() * sub_dt)


def calculate_roll_out_heading_change(bank_angle: float, roll_rate: float, ktas: float,
                                      steps: int = ROLL_OUT_SUBSTEPS) -> float:
    """
    Heading change accrued while rolling from ``bank_angle`` to wings level.

    Args:
        bank_angle: Current bank in degrees
        roll_rate: Roll rate in deg/s
        ktas: True airspeed in knots
        steps: Number of sub-steps of the roll-out interval

    Returns:
        Heading change in degrees, signed like ``bank_angle`` (0 at zero bank)
    """
    change = _swept_heading(bank_angle, 0.0, abs(roll_rate), ktas, steps)
    return copysign(change, bank_angle) if change else 0.0


def calculate_roll_in_heading_change(initial_bank: float, target_bank: float, roll_rate: float,
                                     ktas: float, steps: int = ROLL_OUT_SUBSTEPS) -> float:
    """
    Heading change magnitude accrued rolling from ``initial_bank`` to ``target_bank``.

    An initial bank on the other side of level is clamped to wings level once
    roll-in starts, so the roll is measured from zero in that case.
    """
    return _swept_heading(roll_in_start_bank(initial_bank, target_bank), target_bank,
                          abs(roll_rate), ktas, steps)


def roll_in_start_bank(initial_bank: float, target_bank: float) -> float:
    """Bank the roll-in effectively starts from: ``initial_bank``, or 0 when it opposes the target."""
    return initial_bank if initial_bank * target_bank > 0 else 0.0


def required_heading_change(initial_heading: float, target_heading: float, turn_direction: int) -> float:
    """Heading change from initial to target when turning in ``turn_direction``, in [0, 360)."""
    if turn_direction >= 0:
        return normalize_heading(target_heading - initial_heading)
    return normalize_heading(initial_heading - target_heading)


def calculate_effective_max_bank(required_change: float, params: TurnParameters,
                                 steps: int = ROLL_OUT_SUBSTEPS) -> float:
    """
    Target bank to fly for a turn of ``required_change`` degrees.

    When the turn is shorter than the heading swept by a full roll-in plus a
    full roll-out, the configured bank is scaled by the square root of the
    ratio of required to minimum change and floored at a signed 5 degrees.
    """
    roll_in = calculate_roll_in_heading_change(params.initial_bank, params.max_bank,
                                               params.roll_rate, params.ktas, steps)
    roll_out = abs(calculate_roll_out_heading_change(params.max_bank, params.roll_rate,
                                                     params.ktas, steps))
    minimum = roll_in + roll_out
    if minimum <= 0 or required_change >= minimum:
        return params.max_bank

    reduced = params.max_bank * sqrt(required_change / minimum)
    if abs(reduced) < MIN_EFFECTIVE_BANK_DEG:
        reduced = copysign(MIN_EFFECTIVE_BANK_DEG, params.max_bank)
    return reduced


def calculate_roll_out_heading(target_heading: float, roll_out_change: float, turn_direction: int) -> float:
    """Heading at which to begin rolling out: before the target in the turn direction."""
    return normalize_heading(target_heading - turn_direction * abs(roll_out_change))


def plan_roll_out(params: TurnParameters, target_heading: float,
                  steps: int = ROLL_OUT_SUBSTEPS) -> RollOutPlan:
    """
    Compute the roll-out timing for a turn to ``target_heading``.

    Args:
        params: Turn parameters; the sign of ``max_bank`` sets the direction
        target_heading: Heading to capture in degrees
        steps: Sub-steps of each roll sub-integration

    Returns:
        RollOutPlan with budgets, the effective bank and the roll-out heading
    """
    direction = params.turn_direction
    required = required_heading_change(params.initial_heading, target_heading, direction)
    effective_bank = calculate_effective_max_bank(required, params, steps)

    roll_in = calculate_roll_in_heading_change(params.initial_bank, effective_bank,
                                               params.roll_rate, params.ktas, steps)
    roll_out = abs(calculate_roll_out_heading_change(effective_bank, params.roll_rate,
                                                     params.ktas, steps))
    return RollOutPlan(
        required_heading_change=required,
        effective_max_bank=effective_bank,
        roll_in_heading_change=roll_in,
        roll_out_heading_change=roll_out,
        roll_out_heading=calculate_roll_out_heading(target_heading, roll_out, direction),
        turn_direction=direction,
        reduced=effective_bank != params.max_bank,
    )
