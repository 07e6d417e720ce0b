"""Bank-angle phase controller.

The controller decides, once per integration step, which way the bank angle
moves and how fast:

* ``ROLL_IN``: toward the target bank at the roll rate. Within
  ``ROLL_IN_SNAP_TOLERANCE_DEG`` of the target it switches to ``HOLD`` and the
  bank is snapped exactly onto the target, so the integrator never creeps
  asymptotically short of it.
* ``HOLD``: bank rate is zero.
* ``ROLL_OUT``: toward wings level at the roll rate. A bank smaller than
  ``LEVEL_TOLERANCE_DEG`` counts as level.

Transitions are validated by :class:`groundtrack.state.StateMachine`; the only
legal moves are ROLL_IN -> HOLD, ROLL_IN -> ROLL_OUT and HOLD -> ROLL_OUT.
"""

import logging
from collections.abc import Callable

from .config import LEVEL_TOLERANCE_DEG, ROLL_IN_SNAP_TOLERANCE_DEG
from .models import TurnPhase
from .state import Action, StateMachine

logger = logging.getLogger(__name__)

BankRateFn = Callable[[float], float]


def _sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def clamp_bank(bank: float, phase: TurnPhase, target_bank: float, previous_bank: float) -> float:
    """Bound ``bank`` after an integration step.

    During roll-in and hold the bank stays within [0, target] ([target, 0] for
    a left turn). During roll-out, and for a zero target, it stays between 0
    and the bank held before the step. This removes the overshoot the
    weighted average can introduce near a phase boundary.

    Args:
        bank: Bank angle produced by the step.
        phase: Phase the step was integrated in.
        target_bank: Target bank of the turn (possibly reduced).
        previous_bank: Bank angle before the step.

    Returns:
        The clamped bank angle in degrees.
    """
    if phase is TurnPhase.ROLL_OUT or target_bank == 0:
        bound = previous_bank
    else:
        bound = target_bank
    low, high = min(0.0, bound), max(0.0, bound)
    return min(max(bank, low), high)


class PhaseController:
    """Three-phase bank-angle controller for a single turn.

    Attributes:
        target_bank: Bank held during the sustained part of the turn.
        roll_rate: Roll rate magnitude in deg/s.
        level: True once roll-out has brought the wings level.
    """

    def __init__(self, target_bank: float, roll_rate: float, initial_bank: float):
        """
        Args:
            target_bank: Target bank in degrees (sign = turn direction).
            roll_rate: Roll rate in deg/s; only the magnitude is used.
            initial_bank: Bank at the start of the turn.
        """
        self.target_bank = target_bank
        self.roll_rate = abs(roll_rate)
        self.level = False

        initial_phase = TurnPhase.HOLD if initial_bank == target_bank else TurnPhase.ROLL_IN
        graph = {
            TurnPhase.ROLL_IN: {
                Action(TurnPhase.HOLD, self._snap_to_target),
                Action(TurnPhase.ROLL_OUT, self._log_roll_out),
            },
            TurnPhase.HOLD: {Action(TurnPhase.ROLL_OUT, self._log_roll_out)},
            TurnPhase.ROLL_OUT: set(),
        }
        self._machine = StateMachine(initial_phase, graph)

    @property
    def phase(self) -> TurnPhase:
        return self._machine.current

    def rate_for_step(self, bank: float) -> BankRateFn:
        """Bank-rate function for the next step, fixed for all of its stages.

        Args:
            bank: Bank angle at the start of the step.

        Returns:
            A function of the stage bank angle returning deg/s.
        """
        phase = self.phase
        if phase is TurnPhase.ROLL_IN:
            rate = _sign(self.target_bank - bank) * self.roll_rate
        elif phase is TurnPhase.ROLL_OUT:
            rate = -_sign(bank) * self.roll_rate
        else:
            rate = 0.0
        return lambda _stage_bank: rate

    def clamp(self, bank: float, previous_bank: float) -> float:
        """Clamp ``bank`` for the current phase (see :func:`clamp_bank`)."""
        return clamp_bank(bank, self.phase, self.target_bank, previous_bank)

    def update(self, bank: float) -> float:
        """Apply phase transitions after a step.

        Args:
            bank: Clamped bank angle at the end of the step.

        Returns:
            The bank angle, snapped onto the target or onto zero when a
            boundary was crossed.
        """
        if self.phase is TurnPhase.ROLL_IN and abs(self.target_bank - bank) <= ROLL_IN_SNAP_TOLERANCE_DEG:
            return self._machine.request_transition(TurnPhase.HOLD)
        if self.phase is TurnPhase.ROLL_OUT and abs(bank) < LEVEL_TOLERANCE_DEG:
            self.level = True
            return 0.0
        return bank

    def begin_roll_out(self):
        """Command roll-out; does nothing if already rolling out."""
        if self.phase is not TurnPhase.ROLL_OUT:
            self._machine.request_transition(TurnPhase.ROLL_OUT)

    def _snap_to_target(self) -> float:
        logger.debug("Roll-in complete, holding %.1f deg bank", self.target_bank)
        return self.target_bank

    def _log_roll_out(self):
        logger.debug("Roll-out commanded, target bank was %.1f deg", self.target_bank)
