"""
Fourth-order Runge-Kutta step over the turn state vector.

The state is (east, north, heading, bank). Position rates come out of the
kinematic model in knots and are converted to nautical miles with
``dt / 3600``; angle rates are already deg/s.
"""

from .config import SECONDS_PER_HOUR
from .kinematics import Derivatives, compute_derivatives
from .models import TurnParameters, TurnState, normalize_heading
from .phase import BankRateFn

RK4_WEIGHTS = (1.0, 2.0, 2.0, 1.0)


def _advance(state: TurnState, k: Derivatives, h: float) -> TurnState:
    """State displaced by ``h`` seconds along derivative ``k`` (heading not wrapped)."""
    return TurnState(
        x=state.x + h * k.dx / SECONDS_PER_HOUR,
        y=state.y + h * k.dy / SECONDS_PER_HOUR,
        heading=state.heading + h * k.dheading,
        bank_angle=state.bank_angle + h * k.dbank,
    )


def _evaluate(state: TurnState, params: TurnParameters, bank_rate_fn: BankRateFn) -> Derivatives:
    return compute_derivatives(state, params, bank_rate_fn(state.bank_angle))


def rk4_step(state: TurnState, params: TurnParameters, dt: float, bank_rate_fn: BankRateFn) -> TurnState:
    """
    Advance ``state`` by ``dt`` seconds.

    All four stages use the same ``bank_rate_fn``: the phase is decided once
    before the step and is not re-evaluated between stages. Bank is returned
    unclamped; the caller applies the phase controller's clamp.

    Args:
        state: State at the start of the step
        params: Turn parameters
        dt: Step size in seconds
        bank_rate_fn: Bank rate (deg/s) as a function of stage bank angle

    Returns:
        New state with heading normalized to [0, 360)
    """
    k1 = _evaluate(state, params, bank_rate_fn)
    k2 = _evaluate(_advance(state, k1, 0.5 * dt), params, bank_rate_fn)
    k3 = _evaluate(_advance(state, k2, 0.5 * dt), params, bank_rate_fn)
    k4 = _evaluate(_advance(state, k3, dt), params, bank_rate_fn)

    stages = (k1, k2, k3, k4)
    weight_sum = sum(RK4_WEIGHTS)
    averaged = Derivatives(*(
        sum(w * component for w, component in zip(RK4_WEIGHTS, values)) / weight_sum
        for values in zip(*stages)
    ))

    new_state = _advance(state, averaged, dt)
    new_state.heading = normalize_heading(new_state.heading)
    return new_state
