"""Simulation drivers for a single coordinated turn.

Two entry points share the same integrator and phase controller:

* :func:`simulate_turn_to_time` flies the turn for a fixed duration. The
  bank rolls toward the target and holds it; roll-out is never commanded.
* :func:`simulate_turn_to_heading` flies until a target heading is captured,
  beginning roll-out once the remaining heading change is within the
  pre-computed roll-out budget.

Invalid inputs raise :class:`TurnValidationError` before any integration.
Numerical degeneracy during a run (vanishing step, stalled heading, time or
iteration ceiling) is logged as a warning and the partial track is returned.

Example:
    >>> params = TurnParameters(ktas=150, roll_rate=3, initial_bank=0,
    ...                         max_bank=30, initial_heading=0)
    >>> result = simulate_turn_to_heading(params, target_heading=90)
    >>> round(result.roll_out_heading)
    70
"""

import logging
from math import isfinite
from typing import List, Optional

from .config import DEFAULT_CONFIG, DEFAULT_TIME_STEP, MAX_BANK_DEG, SimulationConfig
from .integrator import rk4_step
from .kinematics import calculate_turn_rate, ground_velocity
from .models import HeadingTurnResult, TrackPoint, TurnParameters, TurnPhase, TurnPhases, TurnState
from .phase import PhaseController
from .rollout import RollOutPlan, plan_roll_out, roll_in_start_bank
from .utils import heading_delta, predict_roll_out_heading

logger = logging.getLogger(__name__)


class TurnValidationError(ValueError):
    """Raised when turn inputs are rejected before simulation."""


def validate_parameters(params: TurnParameters, dt: float):
    """
    Reject inputs that cannot be simulated.

    Raises:
        TurnValidationError: On non-positive airspeed, roll rate or step size,
            bank beyond +/-89 degrees, negative wind speed or non-finite values
    """
    if not isfinite(params.ktas) or params.ktas <= 0:
        raise TurnValidationError(f"Airspeed must be positive, got {params.ktas} kt")
    if not isfinite(params.roll_rate) or params.roll_rate <= 0:
        raise TurnValidationError(f"Roll rate must be positive, got {params.roll_rate} deg/s")
    for name, bank in (("Initial bank", params.initial_bank), ("Maximum bank", params.max_bank)):
        if not isfinite(bank) or abs(bank) > MAX_BANK_DEG:
            raise TurnValidationError(
                f"{name} must be between -{MAX_BANK_DEG:g} and {MAX_BANK_DEG:g} degrees, got {bank}"
            )
    if not isfinite(params.initial_heading):
        raise TurnValidationError("Initial heading must be finite")
    if not isfinite(params.wind_speed) or params.wind_speed < 0:
        raise TurnValidationError(f"Wind speed must be non-negative, got {params.wind_speed} kt")
    if not isfinite(params.wind_direction):
        raise TurnValidationError("Wind direction must be finite")
    if not isfinite(dt) or dt <= 0:
        raise TurnValidationError(f"Time step must be positive, got {dt} s")


def calculate_turn_phases(heading_change: float, params: TurnParameters,
                          target_bank: Optional[float] = None,
                          plan: Optional[RollOutPlan] = None) -> TurnPhases:
    """
    Estimate how long each phase of a turn to a heading lasts.

    Args:
        heading_change: Heading change in degrees (sign ignored)
        params: Turn parameters
        target_bank: Bank to hold; defaults to ``params.max_bank``
        plan: Roll-out plan providing the roll-in/roll-out heading budgets

    Returns:
        TurnPhases with roll-in, sustained, roll-out and total times (s)
    """
    change = abs(heading_change)
    bank = params.max_bank if target_bank is None else target_bank
    turn_rate = calculate_turn_rate(bank, params.ktas)

    roll_in_time = abs(bank - roll_in_start_bank(params.initial_bank, bank)) / params.roll_rate
    roll_out_time = abs(bank) / params.roll_rate

    swept = 0.0
    if plan is not None:
        swept = plan.roll_in_heading_change + plan.roll_out_heading_change
    sustained_change = max(0.0, change - swept)
    if sustained_change == 0:
        sustained_time = 0.0
    elif turn_rate == 0:
        sustained_time = float("inf")
    else:
        sustained_time = sustained_change / abs(turn_rate)

    return TurnPhases(
        roll_in_time=roll_in_time,
        sustained_time=sustained_time,
        roll_out_time=roll_out_time,
        total_time=roll_in_time + sustained_time + roll_out_time,
        target_bank=bank,
        turn_rate=turn_rate,
    )


def validate_heading_change(heading_change: float, params: TurnParameters,
                            plan: Optional[RollOutPlan] = None,
                            config: Optional[SimulationConfig] = None) -> TurnPhases:
    """
    Pre-flight check that a turn to a heading is achievable.

    Raises:
        TurnValidationError: If the change is below the meaningful minimum or
            the estimated turn time exceeds the time ceiling

    Returns:
        The phase timing estimate
    """
    config = config or DEFAULT_CONFIG
    if abs(heading_change) < config.min_heading_change:
        raise TurnValidationError(
            f"Heading change of {abs(heading_change):.3f} deg is too small to be meaningful "
            f"(minimum {config.min_heading_change:g} degrees)"
        )

    target_bank = plan.effective_max_bank if plan is not None else params.max_bank
    phases = calculate_turn_phases(heading_change, params, target_bank, plan)
    if phases.total_time > config.max_duration:
        raise TurnValidationError(
            f"Turn would take {phases.total_time:.1f}s, exceeding maximum duration of "
            f"{config.max_duration:g}s"
        )
    return phases


def _record(time: float, state: TurnState, params: TurnParameters, phase: TurnPhase,
            config: SimulationConfig) -> TrackPoint:
    gs_east, gs_north = ground_velocity(state.heading, params)
    return TrackPoint(
        time=time,
        x=state.x,
        y=state.y,
        heading=state.heading,
        bank_angle=state.bank_angle,
        ground_speed_x=gs_east,
        ground_speed_y=gs_north,
        phase=phase,
        expected_roll_out_heading=predict_roll_out_heading(
            state.heading, state.bank_angle, params.roll_rate, params.ktas, config.roll_out_substeps
        ),
    )


def _step(state: TurnState, params: TurnParameters, controller: PhaseController, dt: float) -> TurnState:
    """One integration step followed by the bank clamp and phase update."""
    previous_bank = state.bank_angle
    new_state = rk4_step(state, params, dt, controller.rate_for_step(previous_bank))
    new_state.bank_angle = controller.clamp(new_state.bank_angle, previous_bank)
    new_state.bank_angle = controller.update(new_state.bank_angle)
    return new_state


def _initial_state(params: TurnParameters) -> TurnState:
    return TurnState(x=0.0, y=0.0, heading=params.initial_heading, bank_angle=params.initial_bank)


def simulate_turn_to_time(params: TurnParameters, duration: float, dt: float = DEFAULT_TIME_STEP,
                          config: Optional[SimulationConfig] = None) -> List[TrackPoint]:
    """
    Simulate a turn for a fixed duration.

    Args:
        params: Turn parameters
        duration: Simulated time in seconds (0 returns only the start point)
        dt: Integration step in seconds; the final step is shortened to land
            exactly on ``duration``
        config: Run limits

    Returns:
        Track points from t=0 to t=duration

    Raises:
        TurnValidationError: On invalid inputs
    """
    config = config or DEFAULT_CONFIG
    validate_parameters(params, dt)
    if not isfinite(duration) or duration < 0:
        raise TurnValidationError(f"Duration must be non-negative, got {duration} s")

    controller = PhaseController(params.max_bank, params.roll_rate, params.initial_bank)
    state = _initial_state(params)
    track = [_record(0.0, state, params, controller.phase, config)]

    t = 0.0
    step_index = 0
    while t < duration:
        step_index += 1
        t_next = min(step_index * dt, duration)
        if duration - t_next < config.min_step:
            t_next = duration
        step_dt = t_next - t
        if step_dt < config.min_step:
            logger.warning("Step size %.3g s too small at t=%.3f s, stopping integration", step_dt, t)
            break

        state = _step(state, params, controller, step_dt)
        t = t_next
        track.append(_record(t, state, params, controller.phase, config))

    return track


def simulate_turn_to_heading(params: TurnParameters, target_heading: float,
                             dt: float = DEFAULT_TIME_STEP,
                             config: Optional[SimulationConfig] = None) -> HeadingTurnResult:
    """
    Simulate a turn that captures ``target_heading``.

    The turn direction is the sign of ``params.max_bank``. Roll-out begins once
    the remaining heading change is within the roll-out budget; while holding
    bank, the step that would cross that point is shortened to land on it.
    A started roll-out is always flown to wings level, so the final point is
    level unless a run limit stops the turn first.

    Args:
        params: Turn parameters; ``max_bank`` must be non-zero
        target_heading: Heading to capture in degrees
        dt: Integration step in seconds
        config: Run limits

    Returns:
        HeadingTurnResult with the track and the roll-out heading

    Raises:
        TurnValidationError: On invalid inputs or an unachievable turn
    """
    config = config or DEFAULT_CONFIG
    validate_parameters(params, dt)
    if params.max_bank == 0:
        raise TurnValidationError("Maximum bank must be non-zero to turn to a heading")
    if not isfinite(target_heading):
        raise TurnValidationError("Target heading must be finite")

    plan = plan_roll_out(params, target_heading, config.roll_out_substeps)
    phases = validate_heading_change(plan.required_heading_change, params, plan, config)
    if plan.reduced:
        logger.info("Turn of %.1f deg too short for %.1f deg bank, flying %.1f deg",
                    plan.required_heading_change, params.max_bank, plan.effective_max_bank)

    direction = plan.turn_direction
    required = plan.required_heading_change
    budget = plan.roll_out_heading_change

    controller = PhaseController(plan.effective_max_bank, params.roll_rate, params.initial_bank)
    state = _initial_state(params)
    track = [_record(0.0, state, params, controller.phase, config)]

    accumulated = 0.0
    stuck_steps = 0
    iterations = 0
    max_iterations = config.max_iterations(dt)
    t = 0.0
    terminated_early = False
    reason = ""

    while not controller.level:
        if t >= config.max_duration or iterations >= max_iterations:
            terminated_early = True
            reason = "time ceiling reached" if t >= config.max_duration else "iteration ceiling reached"
            logger.warning("Turn to %.1f deg stopped after %.1f s: %s", target_heading, t, reason)
            break

        remaining = required - accumulated
        step_dt = dt
        if remaining <= budget:
            controller.begin_roll_out()
        elif controller.phase is TurnPhase.HOLD:
            rate = abs(calculate_turn_rate(state.bank_angle, params.ktas))
            gap = remaining - budget
            if rate > 0 and gap < rate * dt:
                step_dt = gap / rate
                if step_dt < config.min_step:
                    controller.begin_roll_out()
                    step_dt = dt

        step_dt = min(step_dt, config.max_duration - t)
        if step_dt < config.min_step:
            terminated_early = True
            reason = "step size vanished"
            logger.warning("Step size %.3g s too small at t=%.3f s, stopping integration", step_dt, t)
            break

        previous_heading = state.heading
        state = _step(state, params, controller, step_dt)
        iterations += 1
        t += step_dt

        delta = heading_delta(previous_heading, state.heading)
        accumulated += direction * delta
        track.append(_record(t, state, params, controller.phase, config))

        if controller.level:
            reason = "wings level"
            break

        if abs(delta) < config.stuck_threshold_deg:
            stuck_steps += 1
            if stuck_steps >= config.stuck_step_limit:
                terminated_early = True
                reason = "heading progress stalled"
                logger.warning("Heading progress stalled for %d steps at t=%.1f s, returning partial track",
                               stuck_steps, t)
                break
        else:
            stuck_steps = 0

    return HeadingTurnResult(
        track=track,
        roll_out_heading=plan.roll_out_heading,
        roll_out_heading_change=budget,
        effective_max_bank=plan.effective_max_bank,
        required_heading_change=required,
        terminated_early=terminated_early,
        termination_reason=reason,
        metadata={
            "estimated_phases": phases,
            "roll_in_heading_change": plan.roll_in_heading_change,
            "accumulated_heading_change": accumulated,
        },
    )
