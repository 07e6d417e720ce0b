"""Ground track estimation for a fixed-wing aircraft in a coordinated turn.

groundtrack integrates a single turn under constant wind and answers two
questions:

* where will the aircraft be after N seconds of this turn
  (:func:`simulate_turn_to_time`), and
* when must roll-out begin to capture a given heading
  (:func:`simulate_turn_to_heading`).

Components:
    Kinematic model (groundtrack.kinematics):
        • Turn rate from bank and true airspeed (``K * tan(bank) / ktas``)
        • Ground velocity as airspeed along heading plus wind
    Phase controller (groundtrack.phase):
        • ROLL_IN / HOLD / ROLL_OUT with validated transitions
        • Bank clamp after every integration step
    Integrator (groundtrack.integrator):
        • Fourth-order Runge-Kutta step with the phase fixed per step
    Roll-out timing (groundtrack.rollout):
        • Heading swept by roll-in and roll-out via sub-integration
        • Reduced target bank for short turns, roll-out heading
    Utilities (groundtrack.utils):
        • Turn radius, ground speed, ground track, roll-out predictions
    Worker (groundtrack.worker):
        • One-shot background no-wind turn radius requests
    Analysis (groundtrack.analyzer):
        • Track summaries, comparisons, DataFrame, JSON export and plots
    Geography (groundtrack.geo):
        • WGS84 placement of a local track at a start position

Usage:
    >>> from groundtrack import TurnParameters, simulate_turn_to_heading
    >>> params = TurnParameters(ktas=150, roll_rate=3, initial_bank=0,
    ...                         max_bank=30, initial_heading=0)
    >>> result = simulate_turn_to_heading(params, target_heading=90, dt=0.5)
    >>> print(f"Begin roll-out at {result.roll_out_heading:.0f} deg")
    Begin roll-out at 70 deg
"""

from .analyzer import TrackAnalyzer, summarize_track, track_to_dataframe
from .config import SimulationConfig
from .geo import GeoPoint, track_to_geopoints
from .kinematics import calculate_turn_rate
from .models import (
    HeadingTurnResult,
    TrackPoint,
    TurnParameters,
    TurnPhase,
    TurnPhases,
    TurnState,
)
from .phase import PhaseController
from .rollout import RollOutPlan, calculate_roll_out_heading_change, plan_roll_out
from .simulator import (
    TurnValidationError,
    calculate_turn_phases,
    simulate_turn_to_heading,
    simulate_turn_to_time,
    validate_heading_change,
)
from .utils import (
    calculate_ground_speed_magnitude,
    calculate_ground_track_angle,
    calculate_turn_radius,
    predict_roll_out_heading,
)
from .worker import TurnRadiusRequest, TurnRadiusResponse, TurnRadiusWorker

__version__ = "0.1.0"

__all__ = [
    "TurnParameters",
    "TrackPoint",
    "TurnPhase",
    "TurnPhases",
    "TurnState",
    "HeadingTurnResult",
    "SimulationConfig",
    "PhaseController",
    "RollOutPlan",
    "TurnValidationError",
    "simulate_turn_to_time",
    "simulate_turn_to_heading",
    "calculate_turn_phases",
    "validate_heading_change",
    "plan_roll_out",
    "calculate_turn_rate",
    "calculate_turn_radius",
    "calculate_ground_speed_magnitude",
    "calculate_ground_track_angle",
    "calculate_roll_out_heading_change",
    "predict_roll_out_heading",
    "TurnRadiusRequest",
    "TurnRadiusResponse",
    "TurnRadiusWorker",
    "TrackAnalyzer",
    "summarize_track",
    "track_to_dataframe",
    "GeoPoint",
    "track_to_geopoints",
]
