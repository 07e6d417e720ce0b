"""Physical constants, tolerances and run limits for turn simulation.

Module-level constants hold values that define the model itself (gravity,
tolerances of the phase controller, the reduced-bank floor). Run limits that a
caller may reasonably tune live in :class:`SimulationConfig` and are passed to
the simulation drivers.

Constants:
    GRAVITY_FT_S2: Standard gravity used by the coordinated-turn relation.
    KNOT_TO_FT_PER_S: Feet per second in one knot.
    FEET_PER_NM: Feet in one nautical mile.
    TURN_RATE_CONSTANT: ``K`` in ``turn_rate = K * tan(bank) / ktas`` (deg/s).

Example:
    >>> from groundtrack.config import SimulationConfig
    >>> config = SimulationConfig(max_duration=120.0)
"""

from dataclasses import dataclass

from .unit import Degree, Foot, FootPerSecond, Hour, Knot, NauticalMile, Radian, Second

GRAVITY_FT_S2 = 32.174
KNOT_TO_FT_PER_S = Knot(1).to(FootPerSecond)
FEET_PER_NM = NauticalMile(1).to(Foot)
SECONDS_PER_HOUR = Hour(1).to(Second)

# deg/s per (tan(bank) / kt), about 1092
TURN_RATE_CONSTANT = Radian(GRAVITY_FT_S2 / KNOT_TO_FT_PER_S).to(Degree)

MAX_BANK_DEG = 89.0
DEFAULT_TIME_STEP = 1.0

# Phase controller
ROLL_IN_SNAP_TOLERANCE_DEG = 3.0
LEVEL_TOLERANCE_DEG = 0.5

# Roll-out timing
ROLL_OUT_SUBSTEPS = 100
MIN_EFFECTIVE_BANK_DEG = 5.0


@dataclass(frozen=True)
class SimulationConfig:
    """Run limits for the simulation drivers.

    Attributes:
        max_duration: Hard time ceiling for target-heading runs (seconds).
        min_step: Smallest integration step accepted before the run stops.
        stuck_threshold_deg: Heading delta below which a step counts as no progress.
        stuck_step_limit: Consecutive no-progress steps that abort a run.
        min_heading_change: Smallest heading change worth simulating (degrees).
        roll_out_substeps: Sub-steps used by the roll-in/roll-out sub-integration.
    """

    max_duration: float = 300.0
    min_step: float = 1e-10
    stuck_threshold_deg: float = 0.01
    stuck_step_limit: int = 20
    min_heading_change: float = 0.1
    roll_out_substeps: int = ROLL_OUT_SUBSTEPS

    def max_iterations(self, dt: float) -> int:
        """Iteration ceiling for a run with step ``dt``."""
        return int(self.max_duration / dt) + 2


DEFAULT_CONFIG = SimulationConfig()
