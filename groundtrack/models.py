"""
Core data models for coordinated-turn simulation.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from math import atan2, degrees, hypot
from typing import Any, Dict, List


def normalize_heading(heading: float) -> float:
    """Wrap a heading in degrees into [0, 360)."""
    result = heading % 360.0
    # -1e-17 % 360 rounds to 360.0
    return 0.0 if result >= 360.0 else result


class TurnPhase(Enum):
    """Bank-angle phase of a turn."""

    ROLL_IN = "roll_in"
    HOLD = "hold"
    ROLL_OUT = "roll_out"


@dataclass(frozen=True)
class TurnParameters:
    """Immutable inputs describing one turn.

    Attributes:
        ktas: True airspeed in knots.
        roll_rate: Roll rate magnitude in deg/s; direction comes from bank signs.
        initial_bank: Bank angle at the start in degrees, right positive.
        max_bank: Target bank angle in degrees; its sign sets the turn direction.
        initial_heading: Starting heading in degrees, normalized to [0, 360).
        wind_direction: Direction the wind blows from, normalized to [0, 360).
        wind_speed: Wind speed in knots.
    """

    ktas: float
    roll_rate: float
    initial_bank: float
    max_bank: float
    initial_heading: float
    wind_direction: float = 0.0
    wind_speed: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "initial_heading", normalize_heading(self.initial_heading))
        object.__setattr__(self, "wind_direction", normalize_heading(self.wind_direction))

    @property
    def turn_direction(self) -> int:
        """+1 for a right turn, -1 for a left turn, 0 for straight flight."""
        if self.max_bank > 0:
            return 1
        if self.max_bank < 0:
            return -1
        return 0

    def with_max_bank(self, max_bank: float) -> "TurnParameters":
        """Return a copy with a different target bank."""
        return TurnParameters(
            ktas=self.ktas,
            roll_rate=self.roll_rate,
            initial_bank=self.initial_bank,
            max_bank=max_bank,
            initial_heading=self.initial_heading,
            wind_direction=self.wind_direction,
            wind_speed=self.wind_speed,
        )


@dataclass
class TurnState:
    """Integrated state vector: east/north position (NM), heading and bank (deg)."""

    x: float = 0.0
    y: float = 0.0
    heading: float = 0.0
    bank_angle: float = 0.0


@dataclass
class TrackPoint:
    """One recorded sample of the simulated ground track."""

    time: float
    x: float
    y: float
    heading: float
    bank_angle: float
    ground_speed_x: float
    ground_speed_y: float
    phase: TurnPhase
    expected_roll_out_heading: float

    @property
    def ground_speed(self) -> float:
        """Ground speed magnitude in knots."""
        return hypot(self.ground_speed_x, self.ground_speed_y)

    @property
    def ground_track(self) -> float:
        """Direction of motion over the ground in degrees."""
        return normalize_heading(degrees(atan2(self.ground_speed_x, self.ground_speed_y)))

    def to_dict(self) -> Dict[str, Any]:
        """Flat dictionary with the phase as its string value."""
        data = asdict(self)
        data["phase"] = self.phase.value
        return data

    def __repr__(self) -> str:
        return (f"TrackPoint(t={self.time:.2f}, x={self.x:.3f}, y={self.y:.3f}, "
                f"hdg={self.heading:.1f}, bank={self.bank_angle:.1f}, {self.phase.name})")


@dataclass
class TurnPhases:
    """Estimated timing of each phase of a turn to a heading."""

    roll_in_time: float
    sustained_time: float
    roll_out_time: float
    total_time: float
    target_bank: float
    turn_rate: float


@dataclass
class HeadingTurnResult:
    """Result of a target-heading simulation."""

    track: List[TrackPoint]
    roll_out_heading: float
    roll_out_heading_change: float
    effective_max_bank: float
    required_heading_change: float
    terminated_early: bool = False
    termination_reason: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def final_point(self) -> TrackPoint:
        return self.track[-1]

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the turn result."""
        last = self.track[-1]
        return {
            "points": len(self.track),
            "duration": last.time,
            "final_heading": last.heading,
            "final_bank": last.bank_angle,
            "roll_out_heading": self.roll_out_heading,
            "roll_out_heading_change": self.roll_out_heading_change,
            "effective_max_bank": self.effective_max_bank,
            "required_heading_change": self.required_heading_change,
            "terminated_early": self.terminated_early,
            "termination_reason": self.termination_reason,
        }

    def __repr__(self) -> str:
        return (f"HeadingTurnResult(points={len(self.track)}, "
                f"roll_out_heading={self.roll_out_heading:.1f}, "
                f"effective_max_bank={self.effective_max_bank:.1f})")
