"""Background worker for the no-wind turn radius calculation.

Drawing code asks for a simple no-wind turn path without blocking on it. Each
request is handled on a worker thread and produces exactly one response; there
is no shared state, no streaming of partial results and no cancellation.
Failures come back as a response with ``success=False`` rather than as an
exception.

Example:
    >>> with TurnRadiusWorker() as worker:
    ...     future = worker.submit(TurnRadiusRequest(ktas=150, max_bank=30, roll_rate=3,
    ...                                              heading=0, duration=20))
    ...     response = future.result()
    >>> response.success
    True
"""

import itertools
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from math import cos, degrees, inf, isfinite, radians, sin
from typing import List, Optional, Tuple

from .config import MAX_BANK_DEG, SECONDS_PER_HOUR
from .models import normalize_heading
from .utils import calculate_turn_radius

logger = logging.getLogger(__name__)

_request_ids = itertools.count(1)


@dataclass(frozen=True)
class TurnRadiusRequest:
    """Inputs for one no-wind turn path calculation."""

    ktas: float
    max_bank: float
    roll_rate: float
    heading: float
    duration: float
    time_step: float = 0.5
    request_id: int = field(default_factory=lambda: next(_request_ids))


@dataclass
class TurnRadiusResponse:
    """Result message for one request."""

    request_id: int
    success: bool
    points: List[Tuple[float, float]] = field(default_factory=list)
    turn_radius: float = inf
    error: Optional[str] = None


def calculate_no_wind_turn_path(ktas: float, max_bank: float, roll_rate: float, heading: float,
                                duration: float, time_step: float = 0.5) -> List[Tuple[float, float]]:
    """
    East/north points (NM) of a turn from wings level in still air.

    Bank grows at ``roll_rate`` until ``max_bank`` and is then held. Each step
    moves along the arc of the current turn radius.

    Raises:
        ValueError: On non-positive airspeed, roll rate or step, negative
            duration, or bank beyond +/-89 degrees
    """
    if not isfinite(ktas) or ktas <= 0:
        raise ValueError(f"Airspeed must be positive, got {ktas} kt")
    if not isfinite(roll_rate) or roll_rate <= 0:
        raise ValueError(f"Roll rate must be positive, got {roll_rate} deg/s")
    if not isfinite(max_bank) or abs(max_bank) > MAX_BANK_DEG:
        raise ValueError(f"Maximum bank must be between -{MAX_BANK_DEG:g} and {MAX_BANK_DEG:g} degrees")
    if not isfinite(time_step) or time_step <= 0:
        raise ValueError(f"Time step must be positive, got {time_step} s")
    if not isfinite(duration) or duration < 0:
        raise ValueError(f"Duration must be non-negative, got {duration} s")

    speed_nm_per_s = ktas / SECONDS_PER_HOUR
    x, y = 0.0, 0.0
    hdg = normalize_heading(heading)
    bank = 0.0
    points = [(x, y)]

    t = 0.0
    while t < duration:
        step = min(time_step, duration - t)
        if max_bank >= 0:
            bank = min(bank + roll_rate * step, max_bank)
        else:
            bank = max(bank - roll_rate * step, max_bank)

        distance = speed_nm_per_s * step
        radius = calculate_turn_radius(bank, ktas)
        hdg_rad = radians(hdg)
        if radius == inf:
            x += distance * sin(hdg_rad)
            y += distance * cos(hdg_rad)
        else:
            side = 1.0 if bank > 0 else -1.0
            theta = distance / radius
            forward = radius * sin(theta)
            lateral = side * radius * (1.0 - cos(theta))
            x += forward * sin(hdg_rad) + lateral * cos(hdg_rad)
            y += forward * cos(hdg_rad) - lateral * sin(hdg_rad)
            hdg = normalize_heading(hdg + side * degrees(theta))

        points.append((x, y))
        t += step

    return points


def handle_request(request: TurnRadiusRequest) -> TurnRadiusResponse:
    """Compute the response for one request; errors are reported, not raised."""
    try:
        points = calculate_no_wind_turn_path(
            request.ktas, request.max_bank, request.roll_rate,
            request.heading, request.duration, request.time_step,
        )
    except (ValueError, ArithmeticError) as exc:
        logger.error("Turn radius request %s failed: %s", request.request_id, exc)
        return TurnRadiusResponse(request_id=request.request_id, success=False, error=str(exc))

    return TurnRadiusResponse(
        request_id=request.request_id,
        success=True,
        points=points,
        turn_radius=calculate_turn_radius(request.max_bank, request.ktas),
    )


class TurnRadiusWorker:
    """Runs turn radius requests off the caller's thread.

    Attributes:
        executor: Thread pool that handles requests.
    """

    def __init__(self, max_workers: int = 1):
        """
        Args:
            max_workers: Worker threads; one is enough for interactive use.
        """
        self.executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="TurnRadiusWorker")

    def submit(self, request: TurnRadiusRequest) -> "Future[TurnRadiusResponse]":
        """Queue ``request``; the future resolves to its single response."""
        return self.executor.submit(handle_request, request)

    def shutdown(self, wait: bool = True):
        self.executor.shutdown(wait=wait)

    def __enter__(self) -> "TurnRadiusWorker":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
