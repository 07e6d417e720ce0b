"""Time units for simulation steps and durations.

Classes:
    Second: Base time unit in seconds (SI unit).
    Hour: 3600 seconds.

Example:
    >>> Hour(1).to(Second)  # 3600.0
"""

from __future__ import annotations

from .unit_float import UnitFloat


class Second(UnitFloat):
    """Time unit: Second (SI base unit for time)."""

    IS_FAMILY_ROOT = True
    SCALE_TO_SI = 1.0


class Hour(Second):
    """Time unit: Hour (3600 seconds)."""

    SCALE_TO_SI = 3600.0
