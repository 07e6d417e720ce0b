"""Velocity units for airspeed, wind and ground speed.

Airspeed and wind are given in knots; the turn-rate relation needs feet per
second. All velocities are stored as m/s internally.

Classes:
    MeterPerSecond: SI base velocity unit (m/s).
    Knot: One nautical mile per hour.
    FootPerSecond: Feet per second, used with gravity in ft/s².

Example:
    >>> Knot(150).to(FootPerSecond)  # 253.17...
"""

from __future__ import annotations

from .unit_float import UnitFloat


class MeterPerSecond(UnitFloat):
    """Velocity unit: Meters per Second (SI base unit for velocity)."""

    IS_FAMILY_ROOT = True
    SCALE_TO_SI = 1.0


class Knot(MeterPerSecond):
    """Velocity unit: Knot (1852 m per hour)."""

    SCALE_TO_SI = 1852.0 / 3600.0


class FootPerSecond(MeterPerSecond):
    """Velocity unit: Feet per Second."""

    SCALE_TO_SI = 0.3048
