"""Distance units for ground track positions and turn radii.

Track positions are reported in nautical miles on a local flat-earth plane;
the coordinated-turn relation is evaluated in feet because gravity is
expressed in ft/s². Both derive from the Meter root.

Classes:
    Meter: Base distance unit in meters (SI unit).
    Foot: International foot (0.3048 m).
    NauticalMile: International nautical mile (1852 m).

Example:
    >>> NauticalMile(1).to(Foot)  # 6076.115...
"""

from __future__ import annotations

from .unit_float import UnitFloat


class Meter(UnitFloat):
    """Distance unit: Meter (SI base unit for length)."""

    IS_FAMILY_ROOT = True
    SCALE_TO_SI = 1.0


class Foot(Meter):
    """Distance unit: international foot."""

    SCALE_TO_SI = 0.3048


class NauticalMile(Meter):
    """Distance unit: international nautical mile.

    The unit of the east/north coordinates in every ``TrackPoint``.
    """

    SCALE_TO_SI = 1852.0


Length = Meter | Foot | NauticalMile
