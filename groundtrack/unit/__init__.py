"""Type-safe unit system for turn calculations.

Unit Families:
    - Angle: Radian (root), Degree
    - Distance: Meter (root), Foot, NauticalMile
    - Time: Second (root), Hour
    - Velocity: MeterPerSecond (root), Knot, FootPerSecond

Converting between units of different families raises ``TypeError``.

Example:
    >>> from groundtrack.unit import Knot, FootPerSecond, NauticalMile, Foot
    >>> Knot(1).to(FootPerSecond)  # 1.6878...
    >>> NauticalMile(1).to(Foot)  # 6076.11...
"""

from .unit_angle import Angle, Degree, Radian
from .unit_base import Unit
from .unit_distance import Foot, Length, Meter, NauticalMile
from .unit_float import UnitFloat
from .unit_time import Hour, Second
from .unit_velocity import FootPerSecond, Knot, MeterPerSecond

__all__ = [
    # Base classes
    "Unit",
    "UnitFloat",
    # Angular units
    "Radian",
    "Degree",
    "Angle",
    # Distance units
    "Meter",
    "Foot",
    "NauticalMile",
    "Length",
    # Time units
    "Second",
    "Hour",
    # Velocity units
    "MeterPerSecond",
    "Knot",
    "FootPerSecond",
]
