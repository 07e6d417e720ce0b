"""Float-based units with automatic SI conversion and type safety.

Values are stored internally in SI units. Conversion is permitted only between
units of the same family.

Classes:
    UnitFloat: Base class for all float-based units.

Example:
    >>> class Meter(UnitFloat):
    ...     IS_FAMILY_ROOT = True
    ...     SCALE_TO_SI = 1.0
    ...
    >>> class NauticalMile(Meter):
    ...     SCALE_TO_SI = 1852.0
    ...
    >>> float(NauticalMile(2))  # 3704.0 (meters in SI)
"""
from __future__ import annotations

from typing import ClassVar

from .unit_base import Unit

Number = int | float


class UnitFloat(float, Unit):
    """Base class for type-safe unit calculations with automatic SI conversion.

    ``float(value)`` is the SI value, which is what pyproj and ``math`` expect.

    Attributes:
        SCALE_TO_SI (ClassVar[float]): Conversion factor to SI units.
        IS_FAMILY_ROOT (ClassVar[bool]): Indicates if this class is a root unit.
    """

    SCALE_TO_SI: ClassVar[float] = 1.0
    IS_FAMILY_ROOT: ClassVar[bool] = True

    def __new__(cls, value: Number):
        """Create a new instance, converting ``value`` from native scale to SI."""
        si_val = float(value) * cls.SCALE_TO_SI
        return float.__new__(cls, si_val)

    @classmethod
    def from_si(cls, si_value: float) -> UnitFloat:
        """Create instance directly from an SI value."""
        return float.__new__(cls, si_value)

    def to(self, unit_type: type[UnitFloat]) -> float:
        """Convert to another unit of the same family.

        Args:
            unit_type: Target unit type to convert to.

        Returns:
            float: Value in the target unit's scale.

        Raises:
            TypeError: If ``unit_type`` belongs to another family.
        """
        self._check_same_root(unit_type)
        return float(self) / unit_type.SCALE_TO_SI
