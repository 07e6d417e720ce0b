"""Base unit system foundation for type-safe physical quantities.

Every unit family (angle, length, time, velocity) has a root class marked with
``IS_FAMILY_ROOT``. Units in the same family convert into each other;
converting across families raises ``TypeError``.

Classes:
    Unit: Abstract base class for all unit types with family management.

Example:
    >>> class Length(Unit):
    ...     IS_FAMILY_ROOT = True
    >>> class Foot(Length):
    ...     pass  # ROOT = Length
"""

from __future__ import annotations

from typing import ClassVar


class Unit:
    """Base class for all unit types.

    Attributes:
        ROOT (ClassVar[type[Unit]]): Root class defining the unit family.
        IS_FAMILY_ROOT (ClassVar[bool]): Indicates if this class is a root unit.
    """

    __slots__ = ()

    ROOT: ClassVar[type[Unit]]
    IS_FAMILY_ROOT: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs):
        """Assign ROOT from the nearest ancestor flagged as a family root."""
        super().__init_subclass__(**kwargs)
        if "ROOT" in cls.__dict__ and cls.ROOT is not None:
            return

        if cls.__dict__.get("IS_FAMILY_ROOT", False):
            cls.ROOT = cls
            return

        for base in cls.mro()[1:]:
            if base.__dict__.get("IS_FAMILY_ROOT", False):
                cls.ROOT = base
                return

        cls.ROOT = cls

    @classmethod
    def _check_same_root(cls, unit_type: type[Unit]):
        """Check if two unit types belong to the same physical quantity family.

        Args:
            unit_type: The other unit type to check compatibility with.

        Raises:
            TypeError: If the units belong to different physical quantity families.
        """
        if cls.ROOT is not getattr(unit_type, "ROOT", None):
            msg = f"Incompatible units: {cls.ROOT.__name__} and {getattr(unit_type, '__name__', unit_type)}"
            raise TypeError(msg)
