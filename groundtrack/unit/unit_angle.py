"""Angular units for headings, bank angles and roll rates.

Angles are stored in radians (SI). Headings and bank angles are supplied in
degrees throughout groundtrack, so ``Degree(...)`` is the usual entry point and
``float(angle)`` yields the radian value ready for ``math.tan``/``math.sin``.

Classes:
    Radian: Base angular unit in radians (SI unit).
    Degree: Angular unit in degrees with automatic radian conversion.

Example:
    >>> bank = Degree(30)
    >>> round(float(bank), 4)  # 0.5236 (radians)
    >>> bank.to(Degree)  # 30.0
"""

from __future__ import annotations

from math import pi

from .unit_float import UnitFloat


class Radian(UnitFloat):
    """Angular unit: Radian (SI base unit for angles)."""

    IS_FAMILY_ROOT = True
    SCALE_TO_SI = 1.0


class Degree(Radian):
    """Angular unit: Degree (1/360 of a full rotation).

    Used for compass headings (0-360, clockwise from north), signed bank
    angles (right positive) and wind "from" directions.
    """

    SCALE_TO_SI = pi / 180


Angle = Radian | Degree
