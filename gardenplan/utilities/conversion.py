"""
Unit conversion between supported length units.

Every unit is defined by its length in metres; a conversion multiplies by
the ratio of the two factors. Area conversion squares the linear ratio.
All functions are pure.
"""

from __future__ import annotations

from types import MappingProxyType

from .types import CANONICAL_UNIT, Dimensions, LengthUnit

FEET_TO_METERS: float = 0.3048
INCHES_PER_FOOT: float = 12.0

_METERS_PER_UNIT: MappingProxyType[LengthUnit, float] = MappingProxyType(
    {
        LengthUnit.FEET: FEET_TO_METERS,
        LengthUnit.METERS: 1.0,
        LengthUnit.INCHES: FEET_TO_METERS / INCHES_PER_FOOT,
        LengthUnit.CENTIMETERS: 0.01,
    }
)


def conversion_factor(from_unit: LengthUnit | str, to_unit: LengthUnit | str) -> float:
    """Multiplicative factor taking a length in *from_unit* to *to_unit*."""
    src = LengthUnit.parse(from_unit)
    dst = LengthUnit.parse(to_unit)
    if src is dst:
        return 1.0
    return _METERS_PER_UNIT[src] / _METERS_PER_UNIT[dst]


def convert(value: float, from_unit: LengthUnit | str, to_unit: LengthUnit | str) -> float:
    """
    Convert a length between units.

    Identity when the units match.

    Raises:
        UnsupportedUnitError: If either unit is not a LengthUnit.
    """
    return value * conversion_factor(from_unit, to_unit)


def convert_area(value: float, from_unit: LengthUnit | str, to_unit: LengthUnit | str) -> float:
    """Convert an area expressed in square *from_unit* to square *to_unit*."""
    return value * conversion_factor(from_unit, to_unit) ** 2


def feet_to_meters(feet: float) -> float:
    """Convert feet to metres."""
    return feet * FEET_TO_METERS


def meters_to_feet(meters: float) -> float:
    """Convert metres to feet."""
    return meters / FEET_TO_METERS


def inches_to_feet(inches: float) -> float:
    """Convert inches to feet."""
    return inches / INCHES_PER_FOOT


def to_canonical(dims: Dimensions) -> Dimensions:
    """Return *dims* expressed in the canonical unit (feet)."""
    if dims.unit is CANONICAL_UNIT:
        return dims
    factor = conversion_factor(dims.unit, CANONICAL_UNIT)
    return Dimensions(
        length=dims.length * factor,
        width=dims.width * factor,
        unit=CANONICAL_UNIT,
    )
