"""
Core type definitions for the shared utilities layer.

All types are frozen dataclasses; they are immutable after construction and
safe to share across threads. Range checks against configured bounds live
in ``gardenplan.validator`` so that out-of-range values can be reported with
a typed error rather than rejected at construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from gardenplan.errors import UnsupportedUnitError


class LengthUnit(str, Enum):
    """Supported length units. FEET is the canonical unit for all area accounting."""

    FEET = "feet"
    METERS = "meters"
    INCHES = "inches"
    CENTIMETERS = "centimeters"

    @classmethod
    def parse(cls, value: LengthUnit | str) -> LengthUnit:
        """Coerce *value* to a LengthUnit, raising UnsupportedUnitError if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedUnitError(value, tuple(u.value for u in cls)) from None


CANONICAL_UNIT: LengthUnit = LengthUnit.FEET


@dataclass(frozen=True)
class Dimensions:
    """
    Garden length and width in a single length unit.

    ``unit`` accepts a LengthUnit or its string value and is normalized on
    construction.
    """

    length: float
    width: float
    unit: LengthUnit = CANONICAL_UNIT

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit", LengthUnit.parse(self.unit))

    @property
    def area(self) -> float:
        """Area in square ``unit``."""
        return self.length * self.width

    def __str__(self) -> str:
        return f"{self.length:.2f} {self.unit.value} x {self.width:.2f} {self.unit.value}"


@dataclass(frozen=True)
class Point:
    """A planting-position coordinate (bag center) in canonical units."""

    x: float
    y: float
