"""
Core type definitions for the factor registry.

Enums are the canonical vocabulary for categorical inputs; each offers a
``parse`` classmethod that accepts the loose spellings callers send
(case-insensitive, storage suffixes) and raises CategoryError otherwise.
"""

from __future__ import annotations

from enum import Enum

from gardenplan.errors import CategoryError

# ── Enums ──────────────────────────────────────────────────────────────────────


class SoilType(str, Enum):
    """Garden soil types, in canonical casing."""

    RED = "Red"
    SANDY = "Sandy"
    LOAMY = "Loamy"
    CLAY = "Clay"
    BLACK = "Black"

    @classmethod
    def parse(cls, value: SoilType | str) -> SoilType:
        """Accept ``"loamy"``, ``"LOAMY"`` and ``"loamy_soil"`` alike."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key.endswith("_soil"):
            key = key[: -len("_soil")]
        for member in cls:
            if member.value.lower() == key:
                return member
        raise CategoryError("soil_type", value, tuple(m.value for m in cls))


class Sunlight(str, Enum):
    """Daily direct-sun exposure: 6h+, 3-6h, under 3h."""

    FULL_SUN = "full_sun"
    PARTIAL_SHADE = "partial_shade"
    FULL_SHADE = "full_shade"

    @classmethod
    def parse(cls, value: Sunlight | str) -> Sunlight:
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise CategoryError("sunlight", value, tuple(m.value for m in cls))


class YieldBand(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class BagSize(str, Enum):
    """Nominal grow-bag sizes (diameter in inches)."""

    SIZE_8 = '8"'
    SIZE_10 = '10"'
    SIZE_12 = '12"'
    SIZE_14 = '14"'

    @property
    def diameter_inches(self) -> int:
        return int(self.value.rstrip('"'))

    @property
    def yield_band(self) -> YieldBand:
        match self:
            case BagSize.SIZE_8:
                return YieldBand.SMALL
            case BagSize.SIZE_10 | BagSize.SIZE_12:
                return YieldBand.MEDIUM
            case BagSize.SIZE_14:
                return YieldBand.LARGE
        raise AssertionError(f"unhandled bag size {self!r}")

    @classmethod
    def parse(cls, value: BagSize | str | int) -> BagSize:
        """Accept ``'10"'``, ``"10"``, ``"10in"`` or ``10``."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for suffix in ('"', "in", "inch", "inches"):
            if key.endswith(suffix):
                key = key[: -len(suffix)].strip()
                break
        for member in cls:
            if str(member.diameter_inches) == key:
                return member
        raise CategoryError("bag_size", value, tuple(m.value for m in cls))
