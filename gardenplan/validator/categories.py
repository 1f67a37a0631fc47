"""
Categorical input validation.

Each validator returns the canonical enum member for a loosely-spelled
input, or raises CategoryError naming the invalid value and the allowed set.
Membership checks are case-insensitive.
"""

from __future__ import annotations

from gardenplan.config import DEFAULT_CONFIG, EngineConfig
from gardenplan.errors import ValidationError
from gardenplan.registry.types import BagSize, SoilType, Sunlight


def validate_soil_type(value: SoilType | str) -> SoilType:
    """Return the canonical SoilType for *value* (``"loamy_soil"`` → ``SoilType.LOAMY``)."""
    return SoilType.parse(value)


def validate_sunlight(value: Sunlight | str) -> Sunlight:
    """Return the canonical Sunlight condition for *value*."""
    return Sunlight.parse(value)


def validate_bag_size(value: BagSize | str | int) -> BagSize:
    """Return the canonical BagSize for *value*."""
    return BagSize.parse(value)


def validate_bag_count(count: int, config: EngineConfig = DEFAULT_CONFIG) -> int:
    """
    Check that *count* is an integer in [min_grow_bags, max_grow_bags].

    Raises:
        ValidationError: If *count* is not an int or out of bounds.
    """
    if isinstance(count, bool) or not isinstance(count, int):
        raise ValidationError("grow_bag_count", count, "must be an integer")
    if not (config.min_grow_bags <= count <= config.max_grow_bags):
        raise ValidationError(
            "grow_bag_count",
            count,
            f"grow bags must be between {config.min_grow_bags} and {config.max_grow_bags}",
        )
    return count
