"""
Dimension and area range validation.

validate_dimensions checks raw length and width against the configured
bounds in the caller's unit; validate_garden_area checks a canonical (sq ft)
area against the garden-area bounds. Both are side-effect free and raise on
the first failing field.
"""

from __future__ import annotations

import math

from gardenplan.config import DEFAULT_CONFIG, EngineConfig
from gardenplan.errors import AreaRangeError, DimensionError, DimensionErrorKind
from gardenplan.utilities.types import Dimensions


def validate_dimensions(dims: Dimensions, config: EngineConfig = DEFAULT_CONFIG) -> None:
    """
    Reject non-positive or out-of-range garden dimensions.

    Length is checked before width. Bounds are inclusive. NaN and infinite
    values are reported as NON_POSITIVE.

    Raises:
        DimensionError: With kind NON_POSITIVE, TOO_SMALL or TOO_LARGE.
    """
    for field, value in (("length", dims.length), ("width", dims.width)):
        if not math.isfinite(value) or value <= 0:
            raise DimensionError(
                field,
                value,
                DimensionErrorKind.NON_POSITIVE,
                f"{field} must be a positive finite number",
            )
        if value < config.min_dimension:
            raise DimensionError(
                field,
                value,
                DimensionErrorKind.TOO_SMALL,
                f"{field} must be at least {config.min_dimension:.2f} {dims.unit.value}",
            )
        if value > config.max_dimension:
            raise DimensionError(
                field,
                value,
                DimensionErrorKind.TOO_LARGE,
                f"{field} cannot exceed {config.max_dimension:.2f} {dims.unit.value}",
            )


def validate_garden_area(area: float, config: EngineConfig = DEFAULT_CONFIG) -> None:
    """Raise AreaRangeError if *area* (sq ft) is outside the garden-area bounds or NaN."""
    if not (config.min_garden_area <= area <= config.max_garden_area):
        raise AreaRangeError(area, config.min_garden_area, config.max_garden_area)
