"""
Shared utilities for the garden planning engine.

Provides deterministic tools used identically by every calculator: length
units and dimensions, unit conversion, and yield accuracy tolerance.
"""

from .conversion import (
    FEET_TO_METERS,
    INCHES_PER_FOOT,
    conversion_factor,
    convert,
    convert_area,
    feet_to_meters,
    inches_to_feet,
    meters_to_feet,
    to_canonical,
)
from .tolerance import (
    DEFAULT_ACCURACY_TOLERANCE,
    AccuracyCheck,
    check_accuracy,
    relative_deviation,
)
from .types import CANONICAL_UNIT, Dimensions, LengthUnit, Point

__all__ = [
    # types
    "CANONICAL_UNIT",
    "Dimensions",
    "LengthUnit",
    "Point",
    # conversion
    "FEET_TO_METERS",
    "INCHES_PER_FOOT",
    "conversion_factor",
    "convert",
    "convert_area",
    "feet_to_meters",
    "meters_to_feet",
    "inches_to_feet",
    "to_canonical",
    # tolerance
    "DEFAULT_ACCURACY_TOLERANCE",
    "AccuracyCheck",
    "check_accuracy",
    "relative_deviation",
]
