"""
Dimension & range validator — public API.

Exposed names
-------------
validate_dimensions   -- length/width positivity and bounds (DimensionError)
validate_garden_area  -- canonical area bounds (AreaRangeError)
validate_soil_type    -- case-insensitive soil membership (CategoryError)
validate_sunlight     -- case-insensitive sunlight membership (CategoryError)
validate_bag_size     -- nominal bag size membership (CategoryError)
validate_bag_count    -- grow-bag count bounds (ValidationError)
"""

from gardenplan.validator.categories import (
    validate_bag_count,
    validate_bag_size,
    validate_soil_type,
    validate_sunlight,
)
from gardenplan.validator.dimensions import validate_dimensions, validate_garden_area

__all__ = [
    "validate_dimensions",
    "validate_garden_area",
    "validate_soil_type",
    "validate_sunlight",
    "validate_bag_size",
    "validate_bag_count",
]
