"""
gardenplan — grow-bag layout planning and harvest yield estimation.

The engine consumes validated plain values and returns plain result values;
it performs no I/O. See ``gardenplan.service.GardenCalculator`` for the
caller-level facade.
"""

from gardenplan import log  # noqa: F401  installs the package NullHandler
from gardenplan.calculator import (
    AreaResult,
    CapacityStatus,
    CropInput,
    GardenSpace,
    GrowBagLayout,
    LayoutMetrics,
    LayoutOrientation,
    OptimizationConfig,
    SpaceValidationResult,
    YieldBreakdown,
    YieldEstimate,
    calculate_area,
    calculate_crop_yield,
    calculate_yield,
    calculate_yield_breakdown,
    optimize_layout,
    usable_area,
    validate_capacity,
    validate_grow_bag_plan,
)
from gardenplan.config import DEFAULT_CONFIG, EngineConfig
from gardenplan.errors import (
    AreaRangeError,
    CalculationFailureError,
    CapacityError,
    CategoryError,
    DimensionError,
    DimensionErrorKind,
    GardenPlanError,
    NoViableLayoutError,
    UnsupportedUnitError,
    UtilizationBelowTargetError,
    ValidationError,
)
from gardenplan.log import configure_logging
from gardenplan.registry import BagSize, FactorRegistry, SoilType, Sunlight, get_registry
from gardenplan.service import GardenCalculator
from gardenplan.utilities import Dimensions, LengthUnit, Point, convert, convert_area
from gardenplan.validator import (
    validate_bag_count,
    validate_bag_size,
    validate_dimensions,
    validate_soil_type,
    validate_sunlight,
)

__all__ = [
    # types
    "AreaResult",
    "BagSize",
    "CapacityStatus",
    "CropInput",
    "Dimensions",
    "GardenSpace",
    "GrowBagLayout",
    "LayoutMetrics",
    "LayoutOrientation",
    "LengthUnit",
    "OptimizationConfig",
    "Point",
    "SoilType",
    "SpaceValidationResult",
    "Sunlight",
    "YieldBreakdown",
    "YieldEstimate",
    # configuration
    "DEFAULT_CONFIG",
    "EngineConfig",
    "FactorRegistry",
    "configure_logging",
    "get_registry",
    # operations
    "calculate_area",
    "calculate_crop_yield",
    "calculate_yield",
    "calculate_yield_breakdown",
    "convert",
    "convert_area",
    "optimize_layout",
    "usable_area",
    "validate_bag_count",
    "validate_bag_size",
    "validate_capacity",
    "validate_dimensions",
    "validate_grow_bag_plan",
    "validate_soil_type",
    "validate_sunlight",
    "GardenCalculator",
    # errors
    "AreaRangeError",
    "CalculationFailureError",
    "CapacityError",
    "CategoryError",
    "DimensionError",
    "DimensionErrorKind",
    "GardenPlanError",
    "NoViableLayoutError",
    "UnsupportedUnitError",
    "UtilizationBelowTargetError",
    "ValidationError",
]
