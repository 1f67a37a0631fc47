"""
Garden calculators — public API.

All calculators are pure functions of their inputs plus an EngineConfig and
(where factor tables are needed) a FactorRegistry.
"""

from gardenplan.calculator.area import (
    AreaResult,
    calculate_area,
    calculate_path_area,
    usable_area,
)
from gardenplan.calculator.capacity import (
    CapacityStatus,
    GardenSpace,
    SpaceValidationResult,
    bag_area,
    max_bag_capacity,
    required_space,
    validate_capacity,
    validate_grow_bag_plan,
)
from gardenplan.calculator.layout import (
    GrowBagLayout,
    LayoutMetrics,
    LayoutOrientation,
    OptimizationConfig,
    accessibility_score,
    optimize_layout,
)
from gardenplan.calculator.yields import (
    CropInput,
    YieldBreakdown,
    YieldEstimate,
    calculate_crop_yield,
    calculate_yield,
    calculate_yield_breakdown,
    check_yield_accuracy,
)

__all__ = [
    # area
    "AreaResult",
    "calculate_area",
    "calculate_path_area",
    "usable_area",
    # layout
    "GrowBagLayout",
    "LayoutMetrics",
    "LayoutOrientation",
    "OptimizationConfig",
    "accessibility_score",
    "optimize_layout",
    # capacity
    "CapacityStatus",
    "GardenSpace",
    "SpaceValidationResult",
    "bag_area",
    "max_bag_capacity",
    "required_space",
    "validate_capacity",
    "validate_grow_bag_plan",
    # yields
    "CropInput",
    "YieldBreakdown",
    "YieldEstimate",
    "calculate_crop_yield",
    "calculate_yield",
    "calculate_yield_breakdown",
    "check_yield_accuracy",
]
