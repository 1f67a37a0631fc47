"""
Yield calculator: expected harvest in grams per day.

    base_yield     = yield_band_factor(bag_size) × grow_bag_count
    adjusted_yield = base_yield × sunlight_factor × soil_factor

Each multiplicative stage is rounded half-up to two decimals so floating
error does not accumulate. Sunlight and soil are validated strictly; an
unknown value raises CategoryError instead of falling back to a default.

A final sanity check rejects any result outside (0, max_yield]. Accuracy
against a benchmark is checked separately and only flags, never rejects.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from gardenplan.config import DEFAULT_CONFIG, EngineConfig
from gardenplan.errors import CalculationFailureError
from gardenplan.registry.registry import FactorRegistry, get_registry
from gardenplan.registry.types import BagSize, SoilType, Sunlight
from gardenplan.utilities.tolerance import AccuracyCheck, check_accuracy
from gardenplan.validator.categories import (
    validate_bag_count,
    validate_bag_size,
    validate_soil_type,
    validate_sunlight,
)

logger = logging.getLogger(__name__)


def round_2dp(value: float) -> float:
    """Round half away from zero to two decimal places."""
    return math.copysign(math.floor(abs(value) * 100 + 0.5) / 100, value)


@dataclass(frozen=True)
class YieldBreakdown:
    """Every stage of a yield calculation, for auditing and re-derivation."""

    bag_size: BagSize
    grow_bag_count: int
    sunlight: Sunlight
    soil_type: SoilType
    yield_factor: float
    sunlight_factor: float
    soil_factor: float
    base_yield: float
    adjusted_yield: float


@dataclass(frozen=True)
class CropInput:
    """The crop values a yield calculation needs. Not persisted by the engine."""

    bag_size: BagSize | str
    grow_bag_count: int
    name: Optional[str] = None


@dataclass(frozen=True)
class YieldEstimate:
    """A calculated yield and its comparison against the crop benchmark."""

    yield_g_per_day: float
    benchmark_g_per_day: float
    accuracy: AccuracyCheck

    @property
    def flagged(self) -> bool:
        return self.accuracy.flagged


def calculate_yield_breakdown(
    bag_size: BagSize | str,
    grow_bag_count: int,
    sunlight: Sunlight | str,
    soil_type: SoilType | str,
    config: EngineConfig = DEFAULT_CONFIG,
    registry: Optional[FactorRegistry] = None,
) -> YieldBreakdown:
    """
    Validate inputs and compute every stage of the yield calculation.

    Raises:
        CategoryError: For an unknown bag size, sunlight, or soil type.
        ValidationError: For a grow-bag count out of bounds.
        CalculationFailureError: If the adjusted yield is outside (0, max_yield].
    """
    registry = registry if registry is not None else get_registry()
    size = validate_bag_size(bag_size)
    count = validate_bag_count(grow_bag_count, config)
    sun = validate_sunlight(sunlight)
    soil = validate_soil_type(soil_type)

    yield_factor = registry.get_yield_factor(size)
    sunlight_factor = registry.get_sunlight_factor(sun)
    soil_factor = registry.get_soil_yield_factor(soil)

    base = round_2dp(yield_factor * count)
    adjusted = round_2dp(round_2dp(base * sunlight_factor) * soil_factor)

    if adjusted <= 0 or adjusted > config.max_yield:
        raise CalculationFailureError(adjusted, config.max_yield)

    return YieldBreakdown(
        bag_size=size,
        grow_bag_count=count,
        sunlight=sun,
        soil_type=soil,
        yield_factor=yield_factor,
        sunlight_factor=sunlight_factor,
        soil_factor=soil_factor,
        base_yield=base,
        adjusted_yield=adjusted,
    )


def calculate_yield(
    bag_size: BagSize | str,
    grow_bag_count: int,
    sunlight: Sunlight | str,
    soil_type: SoilType | str,
    config: EngineConfig = DEFAULT_CONFIG,
    registry: Optional[FactorRegistry] = None,
) -> float:
    """Expected yield in g/day; see :func:`calculate_yield_breakdown`."""
    return calculate_yield_breakdown(
        bag_size, grow_bag_count, sunlight, soil_type, config, registry
    ).adjusted_yield


def check_yield_accuracy(
    calculated: float,
    expected: float,
    config: EngineConfig = DEFAULT_CONFIG,
) -> AccuracyCheck:
    """Compare a yield against a benchmark; logs a warning when flagged."""
    check = check_accuracy(calculated, expected, config.yield_accuracy_tolerance)
    if check.flagged:
        logger.warning(
            "yield %.2f g/day deviates %.1f%% from expected %.2f g/day (tolerance %.0f%%)",
            calculated,
            check.deviation * 100,
            expected,
            check.tolerance * 100,
        )
    return check


def crop_benchmark(
    crop: CropInput,
    registry: Optional[FactorRegistry] = None,
) -> float:
    """Expected g/day for *crop*: crop base × bags × bag-size multiplier."""
    registry = registry if registry is not None else get_registry()
    size = validate_bag_size(crop.bag_size)
    return round_2dp(
        registry.get_crop_benchmark(crop.name)
        * crop.grow_bag_count
        * registry.get_bag_size_multiplier(size)
    )


def calculate_crop_yield(
    crop: CropInput,
    sunlight: Sunlight | str,
    soil_type: SoilType | str,
    config: EngineConfig = DEFAULT_CONFIG,
    registry: Optional[FactorRegistry] = None,
) -> YieldEstimate:
    """Calculate *crop*'s yield and flag it against the crop benchmark."""
    value = calculate_yield(
        crop.bag_size, crop.grow_bag_count, sunlight, soil_type, config, registry
    )
    benchmark = crop_benchmark(crop, registry)
    return YieldEstimate(
        yield_g_per_day=value,
        benchmark_g_per_day=benchmark,
        accuracy=check_yield_accuracy(value, benchmark, config),
    )
