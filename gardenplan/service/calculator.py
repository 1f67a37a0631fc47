"""
GardenCalculator — the caller-level facade over the engine.

Wires validation, the calculators, and the result cache together for a
request-handling layer:

  calculate_garden_space()  → usable area in the requested unit (cached)
  optimize_layout()         → raw optimizer result for an explicit config (cached)
  plan_grow_bag_layout()    → accessibility-aware config + utilization target
  validate_grow_bag_plan()  → bag-count fit check with max-capacity feedback
  validate_capacity()       → ok / warning / critical classification
  calculate_yield()         → g/day estimate (cached)
  calculate_crop_yield()    → estimate flagged against the crop benchmark

The facade owns the only shared mutable state (the ResultCache); every other
collaborator is immutable, so one instance may serve many threads. Errors
from the calculators propagate unchanged.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from gardenplan.cache.fingerprint import (
    Fingerprint,
    garden_space_fingerprint,
    layout_fingerprint,
    yield_fingerprint,
)
from gardenplan.cache.store import ResultCache
from gardenplan.calculator.area import usable_area
from gardenplan.calculator.capacity import (
    GardenSpace,
    SpaceValidationResult,
)
from gardenplan.calculator.capacity import validate_capacity as _validate_capacity
from gardenplan.calculator.capacity import validate_grow_bag_plan as _validate_grow_bag_plan
from gardenplan.calculator.layout import GrowBagLayout, LayoutOrientation, OptimizationConfig
from gardenplan.calculator.layout import optimize_layout as _optimize_layout
from gardenplan.calculator.yields import CropInput, YieldEstimate
from gardenplan.calculator.yields import calculate_crop_yield as _calculate_crop_yield
from gardenplan.calculator.yields import calculate_yield as _calculate_yield
from gardenplan.config import DEFAULT_CONFIG, EngineConfig
from gardenplan.errors import UtilizationBelowTargetError
from gardenplan.registry.registry import FactorRegistry, get_registry
from gardenplan.registry.types import BagSize, SoilType, Sunlight
from gardenplan.utilities.conversion import convert_area
from gardenplan.utilities.types import CANONICAL_UNIT, Dimensions, LengthUnit
from gardenplan.validator.categories import (
    validate_bag_count,
    validate_bag_size,
    validate_soil_type,
    validate_sunlight,
)

logger = logging.getLogger(__name__)

# Accessibility-priority adjustments applied by plan_grow_bag_layout.
_ACCESS_PATH_WIDTH_FACTOR: float = 1.2
_ACCESS_SPACING_MULTIPLIER: float = 1.15


class GardenCalculator:
    """
    Garden space optimization and yield calculation service.

    Parameters
    ----------
    config:
        Engine constants; defaults to DEFAULT_CONFIG.
    registry:
        Factor tables; defaults to the module registry.
    cache:
        Result cache; a fresh one is created when omitted. Pass
        ``use_cache=False`` to disable memoization entirely.
    max_workers:
        Thread-pool size for layout search; ``None`` scans sequentially.
    """

    def __init__(
        self,
        config: EngineConfig = DEFAULT_CONFIG,
        registry: Optional[FactorRegistry] = None,
        cache: Optional[ResultCache] = None,
        use_cache: bool = True,
        max_workers: Optional[int] = None,
    ) -> None:
        self.config = config
        self.registry = registry if registry is not None else get_registry()
        if use_cache:
            self.cache: Optional[ResultCache] = (
                cache if cache is not None else ResultCache(config.cache_lock_timeout)
            )
        else:
            self.cache = None
        self.max_workers = max_workers

    # ── Area ───────────────────────────────────────────────────────────────────

    def calculate_garden_space(
        self,
        dims: Dimensions,
        unit: Optional[LengthUnit | str] = None,
        include_corners: bool = True,
    ) -> float:
        """
        Usable garden area expressed in square *unit* (default: the unit of *dims*).

        Raises:
            DimensionError, AreaRangeError, UnsupportedUnitError
        """
        output_unit = LengthUnit.parse(unit) if unit is not None else dims.unit
        fingerprint = garden_space_fingerprint(dims, output_unit, include_corners, self.config)
        cached = self._cache_get(fingerprint)
        if cached is not None:
            return cached

        area = usable_area(dims, include_corners, self.config)
        if output_unit is not CANONICAL_UNIT:
            area = convert_area(area, CANONICAL_UNIT, output_unit)

        self._cache_put(fingerprint, area)
        return area

    # ── Layout ─────────────────────────────────────────────────────────────────

    def optimize_layout(
        self,
        dims: Dimensions,
        bag_diameter: float,
        opt: OptimizationConfig,
    ) -> GrowBagLayout:
        """Run the layout optimizer for an explicit config, through the cache."""
        fingerprint = layout_fingerprint(dims, bag_diameter, opt, self.config)
        cached = self._cache_get(fingerprint)
        if cached is not None:
            return cached

        layout = _optimize_layout(
            dims, bag_diameter, opt, config=self.config, max_workers=self.max_workers
        )
        self._cache_put(fingerprint, layout)
        return layout

    def plan_grow_bag_layout(
        self,
        dims: Dimensions,
        bag_diameter: float,
        prioritize_access: bool = False,
    ) -> GrowBagLayout:
        """
        Plan a layout and enforce the space-utilization target.

        Prioritizing access widens the reference path width and the spacing
        between bags, and stops reserving corner paths in the area check.

        Raises:
            NoViableLayoutError: If no layout meets the accessibility floor.
            UtilizationBelowTargetError: If the best layout misses the
                configured utilization target.
        """
        path_width = self.config.min_path_width
        spacing_multiplier = 1.0
        if prioritize_access:
            path_width *= _ACCESS_PATH_WIDTH_FACTOR
            spacing_multiplier = _ACCESS_SPACING_MULTIPLIER
        opt = OptimizationConfig(
            include_corner_spaces=not prioritize_access,
            min_path_width=path_width,
            preferred_orientation=LayoutOrientation.HORIZONTAL,
            spacing_multiplier=spacing_multiplier,
        )

        layout = self.optimize_layout(dims, bag_diameter, opt)
        metrics = layout.metrics(self.config)
        if metrics.utilization_rate < self.config.utilization_target:
            logger.info(
                "layout %dx%d for %s misses utilization target: %.4f < %.2f",
                layout.rows,
                layout.columns,
                dims,
                metrics.utilization_rate,
                self.config.utilization_target,
            )
            raise UtilizationBelowTargetError(
                metrics.utilization_rate, self.config.utilization_target
            )
        return layout

    def validate_grow_bag_plan(
        self, dims: Dimensions, bag_diameter: float, requested_bags: int
    ) -> bool:
        """True when the plan fits; otherwise raises CapacityError with max capacity."""
        return _validate_grow_bag_plan(dims, bag_diameter, requested_bags, self.config)

    # ── Capacity ───────────────────────────────────────────────────────────────

    def validate_capacity(
        self,
        garden: GardenSpace,
        existing_usage: float,
        new_request_bags: int,
        bag_size: BagSize | str,
    ) -> SpaceValidationResult:
        """Classify the request; raises CapacityError at the critical threshold."""
        return _validate_capacity(
            garden,
            existing_usage,
            new_request_bags,
            bag_size,
            config=self.config,
            registry=self.registry,
        )

    # ── Yield ──────────────────────────────────────────────────────────────────

    def calculate_yield(
        self,
        bag_size: BagSize | str,
        grow_bag_count: int,
        sunlight: Sunlight | str,
        soil_type: SoilType | str,
    ) -> float:
        """Expected yield in g/day, validated strictly and cached on canonical inputs."""
        fingerprint = yield_fingerprint(
            validate_bag_size(bag_size),
            validate_bag_count(grow_bag_count, self.config),
            validate_sunlight(sunlight),
            validate_soil_type(soil_type),
            self.config,
            self.registry.digest,
        )
        cached = self._cache_get(fingerprint)
        if cached is not None:
            return cached

        value = _calculate_yield(
            bag_size, grow_bag_count, sunlight, soil_type, self.config, self.registry
        )
        self._cache_put(fingerprint, value)
        return value

    def calculate_crop_yield(
        self,
        crop: CropInput,
        sunlight: Sunlight | str,
        soil_type: SoilType | str,
    ) -> YieldEstimate:
        """Yield for *crop*, flagged when it strays from the crop benchmark."""
        return _calculate_crop_yield(crop, sunlight, soil_type, self.config, self.registry)

    # ── Cache helpers ──────────────────────────────────────────────────────────

    def _cache_get(self, fingerprint: Fingerprint) -> Optional[Any]:
        if self.cache is None:
            return None
        return self.cache.get(fingerprint)

    def _cache_put(self, fingerprint: Fingerprint, value: Any) -> None:
        if self.cache is not None:
            self.cache.put(fingerprint, value)
