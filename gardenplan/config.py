"""
Engine configuration: every numeric rail the calculators enforce.

EngineConfig is a frozen dataclass passed into each calculator, so the
engine holds no hidden global constants. Defaults match the production
boundary values; a deployment may override any of them from YAML.

All lengths are in feet and all areas in square feet (the canonical unit).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, cast

import yaml


@dataclass(frozen=True)
class EngineConfig:
    """
    Tunable constants for validation, area, layout, capacity, and yield.

    Attributes:
        min_dimension, max_dimension: Bounds on garden length and width,
            in the caller's unit.
        min_garden_area, max_garden_area: Bounds on total area in sq ft.
        max_utilization: Ceiling applied to usable area and to bag capacity.
        min_path_width: Width of a maintenance path in ft.
        path_interval: One path is reserved per this many ft of garden side.
        default_bag_spacing: Gap between neighbouring grow bags in ft.
        min_accessibility: Accessibility score a layout must reach.
        accessibility_cap: Upper cap on each spacing ratio.
        accessibility_floor: Score assigned when spacing is below path width.
        utilization_target: Caller-level space-utilization target for layouts.
        capacity_warning, capacity_critical: Capacity thresholds as fractions.
        maintenance_overhead: Multiplier on bag footprint for access room.
        max_yield: Upper sanity bound on yield in g/day.
        yield_accuracy_tolerance: Relative deviation that flags a yield.
        min_grow_bags, max_grow_bags: Bounds on bag counts per request.
        cache_lock_timeout: Seconds a cache operation waits for its lock.
    """

    min_dimension: float = 10.0
    max_dimension: float = 1000.0
    min_garden_area: float = 10.0
    max_garden_area: float = 1000.0
    max_utilization: float = 0.95
    min_path_width: float = 1.0
    path_interval: float = 6.0
    default_bag_spacing: float = 0.5
    min_accessibility: float = 0.8
    accessibility_cap: float = 2.0
    accessibility_floor: float = 0.5
    utilization_target: float = 0.95
    capacity_warning: float = 0.80
    capacity_critical: float = 0.95
    maintenance_overhead: float = 1.2
    max_yield: float = 10000.0
    yield_accuracy_tolerance: float = 0.10
    min_grow_bags: int = 1
    max_grow_bags: int = 100
    cache_lock_timeout: float = 5.0

    def __post_init__(self) -> None:
        if not (0 < self.min_dimension <= self.max_dimension):
            raise ValueError(
                f"dimension bounds must satisfy 0 < min <= max, "
                f"got [{self.min_dimension}, {self.max_dimension}]"
            )
        if not (0 < self.min_garden_area <= self.max_garden_area):
            raise ValueError(
                f"garden area bounds must satisfy 0 < min <= max, "
                f"got [{self.min_garden_area}, {self.max_garden_area}]"
            )
        for name in ("max_utilization", "utilization_target", "yield_accuracy_tolerance"):
            value = getattr(self, name)
            if not (0 < value <= 1):
                raise ValueError(f"{name} must be in (0, 1], got {value}")
        if not (0 < self.capacity_warning < self.capacity_critical):
            raise ValueError(
                f"capacity thresholds must satisfy 0 < warning < critical, "
                f"got warning={self.capacity_warning}, critical={self.capacity_critical}"
            )
        for name in (
            "min_path_width",
            "path_interval",
            "default_bag_spacing",
            "accessibility_cap",
            "maintenance_overhead",
            "max_yield",
            "cache_lock_timeout",
        ):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if not (0 <= self.accessibility_floor <= self.accessibility_cap):
            raise ValueError(
                f"accessibility_floor must be in [0, {self.accessibility_cap}], "
                f"got {self.accessibility_floor}"
            )
        if not (1 <= self.min_grow_bags <= self.max_grow_bags):
            raise ValueError(
                f"grow bag bounds must satisfy 1 <= min <= max, "
                f"got [{self.min_grow_bags}, {self.max_grow_bags}]"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> EngineConfig:
        """Build a config from *data*, overriding defaults. Unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown engine config keys: {', '.join(unknown)}")
        return cls(**dict(data))

    @classmethod
    def from_yaml(cls, path: Path | str) -> EngineConfig:
        """Load overrides from a YAML mapping file. An empty file yields the defaults."""
        path = Path(path)
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Engine config file not found: {path}") from None
        except yaml.YAMLError as exc:
            raise ValueError(f"Failed to parse engine config file {path}: {exc}") from exc
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Engine config file {path} must contain a mapping")
        return cls.from_mapping(cast(dict[str, Any], data))


DEFAULT_CONFIG: EngineConfig = EngineConfig()
