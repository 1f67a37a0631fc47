"""
Error taxonomy for the garden planning engine.

Every failure the engine can surface derives from :class:`GardenPlanError`,
which carries a stable ``code`` for request-handling layers and a
human-readable ``detail``. Nothing in the engine retries: all calculations
are deterministic, so a retry would reproduce the same error.

Warnings (capacity in the warning band, yield accuracy flags) are returned
alongside successful results and are never raised.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from gardenplan.calculator.capacity import SpaceValidationResult


class GardenPlanError(Exception):
    """Base class for all engine errors.

    Attributes:
        code: Machine-readable error code (e.g. ``"SPACE_CAPACITY_CRITICAL"``).
        detail: Human-readable description of the failure.
    """

    code: str = "GARDEN_PLAN_ERROR"

    def __init__(self, detail: str, code: Optional[str] = None) -> None:
        if code is not None:
            self.code = code
        super().__init__(f"[{self.code}] {detail}")
        self.detail = detail


# ── Validation ────────────────────────────────────────────────────────────────


class ValidationError(GardenPlanError):
    """An input value lies outside its allowed domain."""

    code = "VALIDATION_ERROR"

    def __init__(self, field: str, value: object, detail: str) -> None:
        super().__init__(f"validation failed for {field}: {detail} (value: {value!r})")
        self.field = field
        self.value = value


class DimensionErrorKind(str, Enum):
    TOO_SMALL = "too_small"
    TOO_LARGE = "too_large"
    NON_POSITIVE = "non_positive"


class DimensionError(ValidationError):
    """A garden length or width is non-positive or outside the configured bounds."""

    def __init__(self, field: str, value: float, kind: DimensionErrorKind, detail: str) -> None:
        super().__init__(field, value, detail)
        self.kind = kind


class CategoryError(ValidationError):
    """A categorical input (soil, sunlight, bag size) is not in its enumeration."""

    def __init__(self, field: str, value: object, allowed: tuple[str, ...]) -> None:
        super().__init__(
            field,
            value,
            f"must be one of {', '.join(allowed)}",
        )
        self.allowed = allowed


# ── Geometry ──────────────────────────────────────────────────────────────────


class AreaRangeError(GardenPlanError):
    """Total garden area falls outside the configured garden-area bounds."""

    code = "AREA_OUT_OF_RANGE"

    def __init__(self, area: float, min_area: float, max_area: float) -> None:
        super().__init__(
            f"garden area {area:.2f} sq ft outside acceptable range "
            f"[{min_area:.2f}, {max_area:.2f}]"
        )
        self.area = area
        self.min_area = min_area
        self.max_area = max_area


class NoViableLayoutError(GardenPlanError):
    """The layout search found no candidate meeting the accessibility floor.

    Carries the attempted search bounds so callers can suggest a larger
    space or smaller bags.
    """

    code = "NO_VIABLE_LAYOUT"

    def __init__(self, max_rows: int, max_columns: int, bag_diameter: float) -> None:
        super().__init__(
            f"could not find viable layout configuration "
            f"(searched up to {max_rows} rows x {max_columns} columns "
            f"for {bag_diameter:.2f} ft bags)"
        )
        self.max_rows = max_rows
        self.max_columns = max_columns
        self.bag_diameter = bag_diameter


class UtilizationBelowTargetError(GardenPlanError):
    """An optimized layout does not reach the caller's space-utilization target."""

    code = "UTILIZATION_BELOW_TARGET"

    def __init__(self, utilization: float, target: float) -> None:
        super().__init__(
            f"space utilization below target: {utilization * 100:.2f}% "
            f"(target {target * 100:.2f}%)"
        )
        self.utilization = utilization
        self.target = target


# ── Capacity ──────────────────────────────────────────────────────────────────


class CapacityError(GardenPlanError):
    """Garden capacity is critically exceeded; the request is rejected."""

    code = "SPACE_CAPACITY_CRITICAL"

    def __init__(
        self,
        detail: str,
        utilization_percent: float,
        remaining_capacity: float,
        max_bags: int,
        result: Optional[SpaceValidationResult] = None,
    ) -> None:
        super().__init__(f"{detail}; maximum capacity is {max_bags} bags")
        self.utilization_percent = utilization_percent
        self.remaining_capacity = remaining_capacity
        self.max_bags = max_bags
        self.result = result


# ── Yield ─────────────────────────────────────────────────────────────────────


class CalculationFailureError(GardenPlanError):
    """A calculated yield falls outside the sanity bounds."""

    code = "CALCULATION_FAILURE"

    def __init__(self, value: float, max_value: float) -> None:
        super().__init__(
            f"calculated yield outside reasonable bounds: {value:.2f} g/day "
            f"(expected within (0, {max_value:.2f}])"
        )
        self.value = value
        self.max_value = max_value


# ── Units ─────────────────────────────────────────────────────────────────────


class UnsupportedUnitError(GardenPlanError):
    """A length unit outside the supported set. Programmer error; never retried."""

    code = "UNSUPPORTED_UNIT"

    def __init__(self, unit: object, supported: tuple[str, ...]) -> None:
        super().__init__(f"unsupported unit {unit!r}; expected one of {', '.join(supported)}")
        self.unit = unit
