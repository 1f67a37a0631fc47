"""
Capacity validator: can a garden take another batch of grow bags?

    required_space  = new_bags × space_factor(bag_size)
    total_required  = existing_usage + required_space
    adjusted_space  = total_required / soil_efficiency(soil_type)
    utilization_pct = adjusted_space / garden_area × 100

Classification:
  utilization < warning threshold              → OK
  warning ≤ utilization < critical threshold   → WARNING (accepted, message set)
  utilization ≥ critical threshold             → CapacityError (rejected)

Soil efficiency is looked up leniently: unknown soil uses the table default.
Rejections report the maximum number of bags of the requested size the
garden could hold:

    bag_area(d) = (d + bag_spacing)² × maintenance_overhead
    max_bags    = floor(floor(garden_area / bag_area) × max_utilization)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gardenplan.config import DEFAULT_CONFIG, EngineConfig
from gardenplan.errors import CapacityError, ValidationError
from gardenplan.registry.registry import FactorRegistry, get_registry
from gardenplan.registry.types import BagSize, SoilType
from gardenplan.utilities.conversion import inches_to_feet, to_canonical
from gardenplan.utilities.types import Dimensions
from gardenplan.validator.categories import validate_bag_count, validate_bag_size
from gardenplan.validator.dimensions import validate_dimensions, validate_garden_area

logger = logging.getLogger(__name__)


class CapacityStatus(str, Enum):
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class GardenSpace:
    """The garden a capacity check runs against.

    Attributes:
        dimensions: Garden length and width.
        soil_type: Soil in the garden; ``None`` or unknown values use the
            default efficiency.
    """

    dimensions: Dimensions
    soil_type: Optional[SoilType | str] = None

    @property
    def area(self) -> float:
        """Total area in sq ft."""
        return to_canonical(self.dimensions).area


@dataclass(frozen=True)
class SpaceValidationResult:
    """Outcome of a capacity check. All areas are in sq ft."""

    is_valid: bool
    total_area: float
    used_space: float
    required_space: float
    available_space: float
    utilization_percent: float
    status: CapacityStatus
    message: Optional[str] = None


def bag_area(diameter: float, config: EngineConfig = DEFAULT_CONFIG) -> float:
    """Garden area (sq ft) one bag of *diameter* ft needs, including access room."""
    effective = diameter + config.default_bag_spacing
    return effective * effective * config.maintenance_overhead


def max_bag_capacity(
    garden_area: float, diameter: float, config: EngineConfig = DEFAULT_CONFIG
) -> int:
    """Largest number of bags of *diameter* ft that fit *garden_area* sq ft."""
    fits = math.floor(garden_area / bag_area(diameter, config))
    return int(fits * config.max_utilization)


def required_space(
    bag_count: int,
    bag_size: BagSize,
    registry: Optional[FactorRegistry] = None,
) -> float:
    """Garden area (sq ft) consumed by *bag_count* bags of *bag_size*."""
    registry = registry if registry is not None else get_registry()
    return bag_count * registry.get_bag_space_factor(bag_size)


def validate_capacity(
    garden: GardenSpace,
    existing_usage: float,
    new_request_bags: int,
    bag_size: BagSize | str,
    config: EngineConfig = DEFAULT_CONFIG,
    registry: Optional[FactorRegistry] = None,
) -> SpaceValidationResult:
    """
    Check whether *garden* can take *new_request_bags* more bags.

    Parameters
    ----------
    garden:
        Garden dimensions and soil type.
    existing_usage:
        Space already committed to crops, in sq ft.
    new_request_bags:
        Number of bags requested.
    bag_size:
        Nominal size of the requested bags.

    Returns
    -------
    SpaceValidationResult with status OK or WARNING.

    Raises
    ------
    ValidationError
        If inputs are out of domain.
    CapacityError
        If utilization reaches the critical threshold. Carries the computed
        percentage, remaining capacity, maximum bag count, and the result.
    """
    registry = registry if registry is not None else get_registry()
    size = validate_bag_size(bag_size)
    validate_bag_count(new_request_bags, config)
    if not math.isfinite(existing_usage) or existing_usage < 0:
        raise ValidationError(
            "existing_usage", existing_usage, "must be a non-negative finite number"
        )
    validate_dimensions(garden.dimensions, config)
    garden_area = garden.area
    validate_garden_area(garden_area, config)

    requested = required_space(new_request_bags, size, registry)
    total_required = existing_usage + requested
    efficiency = registry.get_soil_efficiency(garden.soil_type)
    adjusted = total_required / efficiency
    utilization = adjusted / garden_area * 100
    available = max(garden_area - existing_usage, 0.0)

    if utilization >= config.capacity_critical * 100:
        status = CapacityStatus.CRITICAL
        message = f"garden capacity critically exceeded: {utilization:.2f}% used"
    elif utilization >= config.capacity_warning * 100:
        status = CapacityStatus.WARNING
        message = f"approaching garden capacity: {utilization:.2f}% used"
    else:
        status = CapacityStatus.OK
        message = None

    result = SpaceValidationResult(
        is_valid=status is not CapacityStatus.CRITICAL,
        total_area=garden_area,
        used_space=existing_usage,
        required_space=requested,
        available_space=available,
        utilization_percent=utilization,
        status=status,
        message=message,
    )

    if status is CapacityStatus.CRITICAL:
        max_bags = max_bag_capacity(garden_area, inches_to_feet(size.diameter_inches), config)
        if adjusted > garden_area:
            message = (
                f"{message}; required {adjusted:.2f} sq ft exceeds garden area "
                f"{garden_area:.2f} sq ft"
            )
        logger.info("capacity check rejected: %s", message)
        raise CapacityError(
            message,
            utilization_percent=utilization,
            remaining_capacity=available,
            max_bags=max_bags,
            result=result,
        )
    if status is CapacityStatus.WARNING:
        logger.warning(message)
    return result


def validate_grow_bag_plan(
    dims: Dimensions,
    bag_diameter: float,
    requested_bags: int,
    config: EngineConfig = DEFAULT_CONFIG,
) -> bool:
    """
    Check that *requested_bags* bags of *bag_diameter* ft fit in *dims*.

    Each bag claims :func:`bag_area`; the plan fits when the summed claim
    does not exceed the garden area.

    Raises
    ------
    ValidationError
        If the diameter is not positive or the count is below one.
    CapacityError
        If the plan does not fit; ``max_bags`` gives the largest count that would.
    """
    if not math.isfinite(bag_diameter) or bag_diameter <= 0:
        raise ValidationError(
            "bag_diameter", bag_diameter, "bag diameter must be a positive finite number"
        )
    if isinstance(requested_bags, bool) or not isinstance(requested_bags, int):
        raise ValidationError("requested_bags", requested_bags, "must be an integer")
    if requested_bags < 1:
        raise ValidationError("requested_bags", requested_bags, "grow bag count must be positive")
    validate_dimensions(dims, config)
    garden_area = to_canonical(dims).area
    validate_garden_area(garden_area, config)

    needed = bag_area(bag_diameter, config) * requested_bags
    if needed > garden_area:
        raise CapacityError(
            f"garden space ({garden_area:.2f} sq ft) cannot accommodate "
            f"{requested_bags} grow bags requiring {needed:.2f} sq ft",
            utilization_percent=needed / garden_area * 100,
            remaining_capacity=garden_area,
            max_bags=max_bag_capacity(garden_area, bag_diameter, config),
        )
    return True
