"""
Usable area calculator.

Net plantable area is what remains after maintenance paths are reserved,
scaled by the utilization ceiling:

    path_area   = floor(length / interval) × path_width × width
                + floor(width / interval)  × path_width × length
                + 4 × path_width²          (only when corners are reserved)
    usable_area = floor₂((length × width − path_area) × max_utilization)

where floor₂ floors to two decimal places. All geometry runs in feet.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from gardenplan.config import DEFAULT_CONFIG, EngineConfig
from gardenplan.utilities.conversion import to_canonical
from gardenplan.utilities.types import Dimensions
from gardenplan.validator.dimensions import validate_dimensions, validate_garden_area


@dataclass(frozen=True)
class AreaResult:
    """Area breakdown for one garden, in square feet."""

    total_area: float
    path_area: float
    usable_area: float


def floor_2dp(value: float) -> float:
    """Floor *value* to two decimal places."""
    return math.floor(value * 100) / 100


def calculate_path_area(
    length: float,
    width: float,
    include_corners: bool,
    path_width: float = DEFAULT_CONFIG.min_path_width,
    path_interval: float = DEFAULT_CONFIG.path_interval,
) -> float:
    """Area reserved for maintenance paths across a *length* × *width* plot."""
    horizontal = math.floor(length / path_interval) * path_width * width
    vertical = math.floor(width / path_interval) * path_width * length
    corners = 4 * path_width**2 if include_corners else 0.0
    return horizontal + vertical + corners


def calculate_area(
    dims: Dimensions,
    include_corners: bool,
    config: EngineConfig = DEFAULT_CONFIG,
) -> AreaResult:
    """
    Validate *dims* and compute total, path, and usable area in sq ft.

    Raises:
        DimensionError: If length or width is out of bounds.
        AreaRangeError: If the canonical total area is out of bounds.
    """
    validate_dimensions(dims, config)
    canonical = to_canonical(dims)
    total = canonical.length * canonical.width
    validate_garden_area(total, config)

    path = calculate_path_area(
        canonical.length,
        canonical.width,
        include_corners,
        path_width=config.min_path_width,
        path_interval=config.path_interval,
    )
    usable = floor_2dp(max(total - path, 0.0) * config.max_utilization)
    return AreaResult(total_area=total, path_area=path, usable_area=usable)


def usable_area(
    dims: Dimensions,
    include_corners: bool,
    config: EngineConfig = DEFAULT_CONFIG,
) -> float:
    """Net plantable area in sq ft; see :func:`calculate_area`."""
    return calculate_area(dims, include_corners, config).usable_area
