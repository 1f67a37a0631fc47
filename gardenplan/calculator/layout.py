"""
Grow-bag layout optimizer.

Finds the grid arrangement of equal-diameter grow bags that maximizes space
utilization while keeping every bag reachable for maintenance.

Search
------
With ``pitch = bag_diameter + default_spacing × spacing_multiplier``::

    max_rows = floor(length / pitch)
    max_cols = floor(width  / pitch)

every ``(rows, cols)`` with ``1 ≤ rows ≤ max_rows`` and ``1 ≤ cols ≤ max_cols``
is scored:

    space_utilization   = rows × cols × π × (d/2)² / (length × width)
    accessibility_score = mean(min(row_spacing / path_width, cap),
                               min(col_spacing / path_width, cap))
                          or the floor score when either spacing is
                          narrower than the path width

The candidate with the highest utilization among those scoring at least the
minimum accessibility wins. Ties go to the first candidate in enumeration
order (ascending rows, then ascending columns).

Candidates are scored into an arena without positions; only the winner's
bag positions are materialized. Row bands may be scored on a thread pool;
band winners are reduced in row order with a strict comparison, so the
result is identical to the sequential scan.
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gardenplan.config import DEFAULT_CONFIG, EngineConfig
from gardenplan.errors import NoViableLayoutError, ValidationError
from gardenplan.utilities.conversion import to_canonical
from gardenplan.utilities.types import Dimensions, Point

from .area import calculate_area, calculate_path_area

logger = logging.getLogger(__name__)


class LayoutOrientation(str, Enum):
    """Which garden side the rows are counted along.

    HORIZONTAL counts rows along the length; VERTICAL along the width.
    """

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class OptimizationConfig:
    """Per-call layout search parameters.

    Attributes:
        include_corner_spaces: Reserve four corner path squares in the usable
            area calculation.
        min_path_width: Path width (ft) that spacing is measured against.
        preferred_orientation: Axis the rows run along.
        spacing_multiplier: Scales the default gap between bags.
    """

    include_corner_spaces: bool = True
    min_path_width: float = DEFAULT_CONFIG.min_path_width
    preferred_orientation: LayoutOrientation = LayoutOrientation.HORIZONTAL
    spacing_multiplier: float = 1.0

    def __post_init__(self) -> None:
        for name in ("min_path_width", "spacing_multiplier"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be a positive finite number, got {value}")
        object.__setattr__(
            self, "preferred_orientation", LayoutOrientation(self.preferred_orientation)
        )


@dataclass(frozen=True)
class LayoutMetrics:
    """Derived, read-only summary of a GrowBagLayout."""

    total_bags: int
    usable_area: float
    path_area: float
    utilization_rate: float
    accessibility_rate: float


@dataclass(frozen=True)
class GrowBagLayout:
    """
    An optimized grid of grow bags.

    ``positions`` holds bag centers in row-major order, in feet from the
    garden origin; ``len(positions) == rows * columns``.
    """

    rows: int
    columns: int
    row_spacing: float
    column_spacing: float
    space_utilization: float
    accessibility_score: float
    positions: tuple[Point, ...]
    orientation: LayoutOrientation = LayoutOrientation.HORIZONTAL

    def __post_init__(self) -> None:
        if self.rows < 0 or self.columns < 0:
            raise ValueError(f"rows and columns must be >= 0, got {self.rows}x{self.columns}")
        if len(self.positions) != self.rows * self.columns:
            raise ValueError(
                f"expected {self.rows * self.columns} positions, got {len(self.positions)}"
            )

    @property
    def total_bags(self) -> int:
        return self.rows * self.columns

    def metrics(self, config: EngineConfig = DEFAULT_CONFIG) -> LayoutMetrics:
        """Compute LayoutMetrics; path area assumes corner reservations."""
        return LayoutMetrics(
            total_bags=self.total_bags,
            usable_area=self.total_bags * self.row_spacing * self.column_spacing,
            path_area=calculate_path_area(
                self.rows * self.row_spacing,
                self.columns * self.column_spacing,
                True,
                path_width=config.min_path_width,
                path_interval=config.path_interval,
            ),
            utilization_rate=self.space_utilization,
            accessibility_rate=self.accessibility_score,
        )


@dataclass(frozen=True)
class _Candidate:
    rows: int
    columns: int
    space_utilization: float
    accessibility_score: float


# ── Scoring ───────────────────────────────────────────────────────────────────


def accessibility_score(
    row_spacing: float,
    column_spacing: float,
    min_path_width: float,
    config: EngineConfig = DEFAULT_CONFIG,
) -> float:
    """Maintenance reachability of a grid with the given row/column pitch."""
    if row_spacing < min_path_width or column_spacing < min_path_width:
        return config.accessibility_floor
    row_access = min(row_spacing / min_path_width, config.accessibility_cap)
    col_access = min(column_spacing / min_path_width, config.accessibility_cap)
    return (row_access + col_access) / 2


def space_utilization(
    rows: int, columns: int, bag_diameter: float, length: float, width: float
) -> float:
    """Fraction of the garden covered by bag footprints."""
    occupied = rows * columns * math.pi * (bag_diameter / 2) ** 2
    return occupied / (length * width)


def grid_positions(
    rows: int,
    columns: int,
    row_spacing: float,
    column_spacing: float,
    bag_diameter: float,
    orientation: LayoutOrientation = LayoutOrientation.HORIZONTAL,
) -> tuple[Point, ...]:
    """Bag centers in row-major order, offset by half a bag from the origin."""
    offset = bag_diameter / 2
    positions: list[Point] = []
    for r in range(rows):
        for c in range(columns):
            along_row = r * row_spacing + offset
            along_col = c * column_spacing + offset
            if orientation is LayoutOrientation.HORIZONTAL:
                positions.append(Point(x=along_col, y=along_row))
            else:
                positions.append(Point(x=along_row, y=along_col))
    return tuple(positions)


# ── Search ────────────────────────────────────────────────────────────────────


def _best_in_band(
    row_range: range,
    max_cols: int,
    pitch: float,
    bag_diameter: float,
    length: float,
    width: float,
    min_path_width: float,
    config: EngineConfig,
) -> Optional[_Candidate]:
    """Score every candidate in *row_range* and return the band's first-found best."""
    arena: list[_Candidate] = []
    best: Optional[int] = None
    for rows in row_range:
        for cols in range(1, max_cols + 1):
            arena.append(
                _Candidate(
                    rows=rows,
                    columns=cols,
                    space_utilization=space_utilization(rows, cols, bag_diameter, length, width),
                    accessibility_score=accessibility_score(pitch, pitch, min_path_width, config),
                )
            )
            candidate = arena[-1]
            if candidate.accessibility_score < config.min_accessibility:
                continue
            if best is None or candidate.space_utilization > arena[best].space_utilization:
                best = len(arena) - 1
    return arena[best] if best is not None else None


def _reduce(candidates: list[Optional[_Candidate]]) -> Optional[_Candidate]:
    """Max-by-utilization over band winners in row order; earlier bands win ties."""
    best: Optional[_Candidate] = None
    for candidate in candidates:
        if candidate is None:
            continue
        if best is None or candidate.space_utilization > best.space_utilization:
            best = candidate
    return best


def _row_bands(max_rows: int, workers: int) -> list[range]:
    size = max(1, math.ceil(max_rows / workers))
    return [range(start, min(start + size, max_rows + 1)) for start in range(1, max_rows + 1, size)]


def optimize_layout(
    dims: Dimensions,
    bag_diameter: float,
    opt: OptimizationConfig,
    config: EngineConfig = DEFAULT_CONFIG,
    max_workers: Optional[int] = None,
) -> GrowBagLayout:
    """
    Find the highest-utilization accessible grid of bags for *dims*.

    Parameters
    ----------
    dims:
        Garden dimensions in any supported unit.
    bag_diameter:
        Bag diameter in feet.
    opt:
        Search parameters.
    config:
        Engine constants.
    max_workers:
        When greater than 1, score row bands on a thread pool of this size.

    Raises
    ------
    ValidationError
        If *bag_diameter* is not positive.
    DimensionError, AreaRangeError
        From the usable-area check.
    NoViableLayoutError
        If no candidate reaches the minimum accessibility score.
    """
    if not math.isfinite(bag_diameter) or bag_diameter <= 0:
        raise ValidationError(
            "bag_diameter", bag_diameter, "bag diameter must be a positive finite number"
        )

    area = calculate_area(dims, opt.include_corner_spaces, config)
    canonical = to_canonical(dims)
    if opt.preferred_orientation is LayoutOrientation.HORIZONTAL:
        row_axis, col_axis = canonical.length, canonical.width
    else:
        row_axis, col_axis = canonical.width, canonical.length

    spacing = config.default_bag_spacing * opt.spacing_multiplier
    pitch = bag_diameter + spacing
    max_rows = int(row_axis // pitch)
    max_cols = int(col_axis // pitch)
    logger.debug(
        "optimizing layout for %s: usable %.2f sq ft, pitch %.3f ft, bounds %dx%d",
        dims,
        area.usable_area,
        pitch,
        max_rows,
        max_cols,
    )

    search_args = (
        max_cols,
        pitch,
        bag_diameter,
        canonical.length,
        canonical.width,
        opt.min_path_width,
        config,
    )
    if max_workers is not None and max_workers > 1 and max_rows > 1:
        bands = _row_bands(max_rows, max_workers)
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            band_winners = list(pool.map(lambda band: _best_in_band(band, *search_args), bands))
        best = _reduce(band_winners)
    else:
        best = _best_in_band(range(1, max_rows + 1), *search_args)

    if best is None:
        raise NoViableLayoutError(max_rows, max_cols, bag_diameter)

    logger.debug(
        "selected %dx%d layout: utilization %.4f, accessibility %.2f",
        best.rows,
        best.columns,
        best.space_utilization,
        best.accessibility_score,
    )
    return GrowBagLayout(
        rows=best.rows,
        columns=best.columns,
        row_spacing=pitch,
        column_spacing=pitch,
        space_utilization=best.space_utilization,
        accessibility_score=best.accessibility_score,
        positions=grid_positions(
            best.rows, best.columns, pitch, pitch, bag_diameter, opt.preferred_orientation
        ),
        orientation=opt.preferred_orientation,
    )
