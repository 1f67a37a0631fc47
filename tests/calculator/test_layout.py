"""Tests for the grow-bag layout optimizer."""

import math

import pytest

from gardenplan.calculator.layout import (
    GrowBagLayout,
    LayoutOrientation,
    OptimizationConfig,
    _Candidate,
    _reduce,
    _row_bands,
    accessibility_score,
    grid_positions,
    optimize_layout,
    space_utilization,
)
from gardenplan.errors import (
    AreaRangeError,
    DimensionError,
    NoViableLayoutError,
    ValidationError,
)
from gardenplan.utilities.types import Dimensions, Point


@pytest.fixture(scope="module")
def garden():
    return Dimensions(20.0, 15.0, "feet")


@pytest.fixture(scope="module")
def default_opt():
    return OptimizationConfig(spacing_multiplier=1.0)


@pytest.fixture(scope="module")
def layout(garden, default_opt):
    return optimize_layout(garden, 1.0, default_opt)


# ── Scoring ────────────────────────────────────────────────────────────────────


class TestAccessibilityScore:
    def test_mean_of_ratios(self):
        assert accessibility_score(1.2, 1.6, 1.0) == pytest.approx(1.4)

    def test_capped(self):
        assert accessibility_score(3.0, 3.0, 1.0) == 2.0

    def test_each_ratio_capped_separately(self):
        assert accessibility_score(2.0, 5.0, 1.0) == 2.0

    def test_spacing_below_path_width_floors(self):
        assert accessibility_score(0.9, 1.5, 1.0) == 0.5

    def test_spacing_equal_to_path_width(self):
        assert accessibility_score(1.0, 1.0, 1.0) == 1.0


class TestSpaceUtilization:
    def test_known_value(self):
        assert space_utilization(13, 10, 1.0, 20.0, 15.0) == pytest.approx(
            130 * math.pi * 0.25 / 300
        )

    def test_scales_with_bag_count(self):
        one = space_utilization(1, 1, 1.0, 20.0, 15.0)
        assert space_utilization(2, 3, 1.0, 20.0, 15.0) == pytest.approx(6 * one)


class TestGridPositions:
    def test_row_major(self):
        positions = grid_positions(2, 3, 1.5, 1.5, 1.0)
        assert positions[0] == Point(0.5, 0.5)
        assert positions[1] == Point(2.0, 0.5)
        assert positions[3] == Point(0.5, 2.0)

    def test_vertical_swaps_axes(self):
        positions = grid_positions(2, 3, 1.5, 1.5, 1.0, LayoutOrientation.VERTICAL)
        assert positions[1] == Point(0.5, 2.0)
        assert positions[3] == Point(2.0, 0.5)


# ── Search ─────────────────────────────────────────────────────────────────────


class TestOptimizeLayout:
    def test_fills_the_search_bounds(self, layout):
        """pitch 1.5 ft → floor(20/1.5)=13 rows, floor(15/1.5)=10 columns."""
        assert (layout.rows, layout.columns) == (13, 10)

    def test_accessibility_floor_met(self, layout):
        assert layout.accessibility_score >= 0.8
        assert layout.accessibility_score == pytest.approx(1.5)

    def test_positions_match_grid(self, layout):
        assert len(layout.positions) == layout.rows * layout.columns
        assert layout.positions[0] == Point(0.5, 0.5)
        assert layout.positions[-1] == Point(9 * 1.5 + 0.5, 12 * 1.5 + 0.5)

    def test_spacing(self, layout):
        assert layout.row_spacing == pytest.approx(1.5)
        assert layout.column_spacing == pytest.approx(1.5)

    def test_utilization(self, layout):
        assert layout.space_utilization == pytest.approx(130 * math.pi * 0.25 / 300)
        assert 0.0 <= layout.space_utilization <= 1.0

    def test_idempotent(self, garden, default_opt, layout):
        assert optimize_layout(garden, 1.0, default_opt) == layout

    def test_monotone_in_bag_diameter(self, garden, default_opt):
        counts = [
            optimize_layout(garden, d, default_opt).total_bags for d in [0.5, 0.75, 1.0, 1.5, 2.0]
        ]
        assert counts == sorted(counts, reverse=True)

    def test_spacing_multiplier_widens_pitch(self, garden):
        wide = optimize_layout(garden, 1.0, OptimizationConfig(spacing_multiplier=2.0))
        assert wide.row_spacing == pytest.approx(2.0)
        assert (wide.rows, wide.columns) == (10, 7)

    def test_vertical_orientation(self, garden):
        opt = OptimizationConfig(preferred_orientation="vertical")
        vertical = optimize_layout(garden, 1.0, opt)
        assert vertical.orientation is LayoutOrientation.VERTICAL
        assert (vertical.rows, vertical.columns) == (10, 13)
        assert vertical.positions[1] == Point(0.5, 2.0)

    def test_parallel_matches_sequential(self, garden, default_opt, layout):
        assert optimize_layout(garden, 1.0, default_opt, max_workers=4) == layout

    def test_parallel_with_more_workers_than_rows(self, default_opt):
        small = Dimensions(10.0, 10.0)
        assert optimize_layout(small, 3.0, default_opt, max_workers=16) == optimize_layout(
            small, 3.0, default_opt
        )


class TestOptimizeLayoutErrors:
    def test_no_candidate_meets_accessibility(self, garden):
        opt = OptimizationConfig(min_path_width=5.0)
        with pytest.raises(NoViableLayoutError) as exc_info:
            optimize_layout(garden, 1.0, opt)
        assert exc_info.value.max_rows == 13
        assert exc_info.value.max_columns == 10
        assert exc_info.value.bag_diameter == 1.0

    def test_bag_larger_than_garden(self, garden, default_opt):
        with pytest.raises(NoViableLayoutError) as exc_info:
            optimize_layout(garden, 20.0, default_opt)
        assert exc_info.value.max_rows == 0

    @pytest.mark.parametrize("diameter", [0.0, -1.0])
    def test_non_positive_diameter(self, garden, default_opt, diameter):
        with pytest.raises(ValidationError, match="bag_diameter"):
            optimize_layout(garden, diameter, default_opt)

    def test_area_out_of_range(self, default_opt):
        with pytest.raises(AreaRangeError):
            optimize_layout(Dimensions(50.0, 50.0), 1.0, default_opt)


class TestReduction:
    def test_first_found_wins_ties(self):
        first = _Candidate(rows=2, columns=6, space_utilization=0.4, accessibility_score=1.0)
        second = _Candidate(rows=3, columns=4, space_utilization=0.4, accessibility_score=1.0)
        assert _reduce([first, second]) is first

    def test_highest_utilization_wins(self):
        low = _Candidate(rows=1, columns=1, space_utilization=0.1, accessibility_score=1.0)
        high = _Candidate(rows=2, columns=2, space_utilization=0.3, accessibility_score=1.0)
        assert _reduce([None, low, high]) is high

    def test_all_empty(self):
        assert _reduce([None, None]) is None

    def test_row_bands_cover_every_row_once(self):
        bands = _row_bands(13, 4)
        rows = [r for band in bands for r in band]
        assert rows == list(range(1, 14))


# ── Types ──────────────────────────────────────────────────────────────────────


class TestOptimizationConfig:
    def test_defaults(self):
        opt = OptimizationConfig()
        assert opt.include_corner_spaces is True
        assert opt.min_path_width == 1.0
        assert opt.preferred_orientation is LayoutOrientation.HORIZONTAL

    def test_orientation_string_coerced(self):
        assert (
            OptimizationConfig(preferred_orientation="vertical").preferred_orientation
            is LayoutOrientation.VERTICAL
        )

    def test_invalid_orientation(self):
        with pytest.raises(ValueError):
            OptimizationConfig(preferred_orientation="diagonal")

    def test_non_positive_values(self):
        with pytest.raises(ValueError, match="spacing_multiplier"):
            OptimizationConfig(spacing_multiplier=0.0)
        with pytest.raises(ValueError, match="min_path_width"):
            OptimizationConfig(min_path_width=-1.0)


class TestGrowBagLayout:
    def test_position_count_enforced(self):
        with pytest.raises(ValueError, match="positions"):
            GrowBagLayout(
                rows=2,
                columns=2,
                row_spacing=1.5,
                column_spacing=1.5,
                space_utilization=0.1,
                accessibility_score=1.5,
                positions=(Point(0.5, 0.5),),
            )

    def test_empty_layout_allowed(self):
        empty = GrowBagLayout(0, 0, 1.5, 1.5, 0.0, 0.0, ())
        assert empty.total_bags == 0

    def test_metrics(self, layout):
        metrics = layout.metrics()
        assert metrics.total_bags == 130
        assert metrics.usable_area == pytest.approx(130 * 1.5 * 1.5)
        # 19.5 x 15 ft grid: 3 paths x 15 + 2 paths x 19.5 + 4 corners
        assert metrics.path_area == pytest.approx(45.0 + 39.0 + 4.0)
        assert metrics.utilization_rate == layout.space_utilization
        assert metrics.accessibility_rate == layout.accessibility_score


class TestNonFiniteInputs:
    @pytest.mark.parametrize("diameter", [float("nan"), float("inf")])
    def test_diameter_rejected(self, garden, default_opt, diameter):
        with pytest.raises(ValidationError, match="bag_diameter"):
            optimize_layout(garden, diameter, default_opt)

    def test_nan_dimension_is_dimension_error(self, default_opt):
        with pytest.raises(DimensionError):
            optimize_layout(Dimensions(float("nan"), 15.0), 1.0, default_opt)

    @pytest.mark.parametrize("field", ["min_path_width", "spacing_multiplier"])
    def test_config_rejects_nan(self, field):
        with pytest.raises(ValueError, match=field):
            OptimizationConfig(**{field: float("nan")})
