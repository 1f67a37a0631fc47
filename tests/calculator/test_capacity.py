"""Tests for the garden capacity validator."""

import logging

import pytest

from gardenplan.calculator.capacity import (
    CapacityStatus,
    GardenSpace,
    bag_area,
    max_bag_capacity,
    required_space,
    validate_capacity,
    validate_grow_bag_plan,
)
from gardenplan.config import EngineConfig
from gardenplan.errors import (
    AreaRangeError,
    CapacityError,
    CategoryError,
    DimensionError,
    ValidationError,
)
from gardenplan.registry.types import BagSize
from gardenplan.utilities.types import Dimensions


@pytest.fixture(scope="module")
def garden():
    """100 sq ft garden with no recorded soil type (efficiency 1.0)."""
    return GardenSpace(Dimensions(10.0, 10.0))


class TestBagArea:
    def test_known_value(self):
        """(1.0 + 0.5)² × 1.2 = 2.7 sq ft."""
        assert bag_area(1.0) == pytest.approx(2.7)

    def test_max_capacity(self):
        """floor(100 / 2.7) = 37 bags; × 0.95 → 35."""
        assert max_bag_capacity(100.0, 1.0) == 35

    def test_max_capacity_ten_inch(self):
        assert max_bag_capacity(100.0, 10 / 12) == 43

    def test_required_space(self):
        assert required_space(10, BagSize.SIZE_10) == pytest.approx(4.0)
        assert required_space(3, BagSize.SIZE_14) == pytest.approx(2.4)


class TestCapacityStatus:
    def test_ok(self, garden):
        result = validate_capacity(garden, 70.0, 10, '10"')
        assert result.status is CapacityStatus.OK
        assert result.is_valid
        assert result.required_space == pytest.approx(4.0)
        assert result.utilization_percent == pytest.approx(74.0)
        assert result.available_space == pytest.approx(30.0)
        assert result.total_area == pytest.approx(100.0)
        assert result.used_space == 70.0
        assert result.message is None

    def test_warning_is_accepted(self, garden, caplog):
        with caplog.at_level(logging.WARNING, logger="gardenplan"):
            result = validate_capacity(garden, 80.0, 10, '10"')
        assert result.status is CapacityStatus.WARNING
        assert result.is_valid
        assert result.utilization_percent == pytest.approx(84.0)
        assert "approaching garden capacity" in result.message
        assert "approaching garden capacity" in caplog.text

    def test_ninety_existing_is_still_warning(self, garden):
        """94% sits below the 95% critical threshold."""
        result = validate_capacity(garden, 90.0, 10, '10"')
        assert result.status is CapacityStatus.WARNING

    def test_critical_rejected_with_max_bags(self, garden):
        with pytest.raises(CapacityError) as exc_info:
            validate_capacity(garden, 92.0, 10, '10"')
        err = exc_info.value
        assert err.code == "SPACE_CAPACITY_CRITICAL"
        assert err.utilization_percent == pytest.approx(96.0)
        assert err.remaining_capacity == pytest.approx(8.0)
        assert err.max_bags == 43
        assert "maximum capacity is 43 bags" in str(err)
        assert err.result is not None
        assert err.result.status is CapacityStatus.CRITICAL
        assert not err.result.is_valid

    def test_exactly_critical_threshold_rejected(self, garden):
        with pytest.raises(CapacityError):
            validate_capacity(garden, 91.0, 10, '10"')

    def test_exceeding_garden_reported(self):
        sandy = GardenSpace(Dimensions(10.0, 10.0), soil_type="Sandy")
        with pytest.raises(CapacityError) as exc_info:
            validate_capacity(sandy, 90.0, 10, '10"')
        assert exc_info.value.utilization_percent == pytest.approx(117.5)
        assert "exceeds garden area" in str(exc_info.value)

    def test_efficient_soil_lowers_utilization(self):
        loamy = GardenSpace(Dimensions(10.0, 10.0), soil_type="loamy_soil")
        result = validate_capacity(loamy, 90.0, 10, '10"')
        assert result.status is CapacityStatus.OK
        assert result.utilization_percent == pytest.approx(94.0 / 1.2)

    def test_unknown_soil_uses_default(self, garden):
        peat = GardenSpace(Dimensions(10.0, 10.0), soil_type="Peat")
        assert validate_capacity(peat, 70.0, 10, '10"') == validate_capacity(
            garden, 70.0, 10, '10"'
        )

    def test_thresholds_configurable(self, garden):
        strict = EngineConfig(capacity_warning=0.5, capacity_critical=0.7)
        with pytest.raises(CapacityError):
            validate_capacity(garden, 70.0, 10, '10"', config=strict)

    def test_area_in_other_units(self):
        """120 in × 120 in is the same 100 sq ft garden."""
        inches = GardenSpace(Dimensions(120.0, 120.0, "inches"))
        result = validate_capacity(inches, 70.0, 10, '10"')
        assert result.total_area == pytest.approx(100.0)
        assert result.utilization_percent == pytest.approx(74.0)


class TestCapacityErrors:
    def test_negative_existing_usage(self, garden):
        with pytest.raises(ValidationError, match="existing_usage"):
            validate_capacity(garden, -1.0, 10, '10"')

    @pytest.mark.parametrize("count", [0, 101])
    def test_bag_count_out_of_range(self, garden, count):
        with pytest.raises(ValidationError):
            validate_capacity(garden, 0.0, count, '10"')

    def test_unknown_bag_size(self, garden):
        with pytest.raises(CategoryError):
            validate_capacity(garden, 0.0, 10, '9"')

    def test_bad_dimensions(self):
        with pytest.raises(DimensionError):
            validate_capacity(GardenSpace(Dimensions(5.0, 50.0)), 0.0, 10, '10"')

    def test_area_out_of_range(self):
        with pytest.raises(AreaRangeError):
            validate_capacity(GardenSpace(Dimensions(100.0, 100.0)), 0.0, 10, '10"')


class TestGrowBagPlan:
    def test_fits(self):
        assert validate_grow_bag_plan(Dimensions(10.0, 10.0), 1.0, 37) is True

    def test_too_many_bags(self):
        with pytest.raises(CapacityError) as exc_info:
            validate_grow_bag_plan(Dimensions(10.0, 10.0), 1.0, 38)
        err = exc_info.value
        assert err.max_bags == 35
        assert "cannot accommodate 38 grow bags" in str(err)
        assert err.result is None

    def test_non_positive_diameter(self):
        with pytest.raises(ValidationError):
            validate_grow_bag_plan(Dimensions(10.0, 10.0), 0.0, 5)

    def test_non_positive_count(self):
        with pytest.raises(ValidationError):
            validate_grow_bag_plan(Dimensions(10.0, 10.0), 1.0, 0)


class TestNonFiniteInputs:
    @pytest.mark.parametrize("usage", [float("nan"), float("inf")])
    def test_existing_usage_rejected(self, garden, usage):
        with pytest.raises(ValidationError, match="existing_usage"):
            validate_capacity(garden, usage, 10, '10"')

    def test_nan_dimension_rejected(self):
        with pytest.raises(DimensionError):
            validate_capacity(GardenSpace(Dimensions(float("nan"), 10.0)), 0.0, 10, '10"')

    @pytest.mark.parametrize("diameter", [float("nan"), float("inf")])
    def test_plan_diameter_rejected(self, diameter):
        with pytest.raises(ValidationError, match="bag_diameter"):
            validate_grow_bag_plan(Dimensions(10.0, 10.0), diameter, 5)

    @pytest.mark.parametrize("count", [float("nan"), 5.0, True])
    def test_plan_count_must_be_integer(self, count):
        with pytest.raises(ValidationError, match="requested_bags"):
            validate_grow_bag_plan(Dimensions(10.0, 10.0), 1.0, count)

    def test_plan_nan_dimension_rejected(self):
        with pytest.raises(DimensionError):
            validate_grow_bag_plan(Dimensions(10.0, float("nan")), 1.0, 5)
