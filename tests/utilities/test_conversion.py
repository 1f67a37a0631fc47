"""Tests for length and area unit conversion."""

import pytest

from gardenplan.errors import UnsupportedUnitError
from gardenplan.utilities.conversion import (
    FEET_TO_METERS,
    conversion_factor,
    convert,
    convert_area,
    feet_to_meters,
    inches_to_feet,
    meters_to_feet,
    to_canonical,
)
from gardenplan.utilities.types import Dimensions, LengthUnit

_UNITS = list(LengthUnit)


class TestConvert:
    def test_feet_to_meters_constant(self):
        assert FEET_TO_METERS == 0.3048

    def test_one_foot_in_meters(self):
        assert convert(1.0, "feet", "meters") == pytest.approx(0.3048)

    def test_one_meter_in_feet(self):
        assert convert(1.0, LengthUnit.METERS, LengthUnit.FEET) == pytest.approx(3.28084, rel=1e-5)

    def test_twelve_inches_is_one_foot(self):
        assert convert(12.0, "inches", "feet") == pytest.approx(1.0)

    def test_centimeters_to_meters(self):
        assert convert(250.0, "centimeters", "meters") == pytest.approx(2.5)

    def test_identity_when_units_match(self):
        for unit in _UNITS:
            assert convert(17.25, unit, unit) == 17.25

    def test_unit_strings_are_case_insensitive(self):
        assert convert(10.0, "FEET", " Meters ") == pytest.approx(3.048)

    def test_round_trip_all_pairs(self):
        for a in _UNITS:
            for b in _UNITS:
                for value in [0.5, 10.0, 123.456, 1000.0]:
                    assert convert(convert(value, a, b), b, a) == pytest.approx(value, abs=1e-6)

    def test_four_significant_digits(self):
        """Ten feet must convert to 3.048 m to at least four significant digits."""
        assert abs(convert(10.0, "feet", "meters") - 3.048) < 0.0005

    def test_unknown_unit_raises(self):
        with pytest.raises(UnsupportedUnitError, match="furlongs"):
            convert(1.0, "furlongs", "feet")

    def test_unknown_target_unit_raises(self):
        with pytest.raises(UnsupportedUnitError):
            conversion_factor("feet", "yards")


class TestConvertArea:
    def test_square_meter_in_square_feet(self):
        assert convert_area(1.0, "meters", "feet") == pytest.approx(10.7639, rel=1e-4)

    def test_square_foot_in_square_inches(self):
        assert convert_area(1.0, "feet", "inches") == pytest.approx(144.0)

    def test_area_round_trip(self):
        assert convert_area(convert_area(200.45, "feet", "meters"), "meters", "feet") == (
            pytest.approx(200.45)
        )


class TestHelpers:
    def test_feet_meters_round_trip(self):
        for val in [1.0, 6.0, 33.3]:
            assert meters_to_feet(feet_to_meters(val)) == pytest.approx(val)

    def test_inches_to_feet(self):
        assert inches_to_feet(14.0) == pytest.approx(14.0 / 12.0)

    def test_to_canonical_returns_same_object_for_feet(self):
        dims = Dimensions(20.0, 15.0, "feet")
        assert to_canonical(dims) is dims

    def test_to_canonical_from_inches(self):
        canonical = to_canonical(Dimensions(240.0, 180.0, "inches"))
        assert canonical.unit is LengthUnit.FEET
        assert canonical.length == pytest.approx(20.0)
        assert canonical.width == pytest.approx(15.0)
