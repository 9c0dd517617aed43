"""Tests for unit conversion tables."""

import pytest

from core.units import (
    ACRE_CONVERSION,
    CONVERSION_FACTORS,
    Unit,
    area_to_acres,
    convert_area,
    to_meters,
)


def test_conversion_factors():
    """Factors to meters are fixed constants."""
    assert CONVERSION_FACTORS[Unit.METERS] == 1.0
    assert CONVERSION_FACTORS[Unit.FEET] == 0.3048
    assert CONVERSION_FACTORS[Unit.INCHES] == 0.0254
    assert all(factor > 0 for factor in CONVERSION_FACTORS.values())


def test_to_meters():
    assert to_meters(10.0, Unit.FEET) == pytest.approx(3.048)
    assert to_meters(100.0, Unit.INCHES) == pytest.approx(2.54)
    assert to_meters(7.5, Unit.METERS) == 7.5


def test_to_meters_accepts_wire_values():
    assert to_meters(1.0, "ft") == pytest.approx(0.3048)


@pytest.mark.parametrize("unit", list(Unit))
def test_convert_area_same_unit_is_identity(unit):
    """Same-unit conversion returns the exact input."""
    value = 1234.5678901234
    assert convert_area(value, unit, unit) == value


def test_convert_area_scales_by_square_of_factor():
    """One square meter is about 10.7639 square feet."""
    assert convert_area(1.0, Unit.METERS, Unit.FEET) == pytest.approx(10.7639104, rel=1e-7)
    assert convert_area(144.0, Unit.INCHES, Unit.FEET) == pytest.approx(1.0)
    assert convert_area(1.0, Unit.FEET, Unit.METERS) == pytest.approx(0.3048 ** 2)


def test_acre_conversion():
    assert area_to_acres(43560.0, Unit.FEET) == pytest.approx(1.0)
    assert area_to_acres(4046.856, Unit.METERS) == pytest.approx(1.0)
    assert area_to_acres(ACRE_CONVERSION[Unit.INCHES] * 2, Unit.INCHES) == pytest.approx(2.0)


def test_unit_labels_and_values():
    assert Unit("ft") is Unit.FEET
    assert Unit.INCHES.value == "in"
    assert Unit.METERS.label == "Meters"
    with pytest.raises(ValueError):
        Unit("yd")
