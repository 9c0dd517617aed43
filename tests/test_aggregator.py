"""Tests for result summaries."""

import pytest

from core.calculations.aggregator import summarize
from core.calculations.area_calculator import evaluate_all
from core.schema import CalculationMethod, TriangleSpec
from core.units import Unit


def _base_height(triangle_id, base, height):
    return TriangleSpec(
        id=triangle_id,
        method=CalculationMethod.BASE_HEIGHT,
        inputs={"base": base, "height": height},
    )


def test_summary_totals_and_extremes():
    specs = [
        _base_height(1, "10", "10"),  # 50
        _base_height(2, "4", "5"),  # 10
        _base_height(3, "20", "10"),  # 100
    ]
    results = evaluate_all(specs, Unit.FEET)
    summary = summarize(results, Unit.FEET)

    assert summary.total_area == pytest.approx(160.0)
    assert summary.total_area_in_meters == pytest.approx(160.0 * 0.3048 ** 2)
    assert summary.total_acres == pytest.approx(160.0 / 43560.0)
    assert summary.triangle_count == 3
    assert summary.valid_count == 3
    assert summary.all_valid
    assert summary.smallest.id == 2
    assert summary.largest.id == 3


def test_summary_skips_invalid_triangles():
    specs = [
        _base_height(1, "10", "10"),
        _base_height(2, "", "5"),
    ]
    summary = summarize(evaluate_all(specs, Unit.METERS), Unit.METERS)
    assert summary.total_area == pytest.approx(50.0)
    assert summary.valid_count == 1
    assert summary.triangle_count == 2
    assert not summary.all_valid
    assert summary.smallest.id == 1
    assert summary.largest.id == 1


def test_summary_of_nothing_valid():
    summary = summarize(evaluate_all([_base_height(1, "0", "0")], Unit.METERS), Unit.METERS)
    assert summary.total_area == 0
    assert summary.total_acres == 0
    assert summary.smallest is None
    assert summary.largest is None
    assert not summary.all_valid


def test_summary_of_empty_list():
    summary = summarize([], Unit.FEET)
    assert summary.triangle_count == 0
    assert not summary.all_valid


def test_ties_keep_first_triangle():
    specs = [_base_height(1, "2", "2"), _base_height(2, "2", "2")]
    summary = summarize(evaluate_all(specs, Unit.FEET), Unit.FEET)
    assert summary.smallest.id == 1
    assert summary.largest.id == 1


def test_summary_serializes_with_camel_case():
    summary = summarize(evaluate_all([_base_height(1, "2", "3")], Unit.METERS), Unit.METERS)
    payload = summary.model_dump(mode="json", by_alias=True)
    assert payload["totalArea"] == pytest.approx(3.0)
    assert payload["allValid"] is True
    assert payload["unit"] == "m"
    assert payload["largest"]["isValid"] is True
