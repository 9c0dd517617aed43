"""
Area Calculator

Evaluates a single triangle specification in the active unit. Incomplete or
impossible input is an ordinary state while the user is typing, so it is
reported through ``is_valid`` rather than raised.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from core.calculations.methods import parse_inputs
from core.schema import CalculationResult, TriangleSpec
from core.units import Unit


def evaluate(spec: TriangleSpec, unit: Unit, index: int) -> CalculationResult:
    """
    Compute the area of one triangle.

    Args:
        spec: Triangle method and its raw input strings.
        unit: Unit the lengths in ``spec`` are expressed in.
        index: Ordinal position of the triangle in its list.

    Returns:
        CalculationResult with ``area`` in square ``unit`` and ``area_in_meters``
        in square meters; both are 0 when the inputs are invalid.
    """
    factor = Unit(unit).factor
    inputs = parse_inputs(spec)

    area = 0.0
    area_in_meters = 0.0
    is_valid = inputs.is_valid()
    if is_valid:
        area = inputs.area()
        area_in_meters = inputs.area_in_meters(factor)

    return CalculationResult(
        id=spec.id,
        index=index,
        method=spec.method,
        inputs=dict(spec.inputs),
        area=area,
        is_valid=is_valid,
        area_in_meters=area_in_meters,
    )


def evaluate_all(specs: Iterable[TriangleSpec], unit: Unit) -> list[CalculationResult]:
    """Evaluate triangles in order, numbering them by position."""
    return [evaluate(spec, unit, index) for index, spec in enumerate(specs)]


def all_valid(results: Sequence[CalculationResult]) -> bool:
    """True when there is at least one result and every result is valid."""
    if not results:
        return False
    return all(result.is_valid for result in results)


__all__ = ["evaluate", "evaluate_all", "all_valid"]
