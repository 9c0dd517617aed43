"""Summaries over a list of evaluated triangles."""

from __future__ import annotations

from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from core.schema import CalculationResult
from core.units import Unit, area_to_acres


class AreaSummary(BaseModel):
    """Totals and extremes over the valid triangles of a project."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    unit: Unit
    total_area: float = Field(0.0, alias="totalArea")
    total_area_in_meters: float = Field(0.0, alias="totalAreaInMeters")
    total_acres: float = Field(0.0, alias="totalAcres")
    triangle_count: int = Field(0, alias="triangleCount")
    valid_count: int = Field(0, alias="validCount")
    all_valid: bool = Field(False, alias="allValid")
    smallest: Optional[CalculationResult] = None
    largest: Optional[CalculationResult] = None


def summarize(results: Sequence[CalculationResult], unit: Unit) -> AreaSummary:
    """
    Aggregate evaluated triangles.

    Only valid results contribute to the totals and to ``smallest``/``largest``;
    ties keep the earliest triangle.
    """
    unit = Unit(unit)
    valid = [result for result in results if result.is_valid]

    if not valid:
        return AreaSummary(
            unit=unit,
            triangle_count=len(results),
            valid_count=0,
            all_valid=False,
        )

    total_area = sum(result.area for result in valid)
    total_in_meters = sum(result.area_in_meters for result in valid)

    smallest = valid[0]
    largest = valid[0]
    for result in valid[1:]:
        if result.area < smallest.area:
            smallest = result
        if result.area > largest.area:
            largest = result

    return AreaSummary(
        unit=unit,
        total_area=total_area,
        total_area_in_meters=total_in_meters,
        total_acres=area_to_acres(total_area, unit),
        triangle_count=len(results),
        valid_count=len(valid),
        all_valid=len(valid) == len(results),
        smallest=smallest,
        largest=largest,
    )


__all__ = ["AreaSummary", "summarize"]
