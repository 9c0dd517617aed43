from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from core.calculations.aggregator import AreaSummary
from core.schema import CalculationMethod, CalculationResult, Point, ScaleReference, TriangleSpec
from core.units import Unit


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class MethodOut(_CamelModel):
    method: CalculationMethod
    name: str
    formula: str
    fields: list[str]


class EvaluateRequest(_CamelModel):
    unit: Unit
    triangles: list[TriangleSpec] = Field(default_factory=list)


class EvaluateResponse(_CamelModel):
    results: list[CalculationResult]
    summary: AreaSummary


class TriangulateRequest(_CamelModel):
    points: list[Point]


class BoundaryDiagnosticsOut(_CamelModel):
    vertex_count: int = Field(..., alias="vertexCount")
    is_simple: bool = Field(..., alias="isSimple")
    reason: str
    area: float


class TriangulateResponse(_CamelModel):
    triangles: list[list[Point]]
    vertex_count: int = Field(..., alias="vertexCount")
    expected_count: int = Field(..., alias="expectedCount")
    is_complete: bool = Field(..., alias="isComplete")
    diagnostics: BoundaryDiagnosticsOut


class FinalizeRequest(_CamelModel):
    boundary_points: list[Point] = Field(..., alias="boundaryPoints")
    scale: Optional[ScaleReference] = None
    first_id: int = Field(1, alias="firstId")
    decimals: Optional[int] = Field(None, ge=0, le=10)


class FinalizeResponse(_CamelModel):
    unit: Unit
    triangles: list[TriangleSpec]
    results: list[CalculationResult]
    summary: AreaSummary
    is_complete: bool = Field(..., alias="isComplete")


class ConvertRequest(_CamelModel):
    area: float
    from_unit: Unit = Field(..., alias="fromUnit")
    to_unit: Unit = Field(..., alias="toUnit")


class ConvertResponse(_CamelModel):
    area: float
    unit: Unit
    acres: float
