"""Calculation, triangulation and project endpoints."""

from __future__ import annotations

from fastapi import APIRouter
from loguru import logger

from core.calculations.aggregator import summarize
from core.calculations.area_calculator import evaluate_all
from core.calculations.methods import FORMULA_DETAILS
from core.geometry.boundary import finalize_boundary, inspect_boundary
from core.geometry.triangulation import triangulate_with_report
from core.schema import METHOD_FIELDS, CalculationMethod, ProjectData
from core.settings import get_settings
from core.units import area_to_acres, convert_area
from services.api.schemas import (
    BoundaryDiagnosticsOut,
    ConvertRequest,
    ConvertResponse,
    EvaluateRequest,
    EvaluateResponse,
    FinalizeRequest,
    FinalizeResponse,
    MethodOut,
    TriangulateRequest,
    TriangulateResponse,
)


router = APIRouter(prefix="/v1", tags=["plot-area"])


@router.get("/methods", response_model=list[MethodOut])
async def list_methods() -> list[MethodOut]:
    """Supported triangle specification methods."""
    return [
        MethodOut(
            method=method,
            name=FORMULA_DETAILS[method]["name"],
            formula=FORMULA_DETAILS[method]["formula"],
            fields=list(METHOD_FIELDS[method]),
        )
        for method in CalculationMethod
    ]


@router.post("/triangles/evaluate", response_model=EvaluateResponse)
async def evaluate_triangles(payload: EvaluateRequest) -> EvaluateResponse:
    """Evaluate triangles in the given unit and summarize them."""
    results = evaluate_all(payload.triangles, payload.unit)
    return EvaluateResponse(results=results, summary=summarize(results, payload.unit))


@router.post("/polygons/triangulate", response_model=TriangulateResponse)
async def triangulate_polygon(payload: TriangulateRequest) -> TriangulateResponse:
    """Ear-clip a boundary polygon."""
    diagnostics = inspect_boundary(payload.points)
    report = triangulate_with_report(payload.points)
    if not report.is_complete and report.vertex_count >= 3:
        logger.warning(
            "Incomplete triangulation: {produced}/{expected} triangles ({reason})",
            produced=len(report.triangles),
            expected=report.expected_count,
            reason=diagnostics.reason,
        )
    return TriangulateResponse(
        triangles=[list(triangle) for triangle in report.triangles],
        vertex_count=report.vertex_count,
        expected_count=report.expected_count,
        is_complete=report.is_complete,
        diagnostics=BoundaryDiagnosticsOut(
            vertex_count=diagnostics.vertex_count,
            is_simple=diagnostics.is_simple,
            reason=diagnostics.reason,
            area=diagnostics.area,
        ),
    )


@router.post("/boundaries/finalize", response_model=FinalizeResponse)
async def finalize(payload: FinalizeRequest) -> FinalizeResponse:
    """Turn a traced boundary and its scale into SSS triangles."""
    decimals = payload.decimals
    if decimals is None:
        decimals = get_settings().calculation.side_decimals
    specs, unit = finalize_boundary(
        payload.boundary_points,
        payload.scale,
        first_id=payload.first_id,
        decimals=decimals,
    )
    results = evaluate_all(specs, unit)
    return FinalizeResponse(
        unit=unit,
        triangles=specs,
        results=results,
        summary=summarize(results, unit),
        is_complete=len(specs) == len(payload.boundary_points) - 2,
    )


@router.post("/units/convert", response_model=ConvertResponse)
async def convert(payload: ConvertRequest) -> ConvertResponse:
    """Convert an area between square units."""
    area = convert_area(payload.area, payload.from_unit, payload.to_unit)
    return ConvertResponse(area=area, unit=payload.to_unit, acres=area_to_acres(area, payload.to_unit))


@router.post("/projects/summary", response_model=EvaluateResponse)
async def project_summary(project: ProjectData) -> EvaluateResponse:
    """Evaluate an exported project in its own unit."""
    results = evaluate_all(project.triangles, project.unit)
    return EvaluateResponse(results=results, summary=summarize(results, project.unit))
