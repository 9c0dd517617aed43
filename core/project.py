"""
Project Editing and Persistence

The only sanctioned ways to change a triangle's inputs, plus loading and
writing the project JSON exchanged with the UI. Specs are immutable; every
edit returns a new object.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping

import pydantic
from loguru import logger

from core.calculations.aggregator import AreaSummary, summarize
from core.calculations.area_calculator import evaluate_all
from core.exceptions import ProjectImportError, ValidationError
from core.geometry.boundary import finalize_boundary
from core.geometry.contract import SIDE_DECIMALS
from core.schema import (
    METHOD_FIELDS,
    CalculationMethod,
    CalculationResult,
    ProjectData,
    ProjectDetails,
    TriangleSpec,
)
from core.settings import Settings, get_settings


def new_project(name: str = "", *, settings: Settings | None = None) -> ProjectData:
    """Empty project in the configured default unit."""
    settings = settings or get_settings()
    return ProjectData(
        project_details=ProjectDetails(name=name),
        unit=settings.calculation.default_unit,
    )


def new_triangle(triangle_id: int) -> TriangleSpec:
    """Blank SSS triangle, as added by the "add triangle" action."""
    return TriangleSpec(
        id=triangle_id,
        method=CalculationMethod.SSS,
        inputs={"a": "", "b": "", "c": ""},
    )


def next_triangle_id(specs: Iterable[TriangleSpec]) -> int:
    return max((spec.id for spec in specs), default=0) + 1


def update_triangle_input(spec: TriangleSpec, field: str, value: str | None) -> TriangleSpec:
    """Return ``spec`` with one input field replaced."""
    if field not in METHOD_FIELDS[spec.method]:
        raise ValidationError(
            f"Field '{field}' is not an input of method {spec.method.value}",
            {"field": field, "method": spec.method.value},
        )
    inputs = dict(spec.inputs)
    inputs[field] = value
    return TriangleSpec(id=spec.id, method=spec.method, inputs=inputs)


def change_triangle_method(spec: TriangleSpec, method: CalculationMethod) -> TriangleSpec:
    """Return ``spec`` switched to ``method`` with its inputs cleared."""
    return TriangleSpec(id=spec.id, method=CalculationMethod(method), inputs={})


def replace_triangle(specs: Iterable[TriangleSpec], updated: TriangleSpec) -> list[TriangleSpec]:
    return [updated if spec.id == updated.id else spec for spec in specs]


def remove_triangle(specs: Iterable[TriangleSpec], triangle_id: int) -> list[TriangleSpec]:
    return [spec for spec in specs if spec.id != triangle_id]


def load_project(payload: str | bytes | Mapping[str, Any]) -> ProjectData:
    """
    Parse an exported project.

    Raises:
        ProjectImportError: If the payload is not JSON or does not match the
            project shape (unknown unit or method, foreign input fields,
            non-string input values, duplicate ids).
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ProjectImportError(
                "Project file is not valid JSON. It may be corrupted.",
                {"line": exc.lineno, "column": exc.colno},
            ) from exc

    if not isinstance(payload, Mapping):
        raise ProjectImportError("Project file must contain a JSON object")

    try:
        project = ProjectData.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ProjectImportError(
            "Project file does not match the expected format",
            {"errors": [_format_error(err) for err in exc.errors()]},
        ) from exc

    logger.debug(
        "Loaded project '{name}' with {count} triangles",
        name=project.project_details.name,
        count=len(project.triangles),
    )
    return project


def _format_error(error: Mapping[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg', 'invalid')}"


def dump_project(project: ProjectData) -> str:
    """Serialize a project in the exported JSON shape."""
    return json.dumps(project.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False)


def project_results(project: ProjectData) -> list[CalculationResult]:
    return evaluate_all(project.triangles, project.unit)


def project_summary(project: ProjectData) -> AreaSummary:
    return summarize(project_results(project), project.unit)


def apply_boundary(project: ProjectData, *, decimals: int = SIDE_DECIMALS) -> ProjectData:
    """Replace a project's triangles with those derived from its traced boundary.

    The project's unit switches to the scale's unit.
    """
    specs, unit = finalize_boundary(
        project.boundary_points,
        project.scale,
        first_id=next_triangle_id(project.triangles),
        decimals=decimals,
    )
    return project.model_copy(update={"triangles": specs, "unit": unit})


__all__ = [
    "new_project",
    "new_triangle",
    "next_triangle_id",
    "update_triangle_input",
    "change_triangle_method",
    "replace_triangle",
    "remove_triangle",
    "load_project",
    "dump_project",
    "project_results",
    "project_summary",
    "apply_boundary",
]
