"""CLI for plot area calculations."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Sequence

import pydantic
from loguru import logger

from core.exceptions import PlotAreaError, ProjectImportError
from core.geometry.boundary import inspect_boundary, triangles_to_specs
from core.geometry.triangulation import triangulate_with_report
from core.logging_config import setup_logging
from core.project import dump_project, load_project, new_project, project_results, project_summary
from core.schema import Point, ScaleReference
from core.settings import get_settings
from core.units import Unit


def _point_dict(point: Point) -> dict[str, float]:
    return {"x": point.x, "y": point.y}


def _read_points(path: Path) -> list[Point]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ProjectImportError(f"{path} is not valid JSON", {"path": str(path)}) from exc
    if isinstance(raw, dict):
        raw = raw.get("boundaryPoints", raw.get("points", []))
    if not isinstance(raw, list):
        raise ProjectImportError(f"{path} must hold a list of points", {"path": str(path)})
    try:
        return [Point.model_validate(item) for item in raw]
    except pydantic.ValidationError as exc:
        raise ProjectImportError(f"{path} contains malformed points: {exc}", {"path": str(path)}) from exc


def cmd_new(args: argparse.Namespace) -> dict[str, Any]:
    return json.loads(dump_project(new_project(args.name)))


def cmd_summary(args: argparse.Namespace) -> dict[str, Any]:
    project = load_project(args.project.read_text(encoding="utf-8"))
    results = project_results(project)
    summary = project_summary(project)
    if not summary.all_valid:
        logger.warning(
            "{invalid} of {total} triangles are invalid",
            invalid=summary.triangle_count - summary.valid_count,
            total=summary.triangle_count,
        )
    return {
        "results": [result.model_dump(mode="json", by_alias=True) for result in results],
        "summary": summary.model_dump(mode="json", by_alias=True),
    }


def cmd_triangulate(args: argparse.Namespace) -> dict[str, Any]:
    points = _read_points(args.points)
    diagnostics = inspect_boundary(points)
    if not diagnostics.is_simple:
        logger.warning("Boundary is not a simple polygon: {reason}", reason=diagnostics.reason)

    report = triangulate_with_report(points)
    output: dict[str, Any] = {
        "triangles": [[_point_dict(p) for p in triangle] for triangle in report.triangles],
        "expectedCount": report.expected_count,
        "isComplete": report.is_complete,
        "boundaryArea": diagnostics.area,
    }

    if args.scale_pixels is not None and args.scale_real is not None:
        scale = ScaleReference(pixel_length=args.scale_pixels, real_length=args.scale_real, unit=args.unit)
        decimals = args.decimals
        if decimals is None:
            decimals = get_settings().calculation.side_decimals
        specs = triangles_to_specs(report.triangles, scale.conversion_factor, first_id=1, decimals=decimals)
        output["unit"] = scale.unit.value
        output["specs"] = [spec.model_dump(mode="json") for spec in specs]
    return output


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="plotarea", description="Compute land plot areas from triangles or traced boundaries")
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    new = subparsers.add_parser("new", help="Print an empty project in the configured default unit")
    new.add_argument("--name", default="", help="Project name")
    new.set_defaults(handler=cmd_new)

    summary = subparsers.add_parser("summary", help="Evaluate every triangle of a project file")
    summary.add_argument("project", type=Path, help="Exported project JSON")
    summary.set_defaults(handler=cmd_summary)

    tri = subparsers.add_parser("triangulate", help="Ear-clip a boundary polygon")
    tri.add_argument("points", type=Path, help="JSON list of {x, y} points (or a project file)")
    tri.add_argument("--scale-pixels", type=float, help="Pixel length of the reference line")
    tri.add_argument("--scale-real", type=float, help="Real length of the reference line")
    tri.add_argument("--unit", type=Unit, choices=list(Unit), default=Unit.FEET, help="Unit of --scale-real")
    tri.add_argument("--decimals", type=int, help="Decimals kept in side lengths (default: calculation.side_decimals)")
    tri.set_defaults(handler=cmd_triangulate)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level=args.log_level.upper())

    try:
        output = args.handler(args)
    except PlotAreaError as exc:
        logger.error("{message} {details}", message=exc.message, details=exc.details)
        return 1

    json.dump(output, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
