"""
Traced Boundary Handling

Turns boundary points captured on an image into SSS triangle specs using a
pixel-to-real scale, and reports polygon validity through shapely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from loguru import logger
from shapely.geometry import Polygon
from shapely.validation import explain_validity

from core.exceptions import BoundaryError, ScaleError
from core.geometry.contract import MIN_POLYGON_VERTICES, SIDE_DECIMALS
from core.geometry.primitives import distance, polygon_area
from core.geometry.triangulation import Triangle, triangulate
from core.schema import CalculationMethod, Point, ScaleReference, TriangleSpec
from core.units import Unit


@dataclass
class BoundaryDiagnostics:
    """Shape checks for a traced boundary; informational only."""
    vertex_count: int
    is_simple: bool
    reason: str
    area: float


def inspect_boundary(points: Sequence[Point]) -> BoundaryDiagnostics:
    """Check whether the traced boundary is a simple polygon."""
    if len(points) < MIN_POLYGON_VERTICES:
        return BoundaryDiagnostics(
            vertex_count=len(points),
            is_simple=False,
            reason=f"Too few points: {len(points)} < {MIN_POLYGON_VERTICES}",
            area=0.0,
        )

    polygon = Polygon([(p.x, p.y) for p in points])
    is_simple = bool(polygon.is_valid) and not polygon.is_empty
    return BoundaryDiagnostics(
        vertex_count=len(points),
        is_simple=is_simple,
        reason=explain_validity(polygon),
        area=polygon_area(points),
    )


def scale_from_points(p1: Point, p2: Point, real_length: float, unit: Unit) -> ScaleReference:
    """Build a scale from two clicked pixel points and the real distance between them."""
    pixel_length = distance(p1, p2)
    scale = ScaleReference(pixel_length=pixel_length, real_length=real_length, unit=Unit(unit))
    return scale.ensure_usable()


def triangle_to_sides(triangle: Triangle, factor: float) -> tuple[float, float, float]:
    """Real-world side lengths (a, b, c) opposite p1, p2 and p3."""
    p1, p2, p3 = triangle
    return (
        distance(p2, p3) * factor,
        distance(p1, p3) * factor,
        distance(p1, p2) * factor,
    )


def triangles_to_specs(
    triangles: Sequence[Triangle],
    factor: float,
    *,
    first_id: int,
    decimals: int = SIDE_DECIMALS,
) -> list[TriangleSpec]:
    """Convert geometric triangles into SSS specs with fixed-decimal side strings."""
    specs: list[TriangleSpec] = []
    for offset, triangle in enumerate(triangles):
        a, b, c = triangle_to_sides(triangle, factor)
        specs.append(
            TriangleSpec(
                id=first_id + offset,
                method=CalculationMethod.SSS,
                inputs={
                    "a": f"{a:.{decimals}f}",
                    "b": f"{b:.{decimals}f}",
                    "c": f"{c:.{decimals}f}",
                },
            )
        )
    return specs


def finalize_boundary(
    points: Sequence[Point],
    scale: ScaleReference | None,
    *,
    first_id: int = 1,
    decimals: int = SIDE_DECIMALS,
) -> tuple[list[TriangleSpec], Unit]:
    """
    Triangulate a traced boundary and express it as SSS triangles.

    Args:
        points: Boundary in image-pixel coordinates.
        scale: Pixel to real-length calibration.
        first_id: Id given to the first generated triangle; the rest follow.
        decimals: Decimals kept in the side strings.

    Returns:
        The generated specs and the unit they are expressed in (the scale's).

    Raises:
        ScaleError: If no usable scale is supplied.
        BoundaryError: If fewer than three points were traced.
    """
    if scale is None:
        raise ScaleError("A scale must be set before finalizing the boundary")
    if len(points) < MIN_POLYGON_VERTICES:
        raise BoundaryError(
            f"A boundary needs at least {MIN_POLYGON_VERTICES} points",
            {"point_count": len(points)},
        )

    factor = scale.conversion_factor
    triangles = triangulate(points)
    if len(triangles) < len(points) - 2:
        logger.warning(
            "Boundary with {count} points produced only {produced} triangles",
            count=len(points),
            produced=len(triangles),
        )

    specs = triangles_to_specs(triangles, factor, first_id=first_id, decimals=decimals)
    logger.info(
        "Finalized boundary into {count} triangles ({unit})",
        count=len(specs),
        unit=scale.unit.value,
    )
    return specs, scale.unit


__all__ = [
    "BoundaryDiagnostics",
    "inspect_boundary",
    "scale_from_points",
    "triangle_to_sides",
    "triangles_to_specs",
    "finalize_boundary",
]
