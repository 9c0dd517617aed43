"""
Ear Clipping Triangulation

Decomposes a simple polygon into ``n - 2`` triangles. Vertices stay in a
fixed arena; ears are removed from a separate index list so no point is ever
moved while the list is being scanned.

Worst case is cubic in the vertex count, which is fine for hand-traced plot
boundaries of a few dozen points.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from loguru import logger

from core.geometry.contract import (
    EAR_CLIPPING_PASS_FACTOR,
    MIN_POLYGON_VERTICES,
    expected_triangle_count,
)
from core.geometry.primitives import is_point_in_triangle, polygon_signed_area, signed_area
from core.schema import Point

Triangle = tuple[Point, Point, Point]


@dataclass
class TriangulationReport:
    """Triangles plus the soft-failure signal for a triangulation run."""
    triangles: list[Triangle] = field(default_factory=list)
    vertex_count: int = 0

    @property
    def expected_count(self) -> int:
        return expected_triangle_count(self.vertex_count)

    @property
    def is_complete(self) -> bool:
        return self.vertex_count >= MIN_POLYGON_VERTICES and len(self.triangles) == self.expected_count


def _normalize_winding(polygon: Sequence[Point]) -> list[Point]:
    """Return the vertices ordered so convex corners have a non-negative signed area."""
    vertices = list(polygon)
    if polygon_signed_area(vertices) < 0:
        vertices.reverse()
    return vertices


def _is_ear(vertices: Sequence[Point], prev_i: int, curr_i: int, next_i: int) -> bool:
    p_prev, p_curr, p_next = vertices[prev_i], vertices[curr_i], vertices[next_i]
    # reflex corner
    if signed_area(p_prev, p_curr, p_next) < 0:
        return False
    for j, candidate in enumerate(vertices):
        if j in (prev_i, curr_i, next_i):
            continue
        if is_point_in_triangle(candidate, p_prev, p_curr, p_next):
            return False
    return True


def triangulate(polygon: Sequence[Point]) -> list[Triangle]:
    """
    Split a simple polygon into triangles by ear clipping.

    Args:
        polygon: Boundary vertices in order, without a closing duplicate.

    Returns:
        Triangles as vertex triples. Fewer than three input points yield an
        empty list. When no ear can be found (self-intersecting input) the
        run stops early, logs a warning and closes with one best-effort
        triangle from the first three remaining vertices, so the result holds
        fewer than ``n - 2`` triangles.
    """
    if len(polygon) < MIN_POLYGON_VERTICES:
        return []

    vertices = _normalize_winding(polygon)
    indices = list(range(len(vertices)))
    triangles: list[Triangle] = []

    max_passes = len(vertices) * EAR_CLIPPING_PASS_FACTOR
    passes = 0
    while len(indices) > 3 and passes < max_passes:
        ear_found = False
        count = len(indices)
        for i in range(count):
            prev_i = indices[(i + count - 1) % count]
            curr_i = indices[i]
            next_i = indices[(i + 1) % count]
            if _is_ear(vertices, prev_i, curr_i, next_i):
                triangles.append((vertices[prev_i], vertices[curr_i], vertices[next_i]))
                del indices[i]
                ear_found = True
                break

        if not ear_found:
            logger.warning(
                "Triangulation failed: no ear found with {remaining} of {total} vertices left. "
                "The polygon might be self-intersecting.",
                remaining=len(indices),
                total=len(vertices),
            )
            break
        passes += 1

    logger.debug(
        "Ear clipping finished after {passes} passes ({ears} ears)",
        passes=passes,
        ears=len(triangles),
    )

    triangles.append((vertices[indices[0]], vertices[indices[1]], vertices[indices[2]]))
    return triangles


def triangulate_with_report(polygon: Sequence[Point]) -> TriangulationReport:
    """Triangulate and report whether the decomposition is complete."""
    return TriangulationReport(triangles=triangulate(polygon), vertex_count=len(polygon))


__all__ = ["Triangle", "TriangulationReport", "triangulate", "triangulate_with_report"]
