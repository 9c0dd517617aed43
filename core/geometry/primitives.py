"""Planar geometry primitives shared by the calculator and the triangulator."""

from __future__ import annotations

import math
from typing import Sequence

from core.schema import Point


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.sqrt((p1.x - p2.x) ** 2 + (p1.y - p2.y) ** 2)


def signed_area(p1: Point, p2: Point, p3: Point) -> float:
    """Twice the signed area of the triangle (p1, p2, p3).

    Positive when the points turn counter-clockwise in a y-up frame, negative
    when they turn clockwise, zero when collinear.
    """
    return (p1.x - p3.x) * (p2.y - p3.y) - (p2.x - p3.x) * (p1.y - p3.y)


def is_point_in_triangle(pt: Point, v1: Point, v2: Point, v3: Point) -> bool:
    """Containment test; points on an edge count as inside."""
    d1 = signed_area(pt, v1, v2)
    d2 = signed_area(pt, v2, v3)
    d3 = signed_area(pt, v3, v1)
    has_neg = d1 < 0 or d2 < 0 or d3 < 0
    has_pos = d1 > 0 or d2 > 0 or d3 > 0
    return not (has_neg and has_pos)


def triangle_area(p1: Point, p2: Point, p3: Point) -> float:
    """Unsigned triangle area."""
    return abs(signed_area(p1, p2, p3)) / 2.0


def polygon_signed_area(points: Sequence[Point]) -> float:
    """Twice the signed polygon area (shoelace sum over consecutive pairs).

    Uses the same orientation convention as :func:`signed_area`.
    """
    total = 0.0
    count = len(points)
    for i in range(count):
        p1 = points[i]
        p2 = points[(i + 1) % count]
        total += p1.x * p2.y - p2.x * p1.y
    return total


def polygon_area(points: Sequence[Point]) -> float:
    """Unsigned polygon area from the shoelace formula."""
    return abs(polygon_signed_area(points)) / 2.0
