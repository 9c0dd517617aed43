from __future__ import annotations

"""
Geometry Contract

Single source of truth for numeric thresholds used by the area calculator and
the triangulator. All modules should import from here instead of hardcoding.
"""

# Shoelace areas at or below this are treated as collinear / degenerate
DEGENERACY_EPSILON = 1e-9

# Angles (degrees)
STRAIGHT_ANGLE_DEG = 180.0

# Ear clipping gives up after this many passes per input vertex
EAR_CLIPPING_PASS_FACTOR = 2

# Fewest vertices that still form a polygon
MIN_POLYGON_VERTICES = 3

# Default decimals for side lengths derived from a traced boundary
SIDE_DECIMALS = 2


def expected_triangle_count(vertex_count: int) -> int:
    """Triangles produced by a complete triangulation of a simple polygon."""
    return max(vertex_count - 2, 0)
