"""
Geometry primitives for wall projection.

Classes:
    Vector3: Immutable 3D vector (room space, mm).
    Point2D: Immutable point on the wall plane (mm).

Functions:
    dot, cross, normalize: Vector algebra.
    point_in_convex_polygon: Same-sign cross product containment test.
    shoelace_area: Unsigned polygon area.
    vertex_centroid: Mean of polygon vertices.
    axis_aligned_rect: TL, TR, BR, BL corners of a centered rectangle.
"""

from .vectors import (
    Vector3,
    Point2D,
    ORIGIN,
    WORLD_UP,
    WORLD_RIGHT,
    dot,
    cross,
    normalize,
)
from .polygon import (
    point_in_convex_polygon,
    shoelace_area,
    vertex_centroid,
    axis_aligned_rect,
    bounding_box,
    is_simple_polygon,
)

__all__ = [
    # Value types
    "Vector3",
    "Point2D",
    "ORIGIN",
    "WORLD_UP",
    "WORLD_RIGHT",
    # Vector algebra
    "dot",
    "cross",
    "normalize",
    # Polygons
    "point_in_convex_polygon",
    "shoelace_area",
    "vertex_centroid",
    "axis_aligned_rect",
    "bounding_box",
    "is_simple_polygon",
]
