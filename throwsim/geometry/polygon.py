"""
Planar Polygon Utilities.

Helpers for wall-plane polygons given as sequences of Point2D vertices.

Point Containment (convex polygons):
------------------------------------
For each edge (p1 -> p2) the signed cross product

    c = (p.x - p1.x) * (p2.y - p1.y) - (p.y - p1.y) * (p2.x - p1.x)

tells which side of the edge the point lies on. A point is inside a convex
polygon (or on its boundary) iff c is never strictly positive for one edge
and strictly negative for another. The test works for either winding.

Shoelace Area:
--------------
    A = |sum_i (x_i * y_{i+1} - x_{i+1} * y_i)| / 2
"""

from typing import List, Sequence, Tuple

import numpy as np

from .vectors import Point2D


def _as_array(vertices: Sequence[Point2D]) -> np.ndarray:
    return np.array([[p.x, p.y] for p in vertices], dtype=np.float64).reshape(-1, 2)


def edge_cross(p: Point2D, p1: Point2D, p2: Point2D) -> float:
    """Signed cross product of edge p1->p2 with point p."""
    return (p.x - p1.x) * (p2.y - p1.y) - (p.y - p1.y) * (p2.x - p1.x)


def point_in_convex_polygon(point: Point2D, vertices: Sequence[Point2D]) -> bool:
    """
    Test whether a point lies inside or on the boundary of a convex polygon.

    Args:
        point: Query point.
        vertices: Polygon vertices in order (either winding).

    Returns:
        True if the point is inside or on an edge.
    """
    positive = False
    negative = False
    n = len(vertices)

    for i in range(n):
        c = edge_cross(point, vertices[i], vertices[(i + 1) % n])
        if c > 0:
            positive = True
        if c < 0:
            negative = True
        if positive and negative:
            return False

    return True


def shoelace_area(vertices: Sequence[Point2D]) -> float:
    """
    Unsigned polygon area via the shoelace formula.

    Args:
        vertices: Polygon vertices in order.

    Returns:
        Area in squared input units (0 for fewer than 3 vertices).
    """
    if len(vertices) < 3:
        return 0.0

    pts = _as_array(vertices)
    x, y = pts[:, 0], pts[:, 1]
    x_next, y_next = np.roll(x, -1), np.roll(y, -1)

    return float(abs(np.sum(x * y_next - x_next * y)) / 2.0)


def vertex_centroid(vertices: Sequence[Point2D]) -> Point2D:
    """Arithmetic mean of the vertices (not the area centroid)."""
    mean = _as_array(vertices).mean(axis=0)
    return Point2D(float(mean[0]), float(mean[1]))


def axis_aligned_rect(center: Point2D, half_width: float, half_height: float) -> Tuple[Point2D, Point2D, Point2D, Point2D]:
    """
    Corners of an axis-aligned rectangle in TL, TR, BR, BL order.

    The wall's y axis points up, so "top" has the larger y.
    """
    return (
        Point2D(center.x - half_width, center.y + half_height),
        Point2D(center.x + half_width, center.y + half_height),
        Point2D(center.x + half_width, center.y - half_height),
        Point2D(center.x - half_width, center.y - half_height),
    )


def bounding_box(vertices: Sequence[Point2D]) -> Tuple[float, float, float, float]:
    """Return (min_x, min_y, max_x, max_y)."""
    pts = _as_array(vertices)
    min_xy = pts.min(axis=0)
    max_xy = pts.max(axis=0)
    return float(min_xy[0]), float(min_xy[1]), float(max_xy[0]), float(max_xy[1])


def _segments_intersect(a1: Point2D, a2: Point2D, b1: Point2D, b2: Point2D) -> bool:
    d1 = edge_cross(b1, a1, a2)
    d2 = edge_cross(b2, a1, a2)
    d3 = edge_cross(a1, b1, b2)
    d4 = edge_cross(a2, b1, b2)
    return (d1 * d2 < 0) and (d3 * d4 < 0)


def is_simple_polygon(vertices: Sequence[Point2D]) -> bool:
    """
    Check that no two non-adjacent edges cross.

    Only proper crossings are detected; touching endpoints are tolerated.
    """
    n = len(vertices)
    edges: List[Tuple[Point2D, Point2D]] = [
        (vertices[i], vertices[(i + 1) % n]) for i in range(n)
    ]

    for i in range(n):
        for j in range(i + 1, n):
            # Adjacent edges share a vertex
            if j == i + 1 or (i == 0 and j == n - 1):
                continue
            if _segments_intersect(*edges[i], *edges[j]):
                return False

    return True
