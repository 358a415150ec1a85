"""
Keystone correction by inscribed-rectangle search.

A skewed projector throws a general quadrilateral onto the wall. Digital
keystone correction crops that down to the largest axis-aligned 16:9
rectangle that still fits inside it.

Search:
-------
The rectangle is centered at the vertex centroid of the quadrilateral and
grows with its half-height h (half-width w = h * 16/9). Feasibility is
monotone in h for convex footprints, so a fixed-step bisection on
h in [0, 5000] mm converges to within 5000 / 2^20 mm (about 0.005 mm).

A degenerate (zero-area) footprint converges to h = 0: the result is a
zero-size rectangle, which callers treat as "no usable correction".
"""

from typing import Sequence, Tuple

from ..geometry import Point2D, axis_aligned_rect, point_in_convex_polygon, vertex_centroid
from .params import PROJECTED_ASPECT


MAX_HALF_HEIGHT = 5000.0
SEARCH_ITERATIONS = 20

Quad = Tuple[Point2D, Point2D, Point2D, Point2D]


def rectangle_fits(rect: Sequence[Point2D], polygon: Sequence[Point2D]) -> bool:
    """True if every rectangle corner is inside or on the polygon."""
    return all(point_in_convex_polygon(p, polygon) for p in rect)


def find_inscribed_rectangle(
    polygon: Sequence[Point2D],
    aspect: float = PROJECTED_ASPECT,
    max_half_height: float = MAX_HALF_HEIGHT,
    iterations: int = SEARCH_ITERATIONS,
) -> Quad:
    """
    Largest centered axis-aligned rectangle of the given aspect inside polygon.

    Args:
        polygon: Wall footprint vertices (expected convex).
        aspect: Rectangle width / height.
        max_half_height: Upper bound for the half-height search (mm).
        iterations: Number of bisection steps.

    Returns:
        Rectangle corners in TL, TR, BR, BL order.
    """
    center = vertex_centroid(polygon)

    lo, hi = 0.0, max_half_height
    best = 0.0

    for _ in range(iterations):
        h = (lo + hi) / 2.0
        candidate = axis_aligned_rect(center, h * aspect, h)

        if rectangle_fits(candidate, polygon):
            best = h
            lo = h
        else:
            hi = h

    return axis_aligned_rect(center, best * aspect, best)
