"""
Ray casting from the projector onto the wall plane z = 0.

For each local sensor corner (u, v):

    d = forward + u * right + v * up        (unnormalized)
    P(t) = position + t * d

Setting P(t).z = 0 gives t = -position.z / d.z. A ray is rejected when it
is parallel to the wall (|d.z| < 1e-4), the hit lies behind the lens
(t < 0), or the lens sits on the wall plane (t == 0). NaN or infinite
inputs surface as a non-finite t or hit and are rejected too. A single
rejected corner invalidates the whole footprint.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from ..geometry import Point2D, Vector3
from .orientation import Orientation


PARALLEL_EPS = 1e-4


class InvalidReason(Enum):
    """Why a projection footprint could not be computed."""
    PARALLEL_RAY = "parallel_ray"            # A corner ray never reaches the wall
    BEHIND_PROJECTOR = "behind_projector"    # Wall hit lies behind the lens
    ON_WALL_PLANE = "on_wall_plane"          # Lens sits on the wall itself
    BAD_THROW_RATIO = "bad_throw_ratio"      # Throw ratio <= 0 or not finite
    NON_FINITE_INPUT = "non_finite_input"    # NaN or infinite position, aim or shift


@dataclass(frozen=True)
class WallHits:
    """
    Outcome of casting the four corner rays.

    Attributes:
        corners: Wall-plane hits in TL, TR, BR, BL order (None on failure).
        failure: Reason for failure, None on success.
        failed_index: Index of the first failing corner, None on success.
    """

    corners: Optional[Tuple[Point2D, Point2D, Point2D, Point2D]]
    failure: Optional[InvalidReason] = None
    failed_index: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def corner_rays(orientation: Orientation, local_corners: np.ndarray) -> np.ndarray:
    """
    Unnormalized ray directions for (N, 2) local sensor corners.

    Returns:
        np.ndarray: (N, 3) ray directions in room space.
    """
    local_corners = np.atleast_2d(local_corners)
    u = local_corners[:, 0:1]
    v = local_corners[:, 1:2]

    return (
        orientation.forward.to_array()
        + u * orientation.right.to_array()
        + v * orientation.up.to_array()
    )


def cast_to_wall(
    position: Vector3,
    orientation: Orientation,
    local_corners: np.ndarray,
) -> WallHits:
    """
    Intersect the corner rays with the wall plane.

    Args:
        position: Ray origin (projector lens) in mm.
        orientation: Projector basis.
        local_corners: (4, 2) sensor corners from sensor_corners().

    Returns:
        WallHits with the four wall corners, or the first failure.
    """
    directions = corner_rays(orientation, local_corners)
    origin = position.to_array()
    hits = []

    for i, direction in enumerate(directions):
        if abs(direction[2]) < PARALLEL_EPS:
            return WallHits(None, InvalidReason.PARALLEL_RAY, i)

        t = -origin[2] / direction[2]
        if not np.isfinite(t):
            return WallHits(None, InvalidReason.NON_FINITE_INPUT, i)
        if t < 0:
            return WallHits(None, InvalidReason.BEHIND_PROJECTOR, i)
        if t == 0:
            return WallHits(None, InvalidReason.ON_WALL_PLANE, i)

        hit = origin + t * direction
        if not np.all(np.isfinite(hit)):
            return WallHits(None, InvalidReason.NON_FINITE_INPUT, i)
        hits.append(Point2D(float(hit[0]), float(hit[1])))

    return WallHits(tuple(hits))
