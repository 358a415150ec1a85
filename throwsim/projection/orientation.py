"""
Projector Orientation Module.

Turns the projector aim (look-at target or yaw/pitch) into an orthonormal
basis (forward, right, up) plus display angles.

Mathematical Background:
========================

Manual aim (yaw theta, pitch phi, radians):

    forward = ( cos(phi) * sin(theta),
                sin(phi),
               -cos(phi) * cos(theta) )

so yaw = pitch = 0 looks straight at the wall along -Z.

Look-at aim:

    forward = normalize(target - position)
    pitch   = asin(forward.y)
    yaw     = atan2(forward.x, -forward.z)

Basis completion (both modes):

    right = normalize(forward x world_up)      world_up = (0, 1, 0)
    up    = normalize(right x forward)

When forward is (nearly) vertical, forward x world_up vanishes. If both the
x and z components of forward are below 1e-3 the basis falls back to
right = (1, 0, 0).
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..geometry import Vector3, WORLD_RIGHT, WORLD_UP, cross, dot, normalize
from .params import Aim, LookAtScreen, ManualAim


VERTICAL_EPS = 1e-3


@dataclass(frozen=True)
class Orientation:
    """
    Orthonormal projector basis.

    Attributes:
        forward: Optical axis direction.
        right: Image right direction.
        up: Image up direction.
    """

    forward: Vector3
    right: Vector3
    up: Vector3

    def as_matrix(self) -> np.ndarray:
        """
        Rotation matrix with rows (right, up, forward).

        Maps room-space directions into the projector's local frame.
        """
        return np.vstack([
            self.right.to_array(),
            self.up.to_array(),
            self.forward.to_array(),
        ])

    def is_orthonormal(self, tol: float = 1e-9) -> bool:
        """Check unit length and mutual perpendicularity within tol."""
        axes = (self.forward, self.right, self.up)
        if any(abs(a.norm() - 1.0) > tol for a in axes):
            return False
        return (
            abs(dot(self.forward, self.right)) <= tol
            and abs(dot(self.forward, self.up)) <= tol
            and abs(dot(self.right, self.up)) <= tol
        )


def forward_from_angles(yaw_deg: float, pitch_deg: float) -> Vector3:
    """Unit forward vector for the given yaw/pitch in degrees."""
    yaw = math.radians(yaw_deg)
    pitch = math.radians(pitch_deg)
    return Vector3(
        math.cos(pitch) * math.sin(yaw),
        math.sin(pitch),
        -math.cos(pitch) * math.cos(yaw),
    )


def angles_from_forward(forward: Vector3) -> Tuple[float, float]:
    """
    Display (yaw, pitch) in degrees for a forward vector.

    Args:
        forward: Unit forward direction.

    Returns:
        Tuple of (yaw_deg, pitch_deg).
    """
    pitch = math.asin(float(np.clip(forward.y, -1.0, 1.0)))
    yaw = math.atan2(forward.x, -forward.z)
    return math.degrees(yaw), math.degrees(pitch)


def complete_basis(forward: Vector3) -> Orientation:
    """Derive right/up from a forward direction using the global up axis."""
    if abs(forward.x) < VERTICAL_EPS and abs(forward.z) < VERTICAL_EPS:
        right = WORLD_RIGHT
    else:
        right = normalize(cross(forward, WORLD_UP))
    up = normalize(cross(right, forward))

    return Orientation(forward=forward, right=right, up=up)


def resolve_orientation(
    position: Vector3,
    aim: Aim,
    target: Vector3,
) -> Tuple[Orientation, float, float]:
    """
    Resolve the projector basis and display angles.

    Args:
        position: Projector lens position (mm).
        aim: LookAtScreen or ManualAim.
        target: Look-at target (screen center). Ignored for ManualAim.

    Returns:
        Tuple[Orientation, float, float]:
            - orientation: Orthonormal (forward, right, up) basis
            - yaw_deg: Display yaw in degrees
            - pitch_deg: Display pitch in degrees

    Note:
        Never raises. A projector placed exactly at the target yields a zero
        forward vector and the vertical fallback basis.

    Example:
        >>> basis, yaw, pitch = resolve_orientation(
        ...     Vector3(2500, 1500, 3000), LookAtScreen(), Vector3(2500, 1500, 0))
        >>> basis.forward
        Vector3(x=0.0, y=0.0, z=-1.0)
    """
    if isinstance(aim, LookAtScreen):
        forward = normalize(target - position)
        yaw_deg, pitch_deg = angles_from_forward(forward)
    elif isinstance(aim, ManualAim):
        forward = forward_from_angles(aim.yaw, aim.pitch)
        yaw_deg, pitch_deg = float(aim.yaw), float(aim.pitch)
    else:
        raise TypeError(f"Unsupported aim type: {type(aim).__name__}")

    return complete_basis(forward), yaw_deg, pitch_deg
