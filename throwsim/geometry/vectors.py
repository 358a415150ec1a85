"""
Vector Value Types Module.

Small immutable value types for the projection geometry: 3D vectors in room
space and 2D points on the wall plane.

Coordinate System:
==================

    Y (up)
    |
    |
    +------ X (along the wall, left to right)
   /
  Z (away from the wall, into the room)

The wall is the plane z = 0. Positions are in millimeters; direction
vectors are dimensionless and normalized when used as directions.

Arithmetic is delegated to numpy so the same helpers work for single
vectors and for (N, 3) batches:

    cross(a, b) = (a_y b_z - a_z b_y, a_z b_x - a_x b_z, a_x b_y - a_y b_x)
"""

from dataclasses import dataclass
from typing import Iterable, Tuple, Union

import numpy as np


@dataclass(frozen=True)
class Vector3:
    """
    Immutable 3D vector.

    Attributes:
        x: X component (mm for positions).
        y: Y component (mm for positions).
        z: Z component (mm for positions).

    Example:
        >>> v = Vector3(3.0, 0.0, 4.0)
        >>> v.norm()
        5.0
        >>> v.normalized()
        Vector3(x=0.6, y=0.0, z=0.8)
    """

    x: float
    y: float
    z: float

    @classmethod
    def from_array(cls, arr: Union[np.ndarray, Iterable[float]]) -> "Vector3":
        """Create a vector from any length-3 sequence or array."""
        arr = np.asarray(arr, dtype=np.float64).flatten()
        if arr.shape != (3,):
            raise ValueError(f"Expected 3 components, got shape {arr.shape}")
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def to_array(self) -> np.ndarray:
        """Return the vector as a float64 array of shape (3,)."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vector3":
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: "Vector3") -> float:
        return dot(self, other)

    def cross(self, other: "Vector3") -> "Vector3":
        return cross(self, other)

    def norm(self) -> float:
        """Euclidean length."""
        return float(np.linalg.norm(self.to_array()))

    def normalized(self) -> "Vector3":
        return normalize(self)

    def is_close(self, other: "Vector3", tol: float = 1e-9) -> bool:
        """
        Value equality within an absolute tolerance.

        Args:
            other: Vector to compare against.
            tol: Maximum allowed per-component difference.

        Returns:
            True if every component differs by at most tol.
        """
        return bool(np.allclose(self.to_array(), other.to_array(), rtol=0.0, atol=tol))


@dataclass(frozen=True)
class Point2D:
    """Immutable point on the wall plane (mm)."""

    x: float
    y: float

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def is_close(self, other: "Point2D", tol: float = 1e-9) -> bool:
        return abs(self.x - other.x) <= tol and abs(self.y - other.y) <= tol


ORIGIN = Vector3(0.0, 0.0, 0.0)
WORLD_UP = Vector3(0.0, 1.0, 0.0)
WORLD_RIGHT = Vector3(1.0, 0.0, 0.0)


def dot(a: Vector3, b: Vector3) -> float:
    """Dot product of two vectors."""
    return float(np.dot(a.to_array(), b.to_array()))


def cross(a: Vector3, b: Vector3) -> Vector3:
    """Right-handed cross product a x b."""
    return Vector3.from_array(np.cross(a.to_array(), b.to_array()))


def normalize(v: Vector3) -> Vector3:
    """
    Scale a vector to unit length.

    A zero-length vector is returned unchanged instead of producing NaNs.

    Args:
        v: Input vector.

    Returns:
        Unit vector in the direction of v, or v itself if it has zero length.
    """
    arr = v.to_array()
    length = np.linalg.norm(arr)
    if length == 0:
        return v
    return Vector3.from_array(arr / length)
