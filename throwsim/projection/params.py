"""
Projector, Screen and Room Parameter Types.

All parameter types are frozen dataclasses. Derived quantities (orientation
basis, screen height, corners) are computed on demand and never stored.

Aim:
====
How the projector is pointed is a tagged variant rather than a boolean flag
plus angles that may or may not be used:

    LookAtScreen()              forward points at the screen center
    ManualAim(yaw, pitch, roll) forward from explicit angles (degrees)

Yaw 0 faces the wall (-Z), positive yaw turns toward +X. Pitch 0 is level,
positive pitch tilts up. Roll is carried for completeness but not applied.

Units:
======
    Lengths / positions:  millimeters
    Angles:               degrees
    Lens shift:           percent of sensor width (H) / height (V)
    Throw ratio:          throw distance / image width (dimensionless)
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from ..geometry import Point2D, Vector3, axis_aligned_rect


PROJECTED_ASPECT = 16.0 / 9.0


@dataclass(frozen=True)
class LensShift:
    """Lens shift as a percentage of sensor width/height."""

    horizontal: float = 0.0
    vertical: float = 0.0


@dataclass(frozen=True)
class LookAtScreen:
    """Aim the projector at the screen center."""


@dataclass(frozen=True)
class ManualAim:
    """Aim the projector with explicit angles in degrees."""

    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0


Aim = Union[LookAtScreen, ManualAim]


@dataclass(frozen=True)
class ProjectorSpec:
    """
    Projector optics and placement.

    Attributes:
        throw_ratio: Throw distance divided by image width (> 0).
        position: Lens position in room space (mm).
        lens_shift: Optical lens shift (percent).
        aim: LookAtScreen or ManualAim.
        auto_keystone: Whether to compute the corrected 16:9 rectangle.
        brightness: Optional lumens rating. Informational only.

    Example:
        >>> proj = ProjectorSpec(
        ...     throw_ratio=1.2,
        ...     position=Vector3(2500, 1500, 3000),
        ...     aim=ManualAim(yaw=10, pitch=-5),
        ... )
        >>> proj.look_at_screen_center
        False
    """

    throw_ratio: float
    position: Vector3
    lens_shift: LensShift = field(default_factory=LensShift)
    aim: Aim = field(default_factory=LookAtScreen)
    auto_keystone: bool = True
    brightness: Optional[float] = None

    @property
    def look_at_screen_center(self) -> bool:
        return isinstance(self.aim, LookAtScreen)

    @property
    def rotation(self) -> Tuple[float, float, float]:
        """Manual (yaw, pitch, roll) in degrees, zeros in look-at mode."""
        if isinstance(self.aim, ManualAim):
            return (self.aim.yaw, self.aim.pitch, self.aim.roll)
        return (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class ScreenSpec:
    """
    Wall-mounted screen.

    Attributes:
        width: Screen width (mm).
        position: Screen center; the wall plane is z = 0.
        aspect_ratio: Width divided by height.
    """

    width: float
    position: Vector3
    aspect_ratio: float = PROJECTED_ASPECT

    @property
    def height(self) -> float:
        return self.width / self.aspect_ratio

    @property
    def center(self) -> Point2D:
        return Point2D(self.position.x, self.position.y)

    def corners(self) -> Tuple[Point2D, Point2D, Point2D, Point2D]:
        """Screen corners on the wall in TL, TR, BR, BL order."""
        return axis_aligned_rect(self.center, self.width / 2.0, self.height / 2.0)


@dataclass(frozen=True)
class RoomSpec:
    """Room dimensions (mm). The screen wall spans width x height."""

    width: float
    height: float
    depth: float


@dataclass(frozen=True)
class SimulationState:
    """Complete simulation input: room, screen and projector."""

    room: RoomSpec
    screen: ScreenSpec
    projector: ProjectorSpec
