"""
Projector-to-wall projection geometry.

This package computes where a projector's image lands on the wall plane
z = 0 and the keystone-corrected 16:9 rectangle inside that footprint.

Classes:
    ProjectorSpec, ScreenSpec, RoomSpec, SimulationState: Inputs.
    LensShift, LookAtScreen, ManualAim: Projector optics and aim.
    Orientation: Orthonormal projector basis.
    ProjectionResult: Solver output.
    ProjectionSolver: Logging facade over calculate_projection().
    InvalidReason: Why a footprint could not be computed.

Standalone Functions:
    calculate_projection: Full pipeline for a projector/screen pair.
    resolve_orientation: Aim -> basis + display yaw/pitch.
    sensor_corners: Local image corners at unit distance.
    cast_to_wall: Corner rays -> wall-plane hits.
    find_inscribed_rectangle: Largest centered 16:9 rectangle in a polygon.
    compute_efficiency: Corrected area as a percentage of raw area.

Example Usage:
    >>> from throwsim.projection import ProjectorSpec, ScreenSpec, calculate_projection
    >>> from throwsim.geometry import Vector3
    >>>
    >>> projector = ProjectorSpec(throw_ratio=1.2, position=Vector3(2500, 1500, 3000))
    >>> screen = ScreenSpec(width=2214, position=Vector3(2500, 1500, 0))
    >>> result = calculate_projection(projector, screen)
    >>> print(f"{result.efficiency:.1f}% of pixels kept")
"""

from .params import (
    PROJECTED_ASPECT,
    LensShift,
    LookAtScreen,
    ManualAim,
    Aim,
    ProjectorSpec,
    ScreenSpec,
    RoomSpec,
    SimulationState,
)
from .orientation import (
    Orientation,
    resolve_orientation,
    forward_from_angles,
    angles_from_forward,
)
from .sensor import sensor_corners, sensor_size
from .raycast import InvalidReason, WallHits, cast_to_wall
from .keystone import (
    MAX_HALF_HEIGHT,
    SEARCH_ITERATIONS,
    find_inscribed_rectangle,
    rectangle_fits,
)
from .solver import (
    ProjectionResult,
    ProjectionSolver,
    calculate_projection,
    compute_efficiency,
)

__all__ = [
    # Parameters
    "PROJECTED_ASPECT",
    "LensShift",
    "LookAtScreen",
    "ManualAim",
    "Aim",
    "ProjectorSpec",
    "ScreenSpec",
    "RoomSpec",
    "SimulationState",
    # Orientation
    "Orientation",
    "resolve_orientation",
    "forward_from_angles",
    "angles_from_forward",
    # Pipeline stages
    "sensor_corners",
    "sensor_size",
    "InvalidReason",
    "WallHits",
    "cast_to_wall",
    "MAX_HALF_HEIGHT",
    "SEARCH_ITERATIONS",
    "find_inscribed_rectangle",
    "rectangle_fits",
    # Solver
    "ProjectionResult",
    "ProjectionSolver",
    "calculate_projection",
    "compute_efficiency",
]
