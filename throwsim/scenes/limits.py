"""
Parameter ranges accepted by the editing surface.

clamp_state() pulls every field of a SimulationState into range. Room
dimensions are clamped first because screen and projector placement bounds
depend on them.
"""

from dataclasses import dataclass, replace
from typing import Tuple

from ..geometry import Vector3
from ..projection.params import LensShift, ManualAim, SimulationState


Range = Tuple[float, float]


@dataclass(frozen=True)
class ParameterLimits:
    """
    Inclusive (min, max) ranges for editable parameters.

    Ranges marked "room" are capped by the room dimension at clamp time.
    """

    room_width: Range = (2000.0, 10000.0)
    room_depth: Range = (2000.0, 10000.0)
    room_height: Range = (2000.0, 5000.0)
    screen_width: Range = (1000.0, 5000.0)
    throw_ratio: Range = (0.1, 3.0)
    lens_shift_horizontal: Range = (-50.0, 50.0)
    lens_shift_vertical: Range = (-100.0, 100.0)
    projector_min_distance: float = 500.0  # room: max is room depth
    yaw: Range = (-60.0, 60.0)
    pitch: Range = (-45.0, 45.0)


DEFAULT_LIMITS = ParameterLimits()


def clamp(value: float, bounds: Range) -> float:
    """Clamp value into the inclusive range bounds."""
    lo, hi = bounds
    return float(min(max(value, lo), hi))


def clamp_state(state: SimulationState, limits: ParameterLimits = DEFAULT_LIMITS) -> SimulationState:
    """
    Return a copy of state with every editable field in range.

    Args:
        state: Input state.
        limits: Ranges to apply.

    Returns:
        New SimulationState; the input is not modified.
    """
    room = replace(
        state.room,
        width=clamp(state.room.width, limits.room_width),
        height=clamp(state.room.height, limits.room_height),
        depth=clamp(state.room.depth, limits.room_depth),
    )

    screen = state.screen
    screen = replace(
        screen,
        width=clamp(screen.width, limits.screen_width),
        position=Vector3(
            clamp(screen.position.x, (0.0, room.width)),
            clamp(screen.position.y, (0.0, room.height)),
            screen.position.z,
        ),
    )

    projector = state.projector
    aim = projector.aim
    if isinstance(aim, ManualAim):
        aim = replace(
            aim,
            yaw=clamp(aim.yaw, limits.yaw),
            pitch=clamp(aim.pitch, limits.pitch),
        )

    projector = replace(
        projector,
        throw_ratio=clamp(projector.throw_ratio, limits.throw_ratio),
        lens_shift=LensShift(
            horizontal=clamp(projector.lens_shift.horizontal, limits.lens_shift_horizontal),
            vertical=clamp(projector.lens_shift.vertical, limits.lens_shift_vertical),
        ),
        position=Vector3(
            clamp(projector.position.x, (0.0, room.width)),
            clamp(projector.position.y, (0.0, room.height)),
            clamp(projector.position.z, (limits.projector_min_distance, room.depth)),
        ),
        aim=aim,
    )

    return SimulationState(room=room, screen=screen, projector=projector)
