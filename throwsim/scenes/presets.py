"""Built-in scene presets."""

from typing import Dict, List

from ..geometry import Vector3
from ..projection.params import (
    LensShift,
    LookAtScreen,
    ProjectorSpec,
    RoomSpec,
    ScreenSpec,
    SimulationState,
)


# Living room, projector straight in front of the screen
DEFAULT_STATE = SimulationState(
    room=RoomSpec(width=5000.0, height=3000.0, depth=4000.0),
    screen=ScreenSpec(
        width=2214.0,  # 100" 16:9
        position=Vector3(2500.0, 1500.0, 0.0),
    ),
    projector=ProjectorSpec(
        throw_ratio=1.2,
        position=Vector3(2500.0, 1500.0, 3000.0),
        aim=LookAtScreen(),
        auto_keystone=True,
    ),
)

# Bedside table, off to the right and low
BEDROOM_SIDE = SimulationState(
    room=RoomSpec(width=3500.0, height=2600.0, depth=3500.0),
    screen=ScreenSpec(width=2000.0, position=Vector3(1750.0, 1500.0, 0.0)),
    projector=ProjectorSpec(
        throw_ratio=1.2,
        position=Vector3(3000.0, 600.0, 3000.0),
        aim=LookAtScreen(),
        auto_keystone=True,
    ),
)

# Ceiling mount with the lens shifted down
MEETING_CEILING = SimulationState(
    room=RoomSpec(width=6000.0, height=3000.0, depth=8000.0),
    screen=ScreenSpec(width=3000.0, position=Vector3(3000.0, 1800.0, 0.0)),
    projector=ProjectorSpec(
        throw_ratio=1.5,
        lens_shift=LensShift(horizontal=0.0, vertical=-50.0),
        position=Vector3(3000.0, 2900.0, 4500.0),
        aim=LookAtScreen(),
        auto_keystone=True,
    ),
)

PRESETS: Dict[str, SimulationState] = {
    "default": DEFAULT_STATE,
    "bedroom_side": BEDROOM_SIDE,
    "meeting_ceiling": MEETING_CEILING,
}


def list_presets() -> List[str]:
    """Names of the built-in presets."""
    return list(PRESETS)


def get_preset(name: str) -> SimulationState:
    """
    Look up a preset by name.

    Raises:
        KeyError: If no preset has that name.
    """
    if name not in PRESETS:
        raise KeyError(
            f"Unknown preset '{name}'. Available: {', '.join(PRESETS)}"
        )
    return PRESETS[name]
