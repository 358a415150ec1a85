"""
Scene file loading and saving.

Scene files are YAML documents with room / screen / projector sections:

    preset: meeting_ceiling        # optional starting point
    room:
      dimensions: {width: 6000, height: 3000, depth: 8000}
    screen:
      width: 3000
      aspect_ratio: 1.7778
      position: {x: 3000, y: 1800, z: 0}
    projector:
      throw_ratio: 1.5
      lens_shift: {horizontal: 0, vertical: -50}
      position: {x: 3000, y: 2900, z: 4500}
      rotation: {yaw: 0, pitch: 0, roll: 0}
      auto_keystone: true
      look_at_screen_center: true

Every field is optional; missing values come from the preset (or the
default scene). Rotation is only used when look_at_screen_center is false.
"""

import math
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..geometry import Vector3
from ..projection.params import (
    LensShift,
    LookAtScreen,
    ManualAim,
    ProjectorSpec,
    RoomSpec,
    ScreenSpec,
    SimulationState,
)
from ..utils.config_loader import ConfigLoader
from ..utils.logger import get_logger
from .presets import DEFAULT_STATE, get_preset


logger = get_logger("throwsim.scenes")


def _vector_to_dict(v: Vector3) -> Dict[str, float]:
    return {"x": v.x, "y": v.y, "z": v.z}


def state_to_dict(state: SimulationState) -> Dict[str, Any]:
    """
    Serialize a SimulationState to plain dicts/floats/bools.

    Args:
        state: State to serialize.

    Returns:
        Nested dictionary in scene-file layout.
    """
    projector = state.projector
    yaw, pitch, roll = projector.rotation

    projector_dict: Dict[str, Any] = {
        "throw_ratio": projector.throw_ratio,
        "lens_shift": {
            "horizontal": projector.lens_shift.horizontal,
            "vertical": projector.lens_shift.vertical,
        },
        "position": _vector_to_dict(projector.position),
        "rotation": {"yaw": yaw, "pitch": pitch, "roll": roll},
        "auto_keystone": projector.auto_keystone,
        "look_at_screen_center": projector.look_at_screen_center,
    }
    if projector.brightness is not None:
        projector_dict["brightness"] = projector.brightness

    return {
        "room": {
            "dimensions": {
                "width": state.room.width,
                "height": state.room.height,
                "depth": state.room.depth,
            },
        },
        "screen": {
            "width": state.screen.width,
            "aspect_ratio": state.screen.aspect_ratio,
            "position": _vector_to_dict(state.screen.position),
        },
        "projector": projector_dict,
    }


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Scene section '{key}' must be a mapping, got {type(value).__name__}")
    return value


def _number(section: Dict[str, Any], key: str, path: str) -> float:
    value = section.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Scene field '{path}.{key}' must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"Scene field '{path}.{key}' must be finite, got {value!r}")
    return float(value)


def _flag(section: Dict[str, Any], key: str, path: str) -> bool:
    value = section.get(key)
    if not isinstance(value, bool):
        raise ValueError(f"Scene field '{path}.{key}' must be true or false, got {value!r}")
    return value


def _vector(section: Dict[str, Any], key: str, path: str) -> Vector3:
    sub = _section(section, key)
    return Vector3(
        _number(sub, "x", f"{path}.{key}"),
        _number(sub, "y", f"{path}.{key}"),
        _number(sub, "z", f"{path}.{key}"),
    )


def state_from_dict(
    data: Dict[str, Any],
    base: Optional[SimulationState] = None,
) -> SimulationState:
    """
    Build a SimulationState from scene-file data.

    Args:
        data: Nested scene dictionary. May name a 'preset' to start from.
        base: Starting state when data names no preset (default scene if None).

    Returns:
        SimulationState.

    Raises:
        KeyError: If data names an unknown preset.
        ValueError: If a field has the wrong type.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Scene data must be a mapping, got {type(data).__name__}")

    if "preset" in data:
        base = get_preset(data["preset"])
    elif base is None:
        base = DEFAULT_STATE

    merged = ConfigLoader().merge(state_to_dict(base), {
        k: v for k, v in data.items() if k != "preset"
    })

    room = _section(_section(merged, "room"), "dimensions")
    screen = _section(merged, "screen")
    projector = _section(merged, "projector")
    rotation = _section(projector, "rotation")
    shift = _section(projector, "lens_shift")

    if _flag(projector, "look_at_screen_center", "projector"):
        aim = LookAtScreen()
    else:
        aim = ManualAim(
            yaw=_number(rotation, "yaw", "projector.rotation"),
            pitch=_number(rotation, "pitch", "projector.rotation"),
            roll=_number(rotation, "roll", "projector.rotation"),
        )

    brightness = projector.get("brightness")
    if brightness is not None:
        brightness = _number(projector, "brightness", "projector")

    return SimulationState(
        room=RoomSpec(
            width=_number(room, "width", "room.dimensions"),
            height=_number(room, "height", "room.dimensions"),
            depth=_number(room, "depth", "room.dimensions"),
        ),
        screen=ScreenSpec(
            width=_number(screen, "width", "screen"),
            aspect_ratio=_number(screen, "aspect_ratio", "screen"),
            position=_vector(screen, "position", "screen"),
        ),
        projector=ProjectorSpec(
            throw_ratio=_number(projector, "throw_ratio", "projector"),
            lens_shift=LensShift(
                horizontal=_number(shift, "horizontal", "projector.lens_shift"),
                vertical=_number(shift, "vertical", "projector.lens_shift"),
            ),
            position=_vector(projector, "position", "projector"),
            aim=aim,
            auto_keystone=_flag(projector, "auto_keystone", "projector"),
            brightness=brightness,
        ),
    )


def load_scene(
    path: Union[str, Path],
    loader: Optional[ConfigLoader] = None,
) -> SimulationState:
    """
    Load a scene file.

    Args:
        path: YAML scene file.
        loader: ConfigLoader to use (a fresh one if None).

    Returns:
        SimulationState.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file content is malformed.
    """
    loader = loader or ConfigLoader()
    data = loader.load(path, use_cache=False)
    state = state_from_dict(data)
    logger.info(f"Loaded scene from {path}")
    return state


def save_scene(state: SimulationState, path: Union[str, Path]) -> None:
    """Write a SimulationState as a YAML scene file."""
    ConfigLoader().save(state_to_dict(state), path)
    logger.info(f"Saved scene to {path}")
