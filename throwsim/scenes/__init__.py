"""Scene presets, parameter limits and scene files."""

from .limits import ParameterLimits, DEFAULT_LIMITS, clamp, clamp_state
from .presets import (
    DEFAULT_STATE,
    BEDROOM_SIDE,
    MEETING_CEILING,
    PRESETS,
    get_preset,
    list_presets,
)
from .loader import state_from_dict, state_to_dict, load_scene, save_scene

__all__ = [
    "ParameterLimits",
    "DEFAULT_LIMITS",
    "clamp",
    "clamp_state",
    "DEFAULT_STATE",
    "BEDROOM_SIDE",
    "MEETING_CEILING",
    "PRESETS",
    "get_preset",
    "list_presets",
    "state_from_dict",
    "state_to_dict",
    "load_scene",
    "save_scene",
]
