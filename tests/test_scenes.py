"""
Tests for presets, parameter limits and scene files.

Test Coverage:
- Limits: every editable field is pulled into range
- Presets: lookup, unknown names, all presets solve
- Scene files: dict conversion, preset overrides, type errors, YAML I/O
"""

from dataclasses import replace
from pathlib import Path

import pytest
import yaml

from throwsim.geometry import Vector3
from throwsim.projection import (
    LensShift,
    LookAtScreen,
    ManualAim,
    RoomSpec,
    calculate_projection,
)
from throwsim.scenes import (
    DEFAULT_LIMITS,
    DEFAULT_STATE,
    MEETING_CEILING,
    PRESETS,
    clamp,
    clamp_state,
    get_preset,
    list_presets,
    load_scene,
    save_scene,
    state_from_dict,
    state_to_dict,
)


PROJECT_ROOT = Path(__file__).parent.parent


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def wild_state():
    """State with every editable field out of range."""
    return replace(
        DEFAULT_STATE,
        room=RoomSpec(width=20000.0, height=1000.0, depth=4000.0),
        screen=replace(
            DEFAULT_STATE.screen,
            width=8000.0,
            position=Vector3(-500.0, 2500.0, 0.0),
        ),
        projector=replace(
            DEFAULT_STATE.projector,
            throw_ratio=5.0,
            lens_shift=LensShift(horizontal=80.0, vertical=-150.0),
            position=Vector3(30000.0, -10.0, 100.0),
            aim=ManualAim(yaw=90.0, pitch=-60.0, roll=15.0),
        ),
    )


# =============================================================================
# Limits
# =============================================================================

class TestClamp:
    """Tests for parameter clamping."""

    def test_clamp_scalar(self):
        assert clamp(5.0, (0.0, 3.0)) == 3.0
        assert clamp(-1.0, (0.0, 3.0)) == 0.0
        assert clamp(1.5, (0.0, 3.0)) == 1.5

    def test_room_clamped(self, wild_state):
        room = clamp_state(wild_state).room

        assert room.width == 10000.0
        assert room.height == 2000.0
        assert room.depth == 4000.0

    def test_screen_clamped_to_room(self, wild_state):
        """Screen center bounds use the already-clamped room."""
        screen = clamp_state(wild_state).screen

        assert screen.width == 5000.0
        assert screen.position == Vector3(0.0, 2000.0, 0.0)

    def test_projector_clamped(self, wild_state):
        projector = clamp_state(wild_state).projector

        assert projector.throw_ratio == 3.0
        assert projector.lens_shift == LensShift(50.0, -100.0)
        assert projector.position == Vector3(10000.0, 0.0, 500.0)
        assert projector.aim == ManualAim(yaw=60.0, pitch=-45.0, roll=15.0)

    def test_projector_depth_capped_by_room(self):
        state = replace(
            DEFAULT_STATE,
            projector=replace(DEFAULT_STATE.projector, position=Vector3(2500.0, 1500.0, 9000.0)),
        )

        assert clamp_state(state).projector.position.z == DEFAULT_STATE.room.depth

    def test_in_range_state_unchanged(self):
        for state in PRESETS.values():
            assert clamp_state(state) == state

    def test_look_at_aim_untouched(self, wild_state):
        state = replace(wild_state, projector=replace(wild_state.projector, aim=LookAtScreen()))

        assert clamp_state(state).projector.aim == LookAtScreen()

    def test_input_not_modified(self, wild_state):
        clamp_state(wild_state)

        assert wild_state.room.width == 20000.0
        assert wild_state.projector.throw_ratio == 5.0

    def test_default_limits(self):
        assert DEFAULT_LIMITS.throw_ratio == (0.1, 3.0)
        assert DEFAULT_LIMITS.projector_min_distance == 500.0


# =============================================================================
# Presets
# =============================================================================

class TestPresets:
    """Tests for built-in presets."""

    def test_list_presets(self):
        assert list_presets() == ["default", "bedroom_side", "meeting_ceiling"]

    def test_get_preset(self):
        assert get_preset("meeting_ceiling") is MEETING_CEILING

    def test_unknown_preset(self):
        with pytest.raises(KeyError, match="Available"):
            get_preset("cinema")

    @pytest.mark.parametrize("name", ["default", "bedroom_side", "meeting_ceiling"])
    def test_presets_produce_valid_projection(self, name):
        state = get_preset(name)
        result = calculate_projection(state.projector, state.screen)

        assert result.is_valid
        assert result.has_usable_correction
        assert 0.0 < result.efficiency <= 100.0 + 1e-6


# =============================================================================
# Scene Files
# =============================================================================

class TestSceneDict:
    """Tests for dict conversion."""

    @pytest.mark.parametrize("name", ["default", "bedroom_side", "meeting_ceiling"])
    def test_roundtrip(self, name):
        state = get_preset(name)

        assert state_from_dict(state_to_dict(state)) == state

    def test_manual_aim_roundtrip(self):
        state = replace(
            DEFAULT_STATE,
            projector=replace(DEFAULT_STATE.projector, aim=ManualAim(20.0, 5.0, 0.0)),
        )
        data = state_to_dict(state)

        assert data["projector"]["look_at_screen_center"] is False
        assert data["projector"]["rotation"] == {"yaw": 20.0, "pitch": 5.0, "roll": 0.0}
        assert state_from_dict(data) == state

    def test_empty_dict_is_default_scene(self):
        assert state_from_dict({}) == DEFAULT_STATE

    def test_preset_with_override(self):
        """Fields not overridden come from the named preset."""
        state = state_from_dict({"preset": "meeting_ceiling", "projector": {"throw_ratio": 2.0}})

        assert state.projector.throw_ratio == 2.0
        assert state.projector.lens_shift == LensShift(0.0, -50.0)
        assert state.room == MEETING_CEILING.room

    def test_partial_position_override(self):
        state = state_from_dict({"projector": {"position": {"z": 2000}}})

        assert state.projector.position == Vector3(2500.0, 1500.0, 2000.0)

    def test_manual_aim_from_rotation(self):
        state = state_from_dict({
            "projector": {
                "look_at_screen_center": False,
                "rotation": {"yaw": -15, "pitch": 10},
            },
        })

        assert state.projector.aim == ManualAim(yaw=-15.0, pitch=10.0, roll=0.0)

    def test_brightness_kept(self):
        state = state_from_dict({"projector": {"brightness": 3000}})

        assert state.projector.brightness == 3000.0
        assert state_to_dict(state)["projector"]["brightness"] == 3000.0

    @pytest.mark.parametrize("data", [
        {"projector": {"throw_ratio": "fast"}},
        {"room": {"dimensions": {"width": True}}},
        {"projector": {"auto_keystone": "yes"}},
        {"screen": 5},
        ["not", "a", "mapping"],
    ])
    def test_bad_types(self, data):
        with pytest.raises(ValueError):
            state_from_dict(data)

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            state_from_dict({"preset": "cinema"})

    @pytest.mark.parametrize("data", [
        {"projector": {"position": {"z": float("nan")}}},
        {"projector": {"throw_ratio": float("inf")}},
        {"room": {"dimensions": {"depth": float("-inf")}}},
    ])
    def test_non_finite_numbers(self, data):
        with pytest.raises(ValueError, match="finite"):
            state_from_dict(data)


class TestSceneFiles:
    """Tests for YAML scene I/O."""

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "scenes" / "meeting.yaml"
        save_scene(MEETING_CEILING, path)

        assert path.exists()
        assert load_scene(path) == MEETING_CEILING

    def test_saved_file_is_plain_yaml(self, tmp_path):
        path = tmp_path / "scene.yaml"
        save_scene(DEFAULT_STATE, path)

        with open(path) as f:
            data = yaml.safe_load(f)

        assert data["room"]["dimensions"]["width"] == 5000.0
        assert data["projector"]["look_at_screen_center"] is True

    def test_load_bundled_scene(self):
        state = load_scene(PROJECT_ROOT / "configs" / "scenes" / "side_throw.yaml")

        assert state.projector.aim == ManualAim(yaw=20.0, pitch=5.0, roll=0.0)
        assert state.projector.position == Vector3(1200.0, 1200.0, 3000.0)
        assert state.room == DEFAULT_STATE.room
        assert calculate_projection(state.projector, state.screen).is_valid

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_scene(tmp_path / "nope.yaml")

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ValueError):
            load_scene(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("projector: {throw_ratio: 1.2\n  position: [\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_scene(path)

    def test_nan_in_file(self, tmp_path):
        path = tmp_path / "nan.yaml"
        path.write_text("projector:\n  position: {x: 2500, y: 1500, z: .nan}\n")

        with pytest.raises(ValueError, match="projector.position.z"):
            load_scene(path)
