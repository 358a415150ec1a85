"""
Tests for simulator views and the report image.

Test Coverage:
- View transform: room mm to pixels, y flip
- HUD text: valid, corrected and invalid results
- Front / top views: canvas size, invalid and far-off footprints
- Report: stacked image width, PNG output
"""

from dataclasses import replace
from datetime import datetime

import cv2
import numpy as np
import pytest

from throwsim.geometry import Vector3
from throwsim.projection import ManualAim, calculate_projection
from throwsim.scenes import BEDROOM_SIDE, DEFAULT_STATE
from throwsim.viz import (
    ViewTransform,
    draw_polygon,
    format_hud,
    render_front_view,
    render_report,
    render_top_view,
    save_image,
    summarize_state,
)


# =============================================================================
# Test Fixtures
# =============================================================================

def _with_aim(state, aim, position=None):
    projector = replace(state.projector, aim=aim)
    if position is not None:
        projector = replace(projector, position=position)
    return replace(state, projector=projector)


@pytest.fixture
def default_result():
    return calculate_projection(DEFAULT_STATE.projector, DEFAULT_STATE.screen)


@pytest.fixture
def invalid_state():
    """Projector turned away from the wall."""
    return _with_aim(DEFAULT_STATE, ManualAim(180.0, 0.0))


@pytest.fixture
def far_off_state():
    """Steep yaw throws the footprint far past the room edge."""
    return _with_aim(DEFAULT_STATE, ManualAim(60.0, 0.0))


# =============================================================================
# View Transform
# =============================================================================

class TestViewTransform:
    """Tests for room-to-pixel mapping."""

    def test_size(self):
        assert ViewTransform(5000.0, 3000.0, 0.2).size == (1040, 640)

    def test_flip_y(self):
        """Room origin maps to the bottom-left corner inside the margin."""
        transform = ViewTransform(5000.0, 3000.0, 0.2)

        assert transform.point(0.0, 0.0) == (20, 620)
        assert transform.point(5000.0, 3000.0) == (1020, 20)

    def test_no_flip(self):
        transform = ViewTransform(5000.0, 4000.0, 0.2, flip_y=False)

        assert transform.point(0.0, 0.0) == (20, 20)
        assert transform.point(2500.0, 4000.0) == (520, 820)

    def test_apply_many(self):
        pixels = ViewTransform(100.0, 100.0, 1.0, margin=0).apply([[0, 0], [100, 100]])

        assert np.allclose(pixels, [[0, 100], [100, 0]])


# =============================================================================
# HUD
# =============================================================================

class TestHud:
    """Tests for heads-up display text."""

    def test_valid_with_correction(self, default_result):
        lines = format_hud(default_result)

        assert lines == [
            "Yaw: 0.0 deg",
            "Pitch: 0.0 deg",
            "Status: OK",
            "Efficiency: 100.0% pixels kept",
        ]

    def test_no_efficiency_without_keystone(self):
        projector = replace(DEFAULT_STATE.projector, auto_keystone=False)
        lines = format_hud(calculate_projection(projector, DEFAULT_STATE.screen))

        assert len(lines) == 3
        assert lines[2] == "Status: OK"

    def test_invalid(self, invalid_state):
        result = calculate_projection(invalid_state.projector, invalid_state.screen)
        lines = format_hud(result)

        assert len(lines) == 3
        assert lines[0] == "Yaw: 180.0 deg"
        assert lines[2] == "Status: INVALID"


# =============================================================================
# Views
# =============================================================================

class TestViews:
    """Tests for front and top view rendering."""

    def test_front_view_shape(self, default_result):
        image = render_front_view(DEFAULT_STATE, default_result)

        assert image.shape == (640, 1040, 3)
        assert image.dtype == np.uint8

    def test_top_view_shape(self, default_result):
        image = render_top_view(DEFAULT_STATE, default_result)

        assert image.shape == (840, 1040, 3)
        assert image.dtype == np.uint8

    def test_scale(self):
        image = render_front_view(DEFAULT_STATE, scale=0.1)

        assert image.shape == (340, 540, 3)

    def test_footprint_drawn(self, default_result):
        """The corrected rectangle tints the middle of the wall."""
        plain = render_front_view(DEFAULT_STATE, default_result, show_hud=False)
        cx, cy = ViewTransform(5000.0, 3000.0, 0.2).point(2000.0, 1500.0)

        assert not np.array_equal(plain[cy, cx], plain[25, 1030])

    def test_result_computed_when_missing(self, default_result):
        assert np.array_equal(
            render_front_view(DEFAULT_STATE),
            render_front_view(DEFAULT_STATE, default_result),
        )

    @pytest.mark.parametrize("fixture", ["invalid_state", "far_off_state"])
    def test_awkward_scenes_render(self, fixture, request):
        state = request.getfixturevalue(fixture)

        front = render_front_view(state)
        top = render_top_view(state)

        assert front.shape == (640, 1040, 3)
        assert top.shape == (840, 1040, 3)

    def test_look_at_from_the_side(self):
        state = _with_aim(BEDROOM_SIDE, BEDROOM_SIDE.projector.aim, Vector3(300.0, 2500.0, 3400.0))

        assert render_top_view(state).shape[2] == 3

    def test_draw_polygon_returns_new_image_when_filled(self):
        canvas = np.zeros((50, 50, 3), dtype=np.uint8)
        square = np.array([[10, 10], [40, 10], [40, 40], [10, 40]])

        filled = draw_polygon(canvas, square, (255, 0, 0), fill_alpha=0.5)

        assert filled is not canvas
        assert filled[25, 25, 0] > 0
        assert canvas[25, 25, 0] == 0


# =============================================================================
# Report
# =============================================================================

class TestReport:
    """Tests for the stacked report image."""

    def test_summary_columns(self):
        left, right = summarize_state(DEFAULT_STATE)

        assert left[0] == "ROOM & SCREEN"
        assert right[0] == "PROJECTOR"
        assert "Throw ratio: 1.20" in right
        assert "Aim (yaw / pitch): look at screen" in right

    def test_report_width(self):
        image = render_report(DEFAULT_STATE, timestamp=datetime(2024, 1, 1))

        assert image.shape[1] == 1000
        assert image.shape[0] > 70 + 140
        assert image.dtype == np.uint8

    def test_report_for_invalid_scene(self, invalid_state):
        image = render_report(invalid_state, width=800)

        assert image.shape[1] == 800

    def test_save_image(self, tmp_path, default_result):
        image = render_front_view(DEFAULT_STATE, default_result)
        path = tmp_path / "out" / "front.png"

        assert save_image(image, path)

        loaded = cv2.imread(str(path))
        assert loaded.shape == image.shape
        # Written as BGR
        assert np.array_equal(loaded[..., ::-1], image)
