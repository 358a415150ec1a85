"""Single-image simulation report: header, parameter summary and both views."""

from datetime import datetime
from typing import List, Optional

import cv2
import numpy as np

from ..projection import ProjectionResult, SimulationState, calculate_projection
from .drawing import BACKGROUND, PRIMARY, TEXT, blank_canvas, draw_text, draw_text_block
from .views import render_front_view, render_top_view


REPORT_WIDTH = 1000


def summarize_state(state: SimulationState) -> List[List[str]]:
    """
    Parameter summary as two columns of text lines.

    Returns:
        [room_and_screen_lines, projector_lines]
    """
    room, screen, proj = state.room, state.screen, state.projector
    yaw, pitch, _ = proj.rotation

    room_lines = [
        "ROOM & SCREEN",
        f"Room (W x D x H): {room.width:.0f} x {room.depth:.0f} x {room.height:.0f} mm",
        f"Screen width: {screen.width:.0f} mm",
        f"Screen center (X, Y): {screen.position.x:.0f}, {screen.position.y:.0f}",
    ]
    aim = "look at screen" if proj.look_at_screen_center else f"{yaw:.0f} / {pitch:.0f} deg"
    projector_lines = [
        "PROJECTOR",
        f"Position (X, Y, Z): {proj.position.x:.0f}, {proj.position.y:.0f}, {proj.position.z:.0f}",
        f"Throw ratio: {proj.throw_ratio:.2f}",
        f"Lens shift (H / V): {proj.lens_shift.horizontal:.0f}% / {proj.lens_shift.vertical:.0f}%",
        f"Aim (yaw / pitch): {aim}",
    ]
    return [room_lines, projector_lines]


def _fit_width(image: np.ndarray, width: int) -> np.ndarray:
    h, w = image.shape[:2]
    if w == width:
        return image
    height = max(int(round(h * width / w)), 1)
    return cv2.resize(image, (width, height), interpolation=cv2.INTER_AREA)


def render_report(
    state: SimulationState,
    result: Optional[ProjectionResult] = None,
    timestamp: Optional[datetime] = None,
    width: int = REPORT_WIDTH,
) -> np.ndarray:
    """
    Render a stacked report image.

    Args:
        state: Simulation state.
        result: Precomputed projection (computed from state if None).
        timestamp: Time printed in the header (now if None).
        width: Output width in pixels.

    Returns:
        (H, W, 3) RGB image.
    """
    if result is None:
        result = calculate_projection(state.projector, state.screen)
    timestamp = timestamp or datetime.now()

    header = blank_canvas(width, 70, BACKGROUND)
    draw_text(header, "Projector Throw Simulator", (20, 32), color=PRIMARY, font_scale=0.8, thickness=2)
    draw_text(header, "Projection configuration report", (20, 58), color=TEXT, font_scale=0.45)
    draw_text(header, timestamp.strftime("%Y-%m-%d %H:%M:%S"), (width - 180, 32),
              color=TEXT, font_scale=0.45)

    summary = blank_canvas(width, 140, BACKGROUND)
    left, right = summarize_state(state)
    draw_text_block(summary, left, (20, 10), colors=[PRIMARY])
    draw_text_block(summary, right, (width // 2 + 10, 10), colors=[PRIMARY])

    front = _fit_width(render_front_view(state, result), width)
    top = _fit_width(render_top_view(state, result), width)

    return np.vstack([header, summary, front, top])
