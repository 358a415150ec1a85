"""
Front (wall) and top (floor plan) views of a simulation.

Front view: the screen wall, x to the right and y up, with the screen
outline, the raw projected footprint and the keystone-corrected rectangle.

Top view: the room seen from above, wall (z = 0) at the top edge, with the
screen line, the light cone and the projector heading.

Both views draw in room millimeters scaled by `scale` pixels per mm.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import cv2
import numpy as np

from ..projection import ProjectionResult, SimulationState, calculate_projection
from .drawing import (
    GRID,
    PRIMARY,
    SCREEN,
    STATUS_BAD,
    STATUS_OK,
    WALL,
    Color,
    blank_canvas,
    draw_dashed_line,
    draw_polygon,
    draw_text,
    draw_text_block,
    to_pixels,
)


GRID_SPACING_MM = 500.0
PROJECTOR_RADIUS_MM = 100.0
HEADING_LENGTH_MM = 300.0


@dataclass(frozen=True)
class ViewTransform:
    """
    Maps room millimeters to canvas pixels.

    Attributes:
        extent_x: Horizontal room extent (mm).
        extent_y: Vertical room extent (mm).
        scale: Pixels per mm.
        margin: Border in pixels.
        flip_y: Whether larger room coordinates map upward.
    """

    extent_x: float
    extent_y: float
    scale: float
    margin: int = 20
    flip_y: bool = True

    @property
    def size(self) -> Tuple[int, int]:
        """Canvas (width, height) in pixels."""
        return (
            int(math.ceil(self.extent_x * self.scale)) + 2 * self.margin,
            int(math.ceil(self.extent_y * self.scale)) + 2 * self.margin,
        )

    def apply(self, points: np.ndarray) -> np.ndarray:
        """Map (N, 2) room coordinates to (N, 2) float pixel coordinates."""
        points = np.atleast_2d(np.asarray(points, dtype=np.float64))
        px = self.margin + points[:, 0] * self.scale
        if self.flip_y:
            py = self.margin + (self.extent_y - points[:, 1]) * self.scale
        else:
            py = self.margin + points[:, 1] * self.scale
        return np.stack([px, py], axis=1)

    def point(self, x: float, y: float) -> Tuple[int, int]:
        px = to_pixels(self.apply([[x, y]]))[0]
        return int(px[0]), int(px[1])


def _quad_array(corners) -> np.ndarray:
    return np.array([[p.x, p.y] for p in corners], dtype=np.float64)


def _draw_grid(canvas: np.ndarray, transform: ViewTransform) -> None:
    for x in np.arange(0.0, transform.extent_x + 1e-6, GRID_SPACING_MM):
        cv2.line(canvas, transform.point(x, 0.0), transform.point(x, transform.extent_y), GRID, 1)
    for y in np.arange(0.0, transform.extent_y + 1e-6, GRID_SPACING_MM):
        cv2.line(canvas, transform.point(0.0, y), transform.point(transform.extent_x, y), GRID, 1)


def _draw_boundary(canvas: np.ndarray, transform: ViewTransform) -> None:
    cv2.rectangle(
        canvas,
        transform.point(0.0, 0.0),
        transform.point(transform.extent_x, transform.extent_y),
        WALL,
        2,
    )


def format_hud(result: ProjectionResult) -> List[str]:
    """
    Heads-up display lines for a projection result.

    The efficiency line only appears when a corrected rectangle exists.
    """
    lines = [
        f"Yaw: {result.yaw:.1f} deg",
        f"Pitch: {result.pitch:.1f} deg",
        f"Status: {'OK' if result.is_valid else 'INVALID'}",
    ]
    if result.is_valid and result.corrected_corners is not None:
        lines.append(f"Efficiency: {result.efficiency:.1f}% pixels kept")
    return lines


def _hud_colors(result: ProjectionResult) -> List[Optional[Color]]:
    status = STATUS_OK if result.is_valid else STATUS_BAD
    colors: List[Optional[Color]] = [None, None, status]
    if result.is_valid and result.corrected_corners is not None:
        colors.append(PRIMARY)
    return colors


def render_front_view(
    state: SimulationState,
    result: Optional[ProjectionResult] = None,
    scale: float = 0.2,
    show_hud: bool = True,
) -> np.ndarray:
    """
    Render the screen wall with the projected footprint.

    Args:
        state: Simulation state.
        result: Precomputed projection (computed from state if None).
        scale: Pixels per mm.
        show_hud: Draw yaw/pitch/status/efficiency box.

    Returns:
        (H, W, 3) RGB image.
    """
    if result is None:
        result = calculate_projection(state.projector, state.screen)

    room = state.room
    transform = ViewTransform(room.width, room.height, scale)
    canvas = blank_canvas(*transform.size)

    _draw_grid(canvas, transform)
    _draw_boundary(canvas, transform)

    screen_px = transform.apply(_quad_array(state.screen.corners()))
    canvas = draw_polygon(canvas, screen_px, SCREEN, thickness=1, fill_alpha=0.1, dashed=True)
    sx, sy = transform.point(state.screen.position.x, state.screen.position.y)
    draw_text(canvas, "SCREEN", (sx - 25, sy + 5), color=SCREEN, font_scale=0.4)

    if result.is_valid:
        corrected = result.corrected_corners is not None
        raw_px = transform.apply(_quad_array(result.corners))
        canvas = draw_polygon(
            canvas,
            raw_px,
            PRIMARY,
            thickness=1 if corrected else 2,
            fill_alpha=0.1 if corrected else 0.2,
            dashed=corrected,
        )

        if corrected:
            rect_px = transform.apply(_quad_array(result.corrected_corners))
            canvas = draw_polygon(canvas, rect_px, PRIMARY, thickness=2, fill_alpha=0.3)

            width, height = result.corrected_size
            br = result.corrected_corners[2]
            bx, by = transform.point(br.x, br.y)
            draw_text(
                canvas,
                f"{round(width)} x {round(height)} mm",
                (bx - 120, by + 20),
                color=PRIMARY,
                font_scale=0.45,
            )

    if show_hud:
        draw_text_block(
            canvas,
            format_hud(result),
            (transform.margin + 10, transform.margin + 10),
            colors=_hud_colors(result),
        )

    return canvas


def render_top_view(
    state: SimulationState,
    result: Optional[ProjectionResult] = None,
    scale: float = 0.2,
) -> np.ndarray:
    """
    Render the room from above with the light cone.

    Args:
        state: Simulation state.
        result: Precomputed projection (computed from state if None).
        scale: Pixels per mm.

    Returns:
        (H, W, 3) RGB image with the wall along the top edge.
    """
    if result is None:
        result = calculate_projection(state.projector, state.screen)

    room = state.room
    transform = ViewTransform(room.width, room.depth, scale, flip_y=False)
    canvas = blank_canvas(*transform.size)

    _draw_grid(canvas, transform)
    _draw_boundary(canvas, transform)

    screen = state.screen
    cv2.line(
        canvas,
        transform.point(screen.position.x - screen.width / 2.0, 0.0),
        transform.point(screen.position.x + screen.width / 2.0, 0.0),
        SCREEN,
        4,
    )
    sx, sy = transform.point(screen.position.x, 0.0)
    draw_text(canvas, "SCREEN (WALL)", (sx - 50, sy + 30), color=SCREEN, font_scale=0.4)

    proj = state.projector.position
    px, pz = transform.point(proj.x, proj.z)

    if result.is_valid:
        xs = [p.x for p in result.corners]
        cone = transform.apply(np.array([
            [proj.x, proj.z],
            [min(xs), 0.0],
            [max(xs), 0.0],
        ]))
        canvas = draw_polygon(canvas, cone, PRIMARY, thickness=1, fill_alpha=0.1, dashed=True)

    radius = max(int(round(PROJECTOR_RADIUS_MM * scale)), 3)
    cv2.circle(canvas, (px, pz), radius, (40, 40, 48), -1, cv2.LINE_AA)
    cv2.circle(canvas, (px, pz), radius, PRIMARY, 2, cv2.LINE_AA)

    yaw = math.radians(result.yaw)
    tip = transform.point(
        proj.x + math.sin(yaw) * HEADING_LENGTH_MM,
        proj.z - math.cos(yaw) * HEADING_LENGTH_MM,
    )
    cv2.arrowedLine(canvas, (px, pz), tip, PRIMARY, 2, cv2.LINE_AA, tipLength=0.3)

    if not result.is_valid:
        draw_dashed_line(canvas, (px, pz), (px, transform.point(0.0, 0.0)[1]), STATUS_BAD, 1)
        draw_text(canvas, "NO IMAGE ON WALL", (px + radius + 5, pz), color=STATUS_BAD,
                  font_scale=0.45, background=True)

    return canvas
