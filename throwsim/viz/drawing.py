"""
Low-level drawing helpers for simulator views.

All images are (H, W, 3) uint8 RGB arrays; save_image() converts to BGR for
OpenCV on write.
"""

from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import cv2
import numpy as np


Color = Tuple[int, int, int]

# Dark theme palette (RGB)
BACKGROUND: Color = (20, 20, 25)
GRID: Color = (45, 45, 52)
WALL: Color = (120, 120, 130)
SCREEN: Color = (160, 160, 170)
PRIMARY: Color = (0, 206, 209)       # Dark turquoise
STATUS_OK: Color = (0, 255, 127)     # Spring green
STATUS_BAD: Color = (255, 82, 82)    # Coral red
TEXT: Color = (200, 200, 205)

# Keeps far-away footprint corners inside int32 pixel range
PIXEL_LIMIT = 1_000_000


def blank_canvas(width: int, height: int, color: Color = BACKGROUND) -> np.ndarray:
    """Create a solid-color RGB canvas."""
    canvas = np.zeros((height, width, 3), dtype=np.uint8)
    canvas[:] = color
    return canvas


def to_pixels(points: np.ndarray) -> np.ndarray:
    """Round (N, 2) float pixel coordinates to clipped int32."""
    points = np.clip(np.asarray(points, dtype=np.float64), -PIXEL_LIMIT, PIXEL_LIMIT)
    return np.round(points).astype(np.int32)


def draw_text(
    image: np.ndarray,
    text: str,
    position: Tuple[int, int],
    color: Color = TEXT,
    font_scale: float = 0.5,
    thickness: int = 1,
    background: bool = False,
    bg_color: Optional[Color] = None,
    padding: int = 3,
) -> np.ndarray:
    """
    Draw text on image with optional background.

    Args:
        image: Image to draw on (modified in place).
        text: Text string to draw (ASCII).
        position: (x, y) position (bottom-left of text).
        color: Text color (RGB).
        font_scale: Font scale factor.
        thickness: Text thickness.
        background: Whether to draw a background box.
        bg_color: Background color (darkened text color if None).
        padding: Background padding in pixels.

    Returns:
        Image with text drawn.
    """
    font = cv2.FONT_HERSHEY_SIMPLEX
    x, y = position

    (text_w, text_h), baseline = cv2.getTextSize(text, font, font_scale, thickness)

    h, w = image.shape[:2]
    y = max(text_h + padding, min(y, h - padding))
    x = max(padding, min(x, w - text_w - padding))

    if background:
        if bg_color is None:
            bg_color = tuple(int(c * 0.3) for c in color)
        cv2.rectangle(
            image,
            (x - padding, y - text_h - padding),
            (x + text_w + padding, y + baseline + padding),
            bg_color,
            -1,
        )

    cv2.putText(image, text, (x, y), font, font_scale, color, thickness, cv2.LINE_AA)

    return image


def draw_dashed_line(
    image: np.ndarray,
    pt1: Tuple[int, int],
    pt2: Tuple[int, int],
    color: Color,
    thickness: int = 1,
    dash: int = 8,
    gap: int = 6,
) -> np.ndarray:
    """Draw a dashed line segment (modified in place)."""
    p1 = np.asarray(pt1, dtype=np.float64)
    p2 = np.asarray(pt2, dtype=np.float64)
    length = float(np.linalg.norm(p2 - p1))

    if length == 0:
        return image

    step = dash + gap
    # Cap dash count for footprints that run far off-canvas
    n_dashes = min(int(length // step) + 1, 2000)
    direction = (p2 - p1) / length

    for i in range(n_dashes):
        start = p1 + direction * (i * step)
        end = p1 + direction * min(i * step + dash, length)
        cv2.line(
            image,
            tuple(int(v) for v in np.round(start)),
            tuple(int(v) for v in np.round(end)),
            color,
            thickness,
            cv2.LINE_AA,
        )

    return image


def draw_polygon(
    image: np.ndarray,
    points: np.ndarray,
    color: Color,
    thickness: int = 2,
    fill_alpha: float = 0.0,
    dashed: bool = False,
) -> np.ndarray:
    """
    Draw a closed polygon with optional translucent fill.

    Args:
        image: RGB image.
        points: (N, 2) pixel coordinates.
        color: Outline/fill color.
        thickness: Outline thickness.
        fill_alpha: Fill opacity (0 = no fill).
        dashed: Draw the outline dashed.

    Returns:
        Image with polygon drawn (a new array if filled).
    """
    pts = to_pixels(points)

    if fill_alpha > 0:
        overlay = image.copy()
        cv2.fillPoly(overlay, [pts], color)
        image = cv2.addWeighted(overlay, fill_alpha, image, 1 - fill_alpha, 0)

    if dashed:
        for i in range(len(pts)):
            a = pts[i]
            b = pts[(i + 1) % len(pts)]
            draw_dashed_line(image, (int(a[0]), int(a[1])), (int(b[0]), int(b[1])), color, thickness)
    else:
        cv2.polylines(image, [pts], True, color, thickness, cv2.LINE_AA)

    return image


def draw_text_block(
    image: np.ndarray,
    lines: Sequence[str],
    origin: Tuple[int, int],
    color: Color = TEXT,
    font_scale: float = 0.5,
    line_height: int = 20,
    padding: int = 8,
    colors: Optional[Sequence[Optional[Color]]] = None,
) -> np.ndarray:
    """
    Draw a boxed block of text lines (modified in place).

    Args:
        image: RGB image.
        lines: Text lines.
        origin: Top-left corner of the box.
        color: Default text color.
        font_scale: Font scale.
        line_height: Pixels between baselines.
        padding: Inner box padding.
        colors: Optional per-line color overrides.

    Returns:
        Image with the text block drawn.
    """
    if not lines:
        return image

    font = cv2.FONT_HERSHEY_SIMPLEX
    text_w = max(cv2.getTextSize(line, font, font_scale, 1)[0][0] for line in lines)
    x, y = origin
    box_w = text_w + 2 * padding
    box_h = line_height * len(lines) + 2 * padding

    cv2.rectangle(image, (x, y), (x + box_w, y + box_h), (32, 32, 40), -1)
    cv2.rectangle(image, (x, y), (x + box_w, y + box_h), GRID, 1)

    for i, line in enumerate(lines):
        line_color = color
        if colors is not None and i < len(colors) and colors[i] is not None:
            line_color = colors[i]
        baseline_y = y + padding + line_height * (i + 1) - 6
        cv2.putText(image, line, (x + padding, baseline_y), font, font_scale,
                    line_color, 1, cv2.LINE_AA)

    return image


def save_image(
    image: np.ndarray,
    path: Union[str, Path],
    create_dir: bool = True,
) -> bool:
    """
    Save an RGB image to file.

    Args:
        image: (H, W, 3) RGB image.
        path: Output file path (.png recommended).
        create_dir: Create parent directories if needed.

    Returns:
        True if successful.
    """
    path = Path(path)

    if create_dir:
        path.parent.mkdir(parents=True, exist_ok=True)

    image_bgr = cv2.cvtColor(image, cv2.COLOR_RGB2BGR)
    return bool(cv2.imwrite(str(path), image_bgr))
