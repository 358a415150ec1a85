"""Visualization of projection results."""

from .drawing import (
    draw_text,
    draw_text_block,
    draw_polygon,
    draw_dashed_line,
    save_image,
)
from .views import (
    ViewTransform,
    format_hud,
    render_front_view,
    render_top_view,
)
from .report import render_report, summarize_state

__all__ = [
    # Drawing
    "draw_text",
    "draw_text_block",
    "draw_polygon",
    "draw_dashed_line",
    "save_image",
    # Views
    "ViewTransform",
    "format_hud",
    "render_front_view",
    "render_top_view",
    # Report
    "render_report",
    "summarize_state",
]
