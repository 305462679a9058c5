"""Terminal rendering helpers for previewing layouts."""

from gridplace.render.canvas import (
    CanvasGraphics,
    CharCanvas,
    canvas_graphics_factory,
    render_layout,
)

__all__ = [
    "CanvasGraphics",
    "CharCanvas",
    "canvas_graphics_factory",
    "render_layout",
]
