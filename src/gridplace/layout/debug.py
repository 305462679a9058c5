"""Debug drawing for grid bounds.

A grid can visualize its bounds with a semi-transparent rectangle. The
rectangle is produced by an injected graphics factory so the layout engine
stays independent of any particular renderer; ``gridplace.render.canvas``
ships one that draws onto a character canvas.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

DEBUG_FILL_COLOR = 0xFF0000
DEBUG_FILL_ALPHA = 0.5


@runtime_checkable
class DebugGraphics(Protocol):
    """A drawable primitive with a chainable clear/fill/rect API."""

    def clear(self) -> DebugGraphics: ...

    def begin_fill(self, color: int, alpha: float = 1.0) -> DebugGraphics: ...

    def draw_rect(self, x: float, y: float, width: float, height: float) -> DebugGraphics: ...


GraphicsFactory = Callable[[Any], DebugGraphics]
"""Creates a DebugGraphics attached to the given parent (may be None)."""
