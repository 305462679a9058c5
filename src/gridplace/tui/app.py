"""Interactive layout preview for gridplace.

This module provides:
- GridPreviewApp: A Textual application showing a live grid layout
- LayoutPreview: Widget displaying the rendered character canvas
- StatusBar: One-line summary of the grid, axis and overflow state

Keys change the traversal axis, add or remove items and toggle the
bounds rectangle; the layout is recomputed after every change.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Static

from gridplace import __version__
from gridplace.config import Config
from gridplace.demo import build_demo_grid, make_sprite
from gridplace.layout.grid import Axis, OverflowEvent
from gridplace.render.canvas import CharCanvas, render_layout

logger = logging.getLogger(__name__)


class LayoutPreview(Static):
    """Displays the rendered layout canvas."""

    DEFAULT_CSS: ClassVar[
        str
    ] = """
    LayoutPreview {
        width: auto;
        height: auto;
        padding: 0 1;
    }
    """


class StatusBar(Static):
    """Summary of grid size, axis, item count and overflow."""

    DEFAULT_CSS: ClassVar[
        str
    ] = """
    StatusBar {
        dock: top;
        height: 1;
        background: $primary;
        color: $text;
    }
    """


class GridPreviewApp(App[None]):
    """Live preview of a grid layout.

    Attributes:
        settings: Configuration the grid was built from
        grid: The grid being previewed
        axis: Current traversal axis
        show_bounds: Whether the debug bounds rectangle is drawn
    """

    TITLE = f"gridplace v{__version__}"

    BINDINGS = [
        Binding("x", "set_axis('x')", "Axis X"),
        Binding("y", "set_axis('y')", "Axis Y"),
        Binding("plus,equals_sign", "add_item", "Add item"),
        Binding("minus", "remove_item", "Remove item"),
        Binding("b", "toggle_bounds", "Bounds"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, config: Config | None = None) -> None:
        """Initialize the preview app.

        Args:
            config: Configuration to preview; defaults are used if None
        """
        super().__init__()
        self.settings = config or Config()
        self.axis = Axis.parse(self.settings.grid.axis)
        self.show_bounds = self.settings.preview.show_bounds
        self._last_overflows: list[OverflowEvent] = []
        self.grid, self.sprites = build_demo_grid(self.settings, on_overflow=self._last_overflows.append)
        self.canvas = CharCanvas.fit(
            self.grid.bounds.right,
            self.grid.bounds.bottom,
            self.settings.preview.canvas_width,
            self.settings.preview.canvas_height,
        )

    def compose(self) -> ComposeResult:
        yield StatusBar(id="status")
        yield LayoutPreview(id="preview")
        yield Footer()

    def on_mount(self) -> None:
        self.relayout()

    def relayout(self) -> None:
        """Recompute the layout and redraw the preview."""
        self._last_overflows.clear()
        self.grid.update(self.axis)
        text = render_layout(self.grid, self.canvas, self.sprites, show_bounds=self.show_bounds)
        self.query_one("#preview", LayoutPreview).update(text)
        self.query_one("#status", StatusBar).update(self.status_text())

    def status_text(self) -> str:
        """Describe the current grid state."""
        o = self.grid.options
        status = (
            f"{o.num_columns}x{o.num_rows} grid | axis {self.axis.value} | "
            f"{len(self.grid)} items"
        )
        if self._last_overflows:
            status += f" | wrapped {len(self._last_overflows)}x"
        return status

    def action_set_axis(self, axis: str) -> None:
        self.axis = Axis.parse(axis)
        self.relayout()

    def action_add_item(self) -> None:
        sprite = make_sprite(self.settings, len(self.sprites))
        self.sprites.append(sprite)
        self.grid.add(sprite)
        self.relayout()

    def action_remove_item(self) -> None:
        if not self.sprites:
            return
        self.grid.remove(self.sprites.pop())
        self.relayout()

    def action_toggle_bounds(self) -> None:
        self.show_bounds = not self.show_bounds
        self.relayout()


def run_app(config: Config) -> None:
    """Run the preview application."""
    logger.debug("Starting preview app")
    GridPreviewApp(config).run()
