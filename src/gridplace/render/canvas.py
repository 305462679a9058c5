"""Character canvas for previewing grid layouts in a terminal.

This module provides:
- CharCanvas: A fixed-size character buffer mapped onto layout coordinates
- CanvasGraphics: A DebugGraphics implementation that paints onto a canvas
- canvas_graphics_factory: Graphics factory usable as ``Grid(graphics_factory=...)``
- render_layout: Paints a grid's cells and placed sprites onto a canvas

Layout coordinates are scaled down to character cells, so a 300x200 region
previewed on a 60x20 canvas uses 5 units per column and 10 per row.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from rich.style import Style
from rich.text import Text

from gridplace.layout.grid import Grid
from gridplace.models.sprite import Sprite

# Fill characters by opacity
SHADE_LIGHT = "░"
SHADE_MEDIUM = "▒"
SHADE_FULL = "█"

CELL_STYLE = Style(color="grey42")
ITEM_STYLES = ["cyan", "magenta", "green", "yellow", "blue", "bright_red"]


def color_to_hex(color: int) -> str:
    """Convert a 0xRRGGBB integer to a ``#rrggbb`` string."""
    return f"#{color & 0xFFFFFF:06x}"


def shade_for_alpha(alpha: float) -> str:
    """Pick a shading character for a fill opacity."""
    if alpha >= 1.0:
        return SHADE_FULL
    if alpha >= 0.5:
        return SHADE_MEDIUM
    return SHADE_LIGHT


class CharCanvas:
    """A grid of styled characters addressed in layout coordinates.

    Attributes:
        columns: Width in characters
        rows: Height in characters
        unit_x: Layout units per character column
        unit_y: Layout units per character row
    """

    def __init__(self, columns: int, rows: int, *, unit_x: float = 1.0, unit_y: float = 1.0) -> None:
        if columns <= 0 or rows <= 0:
            raise ValueError("Canvas size must be positive")
        if unit_x <= 0 or unit_y <= 0:
            raise ValueError("Canvas units must be positive")
        self.columns = columns
        self.rows = rows
        self.unit_x = unit_x
        self.unit_y = unit_y
        self._chars: list[list[str]] = []
        self._styles: list[list[Style | None]] = []
        self.layers: list[CanvasGraphics] = []
        self.reset()

    @classmethod
    def fit(cls, width: float, height: float, columns: int, rows: int) -> CharCanvas:
        """Create a canvas whose area covers ``width x height`` layout units."""
        return cls(
            columns,
            rows,
            unit_x=max(width, 1.0) / columns,
            unit_y=max(height, 1.0) / rows,
        )

    def reset(self) -> None:
        """Blank every character."""
        self._chars = [[" "] * self.columns for _ in range(self.rows)]
        self._styles = [[None] * self.columns for _ in range(self.rows)]

    def _span(self, x: float, y: float, width: float, height: float) -> tuple[int, int, int, int]:
        """Map a layout rectangle to clipped character bounds (x0, y0, x1, y1)."""
        x0 = max(0, round(x / self.unit_x))
        y0 = max(0, round(y / self.unit_y))
        x1 = min(self.columns, max(x0 + 1, round((x + width) / self.unit_x)))
        y1 = min(self.rows, max(y0 + 1, round((y + height) / self.unit_y)))
        return x0, y0, x1, y1

    def put(self, col: int, row: int, char: str, style: Style | None = None) -> None:
        """Set one character if it lies on the canvas."""
        if 0 <= col < self.columns and 0 <= row < self.rows:
            self._chars[row][col] = char
            self._styles[row][col] = style

    def fill_rect(self, x: float, y: float, width: float, height: float, char: str, style: Style | None = None) -> None:
        """Fill a layout rectangle with a character."""
        x0, y0, x1, y1 = self._span(x, y, width, height)
        for row in range(y0, y1):
            for col in range(x0, x1):
                self.put(col, row, char, style)

    def outline_rect(self, x: float, y: float, width: float, height: float, style: Style | None = None) -> None:
        """Draw a box outline around a layout rectangle."""
        x0, y0, x1, y1 = self._span(x, y, width, height)
        right, bottom = x1 - 1, y1 - 1
        for col in range(x0, x1):
            self.put(col, y0, "─", style)
            self.put(col, bottom, "─", style)
        for row in range(y0, y1):
            self.put(x0, row, "│", style)
            self.put(right, row, "│", style)
        self.put(x0, y0, "┌", style)
        self.put(right, y0, "┐", style)
        self.put(x0, bottom, "└", style)
        self.put(right, bottom, "┘", style)

    def write(self, x: float, y: float, label: str, style: Style | None = None) -> None:
        """Write a label starting at a layout point."""
        col = round(x / self.unit_x)
        row = round(y / self.unit_y)
        for offset, char in enumerate(label):
            self.put(col + offset, row, char, style)

    def char_at(self, col: int, row: int) -> str:
        """Return the character at a canvas position."""
        return self._chars[row][col]

    def add_layer(self, graphics: CanvasGraphics) -> None:
        """Attach a graphics layer; layers are painted by paint_layers()."""
        self.layers.append(graphics)

    def paint_layers(self) -> None:
        """Paint every attached graphics layer in order."""
        for layer in self.layers:
            layer.paint()

    def to_text(self) -> Text:
        """Render the canvas as rich Text."""
        text = Text()
        for row in range(self.rows):
            for col in range(self.columns):
                text.append(self._chars[row][col], self._styles[row][col])
            if row < self.rows - 1:
                text.append("\n")
        return text

    def to_plain(self) -> str:
        """Render the canvas as plain text lines."""
        return "\n".join("".join(line) for line in self._chars)


@dataclass(frozen=True)
class FilledRect:
    """One filled rectangle recorded by CanvasGraphics."""

    x: float
    y: float
    width: float
    height: float
    color: int
    alpha: float


class CanvasGraphics:
    """Records filled rectangles and paints them onto a CharCanvas.

    Implements the chainable DebugGraphics API used by ``Grid.draw_bounds``.
    """

    def __init__(self, canvas: CharCanvas | None = None) -> None:
        self.canvas = canvas
        self.shapes: list[FilledRect] = []
        self._fill: tuple[int, float] | None = None
        self.clear_count = 0

    def clear(self) -> CanvasGraphics:
        self.shapes.clear()
        self._fill = None
        self.clear_count += 1
        return self

    def begin_fill(self, color: int, alpha: float = 1.0) -> CanvasGraphics:
        self._fill = (color, alpha)
        return self

    def draw_rect(self, x: float, y: float, width: float, height: float) -> CanvasGraphics:
        color, alpha = self._fill if self._fill is not None else (0xFFFFFF, 1.0)
        self.shapes.append(FilledRect(x, y, width, height, color, alpha))
        return self

    def paint(self, canvas: CharCanvas | None = None) -> None:
        """Paint recorded shapes onto a canvas (defaults to the attached one)."""
        target = canvas if canvas is not None else self.canvas
        if target is None:
            return
        for shape in self.shapes:
            style = Style(color=color_to_hex(shape.color))
            target.fill_rect(
                shape.x, shape.y, shape.width, shape.height, shade_for_alpha(shape.alpha), style
            )


def canvas_graphics_factory(parent: Any) -> CanvasGraphics:
    """Graphics factory attaching new graphics to a CharCanvas parent."""
    canvas = parent if isinstance(parent, CharCanvas) else None
    graphics = CanvasGraphics(canvas)
    if canvas is not None:
        canvas.add_layer(graphics)
    return graphics


def render_layout(
    grid: Grid,
    canvas: CharCanvas,
    items: Iterable[Sprite] | None = None,
    *,
    show_bounds: bool = False,
) -> Text:
    """Paint a grid's cells, optional bounds and placed sprites.

    Cells are drawn in traversal order, then the debug bounds layer, then
    each sprite as a solid block labelled with its index. Sprites should be
    placed (``grid.update``) before rendering.

    Args:
        grid: The grid to preview
        canvas: Target canvas, covering the grid's coordinate space
        items: Sprites to draw (defaults to the grid's items that are Sprites)
        show_bounds: Draw the grid's debug rectangle

    Returns:
        The rendered canvas as rich Text
    """
    canvas.reset()
    for cell in grid.cells():
        canvas.outline_rect(cell.x, cell.y, cell.width, cell.height, CELL_STYLE)

    if show_bounds:
        debug_rect = grid.draw_bounds(canvas)
        if isinstance(debug_rect, CanvasGraphics):
            debug_rect.paint(canvas)

    sprites = list(items) if items is not None else [i for i in grid.items if isinstance(i, Sprite)]
    for index, sprite in enumerate(sprites):
        style = Style(color=ITEM_STYLES[index % len(ITEM_STYLES)])
        canvas.fill_rect(sprite.left, sprite.top, sprite.width, sprite.height, SHADE_FULL, style)
        canvas.write(sprite.left, sprite.top, sprite.name or str(index), Style(reverse=True) + style)

    return canvas.to_text()
