"""Tests for the character canvas renderer."""

import pytest
from rich.text import Text

from gridplace.layout.grid import Grid
from gridplace.models import Bounds, Sprite
from gridplace.render import CanvasGraphics, CharCanvas, canvas_graphics_factory, render_layout
from gridplace.render.canvas import SHADE_FULL, SHADE_LIGHT, SHADE_MEDIUM, color_to_hex, shade_for_alpha


class TestHelpers:
    """Tests for color and shading helpers."""

    def test_color_to_hex(self) -> None:
        """Test integer colors convert to hex strings."""
        assert color_to_hex(0xFF0000) == "#ff0000"
        assert color_to_hex(0x00FF00) == "#00ff00"

    @pytest.mark.parametrize(
        ("alpha", "shade"),
        [(1.0, SHADE_FULL), (0.5, SHADE_MEDIUM), (0.2, SHADE_LIGHT)],
    )
    def test_shade_for_alpha(self, alpha: float, shade: str) -> None:
        """Test opacity picks a shading character."""
        assert shade_for_alpha(alpha) == shade


class TestCharCanvas:
    """Tests for CharCanvas drawing."""

    def test_invalid_size(self) -> None:
        """Test non-positive sizes are rejected."""
        with pytest.raises(ValueError):
            CharCanvas(0, 5)
        with pytest.raises(ValueError):
            CharCanvas(5, 5, unit_x=0)

    def test_fit_units(self) -> None:
        """Test fit maps the layout area onto the canvas."""
        canvas = CharCanvas.fit(300, 200, 60, 20)
        assert canvas.unit_x == 5
        assert canvas.unit_y == 10

    def test_fill_rect(self) -> None:
        """Test filling maps layout units to characters."""
        canvas = CharCanvas(10, 4, unit_x=10, unit_y=10)
        canvas.fill_rect(20, 10, 30, 20, "#")
        assert canvas.to_plain().splitlines() == [
            "          ",
            "  ###     ",
            "  ###     ",
            "          ",
        ]

    def test_outline_rect(self) -> None:
        """Test outlines use box-drawing corners."""
        canvas = CharCanvas(4, 3)
        canvas.outline_rect(0, 0, 4, 3)
        assert canvas.to_plain().splitlines() == ["┌──┐", "│  │", "└──┘"]

    def test_clipping(self) -> None:
        """Test drawing outside the canvas is clipped."""
        canvas = CharCanvas(3, 1)
        canvas.write(1, 0, "hello")
        assert canvas.to_plain() == " he"

    def test_reset(self) -> None:
        """Test reset blanks the canvas."""
        canvas = CharCanvas(2, 1)
        canvas.put(0, 0, "x")
        canvas.reset()
        assert canvas.char_at(0, 0) == " "

    def test_to_text(self) -> None:
        """Test rendering to rich Text keeps the characters."""
        canvas = CharCanvas(2, 2)
        canvas.put(1, 1, "x")
        text = canvas.to_text()
        assert isinstance(text, Text)
        assert text.plain == "  \n x"


class TestCanvasGraphics:
    """Tests for the debug graphics layer."""

    def test_chaining(self) -> None:
        """Test clear/begin_fill/draw_rect chain and record shapes."""
        graphics = CanvasGraphics()
        result = graphics.clear().begin_fill(0xFF0000, 0.5).draw_rect(0, 0, 10, 10)
        assert result is graphics
        assert len(graphics.shapes) == 1
        assert graphics.shapes[0].alpha == 0.5

    def test_clear_discards_shapes(self) -> None:
        """Test clear removes previously drawn shapes."""
        graphics = CanvasGraphics()
        graphics.draw_rect(0, 0, 1, 1)
        graphics.clear()
        assert graphics.shapes == []
        assert graphics.clear_count == 1

    def test_factory_attaches_layer(self) -> None:
        """Test the factory registers the graphics with a canvas parent."""
        canvas = CharCanvas(4, 2)
        graphics = canvas_graphics_factory(canvas)
        assert graphics.canvas is canvas
        assert canvas.layers == [graphics]
        graphics.begin_fill(0xFF0000, 0.5).draw_rect(0, 0, 4, 2)
        canvas.paint_layers()
        assert canvas.to_plain() == SHADE_MEDIUM * 4 + "\n" + SHADE_MEDIUM * 4

    def test_factory_without_canvas(self) -> None:
        """Test the factory works for non-canvas parents."""
        graphics = canvas_graphics_factory(None)
        assert graphics.canvas is None
        graphics.paint()


class TestRenderLayout:
    """Tests for rendering a laid-out grid."""

    def test_renders_cells_and_sprites(self) -> None:
        """Test cell outlines and sprite labels appear on the canvas."""
        grid = Grid(Bounds(width=40, height=10), num_columns=2, num_rows=1)
        sprites = [Sprite(5, 5, name="a"), Sprite(5, 5, name="b")]
        grid.add(*sprites)
        grid.update()
        canvas = CharCanvas.fit(40, 10, 40, 10)
        text = render_layout(grid, canvas)
        lines = text.plain.splitlines()
        assert lines[0].startswith("a")
        assert lines[0][20] == "b"
        assert lines[9][0] == "└"

    def test_show_bounds_uses_debug_rect(self) -> None:
        """Test show_bounds draws the grid's bounds rectangle."""
        grid = Grid(Bounds(width=20, height=4), graphics_factory=canvas_graphics_factory)
        canvas = CharCanvas.fit(20, 4, 20, 4)
        text = render_layout(grid, canvas, [], show_bounds=True)
        assert set(text.plain.replace("\n", "")) == {SHADE_MEDIUM}
        assert grid.debug_rect is not None

    def test_rerender_reuses_debug_rect(self) -> None:
        """Test rendering twice keeps a single debug rectangle."""
        grid = Grid(Bounds(width=20, height=4), graphics_factory=canvas_graphics_factory)
        canvas = CharCanvas.fit(20, 4, 20, 4)
        render_layout(grid, canvas, [], show_bounds=True)
        first = grid.debug_rect
        render_layout(grid, canvas, [], show_bounds=True)
        assert grid.debug_rect is first
