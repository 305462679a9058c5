"""Tests for the gridplace preview application.

This module tests:
- GridPreviewApp instantiation from configuration
- Application lifecycle (startup/shutdown)
- Keyboard bindings for axis, items and bounds
"""

import pytest

from gridplace import __version__
from gridplace.config import Config, load_config
from gridplace.layout.grid import Axis
from gridplace.tui import GridPreviewApp
from gridplace.tui.app import LayoutPreview, StatusBar


def small_config(**preview: object) -> Config:
    return Config(
        grid={"columns": 2, "rows": 2},
        preview={"items": 3, "canvas_width": 20, "canvas_height": 6, **preview},
    )


class TestGridPreviewAppInstantiation:
    """Tests for GridPreviewApp instantiation."""

    def test_instantiate_without_config(self) -> None:
        """Test the app falls back to default settings."""
        app = GridPreviewApp()
        assert app.settings.grid.columns == 1
        assert len(app.sprites) == 6

    def test_instantiate_with_config(self) -> None:
        """Test the app builds its grid from the given config."""
        config = small_config()
        app = GridPreviewApp(config=config)
        assert app.settings is config
        assert app.grid.capacity == 4
        assert len(app.grid) == 3

    def test_app_title_has_version(self) -> None:
        """Test the title contains the version."""
        assert __version__ in GridPreviewApp.TITLE

    def test_status_text(self) -> None:
        """Test the status line summarizes the grid."""
        app = GridPreviewApp(small_config())
        assert app.status_text() == "2x2 grid | axis x | 3 items"


class TestGridPreviewAppLifecycle:
    """Tests for GridPreviewApp lifecycle using Textual's pilot."""

    @pytest.mark.asyncio
    async def test_app_startup(self) -> None:
        """Test the app composes its widgets and lays out items."""
        app = GridPreviewApp(small_config())
        async with app.run_test() as pilot:
            assert pilot.app is app
            assert len(app.query(StatusBar)) == 1
            assert len(app.query(LayoutPreview)) == 1
            assert len(app.query("Footer")) == 1
            assert (app.sprites[1].x, app.sprites[1].y) == (150, 0)

    @pytest.mark.asyncio
    async def test_app_shutdown_with_quit_key(self) -> None:
        """Test the app exits with 'q'."""
        app = GridPreviewApp(small_config())
        async with app.run_test() as pilot:
            await pilot.press("q")

    @pytest.mark.asyncio
    async def test_app_with_loaded_config(self) -> None:
        """Test the app runs with a config from load_config."""
        config = load_config()
        app = GridPreviewApp(config=config)
        async with app.run_test() as pilot:
            assert pilot.app.settings is config


class TestKeyboardBindings:
    """Tests for the preview key bindings."""

    @pytest.mark.asyncio
    async def test_axis_keys(self) -> None:
        """Test 'y' and 'x' switch the traversal axis and relayout."""
        app = GridPreviewApp(small_config())
        async with app.run_test() as pilot:
            await pilot.press("y")
            assert app.axis is Axis.Y
            assert (app.sprites[1].x, app.sprites[1].y) == (0, 100)
            await pilot.press("x")
            assert app.axis is Axis.X
            assert (app.sprites[1].x, app.sprites[1].y) == (150, 0)

    @pytest.mark.asyncio
    async def test_add_and_remove_items(self) -> None:
        """Test '+' adds an item and '-' removes the last one."""
        app = GridPreviewApp(small_config())
        async with app.run_test() as pilot:
            await pilot.press("plus")
            assert len(app.grid) == 4
            await pilot.press("minus")
            await pilot.press("minus")
            assert len(app.grid) == 2
            assert app.grid.items == app.sprites

    @pytest.mark.asyncio
    async def test_overflow_in_status(self) -> None:
        """Test wrapping is shown in the status line."""
        app = GridPreviewApp(small_config(items=3))
        async with app.run_test() as pilot:
            assert "wrapped" not in app.status_text()
            await pilot.press("plus")
            assert app.status_text().endswith("| wrapped 1x")

    @pytest.mark.asyncio
    async def test_remove_from_empty(self) -> None:
        """Test '-' on an empty grid does nothing."""
        app = GridPreviewApp(small_config(items=0))
        async with app.run_test() as pilot:
            await pilot.press("minus")
            assert len(app.grid) == 0

    @pytest.mark.asyncio
    async def test_toggle_bounds(self) -> None:
        """Test 'b' toggles the bounds rectangle."""
        app = GridPreviewApp(small_config())
        async with app.run_test() as pilot:
            assert app.show_bounds is False
            await pilot.press("b")
            assert app.show_bounds is True
            assert app.grid.debug_rect is not None
            await pilot.press("b")
            assert app.show_bounds is False
