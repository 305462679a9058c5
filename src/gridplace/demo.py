"""Demo grids built from configuration.

The CLI and the preview app lay out placeholder sprites sized by the
``preview`` config section.
"""

from __future__ import annotations

from gridplace.config import Config
from gridplace.layout.grid import Grid, OverflowCallback
from gridplace.models.sprite import Sprite
from gridplace.render.canvas import canvas_graphics_factory


def make_sprite(config: Config, index: int) -> Sprite:
    """Create the demo sprite for an item index."""
    return Sprite(
        config.preview.item_width,
        config.preview.item_height,
        name=str(index),
    )


def build_demo_grid(
    config: Config, on_overflow: OverflowCallback | None = None
) -> tuple[Grid, list[Sprite]]:
    """Build a grid and its demo sprites from configuration.

    Args:
        config: Loaded configuration
        on_overflow: Optional callback for overflow events

    Returns:
        Tuple of (grid, sprites), with the sprites already added
    """
    grid = Grid(
        config.make_bounds(),
        config.grid_options(),
        graphics_factory=canvas_graphics_factory,
        on_overflow=on_overflow,
    )
    sprites = [make_sprite(config, i) for i in range(config.preview.items)]
    grid.add(*sprites)
    return grid, sprites
