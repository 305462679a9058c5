"""Geometry models for gridplace.

This module defines the value types the layout engine works with:
- Bounds: The mutable outer rectangle a grid subdivides
- CellRect: One computed cell of a grid (immutable)
- Point: A mutable 2D point used for anchors, pivots and scale factors
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class Bounds(BaseModel):
    """The outer rectangle subdivided into grid cells.

    Bounds are owned by a Grid and mutated in place by ``Grid.set_bounds``.
    Negative sizes are accepted and simply produce degenerate cells.

    Attributes:
        x: Left edge
        y: Top edge
        width: Horizontal extent
        height: Vertical extent
    """

    model_config = ConfigDict(validate_assignment=True)

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def right(self) -> float:
        """Right edge of the rectangle."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge of the rectangle."""
        return self.y + self.height

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Return ``(x, y, width, height)``."""
        return (self.x, self.y, self.width, self.height)


class CellRect(BaseModel):
    """A single grid cell, indexed by column and row.

    Attributes:
        column: Column index (0-based)
        row: Row index (0-based)
        x: Left edge of the cell
        y: Top edge of the cell
        width: Cell width (bounds width minus gutters, divided by columns)
        height: Cell height (bounds height minus gutters, divided by rows)
    """

    model_config = ConfigDict(frozen=True)

    column: int = Field(ge=0)
    row: int = Field(ge=0)
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        """Center point of the cell."""
        return (self.x + self.width / 2, self.y + self.height / 2)

    def contains(self, x: float, y: float) -> bool:
        """Check whether a point lies inside the cell (edges inclusive)."""
        return self.x <= x <= self.x + self.width and self.y <= y <= self.y + self.height


@dataclass
class Point:
    """Mutable 2D point.

    Display objects use points for anchor, pivot and scale, and placement
    policies write to them in place.
    """

    x: float = 0.0
    y: float = 0.0
