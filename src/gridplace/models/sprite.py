"""A minimal display object that can be positioned by a grid.

Sprite stands in for the display objects of a scene graph: it has a
position, a fixed frame size and mutable scale, anchor and pivot points.
Assigning ``width`` or ``height`` rescales the sprite rather than resizing
its frame, which is the behavior the scale-aware placement policies rely on.
"""

from __future__ import annotations

from typing import Any

from gridplace.models.base import Point


class Sprite:
    """Positionable, scalable rectangular item.

    Attributes:
        name: Label used by the CLI and previews
        x: Horizontal position
        y: Vertical position
        frame_width: Unscaled width
        frame_height: Unscaled height
        scale: Scale factors applied to the frame
        anchor: Normalized origin within the frame (0..1 on each axis)
        pivot: Pivot offset in frame units
    """

    def __init__(
        self,
        frame_width: float,
        frame_height: float,
        *,
        name: str = "",
        x: float = 0.0,
        y: float = 0.0,
        anchor: Point | None = None,
        pivot: Point | None = None,
        scale: Point | None = None,
    ) -> None:
        if frame_width <= 0 or frame_height <= 0:
            raise ValueError("Sprite frame size must be positive")
        self.name = name
        self.x = x
        self.y = y
        self.frame_width = frame_width
        self.frame_height = frame_height
        self.anchor = anchor or Point(0.0, 0.0)
        self.pivot = pivot or Point(0.0, 0.0)
        self.scale = scale or Point(1.0, 1.0)

    @property
    def width(self) -> float:
        """Scaled width."""
        return self.frame_width * self.scale.x

    @width.setter
    def width(self, value: float) -> None:
        self.scale.x = value / self.frame_width

    @property
    def height(self) -> float:
        """Scaled height."""
        return self.frame_height * self.scale.y

    @height.setter
    def height(self, value: float) -> None:
        self.scale.y = value / self.frame_height

    @property
    def left(self) -> float:
        """Left edge of the visible box, taking anchor and pivot into account."""
        return self.x - self.anchor.x * self.width - self.pivot.x * self.scale.x

    @property
    def top(self) -> float:
        """Top edge of the visible box, taking anchor and pivot into account."""
        return self.y - self.anchor.y * self.height - self.pivot.y * self.scale.y

    def to_dict(self) -> dict[str, Any]:
        """Serialize the sprite's placed state."""
        return {
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "scale": [self.scale.x, self.scale.y],
        }

    def __repr__(self) -> str:
        return (
            f"Sprite(name={self.name!r}, x={self.x:g}, y={self.y:g}, "
            f"width={self.width:g}, height={self.height:g})"
        )
