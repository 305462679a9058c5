"""Data models for gridplace.

This module provides the value types used throughout gridplace:
- Bounds: The outer rectangle a grid subdivides
- CellRect: A computed grid cell
- Point: Mutable point for anchor, pivot and scale
- Sprite: A concrete positionable display object
"""

from gridplace.models.base import Bounds, CellRect, Point
from gridplace.models.sprite import Sprite

__all__ = [
    "Bounds",
    "CellRect",
    "Point",
    "Sprite",
]
