"""Placement targets: what a grid can do with an item.

An item either brings its own ``layout(x, y, width, height)`` method, or it
only accepts a position and is placed by a policy function. The grid
resolves each item into one of the two target kinds once per update pass.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from gridplace.models.base import CellRect

PlacementPolicy = Callable[[Any, float, float, float, float], None]
"""Signature of a placement policy: ``policy(item, x, y, width, height)``."""


@runtime_checkable
class Positionable(Protocol):
    """Anything with an assignable position."""

    x: float
    y: float


@runtime_checkable
class HasCustomLayout(Protocol):
    """An item that interprets its own cell."""

    def layout(self, x: float, y: float, width: float, height: float) -> None: ...


@dataclass(frozen=True)
class CustomLayoutTarget:
    """Target whose own ``layout`` method is called."""

    item: HasCustomLayout

    def apply(self, cell: CellRect) -> None:
        self.item.layout(cell.x, cell.y, cell.width, cell.height)


@dataclass(frozen=True)
class PositionOnlyTarget:
    """Target placed by a policy function, or left untouched if there is none."""

    item: Positionable
    policy: PlacementPolicy | None

    def apply(self, cell: CellRect) -> None:
        if self.policy is None:
            return
        self.policy(self.item, cell.x, cell.y, cell.width, cell.height)


PlacementTarget = CustomLayoutTarget | PositionOnlyTarget


def has_custom_layout(item: Any) -> bool:
    """Check whether an item exposes a callable ``layout`` method."""
    return isinstance(item, HasCustomLayout) and callable(getattr(item, "layout", None))


def resolve_placement(item: Any, default: PlacementPolicy | None) -> PlacementTarget:
    """Resolve how an item should be placed.

    The item's own ``layout`` override wins over the grid's default policy.

    Args:
        item: The item being placed
        default: The grid's configured policy (may be None)

    Returns:
        A CustomLayoutTarget or PositionOnlyTarget
    """
    if has_custom_layout(item):
        return CustomLayoutTarget(item)
    return PositionOnlyTarget(item, default)
