"""Grid layout engine for gridplace.

This module provides:
- GridOptions: Validated grid dimensions, gutters and default policy
- Axis: Traversal axis ("x" fills rows first, "y" fills columns first)
- Grid: Assigns items to cells and invokes their placement
- CellAssignment / LayoutPlan: The pure result of a traversal
- OverflowEvent: Diagnostic emitted when items wrap around the grid

Layout only happens when ``Grid.update`` is called. Changing bounds,
options or items has no visible effect until the next update.

Example:
    ```python
    grid = Grid(Bounds(width=300, height=200), num_columns=3, num_rows=2,
                layout=policies.center)
    grid.add(*sprites)
    grid.update("x")
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gridplace.layout import policies
from gridplace.layout.debug import DEBUG_FILL_ALPHA, DEBUG_FILL_COLOR, DebugGraphics, GraphicsFactory
from gridplace.layout.errors import DebugGraphicsError, GridConfigError
from gridplace.layout.targets import PlacementPolicy, resolve_placement
from gridplace.models.base import Bounds, CellRect

logger = logging.getLogger(__name__)


class Axis(str, Enum):
    """Primary traversal direction.

    Attributes:
        X: Advance the column first, wrapping to the next row
        Y: Advance the row first, wrapping to the next column
    """

    X = "x"
    Y = "y"

    @classmethod
    def parse(cls, value: Axis | str | None) -> Axis:
        """Parse an axis, falling back to X for unrecognized values."""
        if isinstance(value, Axis):
            return value
        try:
            return cls(value)
        except ValueError:
            logger.debug("Unrecognized axis %r, falling back to 'x'", value)
            return cls.X


class GridOptions(BaseModel):
    """Grid dimensions, gutters and default placement policy.

    Attributes:
        num_columns: Number of columns (at least 1)
        num_rows: Number of rows (at least 1)
        x_padding: Horizontal gutter between cells
        y_padding: Vertical gutter between cells
        layout: Default placement policy, or None to leave items untouched.
            A registered policy name is accepted in place of a function.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    num_columns: int = Field(default=1, ge=1)
    num_rows: int = Field(default=1, ge=1)
    x_padding: float = Field(default=0.0, ge=0)
    y_padding: float = Field(default=0.0, ge=0)
    layout: Callable[..., Any] | None = policies.xy

    @field_validator("layout", mode="before")
    @classmethod
    def resolve_policy_name(cls, v: Any) -> Any:
        """Look up policy names in the registry."""
        if isinstance(v, str):
            return policies.get_policy(v)
        return v

    @property
    def capacity(self) -> int:
        """Number of cells in the grid."""
        return self.num_columns * self.num_rows

    @classmethod
    def build(cls, base: GridOptions | None = None, **changes: Any) -> GridOptions:
        """Create validated options, raising GridConfigError on bad values.

        Args:
            base: Options to start from (defaults if None)
            **changes: Fields to override

        Returns:
            New GridOptions instance

        Raises:
            GridConfigError: If any value is out of range
            UnknownPolicyError: If ``layout`` names an unregistered policy
        """
        data = base.model_dump() if base is not None else {}
        data.update(changes)
        try:
            return cls(**data)
        except ValidationError as e:
            first = e.errors()[0]
            loc = ".".join(str(part) for part in first.get("loc", ()))
            unknown = [key for key in changes if key not in cls.model_fields]
            if unknown:
                raise GridConfigError(
                    f"Unknown grid option '{unknown[0]}'",
                    suggestion=f"valid options are {', '.join(cls.model_fields)}",
                ) from e
            raise GridConfigError(
                f"Invalid grid option '{loc}': {first.get('msg', 'invalid value')}",
                suggestion="columns and rows must be at least 1, padding must be non-negative",
            ) from e


@dataclass(frozen=True)
class CellAssignment:
    """One item mapped to one cell.

    Attributes:
        index: Position of the item in the grid's item list
        item: The item itself
        cell: The cell rectangle assigned to it
    """

    index: int
    item: Any
    cell: CellRect


@dataclass(frozen=True)
class OverflowEvent:
    """Emitted each time the traversal cursor wraps back to cell (0, 0).

    Filling the last cell wraps the cursor, so a grid holding exactly
    ``capacity`` items reports one event.

    Attributes:
        axis: Traversal axis of the pass
        capacity: Number of cells in the grid
        item_index: Index of the item whose placement wrapped the cursor
        wrap_count: How many wraps have happened so far in this pass
    """

    axis: Axis
    capacity: int
    item_index: int
    wrap_count: int

    @property
    def message(self) -> str:
        return (
            f"items have wrapped around: all {self.capacity} cells used "
            f"(wrap {self.wrap_count} after item {self.item_index}, axis '{self.axis.value}')"
        )


@dataclass
class LayoutPlan:
    """Result of a traversal: assignments in item order plus overflow events."""

    axis: Axis
    assignments: list[CellAssignment] = field(default_factory=list)
    overflows: list[OverflowEvent] = field(default_factory=list)

    def __iter__(self) -> Iterator[CellAssignment]:
        return iter(self.assignments)

    def __len__(self) -> int:
        return len(self.assignments)

    @property
    def wrapped(self) -> bool:
        return bool(self.overflows)


OverflowCallback = Callable[[OverflowEvent], None]


class Grid:
    """Positions items into the cells of a rectangular region.

    The grid holds non-owning references to its items and never creates,
    destroys or parents them. Items are laid out in insertion order; an
    item that defines ``layout(x, y, width, height)`` places itself,
    anything else is placed by the grid's default policy.

    Attributes:
        bounds: The region being subdivided (mutated by set_bounds)
        options: Grid dimensions, gutters and default policy
        overflow_count: Total number of wraps emitted by update()
    """

    def __init__(
        self,
        bounds: Bounds | None = None,
        options: GridOptions | None = None,
        *,
        graphics_factory: GraphicsFactory | None = None,
        on_overflow: OverflowCallback | None = None,
        **option_overrides: Any,
    ) -> None:
        """Initialize the grid.

        Args:
            bounds: Region to subdivide. Defaults to an empty rectangle.
            options: Grid options. Defaults to one cell, no padding, ``xy``.
            graphics_factory: Creates the debug rectangle for draw_bounds()
            on_overflow: Called with an OverflowEvent on every wrap
            **option_overrides: GridOptions fields overriding ``options``
                (e.g. ``num_columns=3, layout="center"``)

        Raises:
            GridConfigError: If the resulting options are invalid
        """
        self.bounds = bounds if bounds is not None else Bounds()
        if option_overrides or options is None:
            options = GridOptions.build(options, **option_overrides)
        self._options = options
        self._items: list[Any] = []
        self._graphics_factory = graphics_factory
        self._debug_rect: DebugGraphics | None = None
        self._on_overflow = on_overflow
        self.overflow_count = 0

    @property
    def options(self) -> GridOptions:
        """Current grid options."""
        return self._options

    @property
    def items(self) -> list[Any]:
        """Items in traversal order (copy)."""
        return self._items.copy()

    @property
    def capacity(self) -> int:
        """Number of cells."""
        return self._options.capacity

    @property
    def debug_rect(self) -> DebugGraphics | None:
        """The debug rectangle, once draw_bounds() has created it."""
        return self._debug_rect

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items.copy())

    def __repr__(self) -> str:
        o = self._options
        return (
            f"Grid({o.num_columns}x{o.num_rows}, bounds={self.bounds.as_tuple()}, "
            f"items={len(self._items)})"
        )

    def add(self, *items: Any) -> None:
        """Append items. Duplicates are kept; items are not otherwise touched."""
        self._items.extend(items)

    def remove(self, *items: Any) -> None:
        """Remove every occurrence of each item, compared by identity.

        Items that are not in the grid are ignored.
        """
        doomed = {id(item) for item in items}
        self._items = [item for item in self._items if id(item) not in doomed]

    def clear(self) -> None:
        """Remove all items."""
        self._items.clear()

    def set_bounds(self, x: float, y: float, width: float, height: float) -> None:
        """Replace the bounds in place. Takes effect on the next update()."""
        self.bounds.x = x
        self.bounds.y = y
        self.bounds.width = width
        self.bounds.height = height

    def configure(self, **changes: Any) -> GridOptions:
        """Replace some grid options. Takes effect on the next update().

        Raises:
            GridConfigError: If the new options are invalid
        """
        self._options = GridOptions.build(self._options, **changes)
        return self._options

    def cell_size(self) -> tuple[float, float]:
        """Width and height shared by every cell."""
        o = self._options
        width = (self.bounds.width - (o.num_columns - 1) * o.x_padding) / o.num_columns
        height = (self.bounds.height - (o.num_rows - 1) * o.y_padding) / o.num_rows
        return width, height

    def cell_rect(self, column: int, row: int) -> CellRect:
        """Compute the rectangle of a cell.

        Raises:
            IndexError: If column or row is outside the grid
        """
        o = self._options
        if not (0 <= column < o.num_columns) or not (0 <= row < o.num_rows):
            raise IndexError(f"Cell ({column}, {row}) is outside a {o.num_columns}x{o.num_rows} grid")
        return self._cell(column, row, *self.cell_size())

    def _cell(self, column: int, row: int, width: float, height: float) -> CellRect:
        o = self._options
        return CellRect(
            column=column,
            row=row,
            x=self.bounds.x + column * width + o.x_padding * column,
            y=self.bounds.y + row * height + o.y_padding * row,
            width=width,
            height=height,
        )

    def cells(self, axis: Axis | str = Axis.X) -> list[CellRect]:
        """All cells in traversal order for the given axis."""
        axis = Axis.parse(axis)
        o = self._options
        width, height = self.cell_size()
        if axis is Axis.X:
            coords = [(c, r) for r in range(o.num_rows) for c in range(o.num_columns)]
        else:
            coords = [(c, r) for c in range(o.num_columns) for r in range(o.num_rows)]
        return [self._cell(c, r, width, height) for c, r in coords]

    def plan(self, axis: Axis | str = Axis.X) -> LayoutPlan:
        """Assign every item to a cell without placing anything.

        Args:
            axis: "x" advances columns first, "y" advances rows first.
                Anything else is treated as "x".

        Returns:
            LayoutPlan with one assignment per item and one OverflowEvent
            per wrap of the cursor back to (0, 0)
        """
        axis = Axis.parse(axis)
        o = self._options
        width, height = self.cell_size()
        plan = LayoutPlan(axis=axis)

        column = 0
        row = 0
        for index, item in enumerate(self._items):
            plan.assignments.append(CellAssignment(index, item, self._cell(column, row, width, height)))

            wrapped = False
            if axis is Axis.X:
                column += 1
                if column >= o.num_columns:
                    column = 0
                    row += 1
                    if row >= o.num_rows:
                        row = 0
                        wrapped = True
            else:
                row += 1
                if row >= o.num_rows:
                    row = 0
                    column += 1
                    if column >= o.num_columns:
                        column = 0
                        wrapped = True

            if wrapped:
                plan.overflows.append(
                    OverflowEvent(
                        axis=axis,
                        capacity=o.capacity,
                        item_index=index,
                        wrap_count=len(plan.overflows) + 1,
                    )
                )

        return plan

    def update(self, axis: Axis | str = Axis.X) -> None:
        """Lay out every item.

        Each item is assigned a cell (see plan()) and placed by its own
        ``layout`` method, else by the grid's default policy, else left
        untouched. Each time the cursor wraps past the last cell an
        OverflowEvent is reported after placing the item that filled it;
        later items reuse earlier cells.

        Args:
            axis: "x" or "y"; unrecognized values are treated as "x"
        """
        plan = self.plan(axis)
        overflows = iter(plan.overflows)
        pending = next(overflows, None)
        default = self._options.layout

        for assignment in plan:
            resolve_placement(assignment.item, default).apply(assignment.cell)
            if pending is not None and pending.item_index == assignment.index:
                self._report_overflow(pending)
                pending = next(overflows, None)

    def _report_overflow(self, event: OverflowEvent) -> None:
        self.overflow_count += 1
        logger.warning(event.message)
        if self._on_overflow is not None:
            self._on_overflow(event)

    def draw_bounds(self, parent: Any = None) -> DebugGraphics:
        """Draw the current bounds as a semi-transparent red rectangle.

        The debug rectangle is created on the first call with the grid's
        graphics factory and reused afterwards.

        Args:
            parent: Passed to the graphics factory on first call

        Returns:
            The debug rectangle

        Raises:
            DebugGraphicsError: If the grid has no graphics factory
        """
        if self._debug_rect is None:
            if self._graphics_factory is None:
                raise DebugGraphicsError(
                    "Cannot draw bounds: grid has no graphics factory",
                    suggestion="pass graphics_factory=... when creating the Grid",
                )
            logger.debug("Creating debug rectangle for %r", self)
            self._debug_rect = self._graphics_factory(parent)

        b = self.bounds
        self._debug_rect.clear().begin_fill(DEBUG_FILL_COLOR, DEBUG_FILL_ALPHA).draw_rect(
            b.x, b.y, b.width, b.height
        )
        return self._debug_rect
