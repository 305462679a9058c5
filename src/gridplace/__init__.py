"""gridplace - position rectangular items into the cells of a grid.

Example:
    ```python
    from gridplace import Bounds, Grid, policies

    grid = Grid(Bounds(width=300, height=200), num_columns=3, num_rows=2,
                layout=policies.center)
    grid.add(*items)
    grid.update("x")
    ```
"""

__version__ = "0.1.0"

from gridplace.layout import (  # noqa: E402
    Axis,
    Grid,
    GridConfigError,
    GridOptions,
    GridplaceError,
    OverflowEvent,
    PlacementError,
    UnknownPolicyError,
    get_policy,
)
from gridplace.layout import policies  # noqa: E402
from gridplace.models import Bounds, CellRect, Point, Sprite  # noqa: E402

__all__ = [
    "__version__",
    "Axis",
    "Bounds",
    "CellRect",
    "Grid",
    "GridConfigError",
    "GridOptions",
    "GridplaceError",
    "OverflowEvent",
    "PlacementError",
    "Point",
    "Sprite",
    "UnknownPolicyError",
    "get_policy",
    "policies",
]
