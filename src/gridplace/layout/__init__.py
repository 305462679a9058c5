"""Layout engine for gridplace.

This module provides grid-based placement of items:
- Grid: Assigns items to cells and invokes their placement
- GridOptions: Columns, rows, gutters and default policy
- Placement policies: xy, center, center_x, center_y, center_and_scale_to_fit
- Placement targets: custom-layout vs position-only items
"""

from gridplace.layout.debug import DebugGraphics, GraphicsFactory
from gridplace.layout.errors import (
    DebugGraphicsError,
    GridConfigError,
    GridplaceError,
    PlacementError,
    UnknownPolicyError,
)
from gridplace.layout.grid import (
    Axis,
    CellAssignment,
    Grid,
    GridOptions,
    LayoutPlan,
    OverflowEvent,
)
from gridplace.layout.policies import (
    POLICIES,
    center,
    center_and_scale_to_fit,
    center_x,
    center_y,
    get_policy,
    register_policy,
    xy,
)
from gridplace.layout.targets import (
    CustomLayoutTarget,
    HasCustomLayout,
    PlacementPolicy,
    PlacementTarget,
    PositionOnlyTarget,
    Positionable,
    resolve_placement,
)

__all__ = [
    # Engine
    "Axis",
    "CellAssignment",
    "Grid",
    "GridOptions",
    "LayoutPlan",
    "OverflowEvent",
    # Policies
    "POLICIES",
    "center",
    "center_and_scale_to_fit",
    "center_x",
    "center_y",
    "get_policy",
    "register_policy",
    "xy",
    # Targets
    "CustomLayoutTarget",
    "HasCustomLayout",
    "PlacementPolicy",
    "PlacementTarget",
    "PositionOnlyTarget",
    "Positionable",
    "resolve_placement",
    # Debug drawing
    "DebugGraphics",
    "GraphicsFactory",
    # Errors
    "DebugGraphicsError",
    "GridConfigError",
    "GridplaceError",
    "PlacementError",
    "UnknownPolicyError",
]
