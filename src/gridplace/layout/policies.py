"""Built-in placement policies.

A placement policy interprets a cell rectangle for one item:

- xy: Snap the item's position to the cell's top-left corner
- center_x / center_y / center: Center the item's visible box in the cell
- center_and_scale_to_fit: Scale uniformly to fit the cell, then center

Every policy has the signature ``policy(item, x, y, width, height)`` and
mutates the item in place. The centering math reads the item's optional
``anchor``, ``pivot`` and ``scale`` points; missing anchors and pivots
contribute no offset and a missing scale counts as 1.

Policies are registered by name in POLICIES so configuration files and the
CLI can refer to them.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any

from gridplace.layout.errors import PlacementError, UnknownPolicyError
from gridplace.layout.targets import PlacementPolicy


def _anchor_offset(item: Any, axis: str, size: float) -> float:
    anchor = getattr(item, "anchor", None)
    if anchor is None:
        return 0.0
    return getattr(anchor, axis) * size


def _pivot_offset(item: Any, axis: str) -> float:
    pivot = getattr(item, "pivot", None)
    if pivot is None:
        return 0.0
    scale = getattr(item, "scale", None)
    factor = getattr(scale, axis) if scale is not None else 1.0
    return getattr(pivot, axis) * factor


def xy(item: Any, x: float, y: float, width: float = 0.0, height: float = 0.0) -> None:
    """Place the item at the cell's top-left corner, ignoring its size."""
    item.x = x
    item.y = y


def center_x(item: Any, x: float, y: float, width: float, height: float) -> None:
    """Center the item horizontally within the cell."""
    item.x = (
        x
        + _anchor_offset(item, "x", item.width)
        + _pivot_offset(item, "x")
        + width / 2
        - item.width / 2
    )


def center_y(item: Any, x: float, y: float, width: float, height: float) -> None:
    """Center the item vertically within the cell."""
    item.y = (
        y
        + _anchor_offset(item, "y", item.height)
        + _pivot_offset(item, "y")
        + height / 2
        - item.height / 2
    )


def center(item: Any, x: float, y: float, width: float, height: float) -> None:
    """Center the item on both axes."""
    center_x(item, x, y, width, height)
    center_y(item, x, y, width, height)


def center_and_scale_to_fit(item: Any, x: float, y: float, width: float, height: float) -> None:
    """Scale the item uniformly so it fits the cell, then center it.

    The fit is done in two passes: the item is first stretched to the cell
    width with its y-scale copied from its x-scale. If it is then taller
    than the cell, it is shrunk to the cell height and the x-scale copied
    back from the y-scale. The item's aspect ratio is preserved.

    Args:
        item: Item with settable ``width``/``height`` and a ``scale`` point
        x: Cell left edge
        y: Cell top edge
        width: Cell width
        height: Cell height

    Raises:
        PlacementError: If the item has no ``scale`` point
    """
    scale = getattr(item, "scale", None)
    if scale is None:
        raise PlacementError(
            f"{type(item).__name__} cannot be scaled to fit: it has no 'scale'",
            suggestion="use the 'center' policy for items without a scale",
        )

    item.width = width
    scale.y = scale.x
    if item.height > height:
        item.height = height
        scale.x = scale.y

    item.x = (
        x
        + _anchor_offset(item, "x", item.width)
        + _pivot_offset(item, "x")
        + (width - item.width) / 2
    )
    item.y = (
        y
        + _anchor_offset(item, "y", item.height)
        + _pivot_offset(item, "y")
        + (height - item.height) / 2
    )


POLICIES: dict[str, PlacementPolicy] = {
    "xy": xy,
    "center": center,
    "center_x": center_x,
    "center_y": center_y,
    "center_and_scale_to_fit": center_and_scale_to_fit,
}

# camelCase spellings accepted in config files
POLICY_ALIASES: dict[str, str] = {
    "centerX": "center_x",
    "centerY": "center_y",
    "centerAndScaleToFit": "center_and_scale_to_fit",
    "scale_to_fit": "center_and_scale_to_fit",
    "identity": "xy",
}

DEFAULT_POLICY_NAME = "xy"


def policy_names() -> list[str]:
    """Return the registered policy names in registration order."""
    return list(POLICIES)


def get_policy(name: str) -> PlacementPolicy:
    """Look up a placement policy by name.

    Args:
        name: Registered name or alias (e.g. "center", "centerAndScaleToFit")

    Returns:
        The policy function

    Raises:
        UnknownPolicyError: If no policy matches the name
    """
    key = POLICY_ALIASES.get(name, name)
    try:
        return POLICIES[key]
    except KeyError:
        matches = get_close_matches(key, list(POLICIES) + list(POLICY_ALIASES), n=1, cutoff=0.6)
        suggestion = f"did you mean '{matches[0]}'?" if matches else None
        raise UnknownPolicyError(
            f"Unknown placement policy '{name}'. Available: {', '.join(POLICIES)}",
            suggestion=suggestion,
        ) from None


def policy_name(policy: PlacementPolicy | None) -> str | None:
    """Return the registered name of a policy, or None for custom functions."""
    if policy is None:
        return None
    for name, registered in POLICIES.items():
        if registered is policy:
            return name
    return None


def register_policy(name: str, policy: PlacementPolicy, *, replace: bool = False) -> None:
    """Register a custom placement policy under a name.

    Args:
        name: Name used in configuration and on the command line
        policy: Function with signature ``policy(item, x, y, width, height)``
        replace: Allow overwriting an existing registration

    Raises:
        ValueError: If the name is an alias, or is already registered and
            replace is False
    """
    if name in POLICY_ALIASES:
        raise ValueError(
            f"'{name}' is an alias for placement policy '{POLICY_ALIASES[name]}'"
        )
    if name in POLICIES and not replace:
        raise ValueError(f"Placement policy '{name}' is already registered")
    POLICIES[name] = policy
