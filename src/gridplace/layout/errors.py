"""Exceptions raised by the gridplace layout engine.

All layout exceptions inherit from GridplaceError, allowing callers to
catch every layout failure with a single except clause. Overflow is not
an error and never raises; see ``gridplace.layout.grid.OverflowEvent``.
"""

from __future__ import annotations


class GridplaceError(Exception):
    """Base exception for layout errors.

    Attributes:
        suggestion: Optional hint for fixing the problem
    """

    def __init__(self, message: str, *, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.suggestion = suggestion

    def __str__(self) -> str:
        message = super().__str__()
        if self.suggestion:
            return f"{message} ({self.suggestion})"
        return message


class GridConfigError(GridplaceError, ValueError):
    """Raised when grid options are invalid (e.g. zero columns or rows)."""


class PlacementError(GridplaceError):
    """Raised when a placement policy needs a capability the item lacks."""


class UnknownPolicyError(GridplaceError, KeyError):
    """Raised when a placement policy name is not registered."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return GridplaceError.__str__(self)


class DebugGraphicsError(GridplaceError):
    """Raised when debug drawing is requested without a graphics factory."""
