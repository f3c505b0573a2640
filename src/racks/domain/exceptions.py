"""Exceptions raised by the rack domain.

These signal programming-logic errors: a correctly wired caller checks
placements with ``can_place`` first and never sees them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .value_objects import PlacementResult


class LayoutError(Exception):
    """Base class for layout invariant violations."""

    pass


class DuplicateSlugError(LayoutError):
    """Raised when adding a device type whose slug already exists."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"Device type '{slug}' already exists")


class UnknownDeviceTypeError(LayoutError):
    """Raised when a placed device references a slug that cannot be resolved."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"Unknown device type '{slug}'")


class PlacementError(LayoutError):
    """Raised when a placement would leave the rack out of bounds or colliding.

    Attributes:
        result: The failed placement check.
    """

    def __init__(self, message: str, result: PlacementResult | None = None) -> None:
        self.result = result
        super().__init__(message)
