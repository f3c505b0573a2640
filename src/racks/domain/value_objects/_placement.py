"""Placement validation result value objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PlacementStatus(str, Enum):
    """Outcome of checking a candidate placement.

    Attributes:
        VALID: The device fits and collides with nothing.
        BLOCKED: The device is in bounds but overlaps a colliding device.
        INVALID: Out of bounds or the device type cannot be resolved.
    """

    VALID = "valid"
    BLOCKED = "blocked"
    INVALID = "invalid"


@dataclass(frozen=True)
class PlacementResult:
    """Detailed result of a placement check.

    Attributes:
        status: Overall placement status.
        reason: Human-readable explanation, empty when valid.
        collisions: Indices of existing devices the candidate collides with.
    """

    status: PlacementStatus
    reason: str = ""
    collisions: tuple[int, ...] = ()

    @property
    def is_valid(self) -> bool:
        """Check if the placement can be committed."""
        return self.status is PlacementStatus.VALID

    @classmethod
    def valid(cls) -> PlacementResult:
        return cls(status=PlacementStatus.VALID)

    @classmethod
    def invalid(cls, reason: str) -> PlacementResult:
        return cls(status=PlacementStatus.INVALID, reason=reason)

    @classmethod
    def blocked(cls, reason: str, collisions: tuple[int, ...]) -> PlacementResult:
        return cls(status=PlacementStatus.BLOCKED, reason=reason, collisions=collisions)
