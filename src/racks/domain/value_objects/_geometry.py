"""Rack-unit interval value objects and helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class URange:
    """Closed range of rack units, bottom and top inclusive.

    Attributes:
        bottom: Lowest U occupied.
        top: Highest U occupied.
    """

    bottom: int
    top: int

    @property
    def height(self) -> int:
        """Number of whole U slots covered by the range."""
        return self.top - self.bottom + 1

    def contains(self, u: int) -> bool:
        """Check if a single U slot falls inside this range."""
        return self.bottom <= u <= self.top

    def overlaps(self, other: URange) -> bool:
        """Check if this range shares at least one U slot with another."""
        return ranges_overlap(self, other)


def occupied_range(position: int, u_height: float) -> URange:
    """Compute the U range occupied by a device.

    A device mounted at ``position`` spans ``u_height`` units upward. Half-unit
    devices still claim the whole slot they sit in, so the height is rounded
    up before computing the top.

    Args:
        position: Bottom-most U the device occupies.
        u_height: Device height in rack units (must be positive).

    Returns:
        URange covering ``[position, position + ceil(u_height) - 1]``.
    """
    return URange(bottom=position, top=position + math.ceil(u_height) - 1)


def ranges_overlap(a: URange, b: URange) -> bool:
    """Closed-interval overlap test.

    Touching ranges (``a.top + 1 == b.bottom``) do not overlap.
    """
    return a.bottom <= b.top and b.bottom <= a.top
