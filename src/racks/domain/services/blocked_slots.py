"""Blocked-slot calculation for dual-face rack views.

When one face of the rack is drawn, full-depth devices mounted on the other
face (and every device mounted on both faces) still occupy those slots
physically. This module reports the U ranges to draw as blocked. The result
is a rendering hint; placement validity is decided by the placement rules
alone.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..entities import Rack, resolve_device_types
from ..value_objects import DeviceFace, RackView, URange, occupied_range
from .placement import DeviceTypeSource

__all__ = [
    "get_blocked_slots",
    "is_position_blocked",
    "would_overlap_blocked",
]


def get_blocked_slots(
    rack: Rack,
    view: RackView,
    device_types: DeviceTypeSource,
) -> list[URange]:
    """Calculate which U ranges are blocked on the given view.

    A device blocks the view when its face is BOTH, or when it is mounted on
    the other face and is full depth (absent depth counts as full depth).
    Devices whose type cannot be resolved are skipped.

    Ranges are returned one per blocking device, in rack order, and are not
    merged even when they touch or overlap.

    Args:
        rack: The rack containing devices.
        view: The face being viewed.
        device_types: Device types used to look up heights and depth.

    Returns:
        List of blocked U ranges.
    """
    view = RackView(view)
    resolved = resolve_device_types(device_types)
    blocked: list[URange] = []

    for placed in rack.devices:
        device_type = resolved.get(placed.device_type)
        if device_type is None:
            continue

        if placed.face == DeviceFace.BOTH:
            blocks = True
        elif placed.face.value != view.value:
            blocks = device_type.is_full_depth
        else:
            blocks = False

        if blocks:
            blocked.append(occupied_range(placed.position, device_type.u_height))

    return blocked


def is_position_blocked(blocked_slots: Iterable[URange], position: int) -> bool:
    """Check if a single U falls inside any blocked range."""
    return any(slot.contains(position) for slot in blocked_slots)


def would_overlap_blocked(
    blocked_slots: Iterable[URange], position: int, u_height: float
) -> bool:
    """Check if a device at ``position`` would touch any blocked range."""
    candidate = occupied_range(position, u_height)
    return any(slot.overlaps(candidate) for slot in blocked_slots)
