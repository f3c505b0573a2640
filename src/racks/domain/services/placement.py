"""Placement validation for rack devices.

This module decides whether a candidate device can be mounted at a given
position: the referenced device type must resolve, the device must fit inside
the rack, and it must not overlap any device it can physically collide with.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from ..entities import (
    DeviceType,
    PlacedDevice,
    Rack,
    ResolvedDeviceType,
    resolve_device_types,
)
from ..value_objects import (
    DeviceFace,
    PlacementResult,
    PlacementStatus,
    occupied_range,
)

__all__ = [
    "can_place",
    "check_placement",
    "faces_collide",
    "find_placement_violations",
]

DeviceTypeSource = Iterable[DeviceType] | Mapping[str, ResolvedDeviceType]


def faces_collide(a: DeviceFace, b: DeviceFace) -> bool:
    """Check if devices mounted on faces ``a`` and ``b`` share physical space.

    Front collides with front or both, rear collides with rear or both, and
    both collides with anything.
    """
    a, b = DeviceFace(a), DeviceFace(b)
    if a == DeviceFace.BOTH or b == DeviceFace.BOTH:
        return True
    return a == b


def check_placement(
    rack: Rack,
    device_types: DeviceTypeSource,
    candidate: PlacedDevice,
    exclude_index: int | None = None,
) -> PlacementResult:
    """Check a candidate placement and explain the outcome.

    Rules are applied in order: unresolved device type, then bounds, then
    collisions. Out-of-bounds positions are therefore always INVALID and never
    BLOCKED.

    Args:
        rack: Rack to place into.
        device_types: Device types (or a resolved lookup) for height and slug
            resolution.
        candidate: The device to check. Only ``device_type``, ``position`` and
            ``face`` are used.
        exclude_index: Index of a device to ignore, used when moving a device
            within the same rack. Pass None for new placements and cross-rack
            moves.

    Returns:
        PlacementResult with status, reason and colliding device indices.
    """
    resolved = resolve_device_types(device_types)

    candidate_type = resolved.get(candidate.device_type)
    if candidate_type is None:
        return PlacementResult.invalid(
            f"Unknown device type '{candidate.device_type}'"
        )

    if candidate.position < 1:
        return PlacementResult.invalid(
            f"Position {candidate.position} is below U1"
        )

    candidate_range = occupied_range(candidate.position, candidate_type.u_height)
    if candidate_range.top > rack.height:
        return PlacementResult.invalid(
            f"Device would extend to U{candidate_range.top}, beyond the "
            f"{rack.height}U rack"
        )

    collisions: list[int] = []
    for index, existing in enumerate(rack.devices):
        if index == exclude_index:
            continue
        if not faces_collide(candidate.face, existing.face):
            continue
        existing_type = resolved.get(existing.device_type)
        if existing_type is None:
            continue
        if candidate_range.overlaps(occupied_range(existing.position, existing_type.u_height)):
            collisions.append(index)

    if collisions:
        return PlacementResult.blocked(
            f"Overlaps {len(collisions)} device(s) at U{candidate_range.bottom}"
            f"-U{candidate_range.top}",
            tuple(collisions),
        )

    return PlacementResult.valid()


def can_place(
    rack: Rack,
    device_types: DeviceTypeSource,
    candidate: PlacedDevice,
    exclude_index: int | None = None,
) -> PlacementStatus:
    """Return VALID, BLOCKED or INVALID for a candidate placement.

    Pure and side-effect free, so it is safe to call for drag previews on
    every frame. See ``check_placement`` for the rules.
    """
    return check_placement(rack, device_types, candidate, exclude_index).status


def find_placement_violations(
    rack: Rack, device_types: DeviceTypeSource
) -> list[tuple[int, PlacementResult]]:
    """Audit every device already in a rack.

    Each device is checked as if it were being moved onto its own position,
    so a pair of colliding devices is reported once per device.

    Returns:
        (index, result) pairs for every device whose placement is not valid.
    """
    resolved = resolve_device_types(device_types)
    violations: list[tuple[int, PlacementResult]] = []
    for index, placed in enumerate(rack.devices):
        result = check_placement(rack, resolved, placed, exclude_index=index)
        if not result.is_valid:
            violations.append((index, result))
    return violations
