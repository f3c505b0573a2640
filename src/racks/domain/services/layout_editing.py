"""Copy-on-write transforms over the Layout aggregate.

Every function takes a Layout and returns a new one; the input is never
modified, so older snapshots stay valid for undo. Functions that would break
a layout invariant raise a LayoutError subclass instead of returning.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import fields, replace
from typing import Any

from ..entities import DeviceType, Layout, PlacedDevice, Rack
from ..exceptions import DuplicateSlugError, PlacementError, UnknownDeviceTypeError
from ..value_objects import DeviceFace
from .placement import check_placement, find_placement_violations

__all__ = [
    "RACK_SETTING_FIELDS",
    "add_device_type",
    "clear_rack_devices",
    "insert_device",
    "insert_device_type",
    "move_device",
    "place_device",
    "remove_device_at_index",
    "remove_device_type",
    "replace_rack",
    "require_consistent",
    "restore_rack_devices",
    "set_device_face",
    "set_device_name",
    "update_device_type",
    "update_rack",
]

_DEVICE_TYPE_FIELDS = frozenset(f.name for f in fields(DeviceType))
RACK_SETTING_FIELDS = frozenset(f.name for f in fields(Rack)) - {"devices"}


def _with_devices(layout: Layout, devices: Iterable[PlacedDevice]) -> Layout:
    return replace(layout, rack=replace(layout.rack, devices=tuple(devices)))


def _require_valid(layout: Layout, candidate: PlacedDevice, exclude_index: int | None = None) -> None:
    if layout.find_device_type(candidate.device_type) is None:
        raise UnknownDeviceTypeError(candidate.device_type)
    result = check_placement(layout.rack, layout.device_types, candidate, exclude_index)
    if not result.is_valid:
        raise PlacementError(
            f"Cannot place '{candidate.device_type}' at U{candidate.position} "
            f"({candidate.face.value}): {result.reason}",
            result,
        )


def require_consistent(layout: Layout) -> Layout:
    """Check every layout invariant, returning the layout unchanged.

    Raises:
        DuplicateSlugError: If two device types share a slug.
        UnknownDeviceTypeError: If a placed device references a missing type.
        PlacementError: If a placed device is out of bounds or collides.
    """
    seen: set[str] = set()
    for device_type in layout.device_types:
        if device_type.slug in seen:
            raise DuplicateSlugError(device_type.slug)
        seen.add(device_type.slug)
    for placed in layout.rack.devices:
        if layout.find_device_type(placed.device_type) is None:
            raise UnknownDeviceTypeError(placed.device_type)
    violations = find_placement_violations(layout.rack, layout.device_types)
    if violations:
        index, result = violations[0]
        raise PlacementError(
            f"Device {index} ('{layout.rack.devices[index].device_type}') is no longer "
            f"placeable: {result.reason}",
            result,
        )
    return layout


# -- device types ------------------------------------------------------------


def add_device_type(layout: Layout, device_type: DeviceType) -> Layout:
    """Append a device type. Raises DuplicateSlugError if the slug exists."""
    return insert_device_type(layout, device_type, len(layout.device_types))


def insert_device_type(layout: Layout, device_type: DeviceType, index: int) -> Layout:
    """Insert a device type at ``index`` (clamped to the collection bounds)."""
    if layout.find_device_type(device_type.slug) is not None:
        raise DuplicateSlugError(device_type.slug)
    index = max(0, min(index, len(layout.device_types)))
    device_types = layout.device_types[:index] + (device_type,) + layout.device_types[index:]
    return replace(layout, device_types=device_types)


def remove_device_type(
    layout: Layout, slug: str
) -> tuple[Layout, tuple[tuple[int, PlacedDevice], ...]]:
    """Remove a device type and every placed device that references it.

    Returns:
        The new layout and the removed placed devices with their former
        indices. Removing an unknown slug returns the layout unchanged.
    """
    if layout.find_device_type(slug) is None:
        return layout, ()

    removed = tuple(
        (index, placed)
        for index, placed in enumerate(layout.rack.devices)
        if placed.device_type == slug
    )
    kept = [placed for placed in layout.rack.devices if placed.device_type != slug]
    device_types = tuple(dt for dt in layout.device_types if dt.slug != slug)
    return replace(_with_devices(layout, kept), device_types=device_types), removed


def update_device_type(layout: Layout, slug: str, updates: Mapping[str, Any]) -> Layout:
    """Shallow-merge ``updates`` into the device type with ``slug``.

    Unknown slugs are a no-op. The slug itself cannot change. A height change
    that would push a placed device out of bounds or into a collision raises
    PlacementError.
    """
    index = layout.device_type_index(slug)
    if index < 0:
        return layout

    unknown = set(updates) - _DEVICE_TYPE_FIELDS
    if unknown:
        raise ValueError(f"Unknown device type fields: {', '.join(sorted(unknown))}")
    if updates.get("slug", slug) != slug:
        raise ValueError("Device type slug cannot be changed")

    updated = replace(layout.device_types[index], **dict(updates))
    device_types = layout.device_types[:index] + (updated,) + layout.device_types[index + 1 :]
    new_layout = replace(layout, device_types=device_types)
    if "u_height" in updates:
        require_consistent(new_layout)
    return new_layout


# -- placed devices ----------------------------------------------------------


def place_device(layout: Layout, device: PlacedDevice) -> tuple[Layout, int]:
    """Append a validated placement and return the new layout and its index."""
    _require_valid(layout, device)
    return _with_devices(layout, layout.rack.devices + (device,)), len(layout.rack.devices)


def insert_device(layout: Layout, device: PlacedDevice, index: int) -> Layout:
    """Insert a validated placement at ``index`` (clamped to the rack)."""
    _require_valid(layout, device)
    devices = layout.rack.devices
    index = max(0, min(index, len(devices)))
    return _with_devices(layout, devices[:index] + (device,) + devices[index:])


def _replace_device(layout: Layout, index: int, device: PlacedDevice) -> Layout:
    devices = layout.rack.devices
    return _with_devices(layout, devices[:index] + (device,) + devices[index + 1 :])


def _device_at(layout: Layout, index: int) -> PlacedDevice:
    device = layout.rack.device_at(index)
    if device is None:
        raise IndexError(f"No device at index {index}")
    return device


def move_device(layout: Layout, index: int, new_position: int) -> Layout:
    """Move the device at ``index`` to ``new_position``.

    Raises:
        IndexError: If there is no device at ``index``.
        PlacementError: If the new position is out of bounds or blocked.
    """
    moved = replace(_device_at(layout, index), position=new_position)
    _require_valid(layout, moved, exclude_index=index)
    return _replace_device(layout, index, moved)


def set_device_face(layout: Layout, index: int, face: DeviceFace) -> Layout:
    """Change the face of the device at ``index``, re-checking collisions."""
    flipped = replace(_device_at(layout, index), face=face)
    _require_valid(layout, flipped, exclude_index=index)
    return _replace_device(layout, index, flipped)


def set_device_name(layout: Layout, index: int, name: str | None) -> Layout:
    """Set or clear the display name override of the device at ``index``.

    Empty names clear the override.
    """
    renamed = replace(_device_at(layout, index), name=name or None)
    return _replace_device(layout, index, renamed)


def remove_device_at_index(layout: Layout, index: int) -> tuple[Layout, PlacedDevice | None]:
    """Remove the device at ``index``.

    Out-of-range (including negative) indices are a no-op and return None.
    """
    device = layout.rack.device_at(index)
    if device is None:
        return layout, None
    devices = layout.rack.devices
    return _with_devices(layout, devices[:index] + devices[index + 1 :]), device


# -- rack --------------------------------------------------------------------


def update_rack(layout: Layout, updates: Mapping[str, Any]) -> Layout:
    """Shallow-merge rack settings (everything except ``devices``).

    Shrinking the rack below an occupied unit raises PlacementError.
    """
    unknown = set(updates) - RACK_SETTING_FIELDS
    if unknown:
        raise ValueError(f"Unknown rack settings: {', '.join(sorted(unknown))}")
    new_layout = replace(layout, rack=replace(layout.rack, **dict(updates)))
    if "height" in updates:
        require_consistent(new_layout)
    return new_layout


def replace_rack(layout: Layout, rack: Rack) -> Layout:
    """Swap in a whole rack, which must satisfy every placement invariant."""
    return require_consistent(replace(layout, rack=rack))


def clear_rack_devices(layout: Layout) -> tuple[Layout, tuple[PlacedDevice, ...]]:
    """Remove every placed device, returning the removed devices in order."""
    return _with_devices(layout, ()), layout.rack.devices


def restore_rack_devices(layout: Layout, devices: Iterable[PlacedDevice]) -> Layout:
    """Replace the rack's devices wholesale, re-validating the result."""
    return require_consistent(_with_devices(layout, devices))
