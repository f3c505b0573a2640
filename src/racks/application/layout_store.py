"""Layout store: the single owner of the current layout snapshot.

The store exposes two layers:

- ``*_raw`` mutators, which replace the snapshot directly and are called only
  by commands (execute and undo);
- undo-tracked actions (``place_device``, ``delete_device_type``...), which
  build a command, run it through the ``CommandHistory`` and report expected
  user-driven failures as ``False`` rather than raising.

Reads never observe a half-applied edit: every raw mutator computes the new
layout first and swaps it in with a single assignment.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from racks.domain.entities import DeviceType, Layout, PlacedDevice, Rack
from racks.domain.exceptions import LayoutError
from racks.domain.services import (
    can_place,
    check_placement,
    find_airflow_conflicts,
    get_blocked_slots,
    layout_editing,
)
from racks.domain.value_objects import (
    DEFAULT_DEVICE_FACE,
    AirflowConflict,
    DeviceFace,
    PlacementStatus,
    RackView,
    URange,
)

from .catalog import starter_device_types
from .commands import (
    create_add_device_type_command,
    create_clear_rack_command,
    create_delete_device_type_command,
    create_move_device_command,
    create_place_device_command,
    create_remove_device_command,
    create_replace_rack_command,
    create_update_device_face_command,
    create_update_device_name_command,
    create_update_device_type_command,
    create_update_rack_command,
)
from .history import DEFAULT_HISTORY_SIZE, CommandHistory

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_LAYOUT_NAME",
    "DEFAULT_RACK_HEIGHT",
    "LayoutStore",
    "create_layout",
]

DEFAULT_LAYOUT_NAME = "Untitled"
DEFAULT_RACK_HEIGHT = 42


def create_layout(
    name: str = DEFAULT_LAYOUT_NAME,
    rack_height: int = DEFAULT_RACK_HEIGHT,
    device_types: Iterable[DeviceType] | None = None,
) -> Layout:
    """Create an empty layout seeded with the starter library by default."""
    types = starter_device_types() if device_types is None else tuple(device_types)
    return layout_editing.require_consistent(
        Layout(name=name, rack=Rack(name=name, height=rack_height), device_types=types)
    )


class LayoutStore:
    """Holds the current layout, its dirty flag and the undo history."""

    def __init__(
        self,
        layout: Layout | None = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
    ) -> None:
        self._layout = (
            create_layout() if layout is None else layout_editing.require_consistent(layout)
        )
        self._dirty = False
        self.history = CommandHistory(max_size=history_size)

    # -- snapshot ------------------------------------------------------------

    @property
    def layout(self) -> Layout:
        return self._layout

    @property
    def rack(self) -> Rack:
        return self._layout.rack

    @property
    def device_types(self) -> tuple[DeviceType, ...]:
        return self._layout.device_types

    def _commit(self, layout: Layout, message: str) -> None:
        self._layout = layout
        self._dirty = True
        logger.debug(message)

    # -- queries -------------------------------------------------------------

    def get_device_type(self, slug: str) -> DeviceType | None:
        return self._layout.find_device_type(slug)

    def get_device_at_index(self, index: int) -> PlacedDevice | None:
        return self._layout.rack.device_at(index)

    def get_placed_devices_for_type(self, slug: str) -> tuple[tuple[int, PlacedDevice], ...]:
        """Return (index, device) pairs for every placed instance of ``slug``."""
        return tuple(
            (index, placed)
            for index, placed in enumerate(self._layout.rack.devices)
            if placed.device_type == slug
        )

    def can_place(
        self,
        device_type: str,
        position: int,
        face: DeviceFace = DEFAULT_DEVICE_FACE,
        exclude_index: int | None = None,
    ) -> PlacementStatus:
        """Check whether a device of ``device_type`` fits at ``position``."""
        candidate = PlacedDevice(device_type=device_type, position=position, face=face)
        return can_place(self.rack, self.device_types, candidate, exclude_index)

    def get_blocked_slots(self, view: RackView) -> list[URange]:
        return get_blocked_slots(self.rack, view, self.device_types)

    def find_airflow_conflicts(self) -> list[AirflowConflict]:
        return find_airflow_conflicts(self.rack, self.device_types)

    def _device_label(self, device: PlacedDevice) -> str:
        if device.name:
            return device.name
        device_type = self.get_device_type(device.device_type)
        return device_type.display_name if device_type else device.device_type

    # -- raw mutators: device types -------------------------------------------

    def add_device_type_raw(self, device_type: DeviceType) -> None:
        try:
            layout = layout_editing.add_device_type(self._layout, device_type)
        except LayoutError as e:
            logger.warning(f"Rejected device type: {e}")
            raise
        self._commit(layout, f"Added device type '{device_type.slug}'")

    def insert_device_type_raw(self, device_type: DeviceType, index: int) -> None:
        layout = layout_editing.insert_device_type(self._layout, device_type, index)
        self._commit(layout, f"Inserted device type '{device_type.slug}' at {index}")

    def remove_device_type_raw(self, slug: str) -> tuple[tuple[int, PlacedDevice], ...]:
        """Remove a device type and its placed instances.

        Returns:
            The removed placed devices with their former indices. Empty when
            the slug is unknown, in which case nothing changes.
        """
        layout, removed = layout_editing.remove_device_type(self._layout, slug)
        if layout is self._layout:
            return ()
        self._commit(
            layout, f"Removed device type '{slug}' and {len(removed)} placed device(s)"
        )
        return removed

    def update_device_type_raw(self, slug: str, **updates: Any) -> None:
        layout = layout_editing.update_device_type(self._layout, slug, updates)
        if layout is not self._layout:
            self._commit(layout, f"Updated device type '{slug}': {sorted(updates)}")

    # -- raw mutators: placed devices -----------------------------------------

    def place_device_raw(self, device: PlacedDevice) -> int:
        """Append a device and return its index.

        Raises:
            UnknownDeviceTypeError: If the device type is not in the layout.
            PlacementError: If the placement is out of bounds or collides.
        """
        try:
            layout, index = layout_editing.place_device(self._layout, device)
        except LayoutError as e:
            logger.warning(f"Rejected placement: {e}")
            raise
        self._commit(layout, f"Placed '{device.device_type}' at U{device.position}")
        return index

    def insert_device_at_index_raw(self, device: PlacedDevice, index: int) -> None:
        layout = layout_editing.insert_device(self._layout, device, index)
        self._commit(layout, f"Inserted '{device.device_type}' at index {index}")

    def move_device_raw(self, index: int, new_position: int) -> bool:
        """Move a device. Returns False, leaving state unchanged, on failure."""
        try:
            layout = layout_editing.move_device(self._layout, index, new_position)
        except (IndexError, LayoutError) as e:
            logger.debug(f"Move of device {index} to U{new_position} refused: {e}")
            return False
        self._commit(layout, f"Moved device {index} to U{new_position}")
        return True

    def remove_device_at_index_raw(self, index: int) -> PlacedDevice | None:
        layout, removed = layout_editing.remove_device_at_index(self._layout, index)
        if removed is not None:
            self._commit(layout, f"Removed device {index} ('{removed.device_type}')")
        return removed

    def update_device_face_raw(self, index: int, face: DeviceFace) -> bool:
        """Change a device's face. Returns False, leaving state unchanged, on failure."""
        face = DeviceFace(face)
        try:
            layout = layout_editing.set_device_face(self._layout, index, face)
        except (IndexError, LayoutError) as e:
            logger.debug(f"Face change of device {index} to {face.value} refused: {e}")
            return False
        self._commit(layout, f"Set device {index} face to {face.value}")
        return True

    def update_device_name_raw(self, index: int, name: str | None) -> None:
        if self.get_device_at_index(index) is None:
            logger.warning(f"Ignored rename of missing device {index}")
            return
        layout = layout_editing.set_device_name(self._layout, index, name)
        self._commit(layout, f"Renamed device {index} to {name!r}")

    # -- raw mutators: rack ----------------------------------------------------

    def update_rack_raw(self, **settings: Any) -> None:
        layout = layout_editing.update_rack(self._layout, settings)
        self._commit(layout, f"Updated rack settings: {sorted(settings)}")

    def replace_rack_raw(self, rack: Rack) -> None:
        layout = layout_editing.replace_rack(self._layout, rack)
        self._commit(layout, f"Replaced rack with '{rack.name}'")

    def clear_rack_devices_raw(self) -> tuple[PlacedDevice, ...]:
        layout, removed = layout_editing.clear_rack_devices(self._layout)
        self._commit(layout, f"Cleared {len(removed)} device(s) from rack")
        return removed

    def restore_rack_devices_raw(self, devices: tuple[PlacedDevice, ...]) -> None:
        layout = layout_editing.restore_rack_devices(self._layout, devices)
        self._commit(layout, f"Restored {len(devices)} device(s) to rack")

    # -- undo-tracked actions: device types ------------------------------------

    def add_device_type(self, device_type: DeviceType) -> DeviceType:
        """Add a device type to the layout.

        Raises:
            DuplicateSlugError: If the slug is already in use.
        """
        self.history.execute(create_add_device_type_command(device_type, self))
        return device_type

    def update_device_type(self, slug: str, **updates: Any) -> None:
        """Update fields of a device type. Unknown slugs are ignored."""
        device_type = self.get_device_type(slug)
        if device_type is None:
            logger.warning(f"Ignored update of unknown device type '{slug}'")
            return
        before = {key: getattr(device_type, key, None) for key in updates}
        self.history.execute(
            create_update_device_type_command(slug, before, updates, self)
        )

    def delete_device_type(self, slug: str) -> bool:
        """Delete a device type and every placed instance of it.

        Returns:
            False if no device type has ``slug``.
        """
        index = self._layout.device_type_index(slug)
        if index < 0:
            return False
        command = create_delete_device_type_command(
            self.device_types[index],
            index,
            self.get_placed_devices_for_type(slug),
            self,
        )
        self.history.execute(command)
        return True

    # -- undo-tracked actions: placed devices ----------------------------------

    def place_device(
        self,
        device_type: str,
        position: int,
        face: DeviceFace = DEFAULT_DEVICE_FACE,
        name: str | None = None,
    ) -> bool:
        """Place a device at ``position``. Returns False if it does not fit."""
        device = PlacedDevice(
            device_type=device_type, position=position, face=face, name=name or None
        )
        result = check_placement(self.rack, self.device_types, device)
        if not result.is_valid:
            logger.debug(f"Placement of '{device_type}' at U{position} refused: {result.reason}")
            return False
        self.history.execute(
            create_place_device_command(device, self, self._device_label(device))
        )
        return True

    def move_device(self, index: int, new_position: int) -> bool:
        """Move a device within the rack. Returns False if the move is invalid."""
        device = self.get_device_at_index(index)
        if device is None:
            return False
        moved = PlacedDevice(
            device_type=device.device_type,
            position=new_position,
            face=device.face,
            name=device.name,
        )
        result = check_placement(self.rack, self.device_types, moved, exclude_index=index)
        if not result.is_valid:
            logger.debug(f"Move of device {index} to U{new_position} refused: {result.reason}")
            return False
        self.history.execute(
            create_move_device_command(
                index, device.position, new_position, self, self._device_label(device)
            )
        )
        return True

    def remove_device(self, index: int) -> PlacedDevice | None:
        """Remove the device at ``index``. Out-of-range indices are ignored."""
        device = self.get_device_at_index(index)
        if device is None:
            return None
        self.history.execute(
            create_remove_device_command(index, device, self, self._device_label(device))
        )
        return device

    def update_device_face(self, index: int, face: DeviceFace) -> bool:
        """Flip a device to ``face``. Returns False if that face is occupied."""
        device = self.get_device_at_index(index)
        if device is None:
            return False
        flipped = PlacedDevice(
            device_type=device.device_type,
            position=device.position,
            face=face,
            name=device.name,
        )
        result = check_placement(self.rack, self.device_types, flipped, exclude_index=index)
        if not result.is_valid:
            logger.debug(f"Face change of device {index} refused: {result.reason}")
            return False
        self.history.execute(
            create_update_device_face_command(
                index, device.face, flipped.face, self, self._device_label(device)
            )
        )
        return True

    def update_device_name(self, index: int, name: str | None) -> None:
        """Set or clear a placed device's display name."""
        device = self.get_device_at_index(index)
        if device is None:
            return
        self.history.execute(
            create_update_device_name_command(
                index, device.name, name, self, self._device_label(device)
            )
        )

    # -- undo-tracked actions: rack --------------------------------------------

    def update_rack(self, **settings: Any) -> None:
        """Update rack settings such as ``name``, ``height`` or ``width``."""
        before = {key: getattr(self.rack, key, None) for key in settings}
        self.history.execute(create_update_rack_command(before, settings, self))

    def replace_rack(self, rack: Rack) -> None:
        self.history.execute(create_replace_rack_command(self.rack, rack, self))

    def clear_rack(self) -> int:
        """Remove every device from the rack and return how many were removed."""
        devices = self.rack.devices
        if not devices:
            return 0
        self.history.execute(create_clear_rack_command(devices, self))
        return len(devices)

    # -- history ---------------------------------------------------------------

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    @property
    def undo_description(self) -> str | None:
        return self.history.undo_description

    @property
    def redo_description(self) -> str | None:
        return self.history.redo_description

    # -- lifecycle -------------------------------------------------------------

    def new_layout(self, name: str = DEFAULT_LAYOUT_NAME) -> Layout:
        """Start a fresh layout seeded with the starter library."""
        self._layout = create_layout(name)
        self._dirty = False
        self.history.clear()
        logger.debug(f"Created new layout '{name}'")
        return self._layout

    def load_layout(self, layout: Layout) -> None:
        """Replace the current layout with ``layout`` and clear history.

        Raises:
            LayoutError: If ``layout`` breaks an invariant; the current
                layout is kept.
        """
        self._layout = layout_editing.require_consistent(layout)
        self._dirty = False
        self.history.clear()
        logger.debug(
            f"Loaded layout '{layout.name}' with {layout.rack.device_count} device(s)"
        )

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def mark_dirty(self) -> None:
        self._dirty = True

    def mark_clean(self) -> None:
        self._dirty = False
