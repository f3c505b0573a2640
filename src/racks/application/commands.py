"""Undo/redo commands (use cases) for rack layout editing.

Each kind of edit is its own command class carrying the data it captured at
construction time. ``execute`` and ``undo`` call the store's raw mutators;
``undo`` restores the previous layout exactly, including device order.

The ``create_*_command`` factories copy every sequence they are given, so a
caller mutating its own lists afterwards cannot corrupt a command's undo
snapshot.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from racks.contracts.protocols import (
    DeviceCommandStore,
    DeviceTypeCommandStore,
    RackCommandStore,
)
from racks.domain.entities import DeviceType, PlacedDevice, Rack
from racks.domain.exceptions import PlacementError
from racks.domain.value_objects import DeviceFace


class CommandType(str, Enum):
    """Kinds of undoable edits."""

    ADD_DEVICE_TYPE = "ADD_DEVICE_TYPE"
    UPDATE_DEVICE_TYPE = "UPDATE_DEVICE_TYPE"
    DELETE_DEVICE_TYPE = "DELETE_DEVICE_TYPE"
    PLACE_DEVICE = "PLACE_DEVICE"
    MOVE_DEVICE = "MOVE_DEVICE"
    REMOVE_DEVICE = "REMOVE_DEVICE"
    UPDATE_DEVICE_FACE = "UPDATE_DEVICE_FACE"
    UPDATE_DEVICE_NAME = "UPDATE_DEVICE_NAME"
    UPDATE_RACK = "UPDATE_RACK"
    REPLACE_RACK = "REPLACE_RACK"
    CLEAR_RACK = "CLEAR_RACK"


def _now_ms() -> int:
    return int(time.time() * 1000)


class Command(ABC):
    """Base class for a reversible edit.

    Subclasses set ``command_type`` and implement ``description``,
    ``execute`` and ``undo``. Both ``execute`` and ``undo`` either complete
    or raise without changing the store.
    """

    command_type: ClassVar[CommandType]
    timestamp: int

    @property
    @abstractmethod
    def description(self) -> str:
        """Short human-readable label for UI display."""

    @abstractmethod
    def execute(self) -> None:
        """Apply the edit."""

    @abstractmethod
    def undo(self) -> None:
        """Revert the edit."""


# -- device types ------------------------------------------------------------


@dataclass
class AddDeviceTypeCommand(Command):
    """Add a device type to the layout."""

    command_type: ClassVar[CommandType] = CommandType.ADD_DEVICE_TYPE

    store: DeviceTypeCommandStore
    device_type: DeviceType
    timestamp: int = field(default_factory=_now_ms)

    @property
    def description(self) -> str:
        return f"Add {self.device_type.display_name}"

    def execute(self) -> None:
        self.store.add_device_type_raw(self.device_type)

    def undo(self) -> None:
        self.store.remove_device_type_raw(self.device_type.slug)


@dataclass
class UpdateDeviceTypeCommand(Command):
    """Shallow-merge field changes into a device type."""

    command_type: ClassVar[CommandType] = CommandType.UPDATE_DEVICE_TYPE

    store: DeviceTypeCommandStore
    slug: str
    before: dict[str, Any]
    after: dict[str, Any]
    timestamp: int = field(default_factory=_now_ms)

    @property
    def description(self) -> str:
        return f"Update {self.slug}"

    def execute(self) -> None:
        self.store.update_device_type_raw(self.slug, **self.after)

    def undo(self) -> None:
        self.store.update_device_type_raw(self.slug, **self.before)


@dataclass
class DeleteDeviceTypeCommand(Command):
    """Delete a device type and, by cascade, every placed instance of it.

    Attributes:
        device_type: The deleted device type.
        index: Position of the device type in the layout's collection.
        placed_devices: (rack index, device) pairs removed by the cascade.
    """

    command_type: ClassVar[CommandType] = CommandType.DELETE_DEVICE_TYPE

    store: DeviceTypeCommandStore
    device_type: DeviceType
    index: int
    placed_devices: tuple[tuple[int, PlacedDevice], ...]
    timestamp: int = field(default_factory=_now_ms)

    @property
    def description(self) -> str:
        return f"Delete {self.device_type.display_name}"

    def execute(self) -> None:
        self.store.remove_device_type_raw(self.device_type.slug)

    def undo(self) -> None:
        self.store.insert_device_type_raw(self.device_type, self.index)
        # Ascending order puts every device back at its former index
        for rack_index, device in sorted(self.placed_devices, key=lambda p: p[0]):
            self.store.insert_device_at_index_raw(device, rack_index)


# -- placed devices ----------------------------------------------------------


@dataclass
class PlaceDeviceCommand(Command):
    """Append a device to the rack."""

    command_type: ClassVar[CommandType] = CommandType.PLACE_DEVICE

    store: DeviceCommandStore
    device: PlacedDevice
    device_name: str = "device"
    timestamp: int = field(default_factory=_now_ms)
    placed_index: int = field(default=-1, init=False)

    @property
    def description(self) -> str:
        return f"Place {self.device_name}"

    def execute(self) -> None:
        self.placed_index = self.store.place_device_raw(self.device)

    def undo(self) -> None:
        if self.placed_index >= 0:
            self.store.remove_device_at_index_raw(self.placed_index)


@dataclass
class MoveDeviceCommand(Command):
    """Move a device within the rack."""

    command_type: ClassVar[CommandType] = CommandType.MOVE_DEVICE

    store: DeviceCommandStore
    index: int
    old_position: int
    new_position: int
    device_name: str = "device"
    timestamp: int = field(default_factory=_now_ms)

    @property
    def description(self) -> str:
        return f"Move {self.device_name}"

    def _move(self, position: int) -> None:
        if not self.store.move_device_raw(self.index, position):
            raise PlacementError(
                f"Cannot move device {self.index} to U{position}"
            )

    def execute(self) -> None:
        self._move(self.new_position)

    def undo(self) -> None:
        self._move(self.old_position)


@dataclass
class RemoveDeviceCommand(Command):
    """Remove a device from the rack, restoring it at the same index on undo."""

    command_type: ClassVar[CommandType] = CommandType.REMOVE_DEVICE

    store: DeviceCommandStore
    index: int
    device: PlacedDevice
    device_name: str = "device"
    timestamp: int = field(default_factory=_now_ms)

    @property
    def description(self) -> str:
        return f"Remove {self.device_name}"

    def execute(self) -> None:
        self.store.remove_device_at_index_raw(self.index)

    def undo(self) -> None:
        self.store.insert_device_at_index_raw(self.device, self.index)


@dataclass
class UpdateDeviceFaceCommand(Command):
    """Flip a device to another face."""

    command_type: ClassVar[CommandType] = CommandType.UPDATE_DEVICE_FACE

    store: DeviceCommandStore
    index: int
    old_face: DeviceFace
    new_face: DeviceFace
    device_name: str = "device"
    timestamp: int = field(default_factory=_now_ms)

    @property
    def description(self) -> str:
        return f"Flip {self.device_name}"

    def _set_face(self, face: DeviceFace) -> None:
        if not self.store.update_device_face_raw(self.index, face):
            raise PlacementError(
                f"Cannot mount device {self.index} on the {face.value} face"
            )

    def execute(self) -> None:
        self._set_face(self.new_face)

    def undo(self) -> None:
        self._set_face(self.old_face)


@dataclass
class UpdateDeviceNameCommand(Command):
    """Set or clear the display name override of a placed device."""

    command_type: ClassVar[CommandType] = CommandType.UPDATE_DEVICE_NAME

    store: DeviceCommandStore
    index: int
    old_name: str | None
    new_name: str | None
    device_name: str = "device"
    timestamp: int = field(default_factory=_now_ms)

    @property
    def description(self) -> str:
        return f"Rename {self.device_name}"

    def execute(self) -> None:
        self.store.update_device_name_raw(self.index, self.new_name)

    def undo(self) -> None:
        self.store.update_device_name_raw(self.index, self.old_name)


# -- rack --------------------------------------------------------------------


@dataclass
class UpdateRackCommand(Command):
    """Change rack settings (name, height, width, numbering...)."""

    command_type: ClassVar[CommandType] = CommandType.UPDATE_RACK

    store: RackCommandStore
    before: dict[str, Any]
    after: dict[str, Any]
    timestamp: int = field(default_factory=_now_ms)

    @property
    def description(self) -> str:
        return "Update rack settings"

    def execute(self) -> None:
        self.store.update_rack_raw(**self.after)

    def undo(self) -> None:
        self.store.update_rack_raw(**self.before)


@dataclass
class ReplaceRackCommand(Command):
    """Swap the whole rack, used for bulk edits."""

    command_type: ClassVar[CommandType] = CommandType.REPLACE_RACK

    store: RackCommandStore
    old_rack: Rack
    new_rack: Rack
    timestamp: int = field(default_factory=_now_ms)

    @property
    def description(self) -> str:
        return "Replace rack"

    def execute(self) -> None:
        self.store.replace_rack_raw(self.new_rack)

    def undo(self) -> None:
        self.store.replace_rack_raw(self.old_rack)


@dataclass
class ClearRackCommand(Command):
    """Remove every device from the rack."""

    command_type: ClassVar[CommandType] = CommandType.CLEAR_RACK

    store: RackCommandStore
    devices: tuple[PlacedDevice, ...]
    timestamp: int = field(default_factory=_now_ms)

    @property
    def description(self) -> str:
        count = len(self.devices)
        return f"Clear rack ({count} device{'' if count == 1 else 's'})"

    def execute(self) -> None:
        self.store.clear_rack_devices_raw()

    def undo(self) -> None:
        self.store.restore_rack_devices_raw(self.devices)


# -- factories ---------------------------------------------------------------


def create_add_device_type_command(
    device_type: DeviceType, store: DeviceTypeCommandStore
) -> AddDeviceTypeCommand:
    """Create a command to add a device type."""
    return AddDeviceTypeCommand(store=store, device_type=device_type)


def create_update_device_type_command(
    slug: str,
    before: Mapping[str, Any],
    after: Mapping[str, Any],
    store: DeviceTypeCommandStore,
) -> UpdateDeviceTypeCommand:
    """Create a command to update a device type.

    ``before`` must hold the current values of every key in ``after``.
    """
    return UpdateDeviceTypeCommand(
        store=store, slug=slug, before=dict(before), after=dict(after)
    )


def create_delete_device_type_command(
    device_type: DeviceType,
    index: int,
    placed_devices: Iterable[tuple[int, PlacedDevice]],
    store: DeviceTypeCommandStore,
) -> DeleteDeviceTypeCommand:
    """Create a command to delete a device type including placed instances.

    Args:
        device_type: The device type being deleted.
        index: Its position in the layout's device type collection.
        placed_devices: (rack index, device) pairs that the cascade removes.
        store: Store to operate on.
    """
    return DeleteDeviceTypeCommand(
        store=store,
        device_type=device_type,
        index=index,
        placed_devices=tuple((i, device) for i, device in placed_devices),
    )


def create_place_device_command(
    device: PlacedDevice, store: DeviceCommandStore, device_name: str = "device"
) -> PlaceDeviceCommand:
    """Create a command to place a device."""
    return PlaceDeviceCommand(store=store, device=device, device_name=device_name)


def create_move_device_command(
    index: int,
    old_position: int,
    new_position: int,
    store: DeviceCommandStore,
    device_name: str = "device",
) -> MoveDeviceCommand:
    """Create a command to move a device."""
    return MoveDeviceCommand(
        store=store,
        index=index,
        old_position=old_position,
        new_position=new_position,
        device_name=device_name,
    )


def create_remove_device_command(
    index: int,
    device: PlacedDevice,
    store: DeviceCommandStore,
    device_name: str = "device",
) -> RemoveDeviceCommand:
    """Create a command to remove a device."""
    return RemoveDeviceCommand(
        store=store, index=index, device=device, device_name=device_name
    )


def create_update_device_face_command(
    index: int,
    old_face: DeviceFace,
    new_face: DeviceFace,
    store: DeviceCommandStore,
    device_name: str = "device",
) -> UpdateDeviceFaceCommand:
    """Create a command to change a device's face."""
    return UpdateDeviceFaceCommand(
        store=store,
        index=index,
        old_face=old_face,
        new_face=new_face,
        device_name=device_name,
    )


def create_update_device_name_command(
    index: int,
    old_name: str | None,
    new_name: str | None,
    store: DeviceCommandStore,
    device_name: str = "device",
) -> UpdateDeviceNameCommand:
    """Create a command to rename a placed device."""
    return UpdateDeviceNameCommand(
        store=store,
        index=index,
        old_name=old_name,
        new_name=new_name or None,
        device_name=device_name,
    )


def create_update_rack_command(
    before: Mapping[str, Any], after: Mapping[str, Any], store: RackCommandStore
) -> UpdateRackCommand:
    """Create a command to update rack settings."""
    return UpdateRackCommand(store=store, before=dict(before), after=dict(after))


def create_replace_rack_command(
    old_rack: Rack, new_rack: Rack, store: RackCommandStore
) -> ReplaceRackCommand:
    """Create a command to replace the entire rack."""
    return ReplaceRackCommand(store=store, old_rack=old_rack, new_rack=new_rack)


def create_clear_rack_command(
    devices: Iterable[PlacedDevice], store: RackCommandStore
) -> ClearRackCommand:
    """Create a command to clear all devices from the rack."""
    return ClearRackCommand(store=store, devices=tuple(devices))
