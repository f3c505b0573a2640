"""Store protocols consumed by undo/redo commands.

Commands only need a narrow slice of the layout store. Each protocol below
lists the raw mutators one family of commands calls, so commands can be
exercised against a test double as easily as against a LayoutStore.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from racks.domain.entities import DeviceType, PlacedDevice, Rack
    from racks.domain.value_objects import DeviceFace


@runtime_checkable
class CommandProtocol(Protocol):
    """A reversible unit of mutation.

    Attributes:
        command_type: Kind of command (one of CommandType).
        description: Short label for UI display.
        timestamp: Creation time in epoch milliseconds.
    """

    @property
    def command_type(self) -> Any: ...

    @property
    def description(self) -> str: ...

    @property
    def timestamp(self) -> int: ...

    def execute(self) -> None:
        """Apply the mutation."""
        ...

    def undo(self) -> None:
        """Revert the mutation exactly."""
        ...


class DeviceTypeCommandStore(Protocol):
    """Store operations needed by device type commands."""

    def add_device_type_raw(self, device_type: DeviceType) -> None: ...

    def insert_device_type_raw(self, device_type: DeviceType, index: int) -> None: ...

    def remove_device_type_raw(
        self, slug: str
    ) -> tuple[tuple[int, PlacedDevice], ...]: ...

    def update_device_type_raw(self, slug: str, **updates: Any) -> None: ...

    def insert_device_at_index_raw(self, device: PlacedDevice, index: int) -> None: ...


class DeviceCommandStore(Protocol):
    """Store operations needed by placed device commands."""

    def place_device_raw(self, device: PlacedDevice) -> int: ...

    def insert_device_at_index_raw(self, device: PlacedDevice, index: int) -> None: ...

    def remove_device_at_index_raw(self, index: int) -> PlacedDevice | None: ...

    def move_device_raw(self, index: int, new_position: int) -> bool: ...

    def update_device_face_raw(self, index: int, face: DeviceFace) -> bool: ...

    def update_device_name_raw(self, index: int, name: str | None) -> None: ...


class RackCommandStore(Protocol):
    """Store operations needed by rack commands."""

    def update_rack_raw(self, **settings: Any) -> None: ...

    def replace_rack_raw(self, rack: Rack) -> None: ...

    def clear_rack_devices_raw(self) -> tuple[PlacedDevice, ...]: ...

    def restore_rack_devices_raw(self, devices: tuple[PlacedDevice, ...]) -> None: ...
