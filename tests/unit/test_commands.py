"""Unit tests for undo/redo commands.

Every factory must satisfy the round trip: execute then undo restores a
layout equal to the one before execute, and executing again reproduces the
layout after the first execute.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from builders import make_rack, placed
from racks.application import LayoutStore
from racks.application.commands import (
    Command,
    CommandType,
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
from racks.contracts import CommandProtocol
from racks.domain import DeviceFace, DeviceType, Layout, PlacementError


@pytest.fixture
def populated_store(empty_layout: Layout) -> LayoutStore:
    store = LayoutStore(empty_layout)
    store.place_device_raw(placed("server-1u", 1))
    store.place_device_raw(placed("server-2u", 2, DeviceFace.BOTH))
    store.place_device_raw(placed("server-1u", 4, name="web-01"))
    store.place_device_raw(placed("ups-4u", 10))
    return store


CommandBuilder = Callable[[LayoutStore], Command]

ROUND_TRIP_CASES: dict[str, CommandBuilder] = {
    "add device type": lambda s: create_add_device_type_command(
        DeviceType(slug="nas-2u", u_height=2), s
    ),
    "update device type": lambda s: create_update_device_type_command(
        "ups-4u", {"model": None}, {"model": "Smart-UPS"}, s
    ),
    "delete device type": lambda s: create_delete_device_type_command(
        s.get_device_type("server-1u"),
        s.layout.device_type_index("server-1u"),
        s.get_placed_devices_for_type("server-1u"),
        s,
    ),
    "place device": lambda s: create_place_device_command(placed("patch-panel", 20), s),
    "move device": lambda s: create_move_device_command(3, 10, 30, s),
    "remove device": lambda s: create_remove_device_command(1, s.get_device_at_index(1), s),
    "update face": lambda s: create_update_device_face_command(
        0, DeviceFace.FRONT, DeviceFace.REAR, s
    ),
    "rename device": lambda s: create_update_device_name_command(2, "web-01", "web-02", s),
    "update rack": lambda s: create_update_rack_command(
        {"name": s.rack.name, "height": 42}, {"name": "Edge", "height": 20}, s
    ),
    "replace rack": lambda s: create_replace_rack_command(
        s.rack, make_rack(placed("server-1u", 7), height=12), s
    ),
    "clear rack": lambda s: create_clear_rack_command(s.rack.devices, s),
}


class TestUndoRoundTrip:
    """execute(); undo() restores the prior layout for every command."""

    @pytest.mark.parametrize("build", ROUND_TRIP_CASES.values(), ids=ROUND_TRIP_CASES.keys())
    def test_undo_restores_previous_layout(
        self, populated_store: LayoutStore, build: CommandBuilder
    ) -> None:
        before = populated_store.layout
        command = build(populated_store)

        command.execute()
        after = populated_store.layout
        assert after != before

        command.undo()
        assert populated_store.layout == before

        command.execute()
        assert populated_store.layout == after

    @pytest.mark.parametrize("build", ROUND_TRIP_CASES.values(), ids=ROUND_TRIP_CASES.keys())
    def test_commands_satisfy_protocol(
        self, populated_store: LayoutStore, build: CommandBuilder
    ) -> None:
        command = build(populated_store)
        assert isinstance(command, CommandProtocol)
        assert isinstance(command.command_type, CommandType)
        assert command.timestamp > 0


class TestDeleteDeviceType:
    """Tests for the cascading delete command."""

    def test_undo_restores_device_order(self, populated_store: LayoutStore) -> None:
        before = populated_store.rack.devices
        command = create_delete_device_type_command(
            populated_store.get_device_type("server-1u"),
            0,
            populated_store.get_placed_devices_for_type("server-1u"),
            populated_store,
        )
        command.execute()
        assert [d.device_type for d in populated_store.rack.devices] == ["server-2u", "ups-4u"]

        command.undo()
        assert populated_store.rack.devices == before

    def test_snapshot_is_defensive_copy(self, populated_store: LayoutStore) -> None:
        cascade = list(populated_store.get_placed_devices_for_type("server-1u"))
        before = populated_store.layout
        command = create_delete_device_type_command(
            populated_store.get_device_type("server-1u"), 0, cascade, populated_store
        )
        cascade.clear()

        command.execute()
        command.undo()
        assert populated_store.layout == before
        assert len(command.placed_devices) == 2

    def test_description_uses_model_or_slug(self, populated_store: LayoutStore) -> None:
        server = populated_store.get_device_type("server-1u")
        ups = populated_store.get_device_type("ups-4u")
        assert create_delete_device_type_command(server, 0, (), populated_store).description == "Delete 1U Server"
        assert create_delete_device_type_command(ups, 3, (), populated_store).description == "Delete ups-4u"


class TestDescriptions:
    """Tests for command descriptions."""

    def test_device_descriptions(self, populated_store: LayoutStore) -> None:
        device = populated_store.get_device_at_index(0)
        assert create_place_device_command(device, populated_store, "1U Server").description == "Place 1U Server"
        assert create_move_device_command(0, 1, 5, populated_store, "web").description == "Move web"
        assert create_remove_device_command(0, device, populated_store, "web").description == "Remove web"
        assert (
            create_update_device_face_command(
                0, DeviceFace.FRONT, DeviceFace.REAR, populated_store, "web"
            ).description
            == "Flip web"
        )
        assert create_update_device_name_command(0, None, "x", populated_store, "web").description == "Rename web"

    def test_rack_descriptions(self, populated_store: LayoutStore) -> None:
        rack = populated_store.rack
        assert create_update_rack_command({}, {}, populated_store).description == "Update rack settings"
        assert create_replace_rack_command(rack, rack, populated_store).description == "Replace rack"
        assert create_clear_rack_command(rack.devices, populated_store).description == "Clear rack (4 devices)"
        assert create_clear_rack_command(rack.devices[:1], populated_store).description == "Clear rack (1 device)"

    def test_type_descriptions(self, populated_store: LayoutStore) -> None:
        new_type = DeviceType(slug="nas-2u", u_height=2, model="DS920+")
        assert create_add_device_type_command(new_type, populated_store).description == "Add DS920+"
        assert create_update_device_type_command("nas-2u", {}, {}, populated_store).description == "Update nas-2u"


class TestFailingCommands:
    """Commands that cannot apply raise without changing the store."""

    def test_move_into_collision_raises(self, populated_store: LayoutStore) -> None:
        before = populated_store.layout
        command = create_move_device_command(0, 1, 2, populated_store)
        with pytest.raises(PlacementError):
            command.execute()
        assert populated_store.layout == before

    def test_flip_into_collision_raises(self, populated_store: LayoutStore) -> None:
        populated_store.place_device_raw(placed("server-1u", 1, DeviceFace.REAR))
        before = populated_store.layout
        command = create_update_device_face_command(
            0, DeviceFace.FRONT, DeviceFace.BOTH, populated_store
        )
        with pytest.raises(PlacementError):
            command.execute()
        assert populated_store.layout == before

    def test_update_caller_mapping_is_copied(self, populated_store: LayoutStore) -> None:
        after = {"model": "Smart-UPS"}
        command = create_update_device_type_command("ups-4u", {"model": None}, after, populated_store)
        after["model"] = "Changed"
        command.execute()
        assert populated_store.get_device_type("ups-4u").model == "Smart-UPS"
