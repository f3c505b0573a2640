"""Unit tests for blocked-slot calculation."""

from builders import make_rack, placed
from racks.domain import (
    DeviceFace,
    DeviceType,
    PlacementStatus,
    RackView,
    URange,
    can_place,
    get_blocked_slots,
)
from racks.domain.services import is_position_blocked, would_overlap_blocked


class TestGetBlockedSlots:
    """Tests for get_blocked_slots()."""

    def test_empty_rack(self, device_types) -> None:
        assert get_blocked_slots(make_rack(), RackView.FRONT, device_types) == []

    def test_full_depth_front_device_blocks_rear(self, device_types) -> None:
        rack = make_rack(placed("server-2u", 3, DeviceFace.FRONT))
        assert get_blocked_slots(rack, RackView.REAR, device_types) == [URange(3, 4)]
        assert get_blocked_slots(rack, RackView.FRONT, device_types) == []

    def test_string_view(self, device_types) -> None:
        rack = make_rack(placed("server-2u", 3, "front"), placed("patch-panel", 9, "both"))
        assert get_blocked_slots(rack, "rear", device_types) == [URange(3, 4), URange(9, 9)]
        assert get_blocked_slots(rack, "front", device_types) == [URange(9, 9)]

    def test_half_depth_device_does_not_block(self, device_types) -> None:
        rack = make_rack(placed("patch-panel", 3, DeviceFace.REAR))
        assert get_blocked_slots(rack, RackView.FRONT, device_types) == []

    def test_both_face_device_blocks_every_view(self, device_types) -> None:
        rack = make_rack(placed("patch-panel", 7, DeviceFace.BOTH))
        assert get_blocked_slots(rack, RackView.FRONT, device_types) == [URange(7, 7)]
        assert get_blocked_slots(rack, RackView.REAR, device_types) == [URange(7, 7)]

    def test_unset_depth_behaves_like_full_depth(self) -> None:
        unset = [DeviceType(slug="dev", u_height=2)]
        explicit = [DeviceType(slug="dev", u_height=2, is_full_depth=True)]
        rack = make_rack(placed("dev", 1, DeviceFace.REAR), placed("dev", 5, DeviceFace.FRONT))
        for view in RackView:
            assert get_blocked_slots(rack, view, unset) == get_blocked_slots(rack, view, explicit)

    def test_unresolved_devices_skipped(self, device_types) -> None:
        rack = make_rack(placed("missing", 1, DeviceFace.REAR))
        assert get_blocked_slots(rack, RackView.FRONT, device_types) == []

    def test_ranges_are_not_merged(self, device_types) -> None:
        rack = make_rack(
            placed("server-1u", 1, DeviceFace.REAR),
            placed("server-1u", 2, DeviceFace.REAR),
        )
        assert get_blocked_slots(rack, RackView.FRONT, device_types) == [
            URange(1, 1),
            URange(2, 2),
        ]

    def test_blocked_slot_is_not_a_placement_constraint(self, device_types) -> None:
        """A 1U front server blocks rear U5 yet a rear device still fits there."""
        rack = make_rack(placed("server-1u", 5, DeviceFace.FRONT), height=12)

        assert get_blocked_slots(rack, RackView.REAR, device_types) == [URange(5, 5)]
        candidate = placed("server-1u", 5, DeviceFace.REAR)
        assert can_place(rack, device_types, candidate) is PlacementStatus.VALID


class TestBlockedQueries:
    """Tests for is_position_blocked() and would_overlap_blocked()."""

    def test_is_position_blocked(self) -> None:
        slots = [URange(3, 4)]
        assert is_position_blocked(slots, 3)
        assert is_position_blocked(slots, 4)
        assert not is_position_blocked(slots, 5)

    def test_would_overlap_blocked(self) -> None:
        slots = [URange(5, 6)]
        assert would_overlap_blocked(slots, 4, 2)
        assert not would_overlap_blocked(slots, 2, 3)
        assert would_overlap_blocked(slots, 6, 0.5)
