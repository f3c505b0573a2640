"""Unit tests for rack-unit ranges and face value objects."""

import pytest

from racks.domain.value_objects import (
    DeviceFace,
    PlacementResult,
    PlacementStatus,
    RackView,
    URange,
    occupied_range,
    ranges_overlap,
)


class TestOccupiedRange:
    """Tests for occupied_range()."""

    def test_single_unit_device(self) -> None:
        assert occupied_range(5, 1) == URange(5, 5)

    def test_multi_unit_device(self) -> None:
        assert occupied_range(1, 4) == URange(1, 4)

    def test_half_unit_device_claims_its_slot(self) -> None:
        """A 0.5U device still occupies one whole slot."""
        assert occupied_range(3, 0.5) == URange(3, 3)

    def test_one_and_a_half_unit_device_rounds_up(self) -> None:
        assert occupied_range(3, 1.5) == URange(3, 4)

    def test_height_property(self) -> None:
        assert URange(2, 5).height == 4


class TestRangesOverlap:
    """Tests for closed-interval overlap."""

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            (URange(1, 2), URange(2, 3), True),
            (URange(1, 4), URange(2, 3), True),
            (URange(1, 2), URange(3, 4), False),
            (URange(5, 5), URange(5, 5), True),
            (URange(6, 8), URange(1, 5), False),
        ],
    )
    def test_overlap(self, a: URange, b: URange, expected: bool) -> None:
        assert ranges_overlap(a, b) is expected
        assert ranges_overlap(b, a) is expected

    def test_contains(self) -> None:
        r = URange(3, 5)
        assert r.contains(3)
        assert r.contains(5)
        assert not r.contains(6)

    def test_overlaps_method_matches_function(self) -> None:
        assert URange(1, 3).overlaps(URange(3, 4))


class TestDeviceFace:
    """Tests for DeviceFace helpers."""

    def test_both_is_visible_from_every_view(self) -> None:
        assert DeviceFace.BOTH.is_visible_from(RackView.FRONT)
        assert DeviceFace.BOTH.is_visible_from(RackView.REAR)

    def test_single_face_visible_only_from_own_view(self) -> None:
        assert DeviceFace.FRONT.is_visible_from(RackView.FRONT)
        assert not DeviceFace.FRONT.is_visible_from(RackView.REAR)

    def test_views(self) -> None:
        assert DeviceFace.BOTH.views == (RackView.FRONT, RackView.REAR)
        assert DeviceFace.REAR.views == (RackView.REAR,)

    def test_opposite(self) -> None:
        assert DeviceFace.FRONT.opposite() is DeviceFace.REAR
        assert DeviceFace.REAR.opposite() is DeviceFace.FRONT
        assert DeviceFace.BOTH.opposite() is DeviceFace.BOTH


class TestPlacementResult:
    """Tests for PlacementResult constructors."""

    def test_valid(self) -> None:
        result = PlacementResult.valid()
        assert result.is_valid
        assert result.status is PlacementStatus.VALID
        assert result.collisions == ()

    def test_blocked_carries_collisions(self) -> None:
        result = PlacementResult.blocked("overlap", (0, 2))
        assert not result.is_valid
        assert result.collisions == (0, 2)
