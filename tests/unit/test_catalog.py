"""Unit tests for the starter library and slug helpers."""

import pytest

from racks.application import create_device_type, create_layout, slugify, starter_device_types
from racks.application.catalog import STARTER_DEVICES
from racks.domain import DeviceCategory, is_valid_slug


class TestSlugify:
    """Tests for slugify()."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("1U Server", "1u-server"),
            ("0.5U Blank", "0-5u-blank"),
            ("  Patch  Panel -- 24 Port ", "patch-panel-24-port"),
            ("Dell PowerEdge R650", "dell-poweredge-r650"),
        ],
    )
    def test_slugify(self, name: str, expected: str) -> None:
        assert slugify(name) == expected

    def test_result_is_valid_slug(self) -> None:
        assert is_valid_slug(slugify("A" * 150))

    @pytest.mark.parametrize("name", ["", "   ", "---", "!!"])
    def test_empty_slug_raises(self, name: str) -> None:
        with pytest.raises(ValueError):
            slugify(name)


class TestStarterLibrary:
    """Tests for the starter device types."""

    def test_one_type_per_entry(self) -> None:
        assert len(starter_device_types()) == len(STARTER_DEVICES)

    def test_slugs_are_unique(self) -> None:
        slugs = [dt.slug for dt in starter_device_types()]
        assert len(slugs) == len(set(slugs))

    def test_display_name_is_starter_name(self) -> None:
        names = [dt.display_name for dt in starter_device_types()]
        assert names == [name for name, _, _ in STARTER_DEVICES]

    def test_half_unit_blank_present(self) -> None:
        blank = next(dt for dt in starter_device_types() if dt.slug == "0-5u-blank")
        assert blank.u_height == 0.5
        assert blank.category is DeviceCategory.ACCESSORIES

    def test_create_device_type_uses_category_colour(self) -> None:
        switch = create_device_type("48 Port Switch", 1, DeviceCategory.NETWORKING)
        server = create_device_type("Server", 1, DeviceCategory.SERVER)
        assert switch.slug == "48-port-switch"
        assert switch.colour != server.colour


class TestCreateLayout:
    """Tests for create_layout()."""

    def test_defaults(self) -> None:
        layout = create_layout()
        assert layout.name == "Untitled"
        assert layout.rack.height == 42
        assert layout.rack.devices == ()
        assert layout.device_types == starter_device_types()

    def test_custom_catalog(self) -> None:
        layout = create_layout("Lab", rack_height=12, device_types=[])
        assert layout.rack.name == "Lab"
        assert layout.device_types == ()
