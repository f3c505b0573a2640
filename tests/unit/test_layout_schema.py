"""Unit tests for the layout file schema, loader and adapter.

These tests verify:
- Valid layouts are loaded correctly
- Structural rules are enforced by the schema (slugs, half units, widths)
- Unknown fields are rejected (extra="forbid")
- Loader error handling (file not found, JSON parse errors)
- Conversion between file models and domain entities
"""

from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError as PydanticValidationError

from builders import placed
from racks.application import create_layout
from racks.application.config import (
    ConfigError,
    DeviceTypeConfig,
    LayoutConfiguration,
    PlacedDeviceConfig,
    RackConfig,
    config_to_layout,
    layout_to_config,
    load_layout_file,
    load_layout_from_dict,
)
from racks.application.config.loader import _format_json_path
from racks.domain import Airflow, DeviceFace, Layout
from racks.domain.value_objects import CATEGORY_COLOURS, DeviceCategory, FormFactor


def _layout_data(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": "Homelab",
        "rack": {"name": "Main", "height": 42},
        "device_types": [],
    }
    data.update(overrides)
    return data


class TestDeviceTypeConfig:
    """Tests for DeviceTypeConfig model."""

    def test_defaults(self) -> None:
        config = DeviceTypeConfig(slug="server-1u", u_height=1)
        assert config.is_full_depth is None
        assert config.airflow is None
        assert config.category is DeviceCategory.OTHER
        assert config.tags == []

    @pytest.mark.parametrize("u_height", [0.5, 1, 1.5, 42])
    def test_half_unit_heights_accepted(self, u_height: float) -> None:
        assert DeviceTypeConfig(slug="dev", u_height=u_height).u_height == u_height

    @pytest.mark.parametrize("u_height", [0, -1, 0.3, 1.25, 101])
    def test_invalid_heights_rejected(self, u_height: float) -> None:
        with pytest.raises(PydanticValidationError):
            DeviceTypeConfig(slug="dev", u_height=u_height)

    @pytest.mark.parametrize("slug", ["Server", "server_1u", "-server", "server-", "a--b", ""])
    def test_invalid_slugs_rejected(self, slug: str) -> None:
        with pytest.raises(PydanticValidationError):
            DeviceTypeConfig(slug=slug, u_height=1)

    def test_colour_must_be_hex(self) -> None:
        DeviceTypeConfig(slug="dev", u_height=1, colour="#a1B2c3")
        with pytest.raises(PydanticValidationError):
            DeviceTypeConfig(slug="dev", u_height=1, colour="red")

    def test_airflow_values(self) -> None:
        config = DeviceTypeConfig(slug="dev", u_height=1, airflow="side-to-rear")
        assert config.airflow is Airflow.SIDE_TO_REAR

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(PydanticValidationError):
            DeviceTypeConfig(slug="dev", u_height=1, depth=30)


class TestRackConfig:
    """Tests for RackConfig and PlacedDeviceConfig."""

    def test_defaults(self) -> None:
        rack = RackConfig(name="Main", height=42)
        assert rack.width == 19
        assert rack.desc_units is False
        assert rack.form_factor is FormFactor.FOUR_POST_CABINET
        assert rack.starting_unit == 1
        assert rack.devices == []

    @pytest.mark.parametrize("height", [0, 101])
    def test_height_bounds(self, height: int) -> None:
        with pytest.raises(PydanticValidationError):
            RackConfig(name="Main", height=height)

    def test_width_must_be_standard(self) -> None:
        assert RackConfig(name="Main", height=42, width=10).width == 10
        with pytest.raises(PydanticValidationError, match="width"):
            RackConfig(name="Main", height=42, width=23)

    def test_device_position_must_be_positive(self) -> None:
        with pytest.raises(PydanticValidationError):
            PlacedDeviceConfig(device_type="dev", position=0)

    def test_device_face_defaults_to_front(self) -> None:
        assert PlacedDeviceConfig(device_type="dev", position=1).face is DeviceFace.FRONT

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(PydanticValidationError):
            RackConfig(name="Main", height=42, colour="#000000")


class TestLayoutConfiguration:
    """Tests for the root layout model."""

    def test_minimal_layout(self) -> None:
        config = LayoutConfiguration(name="Homelab", rack=RackConfig(name="Main", height=42))
        assert config.version == "0.2.0"
        assert config.device_types == []

    @pytest.mark.parametrize("version", ["0.2", "0.2.0", "10.1.3"])
    def test_version_pattern_accepted(self, version: str) -> None:
        assert load_layout_from_dict(_layout_data(version=version)).version == version

    @pytest.mark.parametrize("version", ["1", "v0.2", "0.2.0-beta", ""])
    def test_version_pattern_rejected(self, version: str) -> None:
        with pytest.raises(ConfigError):
            load_layout_from_dict(_layout_data(version=version))

    def test_duplicate_slugs_rejected(self) -> None:
        data = _layout_data(
            device_types=[
                {"slug": "server-1u", "u_height": 1},
                {"slug": "server-1u", "u_height": 2},
            ]
        )
        with pytest.raises(ConfigError) as exc_info:
            load_layout_from_dict(data)
        assert exc_info.value.error_type == "validation"
        assert "Duplicate device type slugs: server-1u" in str(exc_info.value)

    def test_dangling_reference_passes_schema(self) -> None:
        """Cross-references are checked by the layout validators, not the schema."""
        data = _layout_data(
            rack={
                "name": "Main",
                "height": 12,
                "devices": [{"device_type": "missing", "position": 1}],
            }
        )
        config = load_layout_from_dict(data)
        assert config.rack.devices[0].device_type == "missing"


class TestFormatJsonPath:
    """Tests for _format_json_path()."""

    @pytest.mark.parametrize(
        "loc, expected",
        [
            (("rack", "height"), "rack.height"),
            (("rack", "devices", 0, "position"), "rack.devices[0].position"),
            (("device_types", 2), "device_types[2]"),
            ((0,), "[0]"),
            ((), ""),
        ],
    )
    def test_format(self, loc: tuple, expected: str) -> None:
        assert _format_json_path(loc) == expected


class TestLoadLayoutFile:
    """Tests for load_layout_file()."""

    def test_valid_file(self, fixtures_path: Path) -> None:
        config = load_layout_file(fixtures_path / "valid_minimal.json")
        assert config.name == "Minimal"
        assert config.rack.height == 12
        assert config.rack.devices[0].position == 5

    def test_file_not_found(self, fixtures_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_layout_file(fixtures_path / "nonexistent.json")
        assert exc_info.value.error_type == "file_not_found"
        assert exc_info.value.path == fixtures_path / "nonexistent.json"

    def test_invalid_json(self, fixtures_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_layout_file(fixtures_path / "invalid_json.json")
        assert exc_info.value.error_type == "json_parse"
        assert "line" in exc_info.value.details[0]

    def test_unknown_field_reports_path(self, fixtures_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_layout_file(fixtures_path / "unknown_field.json")
        error = exc_info.value
        assert error.error_type == "validation"
        assert [d["path"] for d in error.details] == ["rack.colour"]
        assert str(error).startswith("Layout validation failed:")

    def test_model_level_error_uses_root_path(self, fixtures_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_layout_file(fixtures_path / "duplicate_slugs.json")
        assert exc_info.value.details[0]["path"] == "(root)"

    def test_directory_is_read_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_layout_file(tmp_path)
        assert exc_info.value.error_type in ("file_read_error", "permission_denied")


class TestAdapter:
    """Tests for config_to_layout() and layout_to_config()."""

    def test_config_to_layout(self, fixtures_path: Path) -> None:
        layout = config_to_layout(load_layout_file(fixtures_path / "valid_minimal.json"))

        assert isinstance(layout, Layout)
        assert layout.rack.devices == (placed("server-1u", 5),)
        server = layout.find_device_type("server-1u")
        assert server.display_name == "1U Server"
        assert server.colour == CATEGORY_COLOURS[DeviceCategory.SERVER]

    def test_collisions_survive_conversion(self, fixtures_path: Path) -> None:
        layout = config_to_layout(load_layout_file(fixtures_path / "collision.json"))
        assert layout.rack.device_count == 2

    def test_layout_round_trip(self) -> None:
        layout = create_layout("Lab", rack_height=24)
        assert config_to_layout(layout_to_config(layout)) == layout

    def test_layout_to_config_serializes_enums_as_strings(self, empty_layout: Layout) -> None:
        data = layout_to_config(empty_layout).model_dump(mode="json")
        airflows = {dt["slug"]: dt["airflow"] for dt in data["device_types"]}
        assert airflows["server-1u"] == "front-to-rear"
        assert airflows["patch-panel"] is None

    def test_domain_rejection_is_layout_error(self) -> None:
        # model_construct skips validation, so the rack height reaches the domain
        config = LayoutConfiguration(
            name="Bad",
            rack=RackConfig.model_construct(
                name="Main", height=0, width=19, desc_units=False,
                form_factor=FormFactor.FOUR_POST_CABINET, starting_unit=1, devices=[],
            ),
        )
        with pytest.raises(ConfigError) as exc_info:
            config_to_layout(config)
        assert exc_info.value.error_type == "layout"
