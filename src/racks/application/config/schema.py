"""Pydantic schema models for rack layout files.

This module defines the JSON layout file format. It uses Pydantic v2 for
validation; enums are reused from the domain layer so file values and domain
values are the same strings.

Structural rules (types, ranges, slug syntax, unique slugs) are enforced here.
Placement rules that need the whole layout (bounds, collisions, dangling
device type references) are checked by the layout validators after loading.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from racks.domain.entities import (
    ALLOWED_RACK_WIDTHS,
    CURRENT_LAYOUT_VERSION,
    MAX_RACK_HEIGHT,
    MAX_SLUG_LENGTH,
    MIN_RACK_HEIGHT,
    STANDARD_RACK_WIDTH,
)
from racks.domain.value_objects import (
    Airflow,
    DeviceCategory,
    DeviceFace,
    DisplayMode,
    FormFactor,
    WeightUnit,
)

SLUG_REGEX = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
HEX_COLOUR_REGEX = r"^#[0-9a-fA-F]{6}$"
VERSION_REGEX = r"^\d+\.\d+(\.\d+)?$"


class DeviceTypeConfig(BaseModel):
    """A device type template.

    Attributes:
        slug: Unique identifier referenced by placed devices.
        u_height: Height in rack units (multiple of 0.5).
        is_full_depth: Whether the device blocks the opposite face (default
            true when omitted).
        airflow: Airflow pattern (neutral when omitted).
        colour: Hex display colour (defaults to the category colour).
    """

    model_config = ConfigDict(extra="forbid")

    slug: str = Field(..., min_length=1, max_length=MAX_SLUG_LENGTH, pattern=SLUG_REGEX)
    u_height: float = Field(..., gt=0, le=MAX_RACK_HEIGHT)
    manufacturer: str | None = Field(default=None, max_length=100)
    model: str | None = Field(default=None, max_length=100)
    is_full_depth: bool | None = None
    airflow: Airflow | None = None
    weight: float | None = Field(default=None, gt=0)
    weight_unit: WeightUnit | None = None
    comments: str | None = Field(default=None, max_length=1000)
    colour: str | None = Field(default=None, pattern=HEX_COLOUR_REGEX)
    category: DeviceCategory = DeviceCategory.OTHER
    tags: list[str] = Field(default_factory=list)

    @field_validator("u_height")
    @classmethod
    def validate_half_units(cls, v: float) -> float:
        """Validate that the height is a whole or half rack unit."""
        if not float(v * 2).is_integer():
            raise ValueError("u_height must be a multiple of 0.5")
        return v


class PlacedDeviceConfig(BaseModel):
    """A device mounted in the rack."""

    model_config = ConfigDict(extra="forbid")

    device_type: str = Field(..., min_length=1, max_length=MAX_SLUG_LENGTH, pattern=SLUG_REGEX)
    position: int = Field(..., ge=1)
    face: DeviceFace = DeviceFace.FRONT
    name: str | None = Field(default=None, max_length=100)


class RackConfig(BaseModel):
    """Rack dimensions, numbering and mounted devices."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=100)
    height: int = Field(..., ge=MIN_RACK_HEIGHT, le=MAX_RACK_HEIGHT)
    width: int = STANDARD_RACK_WIDTH
    desc_units: bool = False
    form_factor: FormFactor = FormFactor.FOUR_POST_CABINET
    starting_unit: int = Field(default=1, ge=1)
    devices: list[PlacedDeviceConfig] = Field(default_factory=list)

    @field_validator("width")
    @classmethod
    def validate_width(cls, v: int) -> int:
        """Validate that the rail width is a standard width."""
        if v not in ALLOWED_RACK_WIDTHS:
            raise ValueError(
                f"Rack width must be one of {sorted(ALLOWED_RACK_WIDTHS)} inches"
            )
        return v


class LayoutSettingsConfig(BaseModel):
    """Presentation settings."""

    model_config = ConfigDict(extra="forbid")

    display_mode: DisplayMode = DisplayMode.LABEL
    show_labels_on_images: bool = False


class LayoutConfiguration(BaseModel):
    """Root model for a rack layout file.

    Example:
        >>> config = LayoutConfiguration(
        ...     name="Homelab",
        ...     rack=RackConfig(name="Main", height=42),
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    version: str = Field(default=CURRENT_LAYOUT_VERSION, pattern=VERSION_REGEX)
    name: str = Field(..., min_length=1, max_length=100)
    rack: RackConfig
    device_types: list[DeviceTypeConfig] = Field(default_factory=list)
    settings: LayoutSettingsConfig = Field(default_factory=LayoutSettingsConfig)

    @model_validator(mode="after")
    def validate_unique_slugs(self) -> "LayoutConfiguration":
        """Validate that no two device types share a slug."""
        seen: set[str] = set()
        duplicates: list[str] = []
        for device_type in self.device_types:
            if device_type.slug in seen and device_type.slug not in duplicates:
                duplicates.append(device_type.slug)
            seen.add(device_type.slug)
        if duplicates:
            raise ValueError(f"Duplicate device type slugs: {', '.join(duplicates)}")
        return self
