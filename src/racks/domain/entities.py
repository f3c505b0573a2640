"""Domain entities for rack layouts.

Every entity is a frozen dataclass and every collection is a tuple, so a
``Layout`` reference is a stable snapshot: mutation always builds a new
instance with ``dataclasses.replace``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from .value_objects import (
    CATEGORY_COLOURS,
    DEFAULT_DEVICE_FACE,
    Airflow,
    DeviceCategory,
    DeviceFace,
    DisplayMode,
    FormFactor,
    URange,
    WeightUnit,
    occupied_range,
)

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
MAX_SLUG_LENGTH = 100

MIN_RACK_HEIGHT = 1
MAX_RACK_HEIGHT = 100
ALLOWED_RACK_WIDTHS: frozenset[int] = frozenset({10, 19})
STANDARD_RACK_WIDTH = 19

CURRENT_LAYOUT_VERSION = "0.2.0"


def is_valid_slug(slug: str) -> bool:
    """Check that a slug is lowercase alphanumeric with single hyphens."""
    return 0 < len(slug) <= MAX_SLUG_LENGTH and SLUG_PATTERN.match(slug) is not None


@dataclass(frozen=True)
class ResolvedDeviceType:
    """Device type with every default applied.

    Built once at the validator boundary so that placement, blocked-slot and
    airflow code share one default policy: absent depth means full depth and
    absent airflow means passive.
    """

    slug: str
    u_height: float
    is_full_depth: bool
    airflow: Airflow


@dataclass(frozen=True)
class DeviceType:
    """A device template from the catalog, keyed by slug.

    Attributes:
        slug: Unique identifier (lowercase letters, digits and hyphens).
        u_height: Height in rack units, a positive multiple of 0.5.
        is_full_depth: Whether the device blocks the opposite face. None means
            the default (full depth).
        airflow: Declared airflow pattern. None means neutral.
        manufacturer: Optional manufacturer name.
        model: Optional model name, used as the display name when present.
        colour: Hex display colour. Defaults to the category colour.
        category: Device category for filtering.
        weight: Optional device weight.
        weight_unit: Unit for ``weight``.
        comments: Free-form notes.
        tags: User organisation tags.
    """

    slug: str
    u_height: float
    is_full_depth: bool | None = None
    airflow: Airflow | None = None
    manufacturer: str | None = None
    model: str | None = None
    colour: str | None = None
    category: DeviceCategory = DeviceCategory.OTHER
    weight: float | None = None
    weight_unit: WeightUnit | None = None
    comments: str | None = None
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not is_valid_slug(self.slug):
            raise ValueError(
                f"Invalid slug '{self.slug}': must be lowercase with hyphens only "
                "(no leading/trailing/consecutive)"
            )
        if self.u_height <= 0:
            raise ValueError("u_height must be positive")
        if not float(self.u_height * 2).is_integer():
            raise ValueError("u_height must be a multiple of 0.5")
        if self.weight is not None and self.weight <= 0:
            raise ValueError("weight must be positive")
        object.__setattr__(self, "category", DeviceCategory(self.category))
        if self.airflow is not None:
            object.__setattr__(self, "airflow", Airflow(self.airflow))
        if self.weight_unit is not None:
            object.__setattr__(self, "weight_unit", WeightUnit(self.weight_unit))
        object.__setattr__(self, "tags", tuple(self.tags))
        if self.colour is None:
            object.__setattr__(self, "colour", CATEGORY_COLOURS[self.category])

    @property
    def display_name(self) -> str:
        """Model name when known, otherwise the slug."""
        return self.model or self.slug

    def resolve(self) -> ResolvedDeviceType:
        """Return the normalized view with defaults applied."""
        return ResolvedDeviceType(
            slug=self.slug,
            u_height=self.u_height,
            is_full_depth=self.is_full_depth is not False,
            airflow=self.airflow or Airflow.PASSIVE,
        )


@dataclass(frozen=True)
class PlacedDevice:
    """A device type instance mounted in a rack.

    Attributes:
        device_type: Slug of the referenced DeviceType.
        position: Bottom-most U the device occupies (1-indexed).
        face: Which face(s) of the rack the device occupies.
        name: Optional display name override.
    """

    device_type: str
    position: int
    face: DeviceFace = DEFAULT_DEVICE_FACE
    name: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.position, bool) or not isinstance(self.position, int):
            raise TypeError(
                f"position must be an int, got {type(self.position).__name__}"
            )
        object.__setattr__(self, "face", DeviceFace(self.face))

    def occupied_range(self, u_height: float) -> URange:
        """U range covered when the device type is ``u_height`` units tall."""
        return occupied_range(self.position, u_height)


@dataclass(frozen=True)
class Rack:
    """A single rack and its mounted devices.

    The index of a device in ``devices`` is its current position in the
    ordered sequence, not a persistent identifier: removing a device shifts
    the indices of every device after it.

    Attributes:
        name: Display name.
        height: Capacity in rack units.
        width: Rail width in inches (10 or 19).
        desc_units: True when units are numbered from the top down.
        form_factor: Physical rack construction.
        starting_unit: Label of the first unit (usually 1).
        devices: Placed devices in insertion order.
    """

    name: str
    height: int
    width: int = STANDARD_RACK_WIDTH
    desc_units: bool = False
    form_factor: FormFactor = FormFactor.FOUR_POST_CABINET
    starting_unit: int = 1
    devices: tuple[PlacedDevice, ...] = ()

    def __post_init__(self) -> None:
        if not MIN_RACK_HEIGHT <= self.height <= MAX_RACK_HEIGHT:
            raise ValueError(
                f"Rack height must be between {MIN_RACK_HEIGHT} and {MAX_RACK_HEIGHT}"
            )
        if self.width not in ALLOWED_RACK_WIDTHS:
            raise ValueError(
                f"Rack width must be one of {sorted(ALLOWED_RACK_WIDTHS)} inches"
            )
        if self.starting_unit < 1:
            raise ValueError("starting_unit must be at least 1")

    @property
    def device_count(self) -> int:
        """Number of placed devices."""
        return len(self.devices)

    def device_at(self, index: int) -> PlacedDevice | None:
        """Return the device at ``index`` or None when out of range."""
        if 0 <= index < len(self.devices):
            return self.devices[index]
        return None


@dataclass(frozen=True)
class LayoutSettings:
    """Presentation settings stored with a layout."""

    display_mode: DisplayMode = DisplayMode.LABEL
    show_labels_on_images: bool = False


@dataclass(frozen=True)
class Layout:
    """Aggregate root: one rack plus the device types it may reference.

    Attributes:
        name: Layout name.
        rack: The rack being designed.
        device_types: Device templates, unique by slug.
        settings: Presentation settings.
        version: Layout schema version.
    """

    name: str
    rack: Rack
    device_types: tuple[DeviceType, ...] = ()
    settings: LayoutSettings = field(default_factory=LayoutSettings)
    version: str = CURRENT_LAYOUT_VERSION

    def find_device_type(self, slug: str) -> DeviceType | None:
        """Look up a device type by slug."""
        return find_device_type(self.device_types, slug)

    def device_type_index(self, slug: str) -> int:
        """Index of the device type with ``slug``, or -1 when absent."""
        for i, device_type in enumerate(self.device_types):
            if device_type.slug == slug:
                return i
        return -1


def find_device_type(
    device_types: Iterable[DeviceType], slug: str
) -> DeviceType | None:
    """Find a device type by slug, or None when it is not in the collection."""
    for device_type in device_types:
        if device_type.slug == slug:
            return device_type
    return None


def resolve_device_types(
    device_types: Iterable[DeviceType] | Mapping[str, ResolvedDeviceType],
) -> dict[str, ResolvedDeviceType]:
    """Build a slug-keyed lookup of resolved device types.

    Accepts either raw device types or an already-resolved mapping, which is
    returned as a plain dict. The first occurrence of a slug wins.
    """
    if isinstance(device_types, Mapping):
        return dict(device_types)
    resolved: dict[str, ResolvedDeviceType] = {}
    for device_type in device_types:
        resolved.setdefault(device_type.slug, device_type.resolve())
    return resolved
