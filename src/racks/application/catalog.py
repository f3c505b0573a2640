"""Starter device type library and slug helpers.

New layouts are seeded with a small set of generic device types so that a
user can start placing equipment before building a catalog of their own.
"""

from __future__ import annotations

import re

from racks.domain.entities import MAX_SLUG_LENGTH, DeviceType
from racks.domain.value_objects import Airflow, DeviceCategory

__all__ = [
    "STARTER_DEVICES",
    "create_device_type",
    "slugify",
    "starter_device_types",
]

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")

# (name, height in U, category)
STARTER_DEVICES: tuple[tuple[str, float, DeviceCategory], ...] = (
    ("1U Server", 1, DeviceCategory.SERVER),
    ("2U Server", 2, DeviceCategory.SERVER),
    ("4U Server", 4, DeviceCategory.SERVER),
    ("1U Switch", 1, DeviceCategory.NETWORKING),
    ("1U Router", 1, DeviceCategory.NETWORKING),
    ("1U Firewall", 1, DeviceCategory.NETWORKING),
    ("1U Patch Panel", 1, DeviceCategory.CABLE_MANAGEMENT),
    ("2U Patch Panel", 2, DeviceCategory.CABLE_MANAGEMENT),
    ("1U PDU", 1, DeviceCategory.POWER),
    ("2U UPS", 2, DeviceCategory.POWER),
    ("4U UPS", 4, DeviceCategory.POWER),
    ("2U Storage", 2, DeviceCategory.STORAGE),
    ("4U Storage", 4, DeviceCategory.STORAGE),
    ("1U KVM", 1, DeviceCategory.KVM),
    ("1U Console Drawer", 1, DeviceCategory.KVM),
    ("1U Receiver", 1, DeviceCategory.AUDIO_VIDEO),
    ("2U Amplifier", 2, DeviceCategory.AUDIO_VIDEO),
    ("0.5U Blanking Fan", 0.5, DeviceCategory.COOLING),
    ("1U Fan Panel", 1, DeviceCategory.COOLING),
    ("0.5U Blank", 0.5, DeviceCategory.ACCESSORIES),
    ("1U Blank", 1, DeviceCategory.ACCESSORIES),
    ("2U Blank", 2, DeviceCategory.ACCESSORIES),
    ("1U Shelf", 1, DeviceCategory.SHELF),
    ("2U Shelf", 2, DeviceCategory.SHELF),
    ("4U Shelf", 4, DeviceCategory.SHELF),
    ("1U Generic", 1, DeviceCategory.OTHER),
    ("2U Generic", 2, DeviceCategory.OTHER),
)


def slugify(name: str) -> str:
    """Turn a display name into a device type slug.

    Runs of anything other than lowercase letters and digits collapse to a
    single hyphen, e.g. ``"0.5U Blank"`` becomes ``"0-5u-blank"``.

    Raises:
        ValueError: If nothing slug-worthy remains.
    """
    slug = _NON_SLUG_CHARS.sub("-", name.lower()).strip("-")
    slug = slug[:MAX_SLUG_LENGTH].rstrip("-")
    if not slug:
        raise ValueError(f"Cannot derive a slug from '{name}'")
    return slug


def create_device_type(
    name: str,
    u_height: float,
    category: DeviceCategory = DeviceCategory.OTHER,
    *,
    airflow: Airflow | None = None,
    is_full_depth: bool | None = None,
    manufacturer: str | None = None,
    colour: str | None = None,
) -> DeviceType:
    """Create a device type whose slug is derived from ``name``.

    The name is kept as the model so it is used for display.
    """
    return DeviceType(
        slug=slugify(name),
        u_height=u_height,
        is_full_depth=is_full_depth,
        airflow=airflow,
        manufacturer=manufacturer,
        model=name,
        colour=colour,
        category=category,
    )


def starter_device_types() -> tuple[DeviceType, ...]:
    """Return the device types every new layout starts with."""
    return tuple(
        create_device_type(name, u_height, category)
        for name, u_height, category in STARTER_DEVICES
    )
