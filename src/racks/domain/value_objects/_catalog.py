"""Catalog metadata value objects (categories, units, display settings)."""

from __future__ import annotations

from enum import Enum


class DeviceCategory(str, Enum):
    """Device categories used for filtering and default colours."""

    SERVER = "server"
    STORAGE = "storage"
    NETWORKING = "networking"
    POWER = "power"
    COOLING = "cooling"
    KVM = "kvm"
    AUDIO_VIDEO = "audio-video"
    SECURITY = "security"
    CABLE_MANAGEMENT = "cable-management"
    ACCESSORIES = "accessories"
    SHELF = "shelf"
    OTHER = "other"


class FormFactor(str, Enum):
    """Physical rack construction."""

    TWO_POST = "2-post"
    FOUR_POST = "4-post"
    FOUR_POST_CABINET = "4-post-cabinet"
    WALL_MOUNT = "wall-mount"
    OPEN_FRAME = "open-frame"


class WeightUnit(str, Enum):
    """Units for device weight."""

    KG = "kg"
    LB = "lb"


class DisplayMode(str, Enum):
    """How placed devices are drawn by the presentation layer."""

    LABEL = "label"
    IMAGE = "image"


# Default display colours per category
CATEGORY_COLOURS: dict[DeviceCategory, str] = {
    DeviceCategory.SERVER: "#4A90D9",
    DeviceCategory.STORAGE: "#228B22",
    DeviceCategory.NETWORKING: "#7B68EE",
    DeviceCategory.POWER: "#DC143C",
    DeviceCategory.COOLING: "#00CED1",
    DeviceCategory.KVM: "#FF8C00",
    DeviceCategory.AUDIO_VIDEO: "#9932CC",
    DeviceCategory.SECURITY: "#B22222",
    DeviceCategory.CABLE_MANAGEMENT: "#4682B4",
    DeviceCategory.ACCESSORIES: "#2F4F4F",
    DeviceCategory.SHELF: "#8B4513",
    DeviceCategory.OTHER: "#808080",
}
