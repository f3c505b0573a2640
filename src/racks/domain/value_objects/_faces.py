"""Rack face and view value objects."""

from __future__ import annotations

from enum import Enum


class RackView(str, Enum):
    """Which side of the rack is being looked at."""

    FRONT = "front"
    REAR = "rear"


class DeviceFace(str, Enum):
    """Which face(s) of the rack a placed device occupies.

    Attributes:
        FRONT: Mounted on the front rails only.
        REAR: Mounted on the rear rails only.
        BOTH: Spans the full depth and is present in both views.
    """

    FRONT = "front"
    REAR = "rear"
    BOTH = "both"

    @property
    def views(self) -> tuple[RackView, ...]:
        """Physical faces this device is present on, front first."""
        if self == DeviceFace.BOTH:
            return (RackView.FRONT, RackView.REAR)
        return (RackView(self.value),)

    def is_visible_from(self, view: RackView) -> bool:
        """Check if a device with this face is present on the given view."""
        return self == DeviceFace.BOTH or self.value == RackView(view).value

    def opposite(self) -> DeviceFace:
        """Return the other single face; BOTH maps to itself."""
        if self == DeviceFace.FRONT:
            return DeviceFace.REAR
        if self == DeviceFace.REAR:
            return DeviceFace.FRONT
        return self


DEFAULT_DEVICE_FACE = DeviceFace.FRONT
DEFAULT_RACK_VIEW = RackView.FRONT
