"""Domain layer - core rack layout rules."""

from .entities import (
    DeviceType,
    Layout,
    LayoutSettings,
    PlacedDevice,
    Rack,
    ResolvedDeviceType,
    find_device_type,
    is_valid_slug,
    resolve_device_types,
)
from .exceptions import (
    DuplicateSlugError,
    LayoutError,
    PlacementError,
    UnknownDeviceTypeError,
)
from .services import (
    can_place,
    check_placement,
    find_airflow_conflicts,
    get_airflow_direction,
    get_blocked_slots,
    has_airflow_conflict,
)
from .value_objects import (
    Airflow,
    AirflowConflict,
    AirflowDirection,
    DeviceCategory,
    DeviceFace,
    PlacementResult,
    PlacementStatus,
    RackView,
    URange,
    occupied_range,
    ranges_overlap,
)

__all__ = [
    "Airflow",
    "AirflowConflict",
    "AirflowDirection",
    "DeviceCategory",
    "DeviceFace",
    "DeviceType",
    "DuplicateSlugError",
    "Layout",
    "LayoutError",
    "LayoutSettings",
    "PlacedDevice",
    "PlacementError",
    "PlacementResult",
    "PlacementStatus",
    "Rack",
    "RackView",
    "ResolvedDeviceType",
    "URange",
    "UnknownDeviceTypeError",
    "can_place",
    "check_placement",
    "find_airflow_conflicts",
    "find_device_type",
    "get_airflow_direction",
    "get_blocked_slots",
    "has_airflow_conflict",
    "is_valid_slug",
    "occupied_range",
    "ranges_overlap",
    "resolve_device_types",
]
