"""Value objects for the rack domain.

This module provides immutable data types used throughout the rack layout
engine. All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Interval geometry
from ._geometry import (
    URange,
    occupied_range,
    ranges_overlap,
)

# Faces and views
from ._faces import (
    DEFAULT_DEVICE_FACE,
    DEFAULT_RACK_VIEW,
    DeviceFace,
    RackView,
)

# Airflow
from ._airflow import (
    Airflow,
    AirflowConflict,
    AirflowConflictType,
    AirflowDirection,
)

# Catalog metadata
from ._catalog import (
    CATEGORY_COLOURS,
    DeviceCategory,
    DisplayMode,
    FormFactor,
    WeightUnit,
)

# Placement results
from ._placement import (
    PlacementResult,
    PlacementStatus,
)

__all__ = [
    # Geometry
    "URange",
    "occupied_range",
    "ranges_overlap",
    # Faces
    "DeviceFace",
    "RackView",
    "DEFAULT_DEVICE_FACE",
    "DEFAULT_RACK_VIEW",
    # Airflow
    "Airflow",
    "AirflowDirection",
    "AirflowConflictType",
    "AirflowConflict",
    # Catalog
    "DeviceCategory",
    "FormFactor",
    "WeightUnit",
    "DisplayMode",
    "CATEGORY_COLOURS",
    # Placement
    "PlacementStatus",
    "PlacementResult",
]
