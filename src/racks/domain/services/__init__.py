"""Domain services for rack layouts.

This package provides the pure, side-effect-free rules of the layout engine:
placement validation, blocked-slot calculation, airflow conflict detection and
the copy-on-write layout transforms built on top of them.
"""

from .airflow import (
    find_airflow_conflicts,
    get_airflow_direction,
    get_device_airflow_conflicts,
    has_airflow_conflict,
)
from .blocked_slots import (
    get_blocked_slots,
    is_position_blocked,
    would_overlap_blocked,
)
from .placement import (
    can_place,
    check_placement,
    faces_collide,
    find_placement_violations,
)
from . import layout_editing

__all__ = [
    # Placement
    "can_place",
    "check_placement",
    "faces_collide",
    "find_placement_violations",
    # Blocked slots
    "get_blocked_slots",
    "is_position_blocked",
    "would_overlap_blocked",
    # Airflow
    "find_airflow_conflicts",
    "get_airflow_direction",
    "get_device_airflow_conflicts",
    "has_airflow_conflict",
    # Layout transforms
    "layout_editing",
]
