"""Airflow conflict detection for stacked rack devices.

A conflict occurs when a device exhausts hot air on a face directly into the
intake of the device mounted immediately above it on the same face.
Intake-below-exhaust stacking is the correct pattern and is never flagged.
"""

from __future__ import annotations

from ..entities import Rack, resolve_device_types
from ..value_objects import (
    Airflow,
    AirflowConflict,
    AirflowConflictType,
    AirflowDirection,
    RackView,
    occupied_range,
)
from .placement import DeviceTypeSource

__all__ = [
    "find_airflow_conflicts",
    "get_airflow_direction",
    "get_device_airflow_conflicts",
    "has_airflow_conflict",
]

# Direction on the front face; the rear face is the opposite
_FRONT_DIRECTIONS: dict[Airflow, AirflowDirection] = {
    Airflow.FRONT_TO_REAR: AirflowDirection.INTAKE,
    Airflow.REAR_TO_FRONT: AirflowDirection.EXHAUST,
    Airflow.SIDE_TO_REAR: AirflowDirection.INTAKE,
}

_OPPOSITE: dict[AirflowDirection, AirflowDirection] = {
    AirflowDirection.INTAKE: AirflowDirection.EXHAUST,
    AirflowDirection.EXHAUST: AirflowDirection.INTAKE,
    AirflowDirection.NEUTRAL: AirflowDirection.NEUTRAL,
}


def get_airflow_direction(airflow: Airflow | None, face: RackView) -> AirflowDirection:
    """Resolve whether a device takes in or pushes out air on a face.

    Passive, absent and side-to-side airflow are neutral on both faces.
    Side-to-rear behaves like front-to-rear.
    """
    if airflow is None:
        return AirflowDirection.NEUTRAL
    front = _FRONT_DIRECTIONS.get(Airflow(airflow), AirflowDirection.NEUTRAL)
    return front if RackView(face) == RackView.FRONT else _OPPOSITE[front]


def has_airflow_conflict(
    lower_airflow: Airflow | None,
    upper_airflow: Airflow | None,
    face: RackView,
) -> bool:
    """Check if a lower device exhausts into the intake of the device above it."""
    face = RackView(face)
    return (
        get_airflow_direction(lower_airflow, face) == AirflowDirection.EXHAUST
        and get_airflow_direction(upper_airflow, face) == AirflowDirection.INTAKE
    )


def find_airflow_conflicts(
    rack: Rack, device_types: DeviceTypeSource
) -> list[AirflowConflict]:
    """Find every airflow conflict in a rack.

    Every pair of devices where the upper one starts exactly one U above the
    top of the lower one is checked on each face both devices are present on.
    Devices separated by a gap, or mounted on disjoint faces, never conflict.
    Devices whose type cannot be resolved are skipped.

    Args:
        rack: The rack to check.
        device_types: Device types for height and airflow lookup.

    Returns:
        Conflicts ordered by position, then face (front first).
    """
    resolved = resolve_device_types(device_types)

    known = [
        (index, placed, resolved[placed.device_type])
        for index, placed in enumerate(rack.devices)
        if placed.device_type in resolved
    ]
    by_bottom: dict[int, list[int]] = {}
    for slot, (_, placed, _) in enumerate(known):
        by_bottom.setdefault(placed.position, []).append(slot)

    conflicts: list[AirflowConflict] = []
    for lower_index, lower, lower_type in sorted(known, key=lambda k: (k[1].position, k[0])):
        lower_top = occupied_range(lower.position, lower_type.u_height).top
        for slot in by_bottom.get(lower_top + 1, []):
            upper_index, upper, upper_type = known[slot]
            for face in lower.face.views:
                if not upper.face.is_visible_from(face):
                    continue
                if has_airflow_conflict(lower_type.airflow, upper_type.airflow, face):
                    conflicts.append(
                        AirflowConflict(
                            position=upper.position,
                            conflict_type=AirflowConflictType.EXHAUST_TO_INTAKE,
                            face=face,
                            lower_index=lower_index,
                            upper_index=upper_index,
                            lower_device=lower,
                            upper_device=upper,
                        )
                    )

    conflicts.sort(key=lambda c: (c.position, c.face != RackView.FRONT))
    return conflicts


def get_device_airflow_conflicts(
    rack: Rack, device_types: DeviceTypeSource, index: int
) -> list[AirflowConflict]:
    """Return the conflicts that involve the device at ``index``."""
    return [
        conflict
        for conflict in find_airflow_conflicts(rack, device_types)
        if conflict.involves(index)
    ]
