"""Airflow value objects for thermal conflict detection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ._faces import RackView

if TYPE_CHECKING:
    from ..entities import PlacedDevice


class Airflow(str, Enum):
    """Declared cooling airflow pattern of a device type (NetBox values).

    Attributes:
        FRONT_TO_REAR: Cold air in at the front, hot air out at the rear.
        REAR_TO_FRONT: Cold air in at the rear, hot air out at the front.
        LEFT_TO_RIGHT: Side-to-side flow, neutral for face conflicts.
        RIGHT_TO_LEFT: Side-to-side flow, neutral for face conflicts.
        SIDE_TO_REAR: Side intake with rear exhaust.
        PASSIVE: No forced airflow.
    """

    FRONT_TO_REAR = "front-to-rear"
    REAR_TO_FRONT = "rear-to-front"
    LEFT_TO_RIGHT = "left-to-right"
    RIGHT_TO_LEFT = "right-to-left"
    SIDE_TO_REAR = "side-to-rear"
    PASSIVE = "passive"


class AirflowDirection(str, Enum):
    """Resolved airflow behaviour of a device on one face."""

    INTAKE = "intake"
    EXHAUST = "exhaust"
    NEUTRAL = "neutral"


class AirflowConflictType(str, Enum):
    """Kinds of thermal conflict between stacked devices."""

    EXHAUST_TO_INTAKE = "exhaust-to-intake"


@dataclass(frozen=True)
class AirflowConflict:
    """A thermal conflict between two U-adjacent devices on one face.

    Attributes:
        position: U where the conflict occurs (bottom U of the upper device).
        conflict_type: Kind of conflict.
        face: Physical face the conflict occurs on.
        lower_index: Index of the lower (exhausting) device in the rack.
        upper_index: Index of the upper (intaking) device in the rack.
        lower_device: The lower placed device.
        upper_device: The upper placed device.
    """

    position: int
    conflict_type: AirflowConflictType
    face: RackView
    lower_index: int
    upper_index: int
    lower_device: "PlacedDevice"
    upper_device: "PlacedDevice"

    def involves(self, index: int) -> bool:
        """Check if the device at the given rack index takes part in this conflict."""
        return index in (self.lower_index, self.upper_index)
