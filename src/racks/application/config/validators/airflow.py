"""Airflow advisory validation.

An airflow conflict never makes a layout invalid; each one is reported as a
warning so the user can rearrange hot and cold aisles.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from racks.domain.services import find_airflow_conflicts

from .base import ValidationResult

if TYPE_CHECKING:
    from racks.domain.entities import Layout


class AirflowValidator:
    """Validator that reports exhaust-into-intake stacking."""

    @property
    def name(self) -> str:
        return "airflow"

    def validate(self, layout: Layout) -> ValidationResult:
        result = ValidationResult()

        for conflict in find_airflow_conflicts(layout.rack, layout.device_types):
            lower = conflict.lower_device
            upper = conflict.upper_device
            result.add_warning(
                path=f"rack.devices[{conflict.upper_index}]",
                message=(
                    f"'{lower.device_type}' (U{lower.position}) exhausts into the intake "
                    f"of '{upper.device_type}' (U{upper.position}) on the "
                    f"{conflict.face.value} face"
                ),
                suggestion="Flip one device or leave a gap between them",
            )

        return result
