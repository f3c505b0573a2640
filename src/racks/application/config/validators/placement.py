"""Layout integrity validation.

Checks the invariants every editable layout must hold:
- device type slugs are unique
- every placed device references a known device type
- every placed device lies inside the rack
- no two colliding devices overlap
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from racks.domain.entities import resolve_device_types
from racks.domain.services import find_placement_violations
from racks.domain.value_objects import PlacementStatus

from .base import ValidationResult

if TYPE_CHECKING:
    from racks.domain.entities import Layout


class LayoutIntegrityValidator:
    """Validator for the structural invariants of a layout."""

    @property
    def name(self) -> str:
        return "placement"

    def validate(self, layout: Layout) -> ValidationResult:
        result = ValidationResult()

        seen: set[str] = set()
        for i, device_type in enumerate(layout.device_types):
            if device_type.slug in seen:
                result.add_error(
                    path=f"device_types[{i}]",
                    message=f"Duplicate device type slug '{device_type.slug}'",
                    value=device_type.slug,
                )
            seen.add(device_type.slug)

        resolved = resolve_device_types(layout.device_types)
        for index, placement in find_placement_violations(layout.rack, resolved):
            device = layout.rack.devices[index]
            path = f"rack.devices[{index}]"

            if device.device_type not in resolved:
                result.add_error(
                    path=path,
                    message=f"References unknown device type '{device.device_type}'",
                    value=device.device_type,
                )
            elif placement.status is PlacementStatus.BLOCKED:
                others = ", ".join(str(i) for i in placement.collisions)
                result.add_error(
                    path=path,
                    message=(
                        f"'{device.device_type}' at U{device.position} "
                        f"({device.face.value}) collides with device(s) {others}"
                    ),
                    value=device.position,
                )
            else:
                result.add_error(
                    path=path,
                    message=f"'{device.device_type}' does not fit: {placement.reason}",
                    value=device.position,
                )

        return result
