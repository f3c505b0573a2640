"""Plain-text formatters for rack layouts."""

from __future__ import annotations

from racks.domain.entities import Layout, PlacedDevice, resolve_device_types
from racks.domain.services import find_airflow_conflicts, get_blocked_slots
from racks.domain.value_objects import AirflowConflict, RackView, URange

BLOCKED_FILL = "/"


def _unit_label(layout: Layout, u: int) -> int:
    """Number printed next to physical slot ``u`` (1 is the bottom slot)."""
    rack = layout.rack
    if rack.desc_units:
        return rack.starting_unit + rack.height - u
    return rack.starting_unit + u - 1


def _device_label(layout: Layout, device: PlacedDevice) -> str:
    if device.name:
        return device.name
    device_type = layout.find_device_type(device.device_type)
    return device_type.display_name if device_type else device.device_type


class BlockedSlotsFormatter:
    """Formats the blocked U ranges of one rack view."""

    def format(self, slots: list[URange], view: RackView) -> str:
        if not slots:
            return f"No blocked slots on the {view.value} view."

        lines = [f"BLOCKED SLOTS ({view.value.upper()} VIEW)", "=" * 40]
        for slot in slots:
            if slot.bottom == slot.top:
                lines.append(f"  U{slot.bottom}")
            else:
                lines.append(f"  U{slot.bottom}-U{slot.top} ({slot.height}U)")
        return "\n".join(lines)


class AirflowReportFormatter:
    """Formats airflow conflicts."""

    def format(self, layout: Layout, conflicts: list[AirflowConflict]) -> str:
        if not conflicts:
            return "No airflow conflicts."

        lines = ["AIRFLOW CONFLICTS", "=" * 60]
        for conflict in conflicts:
            lines.append(
                f"  U{conflict.position} {conflict.face.value:<5}  "
                f"{_device_label(layout, conflict.lower_device)} exhausts into "
                f"{_device_label(layout, conflict.upper_device)}"
            )
        lines.append("")
        lines.append(f"Total conflicts: {len(conflicts)}")
        return "\n".join(lines)


class RackDiagramFormatter:
    """Formats an ASCII elevation of one rack face, top unit first.

    Devices visible from the view are labelled; slots blocked by devices on
    the other face are hatched.
    """

    def format(self, layout: Layout, view: RackView, width: int = 32) -> str:
        rack = layout.rack
        resolved = resolve_device_types(layout.device_types)

        occupant: dict[int, PlacedDevice] = {}
        for device in rack.devices:
            if not device.face.is_visible_from(view) or device.device_type not in resolved:
                continue
            occupied = device.occupied_range(resolved[device.device_type].u_height)
            for u in range(occupied.bottom, occupied.top + 1):
                occupant[u] = device

        blocked = get_blocked_slots(rack, view, resolved)
        label_width = len(str(_unit_label(layout, rack.height)))
        label_width = max(label_width, len(str(_unit_label(layout, 1))))

        border = " " * (label_width + 2) + "+" + "-" * width + "+"
        lines = [f"{rack.name} ({view.value})", border]
        for u in range(rack.height, 0, -1):
            device = occupant.get(u)
            if device is not None:
                # Label the top unit of each device only
                above = occupant.get(u + 1)
                cell = _device_label(layout, device) if above is not device else ""
            elif any(slot.contains(u) for slot in blocked):
                cell = BLOCKED_FILL * width
            else:
                cell = ""
            lines.append(
                f"U{_unit_label(layout, u):>{label_width}} |{cell[:width]:<{width}}|"
            )
        lines.append(border)
        return "\n".join(lines)


class LayoutReportFormatter:
    """Formats a full text report: rack summary, devices, blocked slots, airflow."""

    def format(self, layout: Layout) -> str:
        rack = layout.rack
        lines = [
            f"LAYOUT: {layout.name}",
            "=" * 60,
            f"Rack: {rack.name} ({rack.height}U, {rack.width}\", {rack.form_factor.value})",
            f"Device types: {len(layout.device_types)}",
            f"Placed devices: {rack.device_count}",
            "",
        ]

        if rack.devices:
            lines.append(f"{'#':>3}  {'Position':<10} {'Face':<6} Device")
            lines.append("-" * 60)
            resolved = resolve_device_types(layout.device_types)
            for index, device in enumerate(rack.devices):
                device_type = resolved.get(device.device_type)
                if device_type is None:
                    position = f"U{device.position}"
                else:
                    occupied = device.occupied_range(device_type.u_height)
                    position = (
                        f"U{occupied.bottom}"
                        if occupied.height == 1
                        else f"U{occupied.bottom}-U{occupied.top}"
                    )
                lines.append(
                    f"{index:>3}  {position:<10} {device.face.value:<6} "
                    f"{_device_label(layout, device)}"
                )
            lines.append("")

        blocked_formatter = BlockedSlotsFormatter()
        for view in RackView:
            lines.append(
                blocked_formatter.format(
                    get_blocked_slots(rack, view, layout.device_types), view
                )
            )
            lines.append("")

        lines.append(
            AirflowReportFormatter().format(
                layout, find_airflow_conflicts(rack, layout.device_types)
            )
        )
        return "\n".join(lines)
