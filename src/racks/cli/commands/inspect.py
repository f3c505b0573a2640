"""Read-only inspection commands: blocked slots, airflow and full report.

These commands work on any layout that passes the schema, including one with
colliding devices, so a broken file can still be examined.
"""

from pathlib import Path
from typing import Annotated

import typer

from racks.application.config import ConfigError, config_to_layout, load_layout_file
from racks.domain.entities import Layout
from racks.domain.services import find_airflow_conflicts, get_blocked_slots
from racks.domain.value_objects import DEFAULT_RACK_VIEW, RackView
from racks.infrastructure import (
    AirflowReportFormatter,
    BlockedSlotsFormatter,
    LayoutReportFormatter,
    RackDiagramFormatter,
)

from .validate import display_load_error

LayoutFileArgument = Annotated[
    Path,
    typer.Argument(help="Path to the JSON layout file"),
]


def _load_or_exit(layout_file: Path) -> Layout:
    try:
        return config_to_layout(load_layout_file(layout_file))
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)


def blocked_command(
    layout_file: LayoutFileArgument,
    view: Annotated[
        RackView,
        typer.Option("--view", "-v", help="Rack face being viewed"),
    ] = DEFAULT_RACK_VIEW,
    diagram: Annotated[
        bool,
        typer.Option("--diagram", "-d", help="Draw an elevation of the view"),
    ] = False,
) -> None:
    """Show U ranges blocked on one view by devices on the other face.

    Example:
        racks blocked homelab.json --view rear --diagram
    """
    layout = _load_or_exit(layout_file)
    if diagram:
        typer.echo(RackDiagramFormatter().format(layout, view))
        typer.echo()
    slots = get_blocked_slots(layout.rack, view, layout.device_types)
    typer.echo(BlockedSlotsFormatter().format(slots, view))


def airflow_command(layout_file: LayoutFileArgument) -> None:
    """List airflow conflicts between stacked devices.

    Exits with code 2 when conflicts are found.
    """
    layout = _load_or_exit(layout_file)
    conflicts = find_airflow_conflicts(layout.rack, layout.device_types)
    typer.echo(AirflowReportFormatter().format(layout, conflicts))
    if conflicts:
        raise typer.Exit(code=2)


def report_command(layout_file: LayoutFileArgument) -> None:
    """Print a full text report of a layout."""
    layout = _load_or_exit(layout_file)
    typer.echo(LayoutReportFormatter().format(layout))
