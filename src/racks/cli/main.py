"""Typer CLI for rack layouts."""

import logging
from typing import Annotated

import typer

from racks.cli.commands import (
    airflow_command,
    blocked_command,
    report_command,
    validate_command,
)

app = typer.Typer(
    name="racks",
    help="Validate and inspect rack layout files.",
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging"),
    ] = False,
) -> None:
    """Validate and inspect rack layout files."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


app.command(name="validate")(validate_command)
app.command(name="blocked")(blocked_command)
app.command(name="airflow")(airflow_command)
app.command(name="report")(report_command)


if __name__ == "__main__":
    app()
