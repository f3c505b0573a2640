"""Validate command for checking layout files.

This module provides the `validate` command that checks a JSON layout file
for schema errors, broken layout invariants and airflow advisories.
"""

from pathlib import Path
from typing import Annotated

import typer

from racks.application.config import (
    ConfigError,
    ValidationResult,
    config_to_layout,
    load_layout_file,
    validate_layout,
)


def display_load_error(error: ConfigError) -> None:
    """Display a layout loading error on stderr."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            value = detail.get("value")
            typer.echo(f"  {path}: {message}", err=True)
            if value is not None and not isinstance(value, (dict, list)):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo()
    typer.echo("Validation failed.", err=True)


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  {error.path}: {error.message}", err=True)
            if error.value is not None:
                typer.echo(f"    Value: {error.value!r}", err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning.path}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Layout is valid.")


def validate_command(
    layout_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON layout file to validate"),
    ],
) -> None:
    """Validate a rack layout file.

    Checks the layout file for:
    - JSON syntax errors
    - Schema errors (missing fields, bad slugs, duplicate slugs...)
    - Layout errors (unknown device types, out-of-bounds or colliding devices)
    - Airflow advisories (exhaust blowing into an intake)

    Exit codes:
        0 - Layout is valid with no warnings
        1 - Layout has errors
        2 - Layout is valid but has warnings

    Example:
        racks validate homelab.json
    """
    typer.echo(f"Validating {layout_file}...")
    typer.echo()

    try:
        layout = config_to_layout(load_layout_file(layout_file))
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = validate_layout(layout)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)
