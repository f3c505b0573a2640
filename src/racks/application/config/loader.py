"""Layout file loader with comprehensive error handling.

This module loads and parses JSON layout files. It handles file system
errors, JSON parsing errors and Pydantic validation errors with clear,
actionable error messages.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from racks.application.config.schema import LayoutConfiguration

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Exception raised when a layout file cannot be loaded.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation, layout)
        path: Path to the layout file (if applicable)
        details: Additional error details (line/column for JSON, validation errors, etc.)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("rack", "height"))
        'rack.height'
        >>> _format_json_path(("rack", "devices", 0, "position"))
        'rack.devices[0].position'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    """Flatten a Pydantic ValidationError into path/message/value/error_type dicts."""
    return [
        {
            "path": _format_json_path(err["loc"]) or "(root)",
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _format_validation_error_message(details: list[dict[str, Any]]) -> str:
    lines = ["Layout validation failed:"]
    for detail in details:
        value = detail.get("value")
        # Whole-object inputs make unreadable messages
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']}")
    return "\n".join(lines)


def _validate(data: Any, path: Path | None = None) -> LayoutConfiguration:
    try:
        return LayoutConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        logger.debug(f"Layout failed schema validation with {len(details)} error(s)")
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            path=path,
            details=details,
        )


def load_layout_file(path: Path) -> LayoutConfiguration:
    """Load and validate a layout from a JSON file.

    Args:
        path: Path to the JSON layout file

    Returns:
        A validated LayoutConfiguration instance

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
            The error_type attribute indicates the specific error category:
            - "file_not_found": File does not exist
            - "permission_denied": File cannot be read
            - "file_read_error": Other I/O failure
            - "json_parse": Invalid JSON syntax
            - "validation": Schema validation failed

    Example:
        >>> try:
        ...     config = load_layout_file(Path("homelab.json"))
        ... except ConfigError as e:
        ...     for detail in e.details:
        ...         print(f"  {detail['path']}: {detail['message']}")
    """
    if not path.exists():
        raise ConfigError(
            message=f"Layout file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading layout file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading layout file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in layout file: {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[
                {
                    "line": e.lineno,
                    "column": e.colno,
                    "message": e.msg,
                }
            ],
        )

    logger.debug(f"Parsed layout file {path}")
    return _validate(data, path)


def load_layout_from_dict(data: dict[str, Any]) -> LayoutConfiguration:
    """Load and validate a layout from an already-parsed dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(data)
