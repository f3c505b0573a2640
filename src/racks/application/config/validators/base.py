"""Findings produced by layout validators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """A broken placement invariant, e.g. two devices sharing a U on one face.

    ``path`` points into the layout file ("rack.devices[2]") and ``value`` holds
    the offending value when there is a single one, such as a position.
    """

    path: str
    message: str
    value: Any = None


@dataclass(frozen=True)
class ValidationWarning:
    """An advisory finding that leaves the layout usable."""

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Errors and warnings collected over one layout."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def exit_code(self) -> int:
        """0 for a clean layout, 1 when any error exists, 2 for warnings alone."""
        if self.errors:
            return 1
        return 2 if self.warnings else 0

    def add_error(self, path: str, message: str, value: Any = None) -> ValidationResult:
        self.errors.append(ValidationError(path, message, value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> ValidationResult:
        self.warnings.append(ValidationWarning(path, message, suggestion))
        return self

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Append another result's findings, keeping their order."""
        self.errors += other.errors
        self.warnings += other.warnings
        return self
