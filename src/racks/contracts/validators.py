"""Validator protocol for layout auditing.

This module defines the protocol that all layout validators must implement,
enabling consistent validation across different validation domains.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from racks.application.config.validators.base import ValidationResult
    from racks.domain.entities import Layout


@runtime_checkable
class Validator(Protocol):
    """Protocol for layout validators.

    Validators check specific aspects of a Layout and return a
    ValidationResult containing any errors or warnings found.

    Attributes:
        name: Unique identifier for the validator (e.g., "placement", "airflow").

    Example:
        class MyValidator:
            @property
            def name(self) -> str:
                return "my_validator"

            def validate(self, layout: Layout) -> ValidationResult:
                result = ValidationResult()
                if problem_found:
                    result.add_error("rack.devices[0]", "Description of problem")
                return result
    """

    @property
    def name(self) -> str:
        """Return the unique name/identifier for this validator."""
        ...

    def validate(self, layout: Layout) -> ValidationResult:
        """Validate the given layout.

        Args:
            layout: A Layout instance to validate.

        Returns:
            ValidationResult containing any errors or warnings found.
        """
        ...
