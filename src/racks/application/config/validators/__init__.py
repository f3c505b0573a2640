"""Layout validators.

- LayoutIntegrityValidator: unique slugs, dangling references, bounds, collisions
- AirflowValidator: exhaust-into-intake advisories

``validate_layout`` runs a sequence of validators (the built-in pair by
default) and merges their findings into one ValidationResult.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .airflow import AirflowValidator
from .base import ValidationError, ValidationResult, ValidationWarning
from .placement import LayoutIntegrityValidator

if TYPE_CHECKING:
    from racks.contracts.validators import Validator
    from racks.domain.entities import Layout

logger = logging.getLogger(__name__)

__all__ = [
    # Results
    "ValidationError",
    "ValidationWarning",
    "ValidationResult",
    # Running
    "DEFAULT_VALIDATORS",
    "validate_layout",
    # Validators
    "AirflowValidator",
    "LayoutIntegrityValidator",
]

DEFAULT_VALIDATORS: tuple[Validator, ...] = (
    LayoutIntegrityValidator(),
    AirflowValidator(),
)


def validate_layout(
    layout: Layout, validators: Sequence[Validator] = DEFAULT_VALIDATORS
) -> ValidationResult:
    """Audit a whole layout: invariant breaks are errors, airflow is a warning.

    Validators run in the order given. One that raises is reported as an
    error on the "validation" path and the rest still run.
    """
    result = ValidationResult()
    for validator in validators:
        logger.debug(f"Running validator '{validator.name}' on layout '{layout.name}'")
        try:
            result.merge(validator.validate(layout))
        except Exception as e:
            logger.error(f"Validator '{validator.name}' raised an exception: {e}")
            result.add_error(
                path="validation",
                message=f"Validator '{validator.name}' failed: {e}",
            )
    return result
