"""Infrastructure layer - text output for rack layouts."""

from .formatters import (
    AirflowReportFormatter,
    BlockedSlotsFormatter,
    LayoutReportFormatter,
    RackDiagramFormatter,
)

__all__ = [
    "AirflowReportFormatter",
    "BlockedSlotsFormatter",
    "LayoutReportFormatter",
    "RackDiagramFormatter",
]
