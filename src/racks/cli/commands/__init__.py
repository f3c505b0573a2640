"""CLI command implementations for the racks application.

- validate: Validate a layout file
- blocked: Show blocked slots for a rack view
- airflow: List airflow conflicts
- report: Print a full layout report
"""

from racks.cli.commands.inspect import airflow_command, blocked_command, report_command
from racks.cli.commands.validate import validate_command

__all__ = ["airflow_command", "blocked_command", "report_command", "validate_command"]
