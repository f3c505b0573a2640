"""Application layer - layout store, undo/redo commands and file loading."""

from .catalog import create_device_type, slugify, starter_device_types
from .commands import Command, CommandType
from .history import DEFAULT_HISTORY_SIZE, CommandHistory
from .layout_store import LayoutStore, create_layout

__all__ = [
    "Command",
    "CommandHistory",
    "CommandType",
    "DEFAULT_HISTORY_SIZE",
    "LayoutStore",
    "create_device_type",
    "create_layout",
    "slugify",
    "starter_device_types",
]
