"""Bounded undo/redo history for layout commands."""

from __future__ import annotations

import logging

from racks.contracts.protocols import CommandProtocol

logger = logging.getLogger(__name__)

__all__ = ["DEFAULT_HISTORY_SIZE", "CommandHistory"]

DEFAULT_HISTORY_SIZE = 50


class CommandHistory:
    """Two stacks of executed and undone commands.

    Executing a new command discards the redo stack. The undo stack keeps at
    most ``max_size`` commands; the oldest is dropped first.

    A command that raises from ``execute`` or ``undo`` is never recorded or
    moved between stacks, so the stacks always describe the store's actual
    state.
    """

    def __init__(self, max_size: int = DEFAULT_HISTORY_SIZE) -> None:
        if max_size < 1:
            raise ValueError(f"History size must be at least 1, got {max_size}")
        self.max_size = max_size
        self._undo_stack: list[CommandProtocol] = []
        self._redo_stack: list[CommandProtocol] = []

    def execute(self, command: CommandProtocol) -> None:
        """Execute ``command`` and record it for undo.

        Raises:
            Whatever ``command.execute`` raises; history is left untouched.
        """
        command.execute()
        self._undo_stack.append(command)
        if len(self._undo_stack) > self.max_size:
            dropped = self._undo_stack.pop(0)
            logger.debug(f"History full, dropped '{dropped.description}'")
        self._redo_stack.clear()
        logger.debug(f"Executed '{command.description}'")

    def undo(self) -> bool:
        """Undo the most recent command. Returns False if there is none."""
        if not self._undo_stack:
            return False
        command = self._undo_stack[-1]
        command.undo()
        self._undo_stack.pop()
        self._redo_stack.append(command)
        logger.debug(f"Undid '{command.description}'")
        return True

    def redo(self) -> bool:
        """Re-execute the most recently undone command. Returns False if none."""
        if not self._redo_stack:
            return False
        command = self._redo_stack[-1]
        command.execute()
        self._redo_stack.pop()
        self._undo_stack.append(command)
        logger.debug(f"Redid '{command.description}'")
        return True

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_description(self) -> str | None:
        return self._undo_stack[-1].description if self._undo_stack else None

    @property
    def redo_description(self) -> str | None:
        return self._redo_stack[-1].description if self._redo_stack else None

    @property
    def undo_count(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_count(self) -> int:
        return len(self._redo_stack)
