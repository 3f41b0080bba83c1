import logging
from typing import TYPE_CHECKING, Optional

from .commands import Command
from .constants import ToolkitConstants

if TYPE_CHECKING:
    from .view import View

logger = logging.getLogger(__name__)


class CommandLog:
    """Undo/redo stacks of edit commands with coalescing."""

    def __init__(self, max_entries: int = ToolkitConstants.MAX_HISTORY_ENTRIES):
        self._undo_stack: list[Command] = []
        self._redo_stack: list[Command] = []
        self._max_entries = max_entries
        self.mergeable = False

    def clear(self):
        self._undo_stack.clear()
        self._redo_stack.clear()
        self.mergeable = False

    def cut(self):
        """Prevent the next command from merging into the previous one."""
        self.mergeable = False

    def exec(self, command: Command):
        """Record a command that has just been applied to the view."""
        last = self._undo_stack[-1] if self._undo_stack else None
        if (self.mergeable and last is not None
                and last.kind is command.kind and last.merge(command)):
            logger.debug("merged %s into %s", command.kind.value, last.info())
        else:
            self._undo_stack.append(command)
            # Cap history
            if len(self._undo_stack) > self._max_entries:
                self._undo_stack.pop(0)
        # Any new edit invalidates redo history
        self._redo_stack.clear()
        self.mergeable = True

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_entries(self) -> list[Command]:
        return list(self._undo_stack)

    @property
    def redo_entries(self) -> list[Command]:
        return list(self._redo_stack)

    def undo(self, view: 'View') -> bool:
        if not self._undo_stack:
            return False
        command = self._undo_stack.pop()
        # Move to redo stack
        self._redo_stack.append(command)
        self.mergeable = False
        logger.debug("undo %s", command.info())
        command.reverse(view)
        return True

    def redo(self, view: 'View') -> bool:
        if not self._redo_stack:
            return False
        command = self._redo_stack.pop()
        # Return command to undo stack
        self._undo_stack.append(command)
        self.mergeable = False
        logger.debug("redo %s", command.info())
        command.execute(view)
        return True

    def render(self, width: int, height: int) -> str:
        """Format the history as a two-pane listing around UNDO/REDO markers.

        Older undo entries come first, then the entry the next undo would
        revert, then the entry the next redo would replay, then the rest
        of the redo stack.  The result has at most `height` lines and
        descriptions wider than `width` end in an ellipsis.
        """
        half = height // 2
        out: list[str] = []

        count = len(self._undo_stack)
        offset = 0
        # Pad so the UNDO marker stays put while the stack is short
        if count > half - 1:
            offset = count - half + 1
        elif count < 2:
            out.extend([""] * (half - 1))
        else:
            out.extend([""] * (half - count))

        for command in self._undo_stack[offset:count - 1]:
            out.append(self._fit(command.info(), width))
        out.append(ToolkitConstants.UNDO_MARKER)
        out.append(self._fit(self._undo_stack[-1].info(), width) if count else "")

        out.append(ToolkitConstants.REDO_MARKER)
        count = len(self._redo_stack)
        out.append(self._fit(self._redo_stack[-1].info(), width) if count else "")
        out.append(ToolkitConstants.END_MARKER)

        offset = count - half + 1 if count > half - 1 else 0
        for i in range(count - 2, offset - 1, -1):
            out.append(self._fit(self._redo_stack[i].info(), width))

        return "\n".join(out[:max(height, 0)])

    @staticmethod
    def _fit(info: str, width: int) -> str:
        if len(info) < width:
            return info
        # Replace the tail with dots if the info is too long
        ellipsis = ToolkitConstants.ELLIPSIS
        return info[:max(width - len(ellipsis), 0)] + ellipsis

    def top(self) -> Optional[Command]:
        """Entry the next undo would revert."""
        return self._undo_stack[-1] if self._undo_stack else None
