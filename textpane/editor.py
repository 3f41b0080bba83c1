"""Edit operations that turn one keystroke into an undoable change."""

import logging

from .commands import (
    BackDeleteCommand,
    BackDeleteLineCommand,
    ForwardDeleteCommand,
    ForwardDeleteLineCommand,
    MoveLineCommand,
    NewLineCommand,
    WriteCommand,
)
from .cursor import CursorNavigator
from .errors import TextPaneError
from .undo import CommandLog

logger = logging.getLogger(__name__)


class TextEditor(CursorNavigator):
    """Buffer mutation, cursor movement and command emission for a view."""
    history: CommandLog
    overwrite: bool = False

    def edit_write(self, ch: str):
        """Write ch at the cursor and step past it."""
        x, y = self.real_position(self.cx, self.cy)
        buffer = self.buffer
        lines_before = len(buffer)
        length_before = buffer.line_length(y)
        replaced = None
        if self.overwrite and x < length_before:
            replaced = buffer.rune(x, y)

        buffer.write_rune(x, y, ch, overwrite=self.overwrite)
        self.move_cursor(1, 0, True)

        self.history.exec(WriteCommand(
            x, y, [ch],
            overwrite=self.overwrite,
            replaced=[replaced],
            pad_lines=max(y - lines_before + 1, 0),
            pad_columns=max(x - length_before, 0),
        ))

    def edit_new_line(self):
        """Break the line at the cursor and move to the start of the next one.

        When the cursor sits at the start of a wrapped continuation the
        wrap boundary already shows the break, so the cursor stays put.
        """
        x, y = self.real_position(self.cx, self.cy)
        lines = self._lines()
        row = self.oy + self.cy
        at_wrapped_start = (self.wrap and self.cx == 0
                            and row < len(lines) and lines[row].x > 0)

        pad_lines = self.buffer.extend_lines(y)
        self.buffer.break_line(x, y)
        if not at_wrapped_start:
            self.ox = 0
            self.cx = 0
            self.move_cursor(0, 1, True)

        self.history.exec(NewLineCommand(x, y, pad_lines=pad_lines))

    def edit_delete(self, back: bool):
        """Delete one character; back selects backspace over delete.

        At a line boundary the two lines are joined instead.  Deleting at
        the very start or end of the buffer does nothing.
        """
        lines = self._lines()
        row = self.oy + self.cy
        if row >= len(lines):
            self.move_cursor(-1, 0, True)
            return
        x, y = self.real_position(self.cx, self.cy)

        if back:
            if self.ox + self.cx == 0:
                if row < 1:
                    return
                if lines[row].x == 0:
                    self._join_previous_line(y)
                else:
                    # Continuation of a wrapped line: eat the last
                    # character of the segment above.
                    self._delete_before(x, y)
            else:
                self._delete_before(x, y)
        else:
            if x >= self.buffer.line_length(y):
                self._join_next_line(y)
            else:
                ch = self.buffer.delete_rune(x, y)
                self.history.exec(ForwardDeleteCommand(x, y, [ch]))

    def _delete_before(self, x: int, y: int):
        try:
            ch = self.buffer.delete_rune(x - 1, y)
        except TextPaneError:
            # Cursor is past the content: just walk back towards it
            self.move_cursor(-1, 0, True)
            return
        # The deletion can rewrap the line
        self.move_to(x - 1, y)
        self.history.exec(BackDeleteCommand(x, y, [ch]))

    def _join_previous_line(self, y: int):
        if y < 1:
            return
        x = self.buffer.line_length(y - 1)
        self.buffer.merge_lines(y - 1)
        self.move_to(x, y - 1)
        self.history.exec(BackDeleteLineCommand([(x, y - 1)]))

    def _join_next_line(self, y: int):
        x = self.buffer.line_length(y)
        try:
            self.buffer.merge_lines(y)
        except TextPaneError:
            logger.debug("delete at end of buffer ignored")
            return
        self.history.exec(ForwardDeleteLineCommand(x, y))

    def edit_move_line(self, up: bool):
        """Swap the cursor's line with its neighbour above or below."""
        x, y = self.real_position(self.cx, self.cy)
        target = y - 1 if up else y + 1
        try:
            self.buffer.permute_lines(y, target)
        except TextPaneError:
            return
        self.move_to(x, target)
        self.history.exec(MoveLineCommand(x, y, up=up))

    def toggle_overwrite(self):
        self.overwrite = not self.overwrite
