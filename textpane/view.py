"""A rectangular window with its own buffer, cursor and edit history."""

from typing import Optional

from .buffer import FILLER, TextBuffer
from .editor import TextEditor
from .errors import InvalidPosition, TextPaneError
from .undo import CommandLog
from .viewport import Viewport


def _is_word_break(ch: str) -> bool:
    return ch == " " or ch == FILLER


class View(TextEditor):
    """A window spanning (x0, y0) to (x1, y1) on the screen.

    The corners belong to the frame, so the visible area is
    (x1 - x0 - 1) columns by (y1 - y0 - 1) rows.
    """

    def __init__(self, name: str, x0: int, y0: int, x1: int, y1: int,
                 wrap: bool = False, editable: bool = False,
                 overwrite: bool = False, history: Optional[CommandLog] = None):
        self.name = name
        self.x0, self.y0, self.x1, self.y1 = x0, y0, x1, y1
        self.buffer = TextBuffer()
        self.viewport = Viewport(self.buffer)
        self.history = history or CommandLog()
        self.ox = self.oy = 0
        self.cx = self.cy = 0
        self.wrap = wrap
        self.editable = editable
        self.overwrite = overwrite
        self.autoscroll = False
        self.frame = True
        self.hidden = False
        self.highlight = False
        self.title = ""
        self.footer = ""

    def __repr__(self):
        return f"View({self.name!r}, {self.x0}, {self.y0}, {self.x1}, {self.y1})"

    def size(self) -> tuple[int, int]:
        return self.x1 - self.x0 - 1, self.y1 - self.y0 - 1

    def position(self) -> tuple[int, int, int, int]:
        return self.x0, self.y0, self.x1, self.y1

    def resize(self, x0: int, y0: int, x1: int, y1: int):
        """Move the view and keep the cursor on the same buffer position."""
        try:
            position = self.real_position(self.cx, self.cy)
        except TextPaneError:
            position = None
        self.x0, self.y0, self.x1, self.y1 = x0, y0, x1, y1
        self.buffer.tainted = True
        if position is not None:
            self.move_to(*position)

    # --- Cursor and origin -----------------------------------------------

    def cursor(self) -> tuple[int, int]:
        return self.cx, self.cy

    def set_cursor(self, x: int, y: int):
        """Place the cursor at a point inside the visible area."""
        max_x, max_y = self.size()
        if x < 0 or x >= max_x or y < 0 or y >= max_y:
            raise InvalidPosition(x, y)
        self.cx = x
        self.cy = y

    def origin(self) -> tuple[int, int]:
        return self.ox, self.oy

    def set_origin(self, x: int, y: int):
        """Scroll so the buffer is drawn starting at view point (x, y)."""
        if x < 0 or y < 0:
            raise InvalidPosition(x, y)
        self.ox = x
        self.oy = y

    def navigate(self, dx: int, dy: int):
        """Pure cursor movement from input: ends the current edit group."""
        self.history.cut()
        self.move_cursor(dx, dy, False)

    # --- Content in and out ----------------------------------------------

    def write(self, text: str) -> int:
        """Append text to the buffer; returns the number of characters taken."""
        self.buffer.append(text)
        return len(text)

    def clear(self):
        """Empty the buffer, reset scrolling and drop the history."""
        self.buffer.clear()
        self.history.clear()
        self.ox = self.oy = 0
        self.cx = self.cy = 0

    def buffer_text(self) -> str:
        """Whole buffer, lines joined by line feeds."""
        return self.buffer.text()

    def view_text(self) -> str:
        """Buffer as currently segmented into view lines."""
        return "\n".join(
            "".join(vline.chars) for vline in self.view_lines()
        ).replace(FILLER, " ")

    def line(self, y: int) -> str:
        """Text of the buffer line shown on view row y."""
        _, ry = self.real_position(0, y)
        if ry >= len(self.buffer):
            raise InvalidPosition(0, y)
        return "".join(self.buffer.lines[ry])

    def word(self, x: int, y: int) -> str:
        """Word under view point (x, y), delimited by spaces."""
        rx, ry = self.real_position(x, y)
        if ry >= len(self.buffer) or rx >= self.buffer.line_length(ry):
            raise InvalidPosition(x, y)
        line = self.buffer.lines[ry]
        start = rx
        while start > 0 and not _is_word_break(line[start - 1]):
            start -= 1
        end = rx
        while end < len(line) and not _is_word_break(line[end]):
            end += 1
        return "".join(line[start:end])

    def visible_lines(self) -> list[str]:
        """Rows as the renderer would draw them, origin applied."""
        max_x, max_y = self.size()
        lines = self.view_lines()
        if self.wrap:
            self.ox = 0
        if self.autoscroll and len(lines) > max_y:
            self.oy = len(lines) - max_y
        rows = []
        for vline in lines[self.oy:self.oy + max_y]:
            text = "".join(vline.chars[self.ox:self.ox + max_x])
            rows.append(text.replace(FILLER, " "))
        return rows

    # --- History ---------------------------------------------------------

    def undo(self) -> bool:
        return self.history.undo(self)

    def redo(self) -> bool:
        return self.history.redo(self)
