"""Cursor movement over wrapped, scrolled view lines.

The cursor is kept as two pairs: the origin (ox, oy), which is the
top-left visible offset into the view lines, and the cursor (cx, cy),
which is relative to the origin.  The four step primitives consult the
viewport to decide when a move wraps onto another view line or scrolls
the origin.  None of them raise: at the edges of the buffer they do
nothing.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .buffer import TextBuffer
from .errors import TextPaneError, WrapWidthZero
from .viewport import ViewLine, Viewport


class CursorNavigator(ABC):
    """Origin/cursor state and the movement state machine."""
    buffer: TextBuffer
    viewport: Viewport
    wrap: bool = False
    ox: int = 0
    oy: int = 0
    cx: int = 0
    cy: int = 0

    @abstractmethod
    def size(self) -> tuple[int, int]:
        """Number of visible columns and rows."""

    @property
    def wrap_width(self) -> int:
        """Width at which lines are cut when wrapping is enabled."""
        max_x, _ = self.size()
        return max_x - 1

    def view_lines(self) -> list[ViewLine]:
        """Current view lines, regenerated first if the buffer changed."""
        return self.viewport.regenerate(self.wrap_width, self.wrap)

    def _lines(self) -> list[ViewLine]:
        try:
            return self.view_lines()
        except WrapWidthZero:
            return []

    def real_position(self, vx: int, vy: int) -> tuple[int, int]:
        """Buffer coordinates of the point (vx, vy) relative to the origin."""
        self.view_lines()
        return self.viewport.real_position(self.ox + vx, self.oy + vy)

    def view_position(self, bx: int, by: int) -> Optional[tuple[int, int]]:
        """Point relative to the origin showing buffer coordinates (bx, by).

        Returns None if the buffer line does not exist.
        """
        self.view_lines()
        found = self.viewport.view_position(bx, by)
        if found is None:
            return None
        x, y = found
        return x - self.ox, y - self.oy

    # --- Position predicates -------------------------------------------

    def _cursor_real(self) -> Optional[tuple[int, int]]:
        try:
            return self.real_position(self.cx, self.cy)
        except TextPaneError:
            return None

    def _at_bol(self) -> bool:
        return self.ox == 0 and self.cx == 0

    def _at_eol(self) -> bool:
        pos = self._cursor_real()
        if pos is None:
            return False
        rx, ry = pos
        return rx == self.buffer.line_length(ry)

    def _at_view_edge(self) -> bool:
        max_x, _ = self.size()
        return self.cx + 1 == max_x

    def _on_first_line(self) -> bool:
        return self.cy + self.oy == 0

    def _on_last_line(self) -> bool:
        pos = self._cursor_real()
        if pos is None:
            return False
        return pos[1] + 1 >= len(self.buffer)

    def _at_first_row(self) -> bool:
        return self.cy == 0

    def _at_last_row(self) -> bool:
        _, max_y = self.size()
        return self.cy + 1 >= max_y

    def _current_line_width(self) -> int:
        lines = self._lines()
        row = self.oy + self.cy
        if 0 <= row < len(lines):
            return len(lines[row].chars)
        return 0

    def _previous_line_width(self) -> int:
        """Column the cursor lands on when stepping back over a line start.

        Crossing a wrap boundary lands on the last character of the
        previous segment, because the end of that segment and the start of
        the current one are the same buffer position.
        """
        lines = self._lines()
        row = self.oy + self.cy
        if row - 1 >= len(lines) or row < 1:
            return 0
        previous = lines[row - 1]
        width = len(previous.chars)
        if row < len(lines) and lines[row].x > 0 and lines[row].y == previous.y:
            return max(width - 1, 0)
        return width

    def _place_at_column(self, width: int):
        """Put the cursor on column width of the current row, scrolling if needed."""
        if self.wrap:
            self.ox = 0
            self.cx = width
            return
        max_x, _ = self.size()
        if width - self.ox < max_x:
            if width < self.ox:
                self.ox = width
            self.cx = width - self.ox
        else:
            self.ox = width - max_x + 1
            self.cx = width - self.ox

    def adjust_position_to_current_line(self):
        """Clamp the column to the length of the line under the cursor."""
        width = self._current_line_width()
        if self.ox + self.cx > width:
            self._place_at_column(width)

    # --- Step primitives -----------------------------------------------

    def step_right(self, write_mode: bool = False):
        """Move one character forward."""
        if self.buffer.is_empty() or (self._on_last_line() and self._at_eol()):
            return
        eol = self._at_eol()
        edge = self._at_view_edge()
        if eol and write_mode:
            self.cx += 1
        elif eol or (edge and self.wrap):
            lines = self._lines()
            next_row = self.oy + self.cy + 1
            continuing = (edge and self.wrap and next_row < len(lines)
                          and lines[next_row].x > 0)
            if self._at_last_row():
                self.oy += 1
            else:
                self.cy += 1
            self.ox = 0
            self.cx = 1 if continuing else 0
        elif edge:
            self.ox += 1
        else:
            self.cx += 1

    def step_left(self):
        """Move one character backward."""
        if self._on_first_line() and self._at_bol():
            return
        if self._at_bol():
            width = self._previous_line_width()
            if self._at_first_row():
                self.oy -= 1
            else:
                self.cy -= 1
            self._place_at_column(width)
        elif self.cx == 0:
            self.ox -= 1
        else:
            self.cx -= 1

    def step_up(self):
        """Move one view line up without touching the column."""
        if self._on_first_line():
            return
        if self._at_first_row():
            self.oy -= 1
        else:
            self.cy -= 1

    def step_down(self, write_mode: bool = False):
        """Move one view line down without touching the column.

        In write mode the cursor may move onto the row just past the last
        view line so a new trailing line can be typed.
        """
        lines = self._lines()
        row = self.oy + self.cy
        if write_mode:
            if row >= len(lines):
                return
        elif row + 1 >= len(lines):
            return
        if self._at_last_row():
            self.oy += 1
        else:
            self.cy += 1

    def move_cursor(self, dx: int, dy: int, write_mode: bool = False):
        """Move the cursor by dx characters and dy view lines.

        Vertical motion resolves first.  Outside write mode, and for every
        backward step, the column is clamped to the landed line.
        """
        for _ in range(abs(dy)):
            if dy < 0:
                self.step_up()
            else:
                self.step_down(write_mode)
        if not write_mode:
            self.adjust_position_to_current_line()

        for _ in range(abs(dx)):
            if dx < 0:
                self.step_left()
            else:
                self.step_right(write_mode)
            if not write_mode or dx < 0:
                self.adjust_position_to_current_line()

    def move_to(self, bx: int, by: int):
        """Place the cursor on buffer coordinates, scrolling minimally."""
        lines = self._lines()
        found = self.viewport.view_position(bx, by)
        if found is None:
            if by < 0 or bx < 0:
                return
            # Past the content: extrapolate like real_position does.
            last_y = lines[-1].y if lines else -1
            vx, vy = bx, len(lines) + by - last_y - 1
        else:
            vx, vy = found
        max_x, max_y = self.size()

        if vy < self.oy:
            self.oy = vy
        elif vy >= self.oy + max_y:
            self.oy = vy - max_y + 1
        self.cy = vy - self.oy

        if self.wrap:
            self.ox = 0
            self.cx = vx
        else:
            if vx < self.ox:
                self.ox = vx
            elif vx >= self.ox + max_x:
                self.ox = vx - max_x + 1
            self.cx = vx - self.ox
