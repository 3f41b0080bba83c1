"""Wrapped, scrollable view lines derived from a TextBuffer.

A view line is one displayable segment of a buffer line.  Without
wrapping every buffer line maps to exactly one view line; with wrapping a
line longer than the wrap width is cut into consecutive segments of at
most ``wrap_width`` characters.  The segments are regenerated lazily: only
when the buffer is tainted or the wrap settings changed since the last
build.
"""

from typing import NamedTuple, Optional

from .buffer import TextBuffer
from .errors import InvalidPosition, WrapWidthZero


class ViewLine(NamedTuple):
    """A wrapped segment of one buffer line."""
    y: int  # Index of the source line in the buffer
    x: int  # Offset of the segment inside the source line
    chars: list[str]


class Viewport:
    """Cache of view lines for one buffer."""

    def __init__(self, buffer: TextBuffer):
        self.buffer = buffer
        self.lines: list[ViewLine] = []
        self._wrap: Optional[bool] = None
        self._wrap_width: Optional[int] = None

    def regenerate(self, wrap_width: int, wrap: bool) -> list[ViewLine]:
        """Rebuild the view lines if the buffer or wrap settings changed."""
        if wrap and wrap_width <= 0:
            raise WrapWidthZero(wrap_width)
        if (not self.buffer.tainted
                and wrap == self._wrap
                and (not wrap or wrap_width == self._wrap_width)):
            return self.lines

        lines: list[ViewLine] = []
        for y, line in enumerate(self.buffer.lines):
            if not wrap or len(line) <= wrap_width:
                lines.append(ViewLine(y, 0, list(line)))
                continue
            for x in range(0, len(line), wrap_width):
                lines.append(ViewLine(y, x, line[x:x + wrap_width]))

        self.lines = lines
        self._wrap = wrap
        self._wrap_width = wrap_width
        self.buffer.tainted = False
        return self.lines

    def real_position(self, x: int, y: int) -> tuple[int, int]:
        """Map an absolute view point to buffer coordinates.

        ``x`` and ``y`` already include the origin.  Rows past the last
        view line extrapolate beyond the final buffer line so callers can
        write past the current content.
        """
        if x < 0 or y < 0:
            raise InvalidPosition(x, y)
        if not self.lines:
            return x, y
        if y < len(self.lines):
            vline = self.lines[y]
            return vline.x + x, vline.y
        last = self.lines[-1]
        return x, last.y + y - len(self.lines) + 1

    def view_position(self, bx: int, by: int) -> Optional[tuple[int, int]]:
        """Map buffer coordinates to an absolute view point.

        Returns None when the buffer line does not exist.  A column on a
        segment boundary maps to the start of the following segment; a
        column past the end of the line stays on the last segment.
        """
        if bx < 0 or by < 0:
            return None
        if not self.lines:
            return (0, 0) if (bx, by) == (0, 0) else None

        found = None
        for index, vline in enumerate(self.lines):
            if vline.y != by:
                if found is not None:
                    break
                continue
            found = index
            if bx < vline.x + len(vline.chars):
                return bx - vline.x, index
        if found is None:
            return None
        return bx - self.lines[found].x, found

    def segments(self, by: int) -> list[int]:
        """Indices of the view lines that belong to buffer line by."""
        return [i for i, vline in enumerate(self.lines) if vline.y == by]
