"""Line storage for a single view.

The buffer is a list of lines, each line a list of single-character
strings.  Coordinates are absolute: ``x`` is the column inside a line and
``y`` the line index.  Every mutation marks the buffer tainted so the
viewport knows its wrapped lines must be rebuilt before the next read.
"""

from typing import Optional

from .constants import ToolkitConstants
from .errors import InvalidPosition, LastLine

FILLER = ToolkitConstants.FILLER


class TextBuffer:
    """Owns the lines of a view and the primitive edits on them."""

    def __init__(self, lines: Optional[list[str]] = None):
        self.lines: list[list[str]] = [list(line) for line in (lines or [])]
        self.tainted = True

    def __len__(self) -> int:
        return len(self.lines)

    def is_empty(self) -> bool:
        return not self.lines

    def line_length(self, y: int) -> int:
        """Length of line y, or 0 when the line does not exist."""
        if 0 <= y < len(self.lines):
            return len(self.lines[y])
        return 0

    def rune(self, x: int, y: int) -> str:
        if y < 0 or y >= len(self.lines) or x < 0 or x >= len(self.lines[y]):
            raise InvalidPosition(x, y)
        return self.lines[y][x]

    def extend_lines(self, y: int) -> int:
        """Append empty lines until line y exists.

        Returns:
            Number of lines added
        """
        if y < 0:
            raise InvalidPosition(0, y)
        missing = y - len(self.lines) + 1
        if missing > 0:
            self.tainted = True
            self.lines.extend([] for _ in range(missing))
            return missing
        return 0

    def write_rune(self, x: int, y: int, ch: str, overwrite: bool = False):
        """Write ch at (x, y), padding lines and columns as needed.

        In insert mode the rest of the line shifts right; in overwrite
        mode the character at x is replaced.
        """
        if x < 0 or y < 0:
            raise InvalidPosition(x, y)
        self.tainted = True

        self.extend_lines(y)
        line = self.lines[y]
        old_length = len(line)
        if x >= old_length:
            line.extend(FILLER for _ in range(x - old_length + 1))
        if not overwrite and x < old_length:
            line.insert(x, ch)
        else:
            line[x] = ch

    def delete_rune(self, x: int, y: int) -> str:
        """Remove the character at (x, y) and return it."""
        if x < 0 or y < 0 or y >= len(self.lines) or x >= len(self.lines[y]):
            raise InvalidPosition(x, y)
        self.tainted = True
        return self.lines[y].pop(x)

    def break_line(self, x: int, y: int):
        """Split line y at column x; the right part becomes line y+1."""
        if y < 0 or y >= len(self.lines):
            raise InvalidPosition(x, y)
        self.tainted = True
        line = self.lines[y]
        if x < len(line):
            left, right = line[:x], line[x:]
        else:
            left, right = line, []
        self.lines[y:y + 1] = [left, right]

    def merge_lines(self, y: int):
        """Append line y+1 onto line y and remove line y+1."""
        if y < 0 or y >= len(self.lines):
            raise InvalidPosition(0, y)
        if y == len(self.lines) - 1:
            raise LastLine(y)
        self.tainted = True
        self.lines[y].extend(self.lines.pop(y + 1))

    def permute_lines(self, y1: int, y2: int):
        """Swap lines y1 and y2."""
        count = len(self.lines)
        if y1 < 0 or y2 < 0 or y1 >= count or y2 >= count:
            raise InvalidPosition(0, max(y1, y2), "invalid line")
        self.tainted = True
        self.lines[y1], self.lines[y2] = self.lines[y2], self.lines[y1]

    def delete_line(self, y: int) -> list[str]:
        """Remove line y entirely and return its characters."""
        if y < 0 or y >= len(self.lines):
            raise InvalidPosition(0, y, "invalid line")
        self.tainted = True
        return self.lines.pop(y)

    def append(self, text: str):
        """Stream text onto the end of the buffer.

        A line feed starts a new line and a carriage return clears the
        current line.
        """
        self.tainted = True
        for ch in text:
            if ch == "\n":
                if not self.lines:
                    self.lines.append([])
                self.lines.append([])
            elif ch == "\r":
                if self.lines:
                    self.lines[-1] = []
                else:
                    self.lines.append([])
            else:
                if not self.lines:
                    self.lines.append([])
                self.lines[-1].append(ch)

    def clear(self):
        self.tainted = True
        self.lines = []

    def text(self) -> str:
        """Whole buffer, lines joined by line feeds, fillers as spaces."""
        return "\n".join(
            "".join(line) for line in self.lines
        ).replace(FILLER, " ")
