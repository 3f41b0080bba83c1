"""Invertible edit commands recorded in a view's history.

Every command stores buffer coordinates taken *before* the edit ran and
exactly the data it needs to replay or invert itself.  Replaying never
looks at buffer state that only existed when the command was first
executed.  Commands are plain data; they are applied to the view passed
in by the command log.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .constants import ToolkitConstants

if TYPE_CHECKING:
    from .view import View

FILLER = ToolkitConstants.FILLER


class CommandKind(Enum):
    """Tag used to decide whether two commands may be merged."""
    WRITE = "write"
    BACK_DELETE = "back_delete"
    FORWARD_DELETE = "forward_delete"
    NEW_LINE = "new_line"
    BACK_DELETE_LINE = "back_delete_line"
    FORWARD_DELETE_LINE = "forward_delete_line"
    MOVE_LINE_UP = "move_line_up"
    MOVE_LINE_DOWN = "move_line_down"


class Command(ABC):
    """Base class for undoable edits."""
    kind: CommandKind

    @abstractmethod
    def execute(self, view: 'View'):
        """Apply the edit to the view's buffer and move the cursor after it."""

    @abstractmethod
    def reverse(self, view: 'View'):
        """Undo the edit and restore the cursor to where it was before."""

    @abstractmethod
    def merge(self, other: Command) -> bool:
        """Fold a following command of the same kind into this one.

        Returns False when the two commands cannot be expressed as one.
        """

    @abstractmethod
    def info(self) -> str:
        """One-line description used by the history panel."""


def _printable(chars: list[str]) -> str:
    return "".join(chars).replace(FILLER, " ")


@dataclass
class WriteCommand(Command):
    """Characters typed from (x, y) onwards."""
    x: int
    y: int
    chars: list[str]
    overwrite: bool = False
    # Character replaced at each position in overwrite mode, None if inserted
    replaced: list[Optional[str]] = field(default_factory=list)
    # Padding created by the first write so undo can remove it again
    pad_lines: int = 0
    pad_columns: int = 0
    kind: CommandKind = field(default=CommandKind.WRITE, init=False)

    def __post_init__(self):
        if not self.replaced:
            self.replaced = [None] * len(self.chars)

    def execute(self, view):
        for i, ch in enumerate(self.chars):
            view.buffer.write_rune(self.x + i, self.y, ch, overwrite=self.overwrite)
        view.move_to(self.x + len(self.chars), self.y)

    def reverse(self, view):
        buffer = view.buffer
        for i in reversed(range(len(self.chars))):
            old = self.replaced[i]
            if old is None:
                buffer.delete_rune(self.x + i, self.y)
            else:
                buffer.write_rune(self.x + i, self.y, old, overwrite=True)
        for _ in range(self.pad_columns):
            buffer.delete_rune(self.x - self.pad_columns, self.y)
        for _ in range(self.pad_lines):
            buffer.delete_line(len(buffer) - 1)
        view.move_to(self.x, self.y)

    def merge(self, other):
        if not isinstance(other, WriteCommand) or other.overwrite != self.overwrite:
            return False
        if other.y != self.y or other.x != self.x + len(self.chars):
            return False
        if other.pad_lines or other.pad_columns:
            return False
        self.chars.extend(other.chars)
        self.replaced.extend(other.replaced)
        return True

    def info(self):
        return "Write : " + _printable(self.chars)


@dataclass
class BackDeleteCommand(Command):
    """Characters removed to the left of (x, y) with backspace."""
    x: int
    y: int
    chars: list[str]
    kind: CommandKind = field(default=CommandKind.BACK_DELETE, init=False)

    def execute(self, view):
        for i in range(len(self.chars)):
            view.buffer.delete_rune(self.x - i - 1, self.y)
        view.move_to(self.x - len(self.chars), self.y)

    def reverse(self, view):
        start = self.x - len(self.chars)
        for i, ch in enumerate(self.chars):
            view.buffer.write_rune(start + i, self.y, ch)
        view.move_to(self.x, self.y)

    def merge(self, other):
        if not isinstance(other, BackDeleteCommand) or other.y != self.y:
            return False
        if other.x != self.x - len(self.chars):
            return False
        self.chars[:0] = other.chars
        return True

    def info(self):
        return "Delete : " + _printable(self.chars)


@dataclass
class ForwardDeleteCommand(Command):
    """Characters removed at (x, y) with the delete key."""
    x: int
    y: int
    chars: list[str]
    kind: CommandKind = field(default=CommandKind.FORWARD_DELETE, init=False)

    def execute(self, view):
        for _ in self.chars:
            view.buffer.delete_rune(self.x, self.y)
        view.move_to(self.x, self.y)

    def reverse(self, view):
        for i, ch in enumerate(self.chars):
            view.buffer.write_rune(self.x + i, self.y, ch)
        view.move_to(self.x, self.y)

    def merge(self, other):
        if not isinstance(other, ForwardDeleteCommand):
            return False
        if (other.x, other.y) != (self.x, self.y):
            return False
        self.chars.extend(other.chars)
        return True

    def info(self):
        return "Delete : " + _printable(self.chars)


@dataclass
class NewLineCommand(Command):
    """Line breaks inserted at (x, y); repeats land on fresh lines below."""
    x: int
    y: int
    count: int = 1
    pad_lines: int = 0
    kind: CommandKind = field(default=CommandKind.NEW_LINE, init=False)

    def execute(self, view):
        view.buffer.extend_lines(self.y)
        view.buffer.break_line(self.x, self.y)
        for i in range(1, self.count):
            view.buffer.break_line(0, self.y + i)
        view.move_to(0, self.y + self.count)

    def reverse(self, view):
        for _ in range(self.count):
            view.buffer.merge_lines(self.y)
        for _ in range(self.pad_lines):
            view.buffer.delete_line(len(view.buffer) - 1)
        view.move_to(self.x, self.y)

    def merge(self, other):
        if not isinstance(other, NewLineCommand) or other.pad_lines:
            return False
        if (other.x, other.y) != (0, self.y + self.count):
            return False
        self.count += other.count
        return True

    def info(self):
        return f"{self.count} NewLine(s)"


@dataclass
class BackDeleteLineCommand(Command):
    """Lines joined onto the previous one with backspace at a line start.

    Each join is recorded as the point (x, y) where the two lines met.
    """
    joins: list[tuple[int, int]]
    kind: CommandKind = field(default=CommandKind.BACK_DELETE_LINE, init=False)

    @property
    def count(self) -> int:
        return len(self.joins)

    def execute(self, view):
        for _, y in self.joins:
            view.buffer.merge_lines(y)
        x, y = self.joins[-1]
        view.move_to(x, y)

    def reverse(self, view):
        for x, y in reversed(self.joins):
            view.buffer.break_line(x, y)
        view.move_to(0, self.joins[0][1] + 1)

    def merge(self, other):
        if not isinstance(other, BackDeleteLineCommand):
            return False
        self.joins.extend(other.joins)
        return True

    def info(self):
        return f"{self.count} DelLine(s)"


@dataclass
class ForwardDeleteLineCommand(Command):
    """Following lines pulled onto line y at its end x with the delete key."""
    x: int
    y: int
    count: int = 1
    kind: CommandKind = field(default=CommandKind.FORWARD_DELETE_LINE, init=False)

    def execute(self, view):
        for _ in range(self.count):
            view.buffer.merge_lines(self.y)
        view.move_to(self.x, self.y)

    def reverse(self, view):
        for _ in range(self.count):
            view.buffer.break_line(self.x, self.y)
        view.move_to(self.x, self.y)

    def merge(self, other):
        if not isinstance(other, ForwardDeleteLineCommand):
            return False
        if (other.x, other.y) != (self.x, self.y):
            return False
        self.count += other.count
        return True

    def info(self):
        return f"{self.count} FwdDelLine(s)"


@dataclass
class MoveLineCommand(Command):
    """Line y carried `distance` lines up or down by successive swaps."""
    x: int
    y: int
    distance: int = 1
    up: bool = True
    kind: CommandKind = field(default=CommandKind.MOVE_LINE_UP, init=False)

    def __post_init__(self):
        self.kind = CommandKind.MOVE_LINE_UP if self.up else CommandKind.MOVE_LINE_DOWN

    @property
    def step(self) -> int:
        return -1 if self.up else 1

    @property
    def target(self) -> int:
        return self.y + self.step * self.distance

    def execute(self, view):
        for i in range(self.distance):
            line = self.y + self.step * i
            view.buffer.permute_lines(line, line + self.step)
        view.move_to(self.x, self.target)

    def reverse(self, view):
        for i in range(self.distance):
            line = self.target - self.step * i
            view.buffer.permute_lines(line, line - self.step)
        view.move_to(self.x, self.y)

    def merge(self, other):
        if not isinstance(other, MoveLineCommand) or other.up != self.up:
            return False
        if other.y != self.target:
            return False
        self.distance += other.distance
        return True

    def info(self):
        return f"MoveLine {self.y + 1} -> {self.target + 1}"
