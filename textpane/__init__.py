"""Textpane - Scrollable, wrappable, editable text views for the terminal."""

__version__ = "0.1.0"

from .buffer import TextBuffer
from .commands import Command, CommandKind
from .errors import InvalidPosition, LastLine, NotFound, TextPaneError, WrapWidthZero
from .keymap import EditAction, KeyMap
from .tree import ViewTree
from .undo import CommandLog
from .view import View
from .viewport import ViewLine, Viewport
from .workqueue import InputPump, WorkQueue

__all__ = [
    'TextBuffer',
    'Viewport',
    'ViewLine',
    'View',
    'ViewTree',
    'Command',
    'CommandKind',
    'CommandLog',
    'KeyMap',
    'EditAction',
    'WorkQueue',
    'InputPump',
    'TextPaneError',
    'InvalidPosition',
    'LastLine',
    'WrapWidthZero',
    'NotFound',
]
