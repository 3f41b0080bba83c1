"""Keyboard input parsing from curtsies-style key names."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass(frozen=True)
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str = ""  # The token as read from the terminal

    @property
    def is_printable(self) -> bool:
        return self.key_type == KeyType.REGULAR and len(self.value) == 1 and self.value.isprintable()


# Token spellings that name the same key
_ALIASES = {
    'pageup': 'page_up',
    'pagedown': 'page_down',
    'bksp': 'backspace',
    'del': 'delete',
    'ins': 'insert',
    'return': 'enter',
    'esc': 'escape',
}


def parse_key(token: str) -> KeyEvent:
    """Parse a curtsies key token such as '<LEFT>', '<Ctrl-z>' or 'a'."""
    if token.startswith('<') and token.endswith('>') and len(token) > 2:
        name = token[1:-1].lower().replace('+', '-')
        parts = name.split('-') if len(name) > 1 else [name]
        base = _ALIASES.get(parts[-1], parts[-1])
        mods = set(parts[:-1])
        if 'meta' in mods or 'esc' in mods:
            mods.add('alt')

        if not mods and base in ('space', 'spacebar', 'spc'):
            return KeyEvent(KeyType.REGULAR, ' ', token)
        if 'ctrl' in mods and len(base) == 1:
            # Ctrl-H is the classic backspace, Ctrl-J/Ctrl-M send enter
            if base == 'h':
                return KeyEvent(KeyType.SPECIAL, 'backspace2', token)
            if base in ('j', 'm'):
                return KeyEvent(KeyType.SPECIAL, 'enter', token)
            return KeyEvent(KeyType.CTRL, base, token)
        if 'alt' in mods:
            return KeyEvent(KeyType.ALT, base, token)
        return KeyEvent(KeyType.SPECIAL, base, token)

    if len(token) == 1:
        o = ord(token)
        if o == 0x7f:
            return KeyEvent(KeyType.SPECIAL, 'backspace', token)
        if o == 0x08:
            return KeyEvent(KeyType.SPECIAL, 'backspace2', token)
        if o == 0x09:
            return KeyEvent(KeyType.SPECIAL, 'tab', token)
        if o in (0x0a, 0x0d):
            return KeyEvent(KeyType.SPECIAL, 'enter', token)
        if o == 0x1b:
            return KeyEvent(KeyType.SPECIAL, 'escape', token)
        if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
            return KeyEvent(KeyType.CTRL, chr(ord('a') + o - 1), token)

    return KeyEvent(KeyType.REGULAR, token, token)


class KeyboardHandler:
    """Turns raw tokens from a terminal interface into KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        token = self.terminal.get_key(timeout)
        if not token:
            return None
        return parse_key(str(token))
