"""Pluggable mapping from key events to edit operations."""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Tuple, TYPE_CHECKING

from .keyboard import KeyEvent, KeyType

if TYPE_CHECKING:
    from .view import View


class EditAction(ABC):
    """One edit a key can trigger on a view."""

    @abstractmethod
    def apply(self, view: 'View', key_event: KeyEvent):
        """Perform the edit."""


class WriteAction(EditAction):
    def apply(self, view, key_event):
        view.edit_write(key_event.value)


class WriteCharAction(EditAction):
    """Writes a fixed character regardless of the key pressed."""

    def __init__(self, ch: str):
        self.ch = ch

    def apply(self, view, key_event):
        view.edit_write(self.ch)


class DeleteAction(EditAction):
    def __init__(self, back: bool):
        self.back = back

    def apply(self, view, key_event):
        view.edit_delete(self.back)


class NewLineAction(EditAction):
    def apply(self, view, key_event):
        view.edit_new_line()


class ToggleOverwriteAction(EditAction):
    def apply(self, view, key_event):
        view.toggle_overwrite()


class FunctionAction(EditAction):
    """Adapter so a plain function can be registered as an action."""

    def __init__(self, func: Callable[['View', KeyEvent], None]):
        self.func = func

    def apply(self, view, key_event):
        self.func(view, key_event)


class KeyMap:
    """Registry mapping key combinations to edit actions.

    Printable characters without a specific binding fall back to the
    write action.  Hosts replace bindings with register/unregister or
    swap the whole map.
    """

    def __init__(self, defaults: bool = True):
        self._actions: Dict[Tuple[KeyType, str], EditAction] = {}
        self._write = WriteAction()
        if defaults:
            self._setup_default_actions()

    def _setup_default_actions(self):
        self.register((KeyType.REGULAR, ' '), WriteCharAction(' '))
        self.register((KeyType.SPECIAL, 'backspace'), DeleteAction(back=True))
        self.register((KeyType.SPECIAL, 'backspace2'), DeleteAction(back=True))
        self.register((KeyType.SPECIAL, 'delete'), DeleteAction(back=False))
        self.register((KeyType.SPECIAL, 'insert'), ToggleOverwriteAction())

    def register(self, key: Tuple[KeyType, str], action):
        """Bind an EditAction, or a plain function(view, key_event), to a key."""
        if not isinstance(action, EditAction):
            action = FunctionAction(action)
        self._actions[key] = action

    def unregister(self, key: Tuple[KeyType, str]):
        self._actions.pop(key, None)

    def get_action(self, key_event: KeyEvent) -> Optional[EditAction]:
        action = self._actions.get((key_event.key_type, key_event.value))
        if action is None and key_event.is_printable:
            return self._write
        return action

    def edit(self, view: 'View', key_event: KeyEvent) -> bool:
        """Apply the action bound to key_event.

        Returns:
            True if an action ran
        """
        if not view.editable:
            return False
        action = self.get_action(key_event)
        if action is None:
            return False
        action.apply(view, key_event)
        return True

