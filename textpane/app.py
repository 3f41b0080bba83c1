"""Demo host: an editable main view beside a live undo history panel."""

import logging
import signal
import time
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from .constants import ToolkitConstants
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .keymap import KeyMap, NewLineAction
from .settings import Settings, get_settings
from .terminal import TerminalInterface
from .tree import ViewTree
from .undo import CommandLog
from .view import View
from .workqueue import InputPump, WorkQueue

logger = logging.getLogger(__name__)

_ARROWS = {
    'left': (-1, 0),
    'right': (1, 0),
    'up': (0, -1),
    'down': (0, 1),
}


class App:
    """Main loop wiring terminal input to a tree of views."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings: Optional[Settings] = None):
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.settings = (settings or get_settings()).load()
        self.tree = ViewTree()
        self.keymap = KeyMap()
        self.keymap.register((KeyType.SPECIAL, 'enter'), NewLineAction())
        self.work = WorkQueue(self.settings["queue_size"])
        self.running = False
        self.error_mode = False
        self.input_pump: Optional[InputPump] = None
        self._resized = False
        self._bindings: Dict[Tuple[KeyType, str], Callable[[KeyEvent], None]] = {
            (KeyType.CTRL, 'q'): self._quit,
            (KeyType.CTRL, 'z'): self._undo,
            (KeyType.CTRL, 'y'): self._redo,
            (KeyType.SPECIAL, 'tab'): self._cycle_focus,
            (KeyType.ALT, 'up'): self._move_line,
            (KeyType.ALT, 'down'): self._move_line,
        }
        for name in _ARROWS:
            self._bindings[(KeyType.SPECIAL, name)] = self._navigate
        self.layout()

    # --- Layout ----------------------------------------------------------

    def layout(self):
        """Size the views to the terminal; too narrow a terminal sets error_mode."""
        width, height = self.terminal.width, self.terminal.height
        if width < ToolkitConstants.MIN_TERMINAL_WIDTH or height < 3:
            self.error_mode = True
            return
        self.error_mode = False

        split = width - ToolkitConstants.HISTORY_PANEL_WIDTH
        if self.tree.has_view(ToolkitConstants.MAIN_VIEW):
            self.tree.set_view(ToolkitConstants.MAIN_VIEW, "", 0, 0, split - 1, height - 1)
            self.tree.set_view(ToolkitConstants.HISTORY_VIEW, "", split, 0, width - 1, height - 1)
        else:
            main = self.tree.set_view(
                ToolkitConstants.MAIN_VIEW, "", 0, 0, split - 1, height - 1,
                wrap=self.settings["wrap"],
                editable=True,
                overwrite=self.settings["overwrite"],
                history=CommandLog(self.settings["history_limit"]),
            )
            main.title = "textpane"
            panel = self.tree.set_view(ToolkitConstants.HISTORY_VIEW, "", split, 0, width - 1, height - 1)
            panel.title = "history"
            self.tree.set_view_on_top(main.name)
            self._focus(main)
        self.refresh_history()

    def main_view(self) -> View:
        return self.tree.view(ToolkitConstants.MAIN_VIEW)

    def refresh_history(self):
        """Re-render the history panel from the main view's command log."""
        if not self.tree.has_view(ToolkitConstants.HISTORY_VIEW):
            return
        panel = self.tree.view(ToolkitConstants.HISTORY_VIEW)
        width, height = panel.size()
        panel.clear()
        panel.write(self.main_view().history.render(width, height))

    def _focus(self, view: View):
        if self.tree.current is not None:
            self.tree.current.highlight = False
        self.tree.current = view
        view.highlight = True

    # --- Key handling ----------------------------------------------------

    def handle_key_event(self, key_event: KeyEvent):
        """Dispatch one key: host bindings first, then the view's key map."""
        binding = self._bindings.get((key_event.key_type, key_event.value))
        if binding is self._quit:
            binding(key_event)
            return
        if self.error_mode or self.tree.current is None:
            return
        if binding is not None:
            binding(key_event)
        else:
            self.keymap.edit(self.tree.current, key_event)
        self.refresh_history()

    def _quit(self, key_event):
        self.running = False

    def _undo(self, key_event):
        self.tree.current.undo()

    def _redo(self, key_event):
        self.tree.current.redo()

    def _navigate(self, key_event):
        dx, dy = _ARROWS[key_event.value]
        self.tree.current.navigate(dx, dy)

    def _move_line(self, key_event):
        view = self.tree.current
        if view.editable:
            view.edit_move_line(up=key_event.value == 'up')

    def _cycle_focus(self, key_event):
        view = self.tree.round_robin_forward()
        if view is not None:
            self._focus(view)

    # --- Files -----------------------------------------------------------

    def load_file(self, filename: str):
        """Seed the main view with the contents of filename."""
        try:
            text = Path(filename).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {filename}: {e}")
            self.main_view().footer = f"cannot read {filename}"
            return
        self.main_view().write(text)
        self.main_view().title = Path(filename).name

    # --- Main loop -------------------------------------------------------

    def _handle_resize(self, signum, frame):
        del signum, frame  # Unused
        self._resized = True

    def draw(self):
        if self.error_mode:
            self.terminal.draw_error_message(
                ToolkitConstants.TERMINAL_TOO_NARROW_MESSAGE.format(ToolkitConstants.MIN_TERMINAL_WIDTH))
            return
        self.terminal.clear_screen()
        for view in self.tree.views():
            self.terminal.draw_view(view)
        self.terminal.place_cursor(self.tree.current)

    def run(self):
        """Run until Ctrl-Q."""
        self.terminal.setup()
        self.running = True
        pump = self.input_pump = InputPump(self.keyboard.get_key_event, self.work,
                                            lambda app, key_event: app.handle_key_event(key_event))
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        try:
            pump.start()
            self.draw()
            while self.running:
                if self._resized:
                    self._resized = False
                    self.layout()
                    self.draw()
                if self.work.drain(self):
                    self.draw()
                else:
                    time.sleep(ToolkitConstants.INPUT_POLL_TIMEOUT)
        except KeyboardInterrupt:
            pass
        finally:
            pump.stop()
            pump.join(timeout=1)
            signal.signal(signal.SIGWINCH, original_winch_handler)
            self.terminal.cleanup()
