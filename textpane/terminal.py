"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
from typing import Optional

import blessed

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen)
        print(self.term.clear)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                # Enter raw mode immediately so reads work
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except (ImportError, OSError) as e:
                # No usable tty (CI, pipes): run without input
                logger.warning(f"Keyboard input unavailable: {e}")
                self._curtsies_input = None
                self._curtsies_active = False

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen)
            print(self.term.normal_cursor)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except OSError as e:
                logger.warning(f"Could not restore terminal mode: {e}")
            finally:
                self._curtsies_input = None
                self._curtsies_active = False

    def clear_screen(self):
        """Clear the entire screen."""
        print(self.term.home + self.term.clear, end='')

    def draw_view(self, view):
        """Draw a view's frame, title and visible text.

        Frame corners sit at (x0, y0) and (x1, y1); text fills the cells
        strictly between them.
        """
        if view.hidden:
            return
        max_x, max_y = view.size()
        if view.frame:
            horizontal = "─" * max_x
            print(self.term.move(view.y0, view.x0) + "┌" + horizontal + "┐", end='')
            for y in range(view.y0 + 1, view.y1):
                print(self.term.move(y, view.x0) + "│", end='')
                print(self.term.move(y, view.x1) + "│", end='')
            print(self.term.move(view.y1, view.x0) + "└" + horizontal + "┘", end='')
            if view.title:
                title = f" {view.title} "[:max_x]
                if view.highlight:
                    title = self.term.reverse + title + self.term.normal
                print(self.term.move(view.y0, view.x0 + 1) + title, end='')
            if view.footer:
                footer = f" {view.footer} "[:max_x]
                print(self.term.move(view.y1, view.x1 - len(footer)) + footer, end='')

        rows = view.visible_lines()
        for y in range(max_y):
            text = rows[y] if y < len(rows) else ""
            print(self.term.move(view.y0 + 1 + y, view.x0 + 1) + text[:max_x].ljust(max_x), end='')

    def place_cursor(self, view):
        """Show the hardware cursor at the view's cursor cell."""
        x, y = view.cursor()
        print(self.term.move(view.y0 + 1 + y, view.x0 + 1 + x) + self.term.normal_cursor,
              end='', flush=True)

    def draw_error_message(self, message1: str, message2: str = ""):
        """Draw an error message in the center of the screen."""
        print(self.term.home + self.term.clear, end='')
        center_y = self.term.height // 2
        box_width = max(len(message1), len(message2)) + 4
        left_margin = max((self.term.width - box_width) // 2, 0)

        print(self.term.move(center_y - 2, left_margin) + "╔" + "═" * (box_width - 2) + "╗", end='')
        print(self.term.move(center_y - 1, left_margin) + "║ " + message1.center(box_width - 4) + " ║", end='')
        bottom = center_y
        if message2:
            print(self.term.move(center_y, left_margin) + "║ " + message2.center(box_width - 4) + " ║", end='')
            bottom += 1
        print(self.term.move(bottom, left_margin) + "╚" + "═" * (box_width - 2) + "╝", end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name, or None if nothing arrived in time
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            return str(next(self._curtsies_input))
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height
