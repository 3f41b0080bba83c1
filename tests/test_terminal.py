"""Test the blessed-based drawing adapter."""

from textpane.terminal import TerminalInterface
from textpane.view import View


class FakeTerm:
    """Stands in for blessed.Terminal; moves print as [row,col]."""
    width = 80
    height = 24
    home = ""
    clear = ""
    reverse = "<r>"
    normal = "</r>"
    normal_cursor = ""

    def move(self, y, x):
        return f"[{y},{x}]"


def make_view(text):
    view = View("v", 0, 0, 6, 3)
    view.write(text)
    return view


def test_draw_view_paints_frame_and_rows(capsys):
    terminal = TerminalInterface(FakeTerm())
    terminal.draw_view(make_view("hello world\nhi"))
    out = capsys.readouterr().out
    assert "[0,0]┌─────┐" in out
    assert "[1,1]hello" in out
    assert "[2,1]hi   " in out
    assert "[3,0]└─────┘" in out


def test_draw_view_highlights_title(capsys):
    view = make_view("x")
    view.title = "main"
    view.highlight = True
    TerminalInterface(FakeTerm()).draw_view(view)
    assert "[0,1]<r> main</r>" in capsys.readouterr().out


def test_hidden_view_is_not_drawn(capsys):
    view = make_view("x")
    view.hidden = True
    TerminalInterface(FakeTerm()).draw_view(view)
    assert capsys.readouterr().out == ""


def test_place_cursor_offsets_by_frame(capsys):
    view = make_view("abc")
    view.set_cursor(2, 0)
    TerminalInterface(FakeTerm()).place_cursor(view)
    assert capsys.readouterr().out == "[1,3]"


def test_get_key_without_input_returns_none():
    assert TerminalInterface(FakeTerm()).get_key(timeout=0) is None
