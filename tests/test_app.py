"""Test the demo host with a mocked terminal."""

from unittest.mock import MagicMock

import pytest
from textpane.app import App
from textpane.constants import ToolkitConstants
from textpane.keyboard import parse_key
from textpane.settings import Settings


def make_terminal(width=80, height=24):
    terminal = MagicMock()
    terminal.width = width
    terminal.height = height
    terminal.get_key.return_value = None
    return terminal


@pytest.fixture
def app(tmp_path):
    return App(terminal=make_terminal(), settings=Settings(config_dir=tmp_path))


def press(app, *tokens):
    for token in tokens:
        app.handle_key_event(parse_key(token))


def history_text(app):
    return app.tree.view(ToolkitConstants.HISTORY_VIEW).buffer_text()


def test_layout_places_main_and_history(app):
    main = app.main_view()
    panel = app.tree.view(ToolkitConstants.HISTORY_VIEW)
    assert main.position() == (0, 0, 49, 23)
    assert panel.position() == (50, 0, 79, 23)
    assert app.tree.current is main
    assert main.highlight
    assert main.editable and not panel.editable


def test_layout_uses_settings(tmp_path):
    settings = Settings(config_dir=tmp_path)
    settings.save({"wrap": False, "overwrite": True})
    app = App(terminal=make_terminal(), settings=Settings(config_dir=tmp_path))
    assert not app.main_view().wrap
    assert app.main_view().overwrite


def test_typing_edits_main_view_and_updates_history(app):
    press(app, "h", "i")
    assert app.main_view().buffer_text() == "hi"
    assert "Write : hi" in history_text(app)


def test_undo_and_redo_keys(app):
    press(app, "h", "i")
    press(app, "<Ctrl-z>")
    assert app.main_view().buffer_text() == ""
    press(app, "<Ctrl-y>")
    assert app.main_view().buffer_text() == "hi"


def test_arrow_keys_cut_the_edit_group(app):
    press(app, "a", "<LEFT>", "<RIGHT>", "b")
    assert app.main_view().buffer_text() == "ab"
    assert len(app.main_view().history.undo_entries) == 2


def test_enter_breaks_line(app):
    press(app, "a", "b", "<LEFT>", "<Ctrl-j>")
    assert app.main_view().buffer_text() == "a\nb"
    assert "1 NewLine(s)" in history_text(app)


def test_alt_arrows_move_lines(app):
    app.main_view().write("one\ntwo")
    app.main_view().set_cursor(0, 1)
    press(app, "<Esc+UP>")
    assert app.main_view().buffer_text() == "two\none"
    press(app, "<Esc+DOWN>")
    assert app.main_view().buffer_text() == "one\ntwo"


def test_tab_cycles_focus(app):
    press(app, "<TAB>")
    panel = app.tree.view(ToolkitConstants.HISTORY_VIEW)
    assert app.tree.current is panel
    assert panel.highlight
    assert not app.main_view().highlight
    # The history panel is read-only
    press(app, "x")
    assert app.main_view().buffer_text() == ""
    press(app, "<TAB>")
    assert app.tree.current is app.main_view()


def test_ctrl_q_stops_the_loop(app):
    app.running = True
    press(app, "<Ctrl-q>")
    assert not app.running


def test_narrow_terminal_enters_error_mode(tmp_path):
    app = App(terminal=make_terminal(width=30), settings=Settings(config_dir=tmp_path))
    assert app.error_mode
    app.running = True
    press(app, "a")
    press(app, "<Ctrl-q>")
    assert not app.running
    app.draw()
    app.terminal.draw_error_message.assert_called_once()


def test_resize_relayouts_existing_views(app):
    main = app.main_view()
    app.terminal.width = 100
    app.layout()
    assert app.main_view() is main
    assert main.position() == (0, 0, 69, 23)


def test_draw_paints_every_view(app):
    app.draw()
    assert app.terminal.draw_view.call_count == 2
    app.terminal.place_cursor.assert_called_once_with(app.main_view())


def test_load_file_seeds_main_view(app, tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("line one\nline two", encoding="utf-8")
    app.load_file(str(path))
    assert app.main_view().buffer_text() == "line one\nline two"
    assert app.main_view().title == "notes.txt"


def test_load_missing_file_reports_in_footer(app, tmp_path):
    app.load_file(str(tmp_path / "missing.txt"))
    assert app.main_view().buffer_text() == ""
    assert "missing.txt" in app.main_view().footer


def test_run_joins_input_thread_and_restores_terminal(app):
    """Queued work stops the loop; run() returns after the input thread exits."""
    app.work.submit(lambda target: setattr(target, 'running', False))
    app.run()
    assert not app.input_pump.is_alive()
    app.terminal.setup.assert_called_once()
    app.terminal.cleanup.assert_called_once()
