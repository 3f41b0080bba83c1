"""Test the cursor movement state machine."""

from textpane.view import View


def make_view(text="", width=20, height=5, wrap=False):
    """Create a view whose visible area is width x height."""
    view = View("v", 0, 0, width + 1, height + 1, wrap=wrap, editable=True)
    if text:
        view.write(text)
    return view


def test_step_right_moves_one_column():
    view = make_view("abc")
    view.move_cursor(1, 0)
    assert view.cursor() == (1, 0)


def test_step_right_at_end_of_line_goes_to_next_line():
    view = make_view("ab\ncd")
    view.move_cursor(3, 0)
    assert view.cursor() == (0, 1)


def test_step_right_saturates_at_buffer_end():
    view = make_view("ab\ncd")
    view.move_cursor(20, 0)
    assert view.cursor() == (2, 1)


def test_step_right_in_write_mode_runs_past_content():
    view = make_view("ab\ncd")
    view.set_cursor(2, 0)
    view.step_right(write_mode=True)
    assert view.cursor() == (3, 0)


def test_step_right_in_write_mode_stops_at_buffer_end():
    view = make_view("ab")
    view.set_cursor(2, 0)
    view.step_right(write_mode=True)
    assert view.cursor() == (2, 0)


def test_step_right_scrolls_horizontally_without_wrap():
    view = make_view("abcdefg", width=4)
    view.move_cursor(7, 0)
    assert view.cursor() == (3, 0)
    assert view.origin() == (4, 0)


def test_step_left_at_line_start_goes_to_previous_line_end():
    view = make_view("abcdef\nxy")
    view.set_cursor(0, 1)
    view.move_cursor(-1, 0)
    assert view.cursor() == (6, 0)


def test_step_left_saturates_at_buffer_start():
    view = make_view("abc")
    view.move_cursor(-3, 0)
    assert view.cursor() == (0, 0)
    assert view.origin() == (0, 0)


def test_step_left_scrolls_back_horizontally():
    view = make_view("abcdefg", width=4)
    view.move_cursor(7, 0)
    view.move_cursor(-5, 0)
    assert view.origin() == (2, 0)
    assert view.cursor() == (0, 0)


def test_vertical_move_clamps_to_landing_line():
    view = make_view("abcdef\nab")
    view.move_cursor(5, 0)
    view.move_cursor(0, 1)
    assert view.cursor() == (2, 1)


def test_step_down_keeps_column():
    """The primitive alone leaves the column for the caller to clamp."""
    view = make_view("abcdef\nab")
    view.set_cursor(5, 0)
    view.step_down()
    assert view.cursor() == (5, 1)
    view.adjust_position_to_current_line()
    assert view.cursor() == (2, 1)


def test_step_down_stops_at_last_line():
    view = make_view("a\nb")
    view.move_cursor(0, 5)
    assert view.cursor() == (0, 1)


def test_step_down_in_write_mode_allows_one_row_past_content():
    view = make_view("a\nb")
    view.move_cursor(0, 5, True)
    assert view.cursor() == (0, 2)


def test_step_up_saturates_at_first_line():
    view = make_view("a\nb")
    view.move_cursor(0, -3)
    assert view.cursor() == (0, 0)


def test_vertical_scroll_at_last_row():
    view = make_view("1\n2\n3\n4", height=2)
    view.move_cursor(0, 3)
    assert view.cursor() == (0, 1)
    assert view.origin() == (0, 2)
    view.move_cursor(0, -3)
    assert view.cursor() == (0, 0)
    assert view.origin() == (0, 0)


def test_step_right_across_wrap_boundary_lands_on_column_one():
    """Continuing a wrapped segment skips the shared boundary position."""
    view = make_view("abcdefgh", width=5, wrap=True)
    assert view.view_text() == "abcd\nefgh"
    view.set_cursor(4, 0)
    view.step_right()
    assert view.cursor() == (1, 1)


def test_step_left_across_wrap_boundary():
    view = make_view("abcdefgh", width=5, wrap=True)
    view.set_cursor(0, 1)
    view.step_left()
    assert view.cursor() == (3, 0)


def test_move_to_scrolls_minimally():
    view = make_view("\n".join(str(i) for i in range(10)), height=3)
    view.move_to(0, 6)
    assert view.origin() == (0, 4)
    assert view.cursor() == (0, 2)
    view.move_to(0, 5)
    assert view.origin() == (0, 4)
    assert view.cursor() == (0, 1)


def test_move_to_past_content_extrapolates():
    view = make_view("ab")
    view.move_to(0, 2)
    assert view.cursor() == (0, 2)


def test_movement_never_raises_with_zero_wrap_width():
    view = View("v", 0, 0, 2, 3, wrap=True)
    view.write("abc")
    view.move_cursor(3, 3)
    view.move_cursor(-3, -3)
    assert view.cursor() == (0, 0)
