"""Test the TextBuffer primitives."""

import pytest
from textpane.buffer import FILLER, TextBuffer
from textpane.errors import InvalidPosition, LastLine


def lines_of(buffer):
    return ["".join(line) for line in buffer.lines]


def test_write_rune_inserts_and_shifts_right():
    """Insert mode shifts the rest of the line."""
    buffer = TextBuffer(["ac"])
    buffer.write_rune(1, 0, "b")
    assert lines_of(buffer) == ["abc"]


def test_write_rune_overwrite_replaces():
    buffer = TextBuffer(["abc"])
    buffer.write_rune(1, 0, "X", overwrite=True)
    assert lines_of(buffer) == ["aXc"]


def test_write_rune_pads_lines_and_columns():
    """Writing past the content pads with empty lines and filler cells."""
    buffer = TextBuffer()
    buffer.write_rune(2, 1, "x")
    assert buffer.lines == [[], [FILLER, FILLER, "x"]]
    assert buffer.text() == "\n  x"


def test_write_rune_negative_position_fails():
    buffer = TextBuffer()
    with pytest.raises(InvalidPosition):
        buffer.write_rune(-1, 0, "x")
    with pytest.raises(InvalidPosition):
        buffer.write_rune(0, -1, "x")


def test_delete_rune_returns_character():
    buffer = TextBuffer(["abc"])
    assert buffer.delete_rune(1, 0) == "b"
    assert lines_of(buffer) == ["ac"]


def test_delete_rune_out_of_bounds():
    buffer = TextBuffer(["abc"])
    with pytest.raises(InvalidPosition):
        buffer.delete_rune(3, 0)
    with pytest.raises(InvalidPosition):
        buffer.delete_rune(0, 1)


def test_break_line_splits_and_shifts_down():
    buffer = TextBuffer(["hello", "world"])
    buffer.break_line(2, 0)
    assert lines_of(buffer) == ["he", "llo", "world"]


def test_break_line_at_end_creates_empty_line():
    buffer = TextBuffer(["abc"])
    buffer.break_line(3, 0)
    assert lines_of(buffer) == ["abc", ""]


def test_merge_lines():
    buffer = TextBuffer(["ab", "cd", "ef"])
    buffer.merge_lines(0)
    assert lines_of(buffer) == ["abcd", "ef"]


def test_merge_last_line_fails():
    buffer = TextBuffer(["ab", "cd"])
    with pytest.raises(LastLine):
        buffer.merge_lines(1)
    assert lines_of(buffer) == ["ab", "cd"]


def test_permute_lines():
    buffer = TextBuffer(["one", "two", "three"])
    buffer.permute_lines(0, 2)
    assert lines_of(buffer) == ["three", "two", "one"]
    with pytest.raises(InvalidPosition):
        buffer.permute_lines(0, 3)


def test_delete_line():
    buffer = TextBuffer(["one", "two"])
    assert buffer.delete_line(0) == list("one")
    assert lines_of(buffer) == ["two"]


def test_extend_lines_reports_added_count():
    buffer = TextBuffer(["a"])
    assert buffer.extend_lines(0) == 0
    assert buffer.extend_lines(3) == 3
    assert len(buffer) == 4


def test_every_mutation_taints():
    """The viewport relies on the taint flag to know when to rebuild."""
    buffer = TextBuffer(["ab", "cd"])
    operations = [
        lambda: buffer.write_rune(0, 0, "x"),
        lambda: buffer.delete_rune(0, 0),
        lambda: buffer.break_line(1, 0),
        lambda: buffer.merge_lines(0),
        lambda: buffer.permute_lines(0, 1),
        lambda: buffer.append("z"),
    ]
    for operation in operations:
        buffer.tainted = False
        operation()
        assert buffer.tainted


def test_failed_mutation_leaves_buffer_clean():
    buffer = TextBuffer(["ab", "cd"])
    buffer.tainted = False
    with pytest.raises(InvalidPosition):
        buffer.delete_rune(5, 0)
    with pytest.raises(InvalidPosition):
        buffer.break_line(0, 2)
    with pytest.raises(InvalidPosition):
        buffer.merge_lines(-1)
    with pytest.raises(LastLine):
        buffer.merge_lines(1)
    assert not buffer.tainted
    assert lines_of(buffer) == ["ab", "cd"]


def test_append_splits_on_line_feed():
    buffer = TextBuffer()
    buffer.append("ab\ncd")
    assert lines_of(buffer) == ["ab", "cd"]
    buffer.append("\n")
    assert lines_of(buffer) == ["ab", "cd", ""]


def test_append_carriage_return_clears_current_line():
    buffer = TextBuffer()
    buffer.append("progress 10%\rprogress 20%")
    assert lines_of(buffer) == ["progress 20%"]


def test_line_length_of_missing_line_is_zero():
    buffer = TextBuffer(["abc"])
    assert buffer.line_length(0) == 3
    assert buffer.line_length(5) == 0
