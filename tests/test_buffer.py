from __future__ import annotations

import random
from pathlib import Path

import pytest

from aied_core.buffer import (
    Buffer,
    BufferEditError,
    BufferIOError,
    CursorRangeError,
    Position,
)


def make_buffer(text: str, *, cursor: tuple[int, int] = (0, 0)) -> Buffer:
    buffer = Buffer.from_text(text)
    buffer.set_cursor(*cursor)
    return buffer


def test_new_buffer_is_single_empty_line() -> None:
    buffer = Buffer()

    assert buffer.lines == ("",)
    assert buffer.line_count == 1
    assert buffer.cursor == Position(0, 0)
    assert buffer.modified is False
    assert buffer.filename == ""


def test_from_text_splits_lines_and_drops_trailing_newline() -> None:
    buffer = Buffer.from_text("alpha\r\nbeta\n")

    assert buffer.lines == ("alpha", "beta")
    assert buffer.text == "alpha\nbeta"
    assert str(buffer) == buffer.text
    assert buffer.modified is False


def test_set_cursor_clamps_into_bounds() -> None:
    buffer = make_buffer("short\nlonger line")

    assert buffer.set_cursor(5, 99) == Position(1, 11)
    assert buffer.set_cursor(-3, -1) == Position(0, 0)
    assert buffer.set_cursor(0, 5) == Position(0, 5)


def test_line_outside_bounds_raises_range_error() -> None:
    buffer = make_buffer("one")

    with pytest.raises(CursorRangeError, match="out of range"):
        buffer.line(1)
    with pytest.raises(CursorRangeError):
        buffer.line(-1)


def test_insert_char_advances_cursor_and_marks_modified() -> None:
    buffer = make_buffer("hllo", cursor=(0, 1))
    before = buffer.version

    buffer.insert_char("e")

    assert buffer.lines == ("hello",)
    assert buffer.cursor == Position(0, 2)
    assert buffer.modified is True
    assert buffer.version == before + 1


def test_insert_char_rejects_newline() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(BufferEditError):
        buffer.insert_char("\n")
    assert buffer.modified is False


def test_delete_char_at_end_of_line_fails_without_change() -> None:
    buffer = make_buffer("abc", cursor=(0, 3))

    with pytest.raises(BufferEditError, match="end of line"):
        buffer.delete_char()
    assert buffer.lines == ("abc",)
    assert buffer.modified is False


def test_delete_char_removes_character_under_cursor() -> None:
    buffer = make_buffer("abc", cursor=(0, 1))

    buffer.delete_char()

    assert buffer.lines == ("ac",)
    assert buffer.cursor == Position(0, 1)


def test_backspace_at_buffer_start_fails() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(BufferEditError, match="beginning of buffer"):
        buffer.backspace()
    assert buffer.modified is False


def test_backspace_at_line_start_merges_with_previous_line() -> None:
    buffer = make_buffer("hello\nworld", cursor=(1, 0))

    buffer.backspace()

    assert buffer.lines == ("helloworld",)
    assert buffer.cursor == Position(0, 5)


def test_backspace_mid_line_removes_previous_character() -> None:
    buffer = make_buffer("abc", cursor=(0, 2))

    buffer.backspace()

    assert buffer.lines == ("ac",)
    assert buffer.cursor == Position(0, 1)


def test_insert_line_splits_at_cursor() -> None:
    buffer = make_buffer("hello world", cursor=(0, 5))

    buffer.insert_line()

    assert buffer.lines == ("hello", " world")
    assert buffer.cursor == Position(1, 0)


def test_insert_empty_line_opens_above() -> None:
    buffer = make_buffer("first\nsecond", cursor=(1, 3))

    buffer.insert_empty_line()

    assert buffer.lines == ("first", "", "second")
    assert buffer.cursor == Position(1, 0)


def test_delete_line_clamps_cursor_to_shorter_line() -> None:
    buffer = make_buffer("a long line\nxy\nz", cursor=(0, 8))

    buffer.delete_line()

    assert buffer.lines == ("xy", "z")
    assert buffer.cursor == Position(0, 2)


def test_delete_last_remaining_line_leaves_empty_line() -> None:
    buffer = make_buffer("only", cursor=(0, 2))

    buffer.delete_line()

    assert buffer.lines == ("",)
    assert buffer.cursor == Position(0, 0)
    assert buffer.modified is True


def test_delete_final_line_moves_cursor_up() -> None:
    buffer = make_buffer("one\ntwo", cursor=(1, 1))

    buffer.delete_line()

    assert buffer.lines == ("one",)
    assert buffer.cursor.line == 0


def test_join_lines_inserts_single_space() -> None:
    buffer = make_buffer("foo\nbar", cursor=(0, 1))

    buffer.join_lines()

    assert buffer.lines == ("foo bar",)
    assert buffer.cursor == Position(0, 1)


def test_join_lines_with_empty_side_adds_no_space() -> None:
    buffer = make_buffer("foo\n\nbar")

    buffer.join_lines()

    assert buffer.lines == ("foo", "bar")


def test_join_last_line_fails() -> None:
    buffer = make_buffer("foo\nbar", cursor=(1, 0))

    with pytest.raises(BufferEditError, match="no next line"):
        buffer.join_lines()
    assert buffer.modified is False


def test_insert_text_spanning_lines_places_cursor_after_text() -> None:
    buffer = make_buffer("head tail", cursor=(0, 5))

    buffer.insert_text("one\ntwo\nthree ")

    assert buffer.lines == ("head one", "two", "three tail")
    assert buffer.cursor == Position(2, 6)


def test_insert_text_normalises_crlf_line_breaks() -> None:
    buffer = make_buffer("x")

    buffer.insert_text("a\r\nb")

    assert buffer.lines == ("a", "bx")
    assert buffer.cursor == Position(1, 1)


def test_get_and_delete_range_are_end_exclusive() -> None:
    buffer = make_buffer("hello\nworld")

    assert buffer.get_text_range(Position(0, 3), Position(1, 2)) == "lo\nwo"
    removed = buffer.delete_range(Position(1, 2), Position(0, 3))

    assert removed == "lo\nwo"
    assert buffer.lines == ("helrld",)
    assert buffer.cursor == Position(0, 3)


def test_delete_range_rejects_positions_outside_buffer() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(CursorRangeError):
        buffer.delete_range(Position(0, 0), Position(3, 0))


def test_save_without_filename_fails() -> None:
    buffer = make_buffer("text")

    with pytest.raises(BufferIOError, match="no filename"):
        buffer.save()


def test_save_then_load_round_trips_content(tmp_path: Path) -> None:
    target = tmp_path / "note.txt"
    buffer = make_buffer("first\nsecond")
    buffer.insert_char("x")

    buffer.save_as(target)

    assert target.read_text(encoding="utf-8") == "xfirst\nsecond"
    assert buffer.modified is False
    assert buffer.filename == str(target)

    loaded = Buffer.from_file(target)
    assert loaded.lines == ("xfirst", "second")
    assert loaded.modified is False
    assert loaded.name == "note.txt"


def test_load_resets_cursor_and_selection(tmp_path: Path) -> None:
    target = tmp_path / "data.txt"
    target.write_text("a\nb\n", encoding="utf-8")
    buffer = make_buffer("xyz\nuvw", cursor=(1, 2))
    buffer.state.set_selection(Position(0, 0), Position(1, 1))

    buffer.load(target)

    assert buffer.lines == ("a", "b")
    assert buffer.cursor == Position(0, 0)
    assert buffer.state.selection is None
    assert buffer.filename == str(target)


def test_load_missing_file_raises_io_error(tmp_path: Path) -> None:
    buffer = make_buffer("keep")

    with pytest.raises(BufferIOError, match="failed to open"):
        buffer.load(tmp_path / "missing.txt")
    assert buffer.lines == ("keep",)


def test_load_empty_file_gives_one_empty_line(tmp_path: Path) -> None:
    target = tmp_path / "empty.txt"
    target.write_text("", encoding="utf-8")

    buffer = Buffer.from_file(target)

    assert buffer.lines == ("",)


def test_save_to_directory_reports_io_error(tmp_path: Path) -> None:
    buffer = make_buffer("text")
    buffer.insert_char("!")

    with pytest.raises(BufferIOError, match="failed to write"):
        buffer.save_as(tmp_path)
    assert buffer.modified is True


def test_reset_clears_content_and_filename() -> None:
    buffer = make_buffer("text", cursor=(0, 2))
    buffer.filename = "notes.txt"
    buffer.insert_char("x")

    buffer.reset()

    assert buffer.lines == ("",)
    assert buffer.filename == ""
    assert buffer.modified is False
    assert buffer.cursor == Position(0, 0)


def test_mirror_reflects_buffer_state() -> None:
    buffer = make_buffer("abc\ndef", cursor=(1, 1))

    mirror = buffer.mirror(attributes={"mode": "normal"})

    assert mirror.text == "abc\ndef"
    assert mirror.cursor == Position(1, 1)
    assert mirror.modified is False
    assert mirror.attributes == {"mode": "normal"}


def test_typing_into_new_buffer() -> None:
    buffer = Buffer()

    for ch in "hello":
        buffer.insert_char(ch)

    assert str(buffer) == "hello"
    assert buffer.cursor == Position(0, 5)
    assert buffer.modified is True


def test_insert_then_backspace_restores_line_and_cursor() -> None:
    buffer = make_buffer("abcdef", cursor=(0, 3))

    buffer.insert_char("Z")
    buffer.backspace()

    assert buffer.lines == ("abcdef",)
    assert buffer.cursor == Position(0, 3)


@pytest.mark.parametrize("col", [0, 3, 6])
def test_split_then_join_restores_line(col: int) -> None:
    original = "abcdef"
    buffer = make_buffer(original, cursor=(0, col))

    buffer.insert_line()
    buffer.set_cursor(0, 0)
    buffer.join_lines()

    if 0 < col < len(original):
        assert buffer.lines == (original[:col] + " " + original[col:],)
    else:
        assert buffer.lines == (original,)


def test_cursor_and_line_invariants_hold_over_edit_sequence() -> None:
    rng = random.Random(1234)
    buffer = make_buffer("alpha beta\n\ngamma\n  delta")
    operations = [
        lambda: buffer.insert_char(rng.choice("xyz ")),
        buffer.delete_char,
        buffer.backspace,
        buffer.insert_line,
        buffer.insert_empty_line,
        buffer.delete_line,
        buffer.join_lines,
        lambda: buffer.move_cursor(rng.randint(-2, 2), rng.randint(-4, 4)),
        lambda: buffer.set_cursor(rng.randint(-5, 10), rng.randint(-5, 20)),
    ]

    for _ in range(500):
        try:
            rng.choice(operations)()
        except BufferEditError:
            pass
        line, col = buffer.cursor
        assert buffer.line_count >= 1
        assert 0 <= line < buffer.line_count
        assert 0 <= col <= len(buffer.current_line)
