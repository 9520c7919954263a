"""Cursor motions shared by Normal, Visual and Insert modes.

Target functions take the buffer and a ``past_end`` flag and return the
position the cursor should land on. ``past_end`` is true in modes where the
cursor may sit after the last character of a line (Insert, Visual).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from aied_core.buffer import Buffer, Position
from aied_core.modes.base_mode import (
    ModeContext,
    ModeResult,
    ModeType,
    clamp_to_last_char,
)

from .visual import sync_selection

if TYPE_CHECKING:
    from aied_core.keymaps import ResolutionMatch

MotionTarget = Callable[[Buffer, bool], Position]


def first_non_blank(text: str) -> int:
    for index, ch in enumerate(text):
        if not ch.isspace():
            return index
    return 0


def left(buffer: Buffer, past_end: bool) -> Position:
    del past_end
    line, col = buffer.cursor
    return Position(line, col - 1)


def right(buffer: Buffer, past_end: bool) -> Position:
    del past_end
    line, col = buffer.cursor
    return Position(line, col + 1)


def up(buffer: Buffer, past_end: bool) -> Position:
    del past_end
    line, col = buffer.cursor
    return Position(line - 1, col)


def down(buffer: Buffer, past_end: bool) -> Position:
    del past_end
    line, col = buffer.cursor
    return Position(line + 1, col)


def line_start(buffer: Buffer, past_end: bool) -> Position:
    del past_end
    return Position(buffer.cursor.line, 0)


def line_end(buffer: Buffer, past_end: bool) -> Position:
    del past_end
    return Position(buffer.cursor.line, len(buffer.current_line))


def line_first_non_blank(buffer: Buffer, past_end: bool) -> Position:
    del past_end
    return Position(buffer.cursor.line, first_non_blank(buffer.current_line))


def buffer_start(buffer: Buffer, past_end: bool) -> Position:
    del buffer, past_end
    return Position(0, 0)


def buffer_end(buffer: Buffer, past_end: bool) -> Position:
    del past_end
    last = buffer.line_count - 1
    return Position(last, first_non_blank(buffer.line(last)))


def word_forward(buffer: Buffer, past_end: bool) -> Position:
    """Skip the rest of the word, then the blanks after it; wrap at line end."""

    del past_end
    line, col = buffer.cursor
    text = buffer.current_line
    has_next = line < buffer.line_count - 1
    if col >= len(text):
        return Position(line + 1, 0) if has_next else Position(line, col)

    while col < len(text) and not text[col].isspace():
        col += 1
    while col < len(text) and text[col].isspace():
        col += 1

    if col >= len(text) and has_next:
        return Position(line + 1, 0)
    return Position(line, col)


def word_backward(buffer: Buffer, past_end: bool) -> Position:
    """Land on the first character of the previous word."""

    line, col = buffer.cursor
    if col <= 0:
        if line == 0:
            return Position(0, 0)
        previous = buffer.line(line - 1)
        end = len(previous) if past_end else max(len(previous) - 1, 0)
        return Position(line - 1, end)

    text = buffer.current_line
    col = min(col, len(text)) - 1
    while col >= 0 and text[col].isspace():
        col -= 1
    while col >= 0 and not text[col].isspace():
        col -= 1
    return Position(line, max(col + 1, 0))


def word_end(buffer: Buffer, past_end: bool) -> Position:
    """Land on the last character of the current or next word."""

    del past_end
    line, col = buffer.cursor
    text = buffer.current_line
    if col >= len(text) - 1:
        if line >= buffer.line_count - 1:
            return Position(line, col)
        following = buffer.line(line + 1)
        target = 0
        while target < len(following) and following[target].isspace():
            target += 1
        while target < len(following) and not following[target].isspace():
            target += 1
        return Position(line + 1, max(target - 1, 0))

    col += 1
    while col < len(text) and text[col].isspace():
        col += 1
    while col < len(text) and not text[col].isspace():
        col += 1
    return Position(line, max(col - 1, 0))


def apply_motion(
    context: ModeContext, mode: str, target: MotionTarget
) -> ModeResult:
    buffer = context.buffer
    past_end = mode != ModeType.NORMAL.value
    buffer.set_cursor(*target(buffer, past_end))
    if mode == ModeType.NORMAL.value:
        clamp_to_last_char(buffer)
    elif mode == ModeType.VISUAL.value:
        sync_selection(context)
    return ModeResult(handled=True, status="motion")


def _motion(context: ModeContext, match: "ResolutionMatch", target: MotionTarget) -> ModeResult:
    return apply_motion(context, match.binding.mode, target)


def move_left(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    return _motion(context, match, left)


def move_right(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    return _motion(context, match, right)


def move_up(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    return _motion(context, match, up)


def move_down(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    return _motion(context, match, down)


def move_line_start(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    return _motion(context, match, line_start)


def move_line_end(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    return _motion(context, match, line_end)


def move_first_non_blank(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    return _motion(context, match, line_first_non_blank)


def move_word_forward(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    return _motion(context, match, word_forward)


def move_word_backward(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    return _motion(context, match, word_backward)


def move_word_end(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    return _motion(context, match, word_end)


def move_buffer_start(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    return _motion(context, match, buffer_start)


def move_buffer_end(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    return _motion(context, match, buffer_end)


__all__ = [
    "apply_motion",
    "buffer_end",
    "buffer_start",
    "first_non_blank",
    "line_end",
    "line_first_non_blank",
    "line_start",
    "move_buffer_end",
    "move_buffer_start",
    "move_down",
    "move_first_non_blank",
    "move_left",
    "move_line_end",
    "move_line_start",
    "move_right",
    "move_up",
    "move_word_backward",
    "move_word_end",
    "move_word_forward",
    "word_backward",
    "word_end",
    "word_forward",
]
