"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import BufferDocument
from .errors import CursorRangeError
from .state import Position


def ensure_line(document: BufferDocument, line: int) -> int:
    if line < 0 or line >= document.line_count:
        raise CursorRangeError(
            f"line {line} out of range [0-{document.line_count - 1}]"
        )
    return line


def ensure_cursor(document: BufferDocument, cursor: Position) -> Position:
    line, col = cursor
    if line < 0 or line >= document.line_count:
        raise CursorRangeError(f"cursor line {line} out of range", cursor=cursor)
    length = len(document.get_line(line))
    if col < 0 or col > length:
        raise CursorRangeError(
            f"cursor column {col} out of range for line length {length}",
            cursor=cursor,
        )
    return Position(line, col)


def clamp_cursor(document: BufferDocument, line: int, col: int) -> Position:
    """Clamp ``(line, col)`` into the document; the single normalization point."""

    line = min(max(line, 0), document.line_count - 1)
    col = min(max(col, 0), len(document.get_line(line)))
    return Position(line, col)
