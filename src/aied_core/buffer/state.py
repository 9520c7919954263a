"""Cursor and selection state for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple


class Position(NamedTuple):
    """Zero-based ``(line, col)`` slot; ``col`` may equal the line length."""

    line: int
    col: int


Selection = Tuple[Position, Position]


@dataclass(slots=True)
class BufferState:
    """Mutable cursor + selection info for a buffer."""

    cursor: Position = Position(0, 0)
    selection: Optional[Selection] = None

    def set_cursor(self, line: int, col: int) -> None:
        self.cursor = Position(line, col)

    def clear_selection(self) -> None:
        self.selection = None

    def set_selection(self, start: Position, end: Position) -> None:
        self.selection = (Position(*start), Position(*end))
