"""Exception taxonomy raised by buffer operations."""

from __future__ import annotations

from typing import Optional

from .state import Position


class EditorBufferError(RuntimeError):
    """Base class for every failure signalled by the buffer layer."""


class CursorRangeError(EditorBufferError):
    """Raised when a cursor or line index falls outside the buffer bounds."""

    def __init__(self, message: str, *, cursor: Optional[Position] = None) -> None:
        super().__init__(message)
        self.cursor = cursor


class BufferEditError(EditorBufferError):
    """Raised when an edit's precondition does not hold (e.g. join on last line)."""


class BufferIOError(EditorBufferError):
    """Raised when loading or saving the buffer fails."""

    def __init__(self, message: str, *, path: str = "") -> None:
        super().__init__(message)
        self.path = path
