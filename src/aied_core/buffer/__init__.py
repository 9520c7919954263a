"""Buffer abstractions: line storage, cursor state and edit transactions."""

from .buffer import Buffer, Transaction
from .document import BufferDocument
from .errors import BufferEditError, BufferIOError, CursorRangeError, EditorBufferError
from .state import BufferState, Position, Selection
from .sync import BufferMirror
from .validation import clamp_cursor, ensure_cursor, ensure_line

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferEditError",
    "BufferIOError",
    "BufferMirror",
    "BufferState",
    "CursorRangeError",
    "EditorBufferError",
    "Position",
    "Selection",
    "Transaction",
    "clamp_cursor",
    "ensure_cursor",
    "ensure_line",
]
