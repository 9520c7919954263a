"""Text-changing actions for Normal and Insert modes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from aied_core.buffer import BufferIOError, EditorBufferError
from aied_core.modes.base_mode import ModeContext, ModeResult, clamp_to_last_char
from aied_core.runtime import telemetry

if TYPE_CHECKING:
    from aied_core.keymaps import ResolutionMatch

logger = telemetry.get_logger(__name__)


def _attempt(label: str, operation: Callable[[], object]) -> ModeResult:
    """Run a buffer edit; precondition failures make the key a no-op."""

    try:
        operation()
    except EditorBufferError as exc:
        logger.debug("%s skipped: %s", label, exc)
        return ModeResult(handled=True, status="noop", message=str(exc))
    return ModeResult(handled=True, status="edit")


# ---------------------------------------------------------------------------
# Normal mode
# ---------------------------------------------------------------------------
def delete_char(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    result = _attempt("delete_char", context.buffer.delete_char)
    clamp_to_last_char(context.buffer)
    return result


def delete_char_before(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    result = _attempt("delete_char_before", context.buffer.backspace)
    clamp_to_last_char(context.buffer)
    return result


def delete_line(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    result = _attempt("delete_line", context.buffer.delete_line)
    clamp_to_last_char(context.buffer)
    return result


def join_lines(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _attempt("join_lines", context.buffer.join_lines)


# ---------------------------------------------------------------------------
# Insert mode
# ---------------------------------------------------------------------------
def insert_newline(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _attempt("insert_newline", context.buffer.insert_line)


def insert_backspace(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _attempt("insert_backspace", context.buffer.backspace)


def insert_delete(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _attempt("insert_delete", context.buffer.delete_char)


def insert_tab(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    unit = context.settings.indent_unit
    return _attempt("insert_tab", lambda: context.buffer.insert_text(unit))


def save_buffer(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    buffer = context.buffer
    if not buffer.filename:
        return ModeResult(handled=True, status="noop", message="No file name specified")
    try:
        buffer.save()
    except BufferIOError as exc:
        logger.info("save failed: %s", exc)
        return ModeResult(
            handled=True, status="error", message=f"Error writing file: {exc}"
        )
    return ModeResult(
        handled=True, status="saved", message=f"File written: {buffer.filename}"
    )


__all__ = [
    "delete_char",
    "delete_char_before",
    "delete_line",
    "insert_backspace",
    "insert_delete",
    "insert_newline",
    "insert_tab",
    "join_lines",
    "save_buffer",
]
