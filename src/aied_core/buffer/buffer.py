"""High-level buffer façade combining document storage and cursor state."""

from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import ContextManager, Optional, Sequence

from aied_core.runtime import telemetry

from .document import BufferDocument
from .errors import BufferEditError, BufferIOError, EditorBufferError
from .state import BufferState, Position
from .sync import BufferMirror
from .validation import clamp_cursor, ensure_cursor, ensure_line

logger = telemetry.get_logger(__name__)


class Buffer:
    """The document under edit: lines, a clamped cursor, filename and dirty flag.

    All mutations go through :class:`Transaction`, which applies the new
    document and cursor only when the edit completes. Precondition failures
    raise an :class:`~aied_core.buffer.errors.EditorBufferError` subclass and
    leave the buffer untouched.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        filename: str = "",
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self._filename = filename

    @classmethod
    def from_text(
        cls, text: str, *, filename: str = "", name: str = "default"
    ) -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text), filename=filename)

    @classmethod
    def from_file(cls, path: str | Path, *, name: Optional[str] = None) -> "Buffer":
        buffer = cls(name=name or Path(path).name)
        buffer.load(path)
        return buffer

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    @property
    def line_count(self) -> int:
        return self.document.line_count

    def line(self, index: int) -> str:
        return self.document.get_line(ensure_line(self.document, index))

    @property
    def current_line(self) -> str:
        return self.document.get_line(self.state.cursor.line)

    @property
    def cursor(self) -> Position:
        return self.state.cursor

    @property
    def filename(self) -> str:
        return self._filename

    @filename.setter
    def filename(self, value: str) -> None:
        self._filename = value

    @property
    def modified(self) -> bool:
        return self.document.dirty

    @property
    def version(self) -> int:
        return self.document.version

    @property
    def text(self) -> str:
        return self.document.to_text()

    def __str__(self) -> str:
        return self.text

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.text,
            cursor=self.state.cursor,
            selection=self.state.selection,
            filename=self._filename,
            modified=self.modified,
            version=self.version,
            attributes=dict(attributes or {}),
        )

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------
    def set_cursor(self, line: int, col: int) -> Position:
        """Clamp ``(line, col)`` into the buffer and move the cursor there."""

        position = clamp_cursor(self.document, line, col)
        self.state.set_cursor(*position)
        return position

    def move_cursor(self, delta_line: int, delta_col: int) -> Position:
        line, col = self.state.cursor
        return self.set_cursor(line + delta_line, col + delta_col)

    # ------------------------------------------------------------------
    # Single-cursor edits
    # ------------------------------------------------------------------
    def insert_char(self, ch: str) -> Position:
        if len(ch) != 1 or ch == "\n":
            raise BufferEditError(f"insert_char expects one character, got {ch!r}")
        line, col = ensure_cursor(self.document, self.state.cursor)
        text = self.document.get_line(line)
        with Transaction(self, "insert_char") as tx:
            tx.stage(
                self.document.update_lines(line, line + 1, [text[:col] + ch + text[col:]]),
                Position(line, col + 1),
            )
        return self.cursor

    def delete_char(self) -> None:
        line, col = ensure_cursor(self.document, self.state.cursor)
        text = self.document.get_line(line)
        if col >= len(text):
            raise BufferEditError("cannot delete at end of line")
        with Transaction(self, "delete_char") as tx:
            tx.stage(
                self.document.update_lines(line, line + 1, [text[:col] + text[col + 1 :]]),
                Position(line, col),
            )

    def backspace(self) -> Position:
        line, col = ensure_cursor(self.document, self.state.cursor)
        if col == 0:
            if line == 0:
                raise BufferEditError("cannot backspace at beginning of buffer")
            previous = self.document.get_line(line - 1)
            merged = previous + self.document.get_line(line)
            with Transaction(self, "backspace") as tx:
                tx.stage(
                    self.document.update_lines(line - 1, line + 1, [merged]),
                    Position(line - 1, len(previous)),
                )
            return self.cursor

        text = self.document.get_line(line)
        with Transaction(self, "backspace") as tx:
            tx.stage(
                self.document.update_lines(line, line + 1, [text[: col - 1] + text[col:]]),
                Position(line, col - 1),
            )
        return self.cursor

    def insert_line(self) -> Position:
        """Split the current line at the cursor; the right part moves below."""

        line, col = ensure_cursor(self.document, self.state.cursor)
        text = self.document.get_line(line)
        with Transaction(self, "insert_line") as tx:
            tx.stage(
                self.document.update_lines(line, line + 1, [text[:col], text[col:]]),
                Position(line + 1, 0),
            )
        return self.cursor

    def insert_empty_line(self) -> Position:
        """Open a blank line above the current one and park the cursor on it."""

        line = ensure_line(self.document, self.state.cursor.line)
        with Transaction(self, "insert_empty_line") as tx:
            tx.stage(self.document.update_lines(line, line, [""]), Position(line, 0))
        return self.cursor

    def delete_line(self) -> Position:
        line, col = self.state.cursor
        if self.document.line_count <= 1:
            with Transaction(self, "delete_line") as tx:
                tx.stage(self.document.update_lines(0, 1, [""]), Position(0, 0))
            return self.cursor

        ensure_line(self.document, line)
        updated = self.document.update_lines(line, line + 1, [])
        with Transaction(self, "delete_line") as tx:
            tx.stage(updated, clamp_cursor(updated, line, col))
        return self.cursor

    def join_lines(self) -> None:
        line = self.state.cursor.line
        if line < 0 or line >= self.document.line_count - 1:
            raise BufferEditError(f"cannot join line {line} (no next line)")
        current = self.document.get_line(line)
        following = self.document.get_line(line + 1)
        separator = " " if current and following else ""
        with Transaction(self, "join_lines") as tx:
            tx.stage(
                self.document.update_lines(line, line + 2, [current + separator + following]),
                self.state.cursor,
            )

    # ------------------------------------------------------------------
    # Range edits
    # ------------------------------------------------------------------
    def insert_text(self, text: str, *, at: Optional[Position] = None) -> Position:
        """Insert ``text`` (may span lines) and leave the cursor after it.

        ``\\r\\n`` line breaks are accepted and normalised the same way as on load.
        """

        line, col = ensure_cursor(self.document, at or self.state.cursor)
        if not text:
            return self.set_cursor(line, col)
        current = self.document.get_line(line)
        head, tail = current[:col], current[col:]
        pieces = [piece[:-1] if piece.endswith("\r") else piece for piece in text.split("\n")]
        if len(pieces) == 1:
            new_lines = [head + pieces[0] + tail]
            cursor = Position(line, col + len(pieces[0]))
        else:
            new_lines = [head + pieces[0], *pieces[1:-1], pieces[-1] + tail]
            cursor = Position(line + len(pieces) - 1, len(pieces[-1]))
        with Transaction(self, "insert_text") as tx:
            tx.stage(self.document.update_lines(line, line + 1, new_lines), cursor)
        return self.cursor

    def get_text_range(self, start: Position, end: Position) -> str:
        """Return text from ``start`` up to (not including) ``end``."""

        start, end = self._ordered(start, end)
        if start.line == end.line:
            return self.document.get_line(start.line)[start.col : end.col]
        parts = [self.document.get_line(start.line)[start.col :]]
        parts.extend(
            self.document.get_line(index) for index in range(start.line + 1, end.line)
        )
        parts.append(self.document.get_line(end.line)[: end.col])
        return "\n".join(parts)

    def delete_range(self, start: Position, end: Position) -> str:
        """Remove ``[start, end)`` and return the removed text."""

        start, end = self._ordered(start, end)
        removed = self.get_text_range(start, end)
        if start == end:
            return removed
        head = self.document.get_line(start.line)[: start.col]
        tail = self.document.get_line(end.line)[end.col :]
        with Transaction(self, "delete_range") as tx:
            tx.stage(
                self.document.update_lines(start.line, end.line + 1, [head + tail]),
                start,
            )
        return removed

    def _ordered(self, start: Position, end: Position) -> tuple[Position, Position]:
        start = ensure_cursor(self.document, start)
        end = ensure_cursor(self.document, end)
        if start > end:
            start, end = end, start
        return start, end

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def save(self) -> None:
        if not self._filename:
            raise BufferIOError("no filename set for buffer")
        self.save_as(self._filename)

    def save_as(self, path: str | Path) -> None:
        filename = str(path)
        if not filename:
            raise BufferIOError("filename cannot be empty")
        with telemetry.span(
            "buffer::save",
            component=True,
            metadata={"buffer": self.name, "path": filename},
            expected=(EditorBufferError,),
        ):
            try:
                with open(filename, "w", encoding="utf-8", newline="") as handle:
                    handle.write(self.text)
            except OSError as exc:
                raise BufferIOError(
                    f"failed to write to file {filename!r}: {exc}", path=filename
                ) from exc
        self._filename = filename
        self.document.mark_clean()
        telemetry.record_event(
            "buffer.save", data={"path": filename, "lines": self.line_count}
        )

    def load(self, path: str | Path) -> None:
        """Replace the content with the file at ``path`` (cursor home, clean)."""

        filename = str(path)
        try:
            with open(filename, "r", encoding="utf-8", newline="") as handle:
                raw = handle.read()
        except OSError as exc:
            raise BufferIOError(
                f"failed to open file {filename!r}: {exc}", path=filename
            ) from exc
        loaded = BufferDocument.from_text(raw)
        self.document = self.document.replace(lines=loaded.snapshot(), dirty=False)
        self.state.set_cursor(0, 0)
        self.state.clear_selection()
        self._filename = filename
        logger.debug("loaded %s (%d lines)", filename, self.line_count)

    def reset(self) -> None:
        """Become an empty, unnamed, unmodified buffer."""

        self.document = self.document.replace(lines=[""], dirty=False)
        self.state.set_cursor(0, 0)
        self.state.clear_selection()
        self._filename = ""


class Transaction(AbstractContextManager["Transaction"]):
    """Wrap one edit in a telemetry span and apply it only on success."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._document: Optional[BufferDocument] = None
        self._cursor: Optional[Position] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
            expected=(EditorBufferError,),
        )
        self._span_cm.__enter__()
        return self

    def stage(self, document: BufferDocument, cursor: Position) -> None:
        self._document = document
        self._cursor = cursor

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if exc_type is None and self._document is not None:
                self.buffer.document = self._document
                cursor = clamp_cursor(self._document, *(self._cursor or (0, 0)))
                self.buffer.state.set_cursor(*cursor)
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False
