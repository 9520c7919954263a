"""Line storage for aied_core buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


@dataclass(slots=True)
class BufferDocument:
    """Immutable-ish text storage built on a simple list-of-lines model.

    Every edit produces a new document with ``version`` bumped and ``dirty``
    set, so a failed edit never leaves a half-applied document behind.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        """Build a clean document from newline-joined text.

        A single trailing newline is dropped and a trailing ``\\r`` is stripped
        from each line, so ``"a\\r\\nb\\n"`` loads as ``["a", "b"]``.
        """

        if text.endswith("\n"):
            text = text[:-1]
        lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
        return cls(_lines=lines or [""], version=0, dirty=False)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def replace(
        self, *, lines: Iterable[str], dirty: bool | None = None
    ) -> "BufferDocument":
        """Return a new document with the provided lines and bumped version."""

        new_lines = list(lines) or [""]
        updated = BufferDocument(_lines=new_lines, version=self.version + 1)
        updated.dirty = bool(dirty if dirty is not None else self.dirty)
        return updated

    def update_lines(
        self, start: int, end: int, new_lines: Iterable[str]
    ) -> "BufferDocument":
        """Return a document with ``[start:end]`` replaced by ``new_lines``.

        Removing every line leaves a single empty line in place.
        """

        lines = list(self._lines)
        lines[start:end] = list(new_lines)
        if not lines:
            lines = [""]
        return BufferDocument(_lines=lines, version=self.version + 1, dirty=True)

    def mark_clean(self) -> None:
        self.dirty = False

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def to_text(self) -> str:
        return "\n".join(self._lines)
