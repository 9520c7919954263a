"""Insert mode: printable keys go into the buffer at the cursor."""

from __future__ import annotations

from aied_core.buffer import EditorBufferError

from .base_mode import KeyInput, ModeResult, ModeType
from .keymap_helpers import KeymapMode


class InsertMode(KeymapMode):
    name = ModeType.INSERT.value

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        text = key.printable
        if not text:
            return ModeResult(handled=False, status="miss")
        try:
            self.context.buffer.insert_char(text)
        except EditorBufferError as exc:
            self.logger.debug("insert skipped: %s", exc)
            return ModeResult(handled=True, status="noop", message=str(exc))
        return ModeResult(handled=True, status="insert")

    @property
    def status_label(self) -> str:
        return "-- INSERT --"
