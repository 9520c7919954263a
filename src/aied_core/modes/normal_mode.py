"""Normal mode: motions, single-key edits and mode entry points."""

from __future__ import annotations

from .base_mode import KeyInput, ModeResult, ModeType, clamp_to_last_char
from .keymap_helpers import KeymapMode


class NormalMode(KeymapMode):
    name = ModeType.NORMAL.value

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._pending.clear()
        clamp_to_last_char(self.context.buffer)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        self.logger.debug("unbound key %s", key.token)
        return ModeResult(handled=False, status="miss")

    @property
    def status_label(self) -> str:
        return self.pending_keys
