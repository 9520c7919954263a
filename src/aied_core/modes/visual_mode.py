"""Visual mode: motions extend a charwise selection from the entry anchor."""

from __future__ import annotations

from typing import MutableMapping, cast

from .base_mode import ModeType
from .keymap_helpers import KeymapMode


class VisualMode(KeymapMode):
    name = ModeType.VISUAL.value

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._pending.clear()
        anchor = self.context.buffer.state.cursor
        self._visual_state()["anchor"] = anchor
        self.context.buffer.state.set_selection(anchor, anchor)
        self.context.bus.emit("visual.selection", {"anchor": anchor, "cursor": anchor})

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        self._visual_state().pop("anchor", None)
        self.context.buffer.state.clear_selection()

    @property
    def anchor(self):
        return self._visual_state().get("anchor")

    @property
    def status_label(self) -> str:
        return "-- VISUAL --"

    def _visual_state(self) -> MutableMapping[str, object]:
        return cast(
            MutableMapping[str, object],
            self.context.extras.setdefault("visual_state", {}),
        )
