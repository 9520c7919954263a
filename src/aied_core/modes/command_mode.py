"""Command-line mode with inline editing and keymap integration."""

from __future__ import annotations

from typing import MutableMapping, cast

from .base_mode import KeyInput, Keys, ModeContext, ModeResult, ModeType
from .keymap_helpers import KeymapMode


def command_state(context: ModeContext) -> MutableMapping[str, object]:
    """Shared command-line state: typed text, last message and last result."""

    state = cast(
        MutableMapping[str, object], context.extras.setdefault("command_state", {})
    )
    state.setdefault("text", "")
    state.setdefault("message", "")
    state.setdefault("result", None)
    return state


class CommandMode(KeymapMode):
    """Single-line editor for ``:`` commands.

    The typed text, the last message and the last result live in
    ``context.extras["command_state"]`` so Enter/Escape actions and hosts
    share them. The message outlives the mode and is cleared on re-entry.
    """

    name = ModeType.COMMAND.value

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._pending.clear()
        state = self._command_state()
        state["text"] = ""
        state["message"] = ""
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        state = self._command_state()
        self.context.bus.emit("command.end", state["text"])
        state["text"] = ""

    @property
    def current_command(self) -> str:
        return str(self._command_state()["text"])

    @property
    def command_line(self) -> str:
        return f":{self.current_command}"

    @property
    def message(self) -> str:
        return str(self._command_state()["message"])

    @property
    def status_label(self) -> str:
        return "-- COMMAND --"

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        state = self._command_state()
        if key.key == Keys.BACKSPACE and not key.modifiers:
            text = str(state["text"])
            if text:
                state["text"] = text[:-1]
            return ModeResult(handled=True, status="editing")

        if key.printable:
            state["text"] = str(state["text"]) + key.printable
            return ModeResult(handled=True, status="editing")

        return ModeResult(handled=False, status="miss", message="unhandled")

    def _command_state(self) -> MutableMapping[str, object]:
        return command_state(self.context)
