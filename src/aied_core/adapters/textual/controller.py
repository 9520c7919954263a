"""Minimal Textual adapter that wires ModeManager events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

from textual import events

from aied_core.buffer import BufferMirror
from aied_core.modes import KeyInput, ModeResult
from aied_core.modes.mode_manager import ModeManager
from aied_core.runtime import telemetry

from .keys import key_from_event

logger = telemetry.get_logger(__name__)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    exit_app: Callable[[], None] = _noop


class TextualEditorAdapter:
    """Bridges ModeManager + bus events to a Textual-friendly surface."""

    EVENTS = (
        "mode.switch",
        "visual.selection",
        "visual.yank",
        "visual.delete",
        "command.start",
        "command.end",
        "command.submit",
        "command.result",
    )

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()
        self._refresh_status()
        self._refresh_command_line()

    def handle_textual_event(self, event: events.Key) -> Optional[ModeResult]:
        """Dispatch a Textual ``Key`` event; undecodable keys are ignored."""

        key = key_from_event(event)
        if key is None:
            logger.debug("ignored textual key %s", event.key)
            return None
        result = self.handle_key(key)
        if result.handled:
            event.stop()
        return result

    def pull_buffer(self) -> BufferMirror:
        return self.manager.context.buffer.mirror(
            attributes={"mode": self.manager.active_name or ""}
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        logger.debug("key -> %s %s", key.token, self._state_metadata())
        result = self.manager.handle_key(key)
        self._after_mode_result(result)
        logger.debug(
            "result <- handled=%s status=%s switch_to=%s",
            result.handled,
            result.status,
            result.switch_to,
        )
        return result

    def _after_mode_result(self, result: ModeResult) -> None:
        self._refresh_buffer()
        self._refresh_status(result)
        self._refresh_command_line()
        if self.manager.exit_requested:
            self.hooks.exit_app()

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in self.EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self.hooks.handle_event(name, payload)
            )

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.pull_buffer())

    def _refresh_status(self, result: ModeResult | None = None) -> None:
        label = self.manager.status_label
        message = self._command_state().get("message")
        if result is not None and result.status == "visual_yank":
            message = f"yanked {len(result.message or '')} characters"
        if message:
            label = f"{label} {message}".strip()
        self.hooks.update_status(label)

    def _refresh_command_line(self) -> None:
        mode = self.manager.active_mode
        if mode is not None and mode.name == "command":
            self.hooks.show_command(f":{self._command_state().get('text', '')}")
        else:
            self.hooks.show_command("")

    def _command_state(self) -> Mapping[str, object]:
        state = self.manager.context.extras.get("command_state")
        return state if isinstance(state, dict) else {}

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.manager.context.buffer
        return {
            "mode": self.manager.active_name or "?",
            "cursor": tuple(buffer.cursor),
            "selection": buffer.state.selection,
            "version": buffer.version,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
