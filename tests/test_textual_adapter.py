from __future__ import annotations

from typing import Any, Dict, List

from textual import events

from aied_core.adapters.textual import (
    TextualEditorAdapter,
    TextualUIHooks,
    decode_key,
)
from aied_core.buffer import Buffer
from aied_core.modes import KeyInput
from aied_core.modes.mode_manager import ModeManager, create_default_manager


def make_manager(text: str = "") -> ModeManager:
    return create_default_manager(Buffer.from_text(text))


def test_decode_key_maps_named_control_and_printable_keys() -> None:
    assert decode_key("escape") == KeyInput.named("ESC")
    assert decode_key("enter") == KeyInput.named("ENTER")
    assert decode_key("ctrl+c") == KeyInput.ctrl("c")
    assert decode_key("a", "a") == KeyInput.char("a")
    assert decode_key("dollar_sign", "$") == KeyInput.char("$")
    assert decode_key("space", " ") == KeyInput.char(" ")
    assert decode_key("f5") is None


def test_adapter_updates_buffer_and_status() -> None:
    manager = make_manager()
    updates: List[str] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: updates.append(mirror.text),
        update_status=lambda status: statuses.append(status),
    )
    adapter = TextualEditorAdapter(manager, hooks)

    adapter.handle_textual_event(events.Key("i", "i"))
    adapter.handle_textual_event(events.Key("h", "h"))
    adapter.handle_textual_event(events.Key("escape", None))

    assert updates[-1] == "h"
    assert "-- INSERT --" in statuses
    assert statuses[-1] == ""
    assert adapter.pull_buffer().attributes == {"mode": "normal"}


def test_adapter_relays_command_line_and_events() -> None:
    manager = make_manager()
    command_lines: List[str] = []
    seen: List[tuple[str, object | None]] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        show_command=lambda text: command_lines.append(text),
        handle_event=lambda name, payload: seen.append((name, payload)),
    )
    adapter = TextualEditorAdapter(manager, hooks)

    for key in ":echo":
        adapter.handle_key(KeyInput.char(key))
    assert command_lines[-1] == ":echo"

    adapter.handle_key(KeyInput.named("ENTER"))

    assert command_lines[-1] == ""
    assert ("command.submit", "echo") in seen
    assert ("mode.switch", {"from": "normal", "to": "command"}) in seen


def test_adapter_surfaces_visual_selection_events() -> None:
    manager = make_manager("alpha")
    seen: List[Dict[str, Any]] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        handle_event=lambda name, payload: seen.append(
            {"name": name, "payload": payload}
        ),
    )
    adapter = TextualEditorAdapter(manager, hooks)

    adapter.handle_key(KeyInput.char("v"))
    adapter.handle_key(KeyInput.char("l"))

    visual_payloads = [event for event in seen if event["name"] == "visual.selection"]
    assert visual_payloads
    assert visual_payloads[-1]["payload"]["cursor"] == (0, 1)


def test_adapter_calls_exit_hook_on_quit() -> None:
    manager = make_manager("clean")
    exits: List[bool] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        exit_app=lambda: exits.append(True),
    )
    adapter = TextualEditorAdapter(manager, hooks)

    for key in ":q":
        adapter.handle_key(KeyInput.char(key))
    adapter.handle_key(KeyInput.named("ENTER"))

    assert exits == [True]


def test_adapter_ignores_undecodable_keys() -> None:
    manager = make_manager("abc")
    adapter = TextualEditorAdapter(manager, TextualUIHooks(update_buffer=lambda mirror: None))

    assert adapter.handle_textual_event(events.Key("f5", None)) is None
    assert manager.active_name == "normal"
