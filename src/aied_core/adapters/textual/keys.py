"""Decode Textual key events into engine ``KeyInput`` values."""

from __future__ import annotations

from typing import Dict, Optional

from textual import events

from aied_core.modes import KeyInput, Keys

_NAMED: Dict[str, str] = {
    "escape": Keys.ESC,
    "enter": Keys.ENTER,
    "return": Keys.ENTER,
    "backspace": Keys.BACKSPACE,
    "ctrl+h": Keys.BACKSPACE,
    "delete": Keys.DELETE,
    "tab": Keys.TAB,
    "ctrl+i": Keys.TAB,
    "up": Keys.UP,
    "down": Keys.DOWN,
    "left": Keys.LEFT,
    "right": Keys.RIGHT,
    "home": Keys.HOME,
    "end": Keys.END,
    "pageup": Keys.PAGEUP,
    "pagedown": Keys.PAGEDOWN,
}


def decode_key(key: str, character: Optional[str] = None) -> Optional[KeyInput]:
    """Map a Textual key name (plus its character) onto a ``KeyInput``.

    Returns ``None`` for keys the engine has no use for, such as bare
    modifier presses or function keys.
    """

    named = _NAMED.get(key)
    if named is not None:
        return KeyInput.named(named)
    if key.startswith("ctrl+"):
        rest = key[len("ctrl+"):]
        if len(rest) == 1:
            return KeyInput.ctrl(rest)
        return None
    if character and len(character) == 1 and character.isprintable():
        return KeyInput.char(character)
    return None


def key_from_event(event: events.Key) -> Optional[KeyInput]:
    return decode_key(event.key, event.character)


__all__ = ["decode_key", "key_from_event"]
