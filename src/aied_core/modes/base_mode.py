"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from aied_core.buffer import Buffer
from aied_core.settings import EditorSettings

if TYPE_CHECKING:
    from aied_core.commands import CommandExecutor


class ModeType(str, Enum):
    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    COMMAND = "command"


class Keys:
    """Named key tokens understood by every mode."""

    ESC = "ESC"
    ENTER = "ENTER"
    BACKSPACE = "BACKSPACE"
    DELETE = "DELETE"
    TAB = "TAB"
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    HOME = "HOME"
    END = "END"
    PAGEUP = "PAGEUP"
    PAGEDOWN = "PAGEDOWN"


NAMED_KEYS = frozenset(
    value for name, value in vars(Keys).items() if not name.startswith("_")
)
_KEY_ALIASES = {"<Esc>": Keys.ESC, "ESCAPE": Keys.ESC, "RETURN": Keys.ENTER}


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    ``key`` is a printable character or a :class:`Keys` token. Control
    combinations carry ``modifiers=("ctrl",)`` and no ``text``.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        self.key = _KEY_ALIASES.get(self.key, self.key)
        self.modifiers = tuple(sorted({m.strip().lower() for m in self.modifiers if m.strip()}))
        if self.text is None and not self.modifiers and len(self.key) == 1:
            self.text = self.key

    @classmethod
    def char(cls, ch: str) -> "KeyInput":
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        return cls(ch, text=ch)

    @classmethod
    def named(cls, token: str) -> "KeyInput":
        return cls(token)

    @classmethod
    def ctrl(cls, key: str) -> "KeyInput":
        return cls(key.lower() if len(key) == 1 else key, modifiers=("ctrl",))

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{self.key}"
        return self.key

    @property
    def printable(self) -> Optional[str]:
        """The character to insert for this key, if it inserts one."""

        if self.modifiers or self.key in NAMED_KEYS:
            return None
        return self.text


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    handled: bool
    switch_to: Optional[str] = None
    exit_editor: bool = False
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """Shared services every mode can access."""

    buffer: Buffer
    bus: "ModeBus"
    settings: EditorSettings = field(default_factory=EditorSettings)
    commands: Optional["CommandExecutor"] = None
    extras: Dict[str, object] = field(default_factory=dict)


class ModeBus:
    """Minimal event bus letting modes exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


def clamp_to_last_char(buffer: Buffer) -> None:
    """Pull the cursor back onto the last character of a non-empty line.

    Normal mode never rests on the slot after the last character.
    """

    line, col = buffer.cursor
    length = len(buffer.current_line)
    if length and col >= length:
        buffer.set_cursor(line, length - 1)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode

    def handle_key(self, key: KeyInput) -> ModeResult:
        raise NotImplementedError

    @property
    def status_label(self) -> str:
        return ""
