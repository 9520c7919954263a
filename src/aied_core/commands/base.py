"""Command metadata, results and the environment handed to every handler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from aied_core.buffer import Buffer
from aied_core.integrations import CompletionProvider, LanguageService
from aied_core.settings import EditorSettings

if TYPE_CHECKING:
    from .registry import CommandRegistry


@dataclass(slots=True)
class CommandResult:
    """Outcome of one ex command."""

    success: bool
    message: str = ""
    exit_editor: bool = False
    switch_mode: bool = False

    @classmethod
    def ok(cls, message: str = "", *, exit_editor: bool = False) -> "CommandResult":
        return cls(success=True, message=message, exit_editor=exit_editor)

    @classmethod
    def fail(cls, message: str, *, switch_mode: bool = False) -> "CommandResult":
        return cls(success=False, message=message, switch_mode=switch_mode)


@dataclass(slots=True)
class CommandEnvironment:
    """Explicit collaborators available to command handlers.

    ``completion`` and ``language`` stay ``None`` when the host runs without
    an assistant or language server; commands needing them fail gracefully.
    """

    settings: EditorSettings = field(default_factory=EditorSettings)
    completion: Optional[CompletionProvider] = None
    language: Optional[LanguageService] = None
    registry: Optional["CommandRegistry"] = None


CommandHandler = Callable[[Sequence[str], Buffer, CommandEnvironment], CommandResult]


@dataclass(frozen=True, slots=True)
class Command:
    """Named, aliasable operation invokable from the command line."""

    name: str
    handler: CommandHandler
    aliases: tuple[str, ...] = ()
    help: str = ""

    def __post_init__(self) -> None:
        if not self.name or any(ch.isspace() for ch in self.name):
            raise ValueError(f"invalid command name {self.name!r}")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(
            self, "aliases", tuple(dict.fromkeys(a for a in self.aliases if a))
        )

    @property
    def keys(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)

    def __call__(
        self, args: Sequence[str], buffer: Buffer, env: CommandEnvironment
    ) -> CommandResult:
        return self.handler(args, buffer, env)


__all__ = ["Command", "CommandEnvironment", "CommandHandler", "CommandResult"]
