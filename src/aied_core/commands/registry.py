"""Registry mapping command names and aliases to handlers."""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from aied_core.runtime import telemetry

from .base import Command

logger = telemetry.get_logger(__name__)


class CommandRegistry:
    """Per-key command table.

    Each name and alias is its own entry, so re-registering a colliding key
    only replaces that key; other keys keep pointing at the earlier command.
    """

    def __init__(
        self,
        commands: Iterable[Command] = (),
        *,
        logger_name: str | None = None,
    ) -> None:
        self._entries: Dict[str, Command] = {}
        self._logger_name = logger_name
        for command in commands:
            self.register(command)

    def register(self, command: Command) -> Command:
        with telemetry.span(
            "commands::register",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command": command.name},
        ) as handle:
            replaced = [key for key in command.keys if key in self._entries]
            if replaced:
                handle.add_metadata("replaced", ",".join(replaced))
                logger.debug(
                    "command %s replaces existing keys %s", command.name, replaced
                )
            for key in command.keys:
                self._entries[key] = command
            return command

    def get(self, name: str) -> Optional[Command]:
        return self._entries.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def names(self) -> list[str]:
        """Canonical names of every reachable command, sorted."""

        return sorted({command.name for command in self._entries.values()})

    def commands(self) -> list[Command]:
        unique: Dict[str, Command] = {}
        for command in self._entries.values():
            unique.setdefault(command.name, command)
        return [unique[name] for name in sorted(unique)]


__all__ = ["CommandRegistry"]
