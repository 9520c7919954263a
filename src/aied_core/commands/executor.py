"""Parse-and-dispatch entry point for command lines."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from aied_core.buffer import Buffer, EditorBufferError
from aied_core.runtime import telemetry

from .assist import ASSIST_COMMANDS
from .base import CommandEnvironment, CommandResult
from .builtins import BUILTIN_COMMANDS
from .parser import CommandParseError, parse_command_line
from .registry import CommandRegistry

logger = telemetry.get_logger(__name__)


def create_default_registry() -> CommandRegistry:
    return CommandRegistry((*BUILTIN_COMMANDS, *ASSIST_COMMANDS))


class CommandExecutor:
    """Turns a typed command line into a buffer mutation plus a result."""

    def __init__(
        self,
        registry: Optional[CommandRegistry] = None,
        environment: Optional[CommandEnvironment] = None,
        *,
        logger_name: str | None = None,
    ) -> None:
        self.registry = registry if registry is not None else create_default_registry()
        self.environment = replace(
            environment or CommandEnvironment(), registry=self.registry
        )
        self._logger_name = logger_name

    def execute(self, line: str, buffer: Buffer) -> CommandResult:
        with telemetry.span(
            "commands::execute",
            logger_name=self._logger_name,
            component="commands",
        ) as handle:
            try:
                name, args = parse_command_line(line)
            except CommandParseError as exc:
                handle.add_metadata("status", "parse_error")
                return CommandResult.fail(f"Error: {exc}", switch_mode=True)

            handle.add_metadata("command", name)
            command = self.registry.get(name)
            if command is None:
                handle.add_metadata("status", "unknown")
                return CommandResult.fail(f"Unknown command: {name}", switch_mode=True)

            try:
                result = command(args, buffer, self.environment)
            except EditorBufferError as exc:
                logger.debug("command %s failed: %s", name, exc)
                result = CommandResult.fail(str(exc))

            if not result.exit_editor:
                result.switch_mode = True
            handle.add_metadata("status", "ok" if result.success else "failed")

        telemetry.record_event(
            "command.execute",
            level="debug",
            data={"command": name, "success": result.success},
            logger_name=self._logger_name,
        )
        return result


__all__ = ["CommandExecutor", "create_default_registry"]
