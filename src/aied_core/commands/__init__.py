"""Ex-style command registry, parser and executor."""

from .assist import ASSIST_COMMANDS
from .base import Command, CommandEnvironment, CommandHandler, CommandResult
from .builtins import BUILTIN_COMMANDS
from .executor import CommandExecutor, create_default_registry
from .parser import CommandParseError, ParsedCommand, parse_command_line
from .registry import CommandRegistry

__all__ = [
    "ASSIST_COMMANDS",
    "BUILTIN_COMMANDS",
    "Command",
    "CommandEnvironment",
    "CommandExecutor",
    "CommandHandler",
    "CommandParseError",
    "CommandRegistry",
    "CommandResult",
    "ParsedCommand",
    "create_default_registry",
    "parse_command_line",
]
