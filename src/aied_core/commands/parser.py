"""Command-line tokenizer."""

from __future__ import annotations

from typing import NamedTuple


class CommandParseError(ValueError):
    """Raised when a command line cannot be split into a name."""


class ParsedCommand(NamedTuple):
    name: str
    args: tuple[str, ...]


def parse_command_line(line: str) -> ParsedCommand:
    """Split ``line`` on whitespace into a command name and its arguments.

    Tokens such as ``s/old/new/g`` are kept whole; their inner syntax is the
    command's business.
    """

    parts = line.split()
    if not parts:
        raise CommandParseError("empty command")
    return ParsedCommand(parts[0], tuple(parts[1:]))


__all__ = ["CommandParseError", "ParsedCommand", "parse_command_line"]
