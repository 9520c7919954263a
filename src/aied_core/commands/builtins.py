"""Built-in file and session commands."""

from __future__ import annotations

import os
from typing import Sequence

from aied_core.buffer import Buffer, BufferIOError

from .base import Command, CommandEnvironment, CommandResult


def write_buffer(
    args: Sequence[str], buffer: Buffer, env: CommandEnvironment
) -> CommandResult:
    del env
    if args:
        filename = args[0]
    else:
        filename = buffer.filename
        if not filename:
            return CommandResult.fail("No file name specified")
    try:
        if args:
            buffer.save_as(filename)
        else:
            buffer.save()
    except BufferIOError as exc:
        return CommandResult.fail(f"Error writing file: {exc}")
    return CommandResult.ok(f"File written: {filename}")


def quit_editor(
    args: Sequence[str], buffer: Buffer, env: CommandEnvironment
) -> CommandResult:
    del args, env
    if buffer.modified:
        return CommandResult.fail(
            "Buffer has unsaved changes. Use :q! to force quit or :wq to save and quit"
        )
    return CommandResult.ok("Goodbye!", exit_editor=True)


def force_quit(
    args: Sequence[str], buffer: Buffer, env: CommandEnvironment
) -> CommandResult:
    del args, buffer, env
    return CommandResult.ok("Goodbye!", exit_editor=True)


def write_quit(
    args: Sequence[str], buffer: Buffer, env: CommandEnvironment
) -> CommandResult:
    written = write_buffer(args, buffer, env)
    if not written.success:
        return written
    return CommandResult.ok("File written and editor closed", exit_editor=True)


def _edit(args: Sequence[str], buffer: Buffer, *, force: bool) -> CommandResult:
    if not args:
        filename = buffer.filename
        if not filename:
            return CommandResult.fail("No file to reload")
        if buffer.modified and not force:
            return CommandResult.fail(
                "Buffer has unsaved changes. Use :e! to force reload"
            )
        message = f"Reloaded: {filename}"
    else:
        filename = args[0]
        if buffer.modified and not force:
            return CommandResult.fail(
                "Buffer has unsaved changes. Save first or use :e! to discard"
            )
        if not os.path.exists(filename):
            return CommandResult.fail(f"File not found: {filename}")
        message = f"Editing: {filename}"

    try:
        buffer.load(filename)
    except BufferIOError as exc:
        return CommandResult.fail(f"Error reading file: {exc}")
    return CommandResult.ok(message)


def edit_file(
    args: Sequence[str], buffer: Buffer, env: CommandEnvironment
) -> CommandResult:
    del env
    return _edit(args, buffer, force=False)


def force_edit_file(
    args: Sequence[str], buffer: Buffer, env: CommandEnvironment
) -> CommandResult:
    del env
    return _edit(args, buffer, force=True)


def new_buffer(
    args: Sequence[str], buffer: Buffer, env: CommandEnvironment
) -> CommandResult:
    del args, env
    if buffer.modified:
        return CommandResult.fail("Buffer has unsaved changes. Save first")
    buffer.reset()
    return CommandResult.ok("New buffer")


def echo(args: Sequence[str], buffer: Buffer, env: CommandEnvironment) -> CommandResult:
    del buffer, env
    return CommandResult.ok(" ".join(args))


def show_help(
    args: Sequence[str], buffer: Buffer, env: CommandEnvironment
) -> CommandResult:
    del buffer
    registry = env.registry
    if registry is None:
        return CommandResult.fail("Help is not available")
    if not args:
        return CommandResult.ok("Commands: " + ", ".join(registry.names()))
    command = registry.get(args[0])
    if command is None:
        return CommandResult.fail(f"Unknown command: {args[0]}")
    return CommandResult.ok(command.help or f":{command.name}")


BUILTIN_COMMANDS: tuple[Command, ...] = (
    Command("write", write_buffer, aliases=("w",), help=":w [filename] - Write buffer to file"),
    Command(
        "quit", quit_editor, aliases=("q",), help=":q - Quit editor (fails if unsaved changes)"
    ),
    Command(
        "quit!",
        force_quit,
        aliases=("q!",),
        help=":q! - Force quit editor (discards unsaved changes)",
    ),
    Command(
        "wq",
        write_quit,
        aliases=("x", "exit"),
        help=":wq [filename] - Write buffer and quit editor",
    ),
    Command(
        "edit",
        edit_file,
        aliases=("e",),
        help=":e [filename] - Edit file (loads new file or reloads current)",
    ),
    Command(
        "edit!",
        force_edit_file,
        aliases=("e!",),
        help=":e! [filename] - Edit file, discarding unsaved changes",
    ),
    Command("new", new_buffer, aliases=("enew",), help=":new - Create new empty buffer"),
    Command("echo", echo, help=":echo text - Show text in the message line"),
    Command("help", show_help, aliases=("h",), help=":help [command] - Show command help"),
)


__all__ = [
    "BUILTIN_COMMANDS",
    "echo",
    "edit_file",
    "force_edit_file",
    "force_quit",
    "new_buffer",
    "quit_editor",
    "show_help",
    "write_buffer",
    "write_quit",
]
