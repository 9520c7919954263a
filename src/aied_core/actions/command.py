"""Actions that evaluate Ex-style command lines."""

from __future__ import annotations

from typing import TYPE_CHECKING

from aied_core.commands import CommandResult
from aied_core.modes.base_mode import ModeContext, ModeResult, ModeType
from aied_core.modes.command_mode import command_state

if TYPE_CHECKING:
    from aied_core.keymaps import ResolutionMatch


def submit_command_line(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    state = command_state(context)
    text = str(state.get("text", ""))
    state["text"] = ""
    if not text:
        return ModeResult(
            handled=True, switch_to=ModeType.NORMAL.value, status="command_empty"
        )

    context.bus.emit("command.submit", text)

    result = _execute(context, text)
    state["message"] = result.message
    state["result"] = result
    context.bus.emit("command.result", result)

    status = "command_ok" if result.success else "command_failed"
    if result.exit_editor:
        return ModeResult(
            handled=True, exit_editor=True, status="command_exit", message=result.message
        )
    if result.switch_mode:
        return ModeResult(
            handled=True,
            switch_to=ModeType.NORMAL.value,
            status=status,
            message=result.message,
        )
    return ModeResult(handled=True, status=status, message=result.message)


def cancel_command_line(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    state = command_state(context)
    state["text"] = ""
    state["message"] = ""
    return ModeResult(
        handled=True, switch_to=ModeType.NORMAL.value, status="command_cancel"
    )


def show_hover(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    """Run ``:hover`` without leaving Normal mode."""

    del match
    return _run_in_place(context, "hover")


def show_definition(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _run_in_place(context, "definition")


def show_references(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    return _run_in_place(context, "references")


def _run_in_place(context: ModeContext, line: str) -> ModeResult:
    result = _execute(context, line)
    state = command_state(context)
    state["message"] = result.message
    state["result"] = result
    context.bus.emit("command.result", result)
    return ModeResult(
        handled=True,
        status="command_ok" if result.success else "command_failed",
        message=result.message,
    )


def _execute(context: ModeContext, line: str) -> CommandResult:
    if context.commands is None:
        return CommandResult.fail("No command executor configured", switch_mode=True)
    return context.commands.execute(line, context.buffer)


__all__ = [
    "cancel_command_line",
    "show_definition",
    "show_hover",
    "show_references",
    "submit_command_line",
]
