"""Core action implementations shared across modes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from aied_core.buffer import EditorBufferError
from aied_core.modes.base_mode import ModeContext, ModeResult, ModeType
from aied_core.runtime import telemetry

from .motions import first_non_blank

if TYPE_CHECKING:
    from aied_core.keymaps import ResolutionMatch

logger = telemetry.get_logger(__name__)

INSERT = ModeType.INSERT.value


def enter_insert_mode(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del context, match
    return ModeResult(handled=True, switch_to=INSERT, message="enter_insert")


def append_after_cursor(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    buffer = context.buffer
    if buffer.current_line:
        buffer.move_cursor(0, 1)
    return ModeResult(handled=True, switch_to=INSERT, message="append")


def append_end_of_line(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    buffer = context.buffer
    buffer.set_cursor(buffer.cursor.line, len(buffer.current_line))
    return ModeResult(handled=True, switch_to=INSERT, message="append_eol")


def insert_at_first_non_blank(
    context: ModeContext, match: "ResolutionMatch"
) -> ModeResult:
    del match
    buffer = context.buffer
    buffer.set_cursor(buffer.cursor.line, first_non_blank(buffer.current_line))
    return ModeResult(handled=True, switch_to=INSERT, message="insert_bol")


def open_line_below(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    buffer = context.buffer
    buffer.set_cursor(buffer.cursor.line, len(buffer.current_line))
    try:
        buffer.insert_line()
    except EditorBufferError as exc:
        logger.debug("open_line_below skipped: %s", exc)
    return ModeResult(handled=True, switch_to=INSERT, message="open_below")


def open_line_above(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    buffer = context.buffer
    buffer.set_cursor(buffer.cursor.line, 0)
    try:
        buffer.insert_empty_line()
    except EditorBufferError as exc:
        logger.debug("open_line_above skipped: %s", exc)
    return ModeResult(handled=True, switch_to=INSERT, message="open_above")


def exit_to_normal_mode(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del context, match
    return ModeResult(
        handled=True, switch_to=ModeType.NORMAL.value, message="exit_to_normal"
    )


def enter_visual_mode(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del context, match
    return ModeResult(
        handled=True, switch_to=ModeType.VISUAL.value, message="enter_visual"
    )


def enter_command_mode(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del context, match
    return ModeResult(
        handled=True, switch_to=ModeType.COMMAND.value, message="enter_command"
    )


def exit_editor(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del context, match
    return ModeResult(handled=True, exit_editor=True, status="exit")


__all__ = [
    "append_after_cursor",
    "append_end_of_line",
    "enter_command_mode",
    "enter_insert_mode",
    "enter_visual_mode",
    "exit_editor",
    "exit_to_normal_mode",
    "insert_at_first_non_blank",
    "open_line_above",
    "open_line_below",
]
