"""Actions dedicated to Visual mode selection management.

Selections are charwise and inclusive at both ends. When the far end sits on
the slot after a line's last character, the line break is part of the span.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, MutableMapping, Optional, cast

from aied_core.buffer import Buffer, Position
from aied_core.modes.base_mode import ModeContext, ModeResult, ModeType

if TYPE_CHECKING:
    from aied_core.keymaps import ResolutionMatch


def _visual_state(context: ModeContext) -> MutableMapping[str, Position]:
    state = cast(
        MutableMapping[str, Position], context.extras.setdefault("visual_state", {})
    )
    if "anchor" not in state:
        state["anchor"] = context.buffer.state.cursor
    return state


def sync_selection(context: ModeContext) -> None:
    """Publish the anchor-to-cursor span after the cursor moved."""

    buffer = context.buffer
    anchor = _visual_state(context)["anchor"]
    cursor = buffer.cursor
    buffer.state.set_selection(anchor, cursor)
    context.bus.emit("visual.selection", {"anchor": anchor, "cursor": cursor})


def selection_span(buffer: Buffer, anchor: Position, cursor: Position) -> tuple[Position, Position]:
    """Return the ``[start, end)`` range covered by an inclusive selection."""

    start, end = sorted((Position(*anchor), Position(*cursor)))
    length = len(buffer.line(end.line))
    if end.col < length:
        return start, Position(end.line, end.col + 1)
    if end.line < buffer.line_count - 1:
        return start, Position(end.line + 1, 0)
    return start, Position(end.line, length)


def _selection_range(context: ModeContext) -> Optional[tuple[Position, Position]]:
    selection = context.buffer.state.selection
    if not selection:
        return None
    anchor, cursor = selection
    return selection_span(context.buffer, anchor, cursor)


def yank_selection(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    span = _selection_range(context)
    if span is None:
        return ModeResult(handled=False, status="no_selection")
    start, end = span
    text = context.buffer.get_text_range(start, end)
    context.buffer.set_cursor(*start)
    context.bus.emit("visual.yank", {"text": text, "range": (start, end)})
    return ModeResult(
        handled=True,
        switch_to=ModeType.NORMAL.value,
        status="visual_yank",
        message=text,
    )


def swap_anchor(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    state = _visual_state(context)
    cursor = context.buffer.state.cursor
    anchor = state["anchor"]
    state["anchor"] = cursor
    context.buffer.set_cursor(*anchor)
    context.buffer.state.set_selection(cursor, anchor)
    context.bus.emit(
        "visual.selection",
        {"anchor": cursor, "cursor": anchor, "swap": True},
    )
    return ModeResult(handled=True, status="visual_swap")


def delete_selection(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    text = _delete_selection(context, label="visual_delete")
    if text is None:
        return ModeResult(handled=False, status="no_selection")
    return ModeResult(
        handled=True,
        switch_to=ModeType.NORMAL.value,
        status="visual_delete",
        message=text,
    )


def change_selection(context: ModeContext, match: "ResolutionMatch") -> ModeResult:
    del match
    text = _delete_selection(context, label="visual_change")
    if text is None:
        return ModeResult(handled=False, status="no_selection")
    return ModeResult(
        handled=True,
        switch_to=ModeType.INSERT.value,
        status="visual_change",
        message=text,
    )


def _delete_selection(context: ModeContext, *, label: str) -> str | None:
    span = _selection_range(context)
    if span is None:
        return None
    start, end = span
    text = context.buffer.delete_range(start, end)
    context.buffer.state.clear_selection()
    _visual_state(context)["anchor"] = context.buffer.state.cursor
    context.bus.emit(
        "visual.delete",
        {"label": label, "text": text, "range": (start, end)},
    )
    return text


__all__ = [
    "change_selection",
    "delete_selection",
    "selection_span",
    "swap_anchor",
    "sync_selection",
    "yank_selection",
]
