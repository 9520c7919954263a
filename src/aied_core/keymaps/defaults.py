"""Built-in keymaps that seed each mode with sensible defaults."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from aied_core.actions import command as command_actions
from aied_core.actions import core as core_actions
from aied_core.actions import editing as editing_actions
from aied_core.actions import motions as motion_actions
from aied_core.actions import visual as visual_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    # Mode switches
    ActionRef(
        id="core.enter_insert",
        handler=core_actions.enter_insert_mode,
        description="Enter insert mode",
    ),
    ActionRef(
        id="core.append",
        handler=core_actions.append_after_cursor,
        description="Enter insert mode after the cursor",
    ),
    ActionRef(
        id="core.append_eol",
        handler=core_actions.append_end_of_line,
        description="Enter insert mode at end of line",
    ),
    ActionRef(
        id="core.insert_bol",
        handler=core_actions.insert_at_first_non_blank,
        description="Enter insert mode at first non-blank",
    ),
    ActionRef(
        id="core.open_below",
        handler=core_actions.open_line_below,
        description="Open a line below and enter insert mode",
    ),
    ActionRef(
        id="core.open_above",
        handler=core_actions.open_line_above,
        description="Open a line above and enter insert mode",
    ),
    ActionRef(
        id="core.exit_to_normal",
        handler=core_actions.exit_to_normal_mode,
        description="Return to normal mode",
    ),
    ActionRef(
        id="core.enter_visual",
        handler=core_actions.enter_visual_mode,
        description="Enter visual mode",
    ),
    ActionRef(
        id="core.enter_command",
        handler=core_actions.enter_command_mode,
        description="Enter command-line mode",
    ),
    ActionRef(
        id="core.exit_editor",
        handler=core_actions.exit_editor,
        description="Leave the editor",
    ),
    # Motions
    ActionRef(id="motion.left", handler=motion_actions.move_left, description="Cursor left"),
    ActionRef(id="motion.right", handler=motion_actions.move_right, description="Cursor right"),
    ActionRef(id="motion.up", handler=motion_actions.move_up, description="Cursor up"),
    ActionRef(id="motion.down", handler=motion_actions.move_down, description="Cursor down"),
    ActionRef(
        id="motion.line_start",
        handler=motion_actions.move_line_start,
        description="Start of line",
    ),
    ActionRef(
        id="motion.line_end",
        handler=motion_actions.move_line_end,
        description="End of line",
    ),
    ActionRef(
        id="motion.first_non_blank",
        handler=motion_actions.move_first_non_blank,
        description="First non-blank character of line",
    ),
    ActionRef(
        id="motion.word_forward",
        handler=motion_actions.move_word_forward,
        description="Start of next word",
    ),
    ActionRef(
        id="motion.word_backward",
        handler=motion_actions.move_word_backward,
        description="Start of previous word",
    ),
    ActionRef(
        id="motion.word_end",
        handler=motion_actions.move_word_end,
        description="End of word",
    ),
    ActionRef(
        id="motion.buffer_start",
        handler=motion_actions.move_buffer_start,
        description="First line of buffer",
    ),
    ActionRef(
        id="motion.buffer_end",
        handler=motion_actions.move_buffer_end,
        description="Last line of buffer",
    ),
    # Edits
    ActionRef(
        id="edit.delete_char",
        handler=editing_actions.delete_char,
        description="Delete character under cursor",
    ),
    ActionRef(
        id="edit.delete_char_before",
        handler=editing_actions.delete_char_before,
        description="Delete character before cursor",
    ),
    ActionRef(
        id="edit.delete_line",
        handler=editing_actions.delete_line,
        description="Delete current line",
    ),
    ActionRef(
        id="edit.join_lines",
        handler=editing_actions.join_lines,
        description="Join current line with the next",
    ),
    ActionRef(
        id="insert.newline",
        handler=editing_actions.insert_newline,
        description="Split line at cursor",
    ),
    ActionRef(
        id="insert.backspace",
        handler=editing_actions.insert_backspace,
        description="Delete character before cursor",
    ),
    ActionRef(
        id="insert.delete",
        handler=editing_actions.insert_delete,
        description="Delete character under cursor",
    ),
    ActionRef(
        id="insert.tab",
        handler=editing_actions.insert_tab,
        description="Insert one indent unit",
    ),
    ActionRef(
        id="insert.save",
        handler=editing_actions.save_buffer,
        description="Save buffer to its file",
    ),
    # Visual operators
    ActionRef(
        id="visual.yank_selection",
        handler=visual_actions.yank_selection,
        description="Yank current visual selection",
    ),
    ActionRef(
        id="visual.swap_anchor",
        handler=visual_actions.swap_anchor,
        description="Swap selection anchor",
    ),
    ActionRef(
        id="visual.delete_selection",
        handler=visual_actions.delete_selection,
        description="Delete current selection",
    ),
    ActionRef(
        id="visual.change_selection",
        handler=visual_actions.change_selection,
        description="Change current selection",
    ),
    # Command line
    ActionRef(
        id="command.submit_line",
        handler=command_actions.submit_command_line,
        description="Evaluate the active command line",
    ),
    ActionRef(
        id="command.cancel_line",
        handler=command_actions.cancel_command_line,
        description="Discard the command line",
    ),
    ActionRef(
        id="command.hover",
        handler=command_actions.show_hover,
        description="Show hover information at cursor",
    ),
    ActionRef(
        id="command.definition",
        handler=command_actions.show_definition,
        description="Locate definition of symbol at cursor",
    ),
    ActionRef(
        id="command.references",
        handler=command_actions.show_references,
        description="List references to symbol at cursor",
    ),
)


def _bind(mode: str, keys: Sequence[str], action_id: str, description: str = "") -> Binding:
    sequence = KeySequence.from_strings(*keys)
    return Binding(
        id=f"{mode}.{'_'.join(sequence.tokens)}",
        mode=mode,
        sequence=sequence,
        action_id=action_id,
        description=description,
        source="defaults",
    )


_MOTION_KEYS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("h",), "motion.left"),
    (("LEFT",), "motion.left"),
    (("l",), "motion.right"),
    (("RIGHT",), "motion.right"),
    (("k",), "motion.up"),
    (("UP",), "motion.up"),
    (("j",), "motion.down"),
    (("DOWN",), "motion.down"),
    (("0",), "motion.line_start"),
    (("HOME",), "motion.line_start"),
    (("$",), "motion.line_end"),
    (("END",), "motion.line_end"),
    (("^",), "motion.first_non_blank"),
    (("w",), "motion.word_forward"),
    (("b",), "motion.word_backward"),
    (("e",), "motion.word_end"),
    (("g", "g"), "motion.buffer_start"),
    (("G",), "motion.buffer_end"),
)


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    *(_bind("normal", keys, action_id) for keys, action_id in _MOTION_KEYS),
    _bind("normal", ("i",), "core.enter_insert", "Insert before cursor"),
    _bind("normal", ("a",), "core.append", "Append after cursor"),
    _bind("normal", ("I",), "core.insert_bol", "Insert at first non-blank"),
    _bind("normal", ("A",), "core.append_eol", "Append at end of line"),
    _bind("normal", ("o",), "core.open_below", "Open line below"),
    _bind("normal", ("O",), "core.open_above", "Open line above"),
    _bind("normal", ("v",), "core.enter_visual", "Enter visual mode"),
    _bind("normal", (":",), "core.enter_command", "Enter command-line mode"),
    _bind("normal", ("x",), "edit.delete_char", "Delete character"),
    _bind("normal", ("DELETE",), "edit.delete_char", "Delete character"),
    _bind("normal", ("X",), "edit.delete_char_before", "Delete previous character"),
    _bind("normal", ("d", "d"), "edit.delete_line", "Delete line"),
    _bind("normal", ("J",), "edit.join_lines", "Join lines"),
    _bind("normal", ("g", "h"), "command.hover", "Hover information"),
    _bind("normal", ("g", "d"), "command.definition", "Go to definition"),
    _bind("normal", ("g", "r"), "command.references", "Find references"),
    _bind("normal", ("ctrl+c",), "core.exit_editor", "Leave the editor"),
    _bind("insert", ("ESC",), "core.exit_to_normal", "Leave insert mode"),
    _bind("insert", ("ctrl+c",), "core.exit_to_normal", "Leave insert mode"),
    _bind("insert", ("ENTER",), "insert.newline"),
    _bind("insert", ("BACKSPACE",), "insert.backspace"),
    _bind("insert", ("DELETE",), "insert.delete"),
    _bind("insert", ("TAB",), "insert.tab"),
    _bind("insert", ("LEFT",), "motion.left"),
    _bind("insert", ("RIGHT",), "motion.right"),
    _bind("insert", ("UP",), "motion.up"),
    _bind("insert", ("DOWN",), "motion.down"),
    _bind("insert", ("HOME",), "motion.line_start"),
    _bind("insert", ("END",), "motion.line_end"),
    _bind("insert", ("ctrl+s",), "insert.save", "Save buffer"),
    *(_bind("visual", keys, action_id) for keys, action_id in _MOTION_KEYS),
    _bind("visual", ("ESC",), "core.exit_to_normal", "Leave visual mode"),
    _bind("visual", ("ctrl+c",), "core.exit_to_normal", "Leave visual mode"),
    _bind("visual", ("i",), "core.enter_insert", "Enter insert mode"),
    _bind("visual", ("y",), "visual.yank_selection", "Yank the current selection"),
    _bind("visual", ("o",), "visual.swap_anchor", "Swap selection anchor"),
    _bind("visual", ("d",), "visual.delete_selection", "Delete current selection"),
    _bind("visual", ("x",), "visual.delete_selection", "Delete current selection"),
    _bind("visual", ("c",), "visual.change_selection", "Change current selection"),
    _bind("command", ("ESC",), "command.cancel_line", "Cancel command line"),
    _bind("command", ("ctrl+c",), "command.cancel_line", "Cancel command line"),
    _bind("command", ("ENTER",), "command.submit_line", "Submit the command line"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    excluded = set(exclude_bindings or ())

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)

    if per_mode_overrides:
        for mode, bindings in per_mode_overrides.items():
            for binding in bindings:
                if binding.mode != mode:
                    raise ValueError(
                        f"Override binding '{binding.id}' must target mode '{mode}'"
                    )
                registry.register_binding(binding, replace=True)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
