"""High-level editing verbs reused across modes."""

from .core import (
    append_after_cursor,
    append_end_of_line,
    enter_command_mode,
    enter_insert_mode,
    enter_visual_mode,
    exit_editor,
    exit_to_normal_mode,
    insert_at_first_non_blank,
    open_line_above,
    open_line_below,
)
from .editing import (
    delete_char,
    delete_char_before,
    delete_line,
    insert_backspace,
    insert_delete,
    insert_newline,
    insert_tab,
    join_lines,
    save_buffer,
)
from .visual import (
    change_selection,
    delete_selection,
    swap_anchor,
    yank_selection,
)
from .command import (
    cancel_command_line,
    show_definition,
    show_hover,
    show_references,
    submit_command_line,
)

__all__ = [
    "append_after_cursor",
    "append_end_of_line",
    "cancel_command_line",
    "change_selection",
    "delete_char",
    "delete_char_before",
    "delete_line",
    "delete_selection",
    "enter_command_mode",
    "enter_insert_mode",
    "enter_visual_mode",
    "exit_editor",
    "exit_to_normal_mode",
    "insert_at_first_non_blank",
    "insert_backspace",
    "insert_delete",
    "insert_newline",
    "insert_tab",
    "join_lines",
    "open_line_above",
    "open_line_below",
    "save_buffer",
    "show_definition",
    "show_hover",
    "show_references",
    "submit_command_line",
    "swap_anchor",
    "yank_selection",
]
