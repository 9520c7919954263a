"""Editor modes and the key dispatch primitives they share.

The manager lives in :mod:`aied_core.modes.mode_manager`; it pulls in the
default keymaps, which in turn depend on the actions built on this package.
"""

from .base_mode import (
    KeyInput,
    Keys,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    ModeType,
    clamp_to_last_char,
)
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .visual_mode import VisualMode
from .command_mode import CommandMode

__all__ = [
    "KeyInput",
    "Keys",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "ModeType",
    "clamp_to_last_char",
    "NormalMode",
    "InsertMode",
    "VisualMode",
    "CommandMode",
]
