"""UI-agnostic modal editing core: buffer, commands and mode state machine."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "commands",
    "integrations",
    "keymaps",
    "modes",
    "runtime",
    "settings",
]

__version__ = "0.1.0"
