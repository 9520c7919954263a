"""Editor settings consumed by modes and commands."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "AIED_"
INDENT_STYLES = ("spaces", "tabs")


@dataclass(slots=True, frozen=True)
class EditorSettings:
    tab_size: int = 4
    indent_style: str = "spaces"
    context_lines: int = 10

    def __post_init__(self) -> None:
        if self.tab_size < 1:
            raise ValueError(f"tab_size must be positive, got {self.tab_size}")
        if self.indent_style not in INDENT_STYLES:
            raise ValueError(
                f"indent_style must be one of {INDENT_STYLES}, got {self.indent_style!r}"
            )
        if self.context_lines < 0:
            raise ValueError(
                f"context_lines must not be negative, got {self.context_lines}"
            )

    @property
    def indent_unit(self) -> str:
        return "\t" if self.indent_style == "tabs" else " " * self.tab_size

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        """Build settings from ``AIED_*`` variables, falling back to defaults."""

        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            tab_size=_int_setting(env, "TAB_SIZE", defaults.tab_size),
            indent_style=env.get(f"{ENV_PREFIX}INDENT_STYLE", defaults.indent_style).lower(),
            context_lines=_int_setting(env, "CONTEXT_LINES", defaults.context_lines),
        )


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


__all__ = ["EditorSettings"]
