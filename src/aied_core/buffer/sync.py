"""Adapter boundary types for syncing buffers with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .state import Position, Selection


@dataclass(slots=True)
class BufferMirror:
    """Read-only snapshot a host renders: text, cursor and buffer metadata."""

    text: str
    cursor: Position
    selection: Optional[Selection]
    filename: str = ""
    modified: bool = False
    version: int = 0
    attributes: dict[str, str] = field(default_factory=dict)
