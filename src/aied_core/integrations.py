"""Boundary protocols for collaborators that live outside the editing core.

Completion providers and language services are handed to commands through
:class:`aied_core.commands.CommandEnvironment`; the core never constructs or
owns them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional, Protocol, Sequence

from aied_core.buffer import Position


@dataclass(slots=True, frozen=True)
class CompletionRequest:
    prompt: str
    context: str
    language: str
    kind: str = "completion"


@dataclass(slots=True, frozen=True)
class Location:
    """A 0-based position inside some file, as reported by a language server."""

    path: str
    line: int
    col: int

    def __str__(self) -> str:
        return f"{self.path}:{self.line + 1}:{self.col + 1}"


class CompletionProvider(Protocol):
    """Anything that can turn a prompt plus surrounding code into text."""

    def complete(self, request: CompletionRequest) -> str:
        ...


class LanguageService(Protocol):
    """Symbol lookups against a language server for the buffer's file."""

    def hover(self, path: str, position: Position) -> Optional[str]:
        ...

    def definition(self, path: str, position: Position) -> Sequence[Location]:
        ...

    def references(self, path: str, position: Position) -> Sequence[Location]:
        ...


_LANGUAGE_BY_SUFFIX = {
    "go": "go",
    "py": "python",
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "java": "java",
    "c": "c",
    "cpp": "cpp",
    "cc": "cpp",
    "cxx": "cpp",
    "rs": "rust",
    "rb": "ruby",
    "php": "php",
    "sh": "bash",
    "bash": "bash",
    "md": "markdown",
}


def detect_language(filename: str) -> str:
    """Map a file name to a language id by suffix (``"text"`` when unknown)."""

    suffix = PurePath(filename).suffix.lower().lstrip(".")
    return _LANGUAGE_BY_SUFFIX.get(suffix, "text")


__all__ = [
    "CompletionProvider",
    "CompletionRequest",
    "LanguageService",
    "Location",
    "detect_language",
]
