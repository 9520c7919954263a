"""Commands backed by the assistant and language-service collaborators."""

from __future__ import annotations

from typing import Optional, Sequence

from aied_core.buffer import Buffer
from aied_core.integrations import CompletionRequest, detect_language
from aied_core.runtime import telemetry

from .base import Command, CommandEnvironment, CommandResult

logger = telemetry.get_logger(__name__)

CURSOR_MARKER = ">>> "
MAX_LISTED_REFERENCES = 5


def gather_context(buffer: Buffer, radius: int) -> str:
    """Return up to ``radius`` lines either side of the cursor, cursor line marked."""

    line = buffer.cursor.line
    first = max(line - radius, 0)
    last = min(line + radius, buffer.line_count - 1)
    parts = []
    for index in range(first, last + 1):
        prefix = CURSOR_MARKER if index == line else ""
        parts.append(f"{prefix}{buffer.line(index)}\n")
    return "".join(parts)


def ai_complete(
    args: Sequence[str], buffer: Buffer, env: CommandEnvironment
) -> CommandResult:
    del args
    if env.completion is None:
        return CommandResult.fail("No completion provider configured")

    cursor = buffer.cursor
    request = CompletionRequest(
        prompt=buffer.current_line[: cursor.col],
        context=gather_context(buffer, env.settings.context_lines),
        language=detect_language(buffer.filename),
    )
    with telemetry.span(
        "commands::aicomplete",
        component="commands",
        metadata={"language": request.language},
    ) as handle:
        try:
            reply = env.completion.complete(request)
        except Exception as exc:  # provider failures must not end the session
            handle.add_metadata("error", type(exc).__name__)
            logger.warning("completion provider failed: %s", exc)
            return CommandResult.fail(f"AI error: {exc}")
        handle.add_metadata("chars", len(reply))

    if not reply:
        return CommandResult.ok("No completion returned")
    buffer.insert_text(reply, at=cursor)
    return CommandResult.ok(f"Inserted {len(reply)} characters")


def ai_explain(
    args: Sequence[str], buffer: Buffer, env: CommandEnvironment
) -> CommandResult:
    if env.completion is None:
        return CommandResult.fail("No completion provider configured")

    code = " ".join(args) if args else buffer.current_line
    request = CompletionRequest(
        prompt=f"Explain this code: {code}",
        context=gather_context(buffer, env.settings.context_lines),
        language=detect_language(buffer.filename),
        kind="explanation",
    )
    with telemetry.span(
        "commands::aiexplain",
        component="commands",
        metadata={"language": request.language},
    ) as handle:
        try:
            reply = env.completion.complete(request)
        except Exception as exc:  # provider failures must not end the session
            handle.add_metadata("error", type(exc).__name__)
            logger.warning("explain request failed: %s", exc)
            return CommandResult.fail(f"AI error: {exc}")
    return CommandResult.ok(reply or "No explanation returned")


def _language_ready(buffer: Buffer, env: CommandEnvironment) -> Optional[CommandResult]:
    if env.language is None:
        return CommandResult.fail("LSP not available")
    if not buffer.filename:
        return CommandResult.fail("No file associated with buffer")
    return None


def hover(args: Sequence[str], buffer: Buffer, env: CommandEnvironment) -> CommandResult:
    del args
    failure = _language_ready(buffer, env)
    if failure is not None:
        return failure
    try:
        contents = env.language.hover(buffer.filename, buffer.cursor)
    except Exception as exc:  # language server failures are reported, not raised
        logger.warning("hover request failed: %s", exc)
        return CommandResult.fail(f"Hover failed: {exc}")
    if not contents:
        return CommandResult.ok("No hover information available")
    return CommandResult.ok(contents)


def definition(
    args: Sequence[str], buffer: Buffer, env: CommandEnvironment
) -> CommandResult:
    del args
    failure = _language_ready(buffer, env)
    if failure is not None:
        return failure
    try:
        locations = list(env.language.definition(buffer.filename, buffer.cursor))
    except Exception as exc:  # language server failures are reported, not raised
        logger.warning("definition request failed: %s", exc)
        return CommandResult.fail(f"Definition failed: {exc}")
    if not locations:
        return CommandResult.ok("No definition found")
    return CommandResult.ok(f"Definition at {locations[0]}")


def references(
    args: Sequence[str], buffer: Buffer, env: CommandEnvironment
) -> CommandResult:
    del args
    failure = _language_ready(buffer, env)
    if failure is not None:
        return failure
    try:
        locations = list(env.language.references(buffer.filename, buffer.cursor))
    except Exception as exc:  # language server failures are reported, not raised
        logger.warning("references request failed: %s", exc)
        return CommandResult.fail(f"References failed: {exc}")
    if not locations:
        return CommandResult.ok("No references found")

    lines = [f"Found {len(locations)} references:"]
    lines.extend(f"  {location}" for location in locations[:MAX_LISTED_REFERENCES])
    hidden = len(locations) - MAX_LISTED_REFERENCES
    if hidden > 0:
        lines.append(f"  ... and {hidden} more")
    return CommandResult.ok("\n".join(lines))


ASSIST_COMMANDS: tuple[Command, ...] = (
    Command(
        "aicomplete",
        ai_complete,
        aliases=("aic",),
        help=":aicomplete - Complete code at cursor position using AI",
    ),
    Command(
        "aiexplain",
        ai_explain,
        aliases=("aie",),
        help=":aiexplain [code] - Explain the current line or the given code",
    ),
    Command(
        "hover",
        hover,
        aliases=("lsp-hover",),
        help=":hover - Show language-server hover information at cursor",
    ),
    Command(
        "definition",
        definition,
        aliases=("def", "lsp-definition"),
        help=":definition - Locate the definition of the symbol at cursor",
    ),
    Command(
        "references",
        references,
        aliases=("refs", "lsp-references"),
        help=":references - List references to the symbol at cursor",
    ),
)


__all__ = [
    "ASSIST_COMMANDS",
    "ai_complete",
    "ai_explain",
    "definition",
    "gather_context",
    "hover",
    "references",
]
