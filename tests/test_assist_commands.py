from __future__ import annotations

from typing import List, Optional, Sequence

from aied_core.buffer import Buffer, Position
from aied_core.commands import CommandEnvironment, CommandExecutor
from aied_core.commands.assist import gather_context
from aied_core.integrations import CompletionRequest, Location, detect_language
from aied_core.settings import EditorSettings


class FakeCompletion:
    def __init__(self, reply: str = "", *, error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.requests: List[CompletionRequest] = []

    def complete(self, request: CompletionRequest) -> str:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeLanguage:
    def __init__(
        self,
        contents: Optional[str] = None,
        *,
        locations: Sequence[Location] = (),
        error: Optional[Exception] = None,
    ) -> None:
        self.contents = contents
        self.locations = list(locations)
        self.error = error
        self.calls: List[tuple[str, Position]] = []

    def hover(self, path: str, position: Position) -> Optional[str]:
        self.calls.append((path, position))
        return self.contents

    def definition(self, path: str, position: Position) -> List[Location]:
        return self._lookup(path, position)

    def references(self, path: str, position: Position) -> List[Location]:
        return self._lookup(path, position)

    def _lookup(self, path: str, position: Position) -> List[Location]:
        self.calls.append((path, position))
        if self.error is not None:
            raise self.error
        return self.locations


def make_executor(**env: object) -> CommandExecutor:
    return CommandExecutor(environment=CommandEnvironment(**env))


def test_gather_context_marks_cursor_line() -> None:
    buffer = Buffer.from_text("a\nb\nc\nd\ne")
    buffer.set_cursor(2, 0)

    assert gather_context(buffer, 1) == "b\n>>> c\nd\n"


def test_detect_language_by_extension() -> None:
    assert detect_language("main.go") == "go"
    assert detect_language("app.tsx") == "typescript"
    assert detect_language("README") == "text"


def test_aicomplete_without_provider_fails() -> None:
    result = make_executor().execute("aic", Buffer())

    assert result.success is False
    assert result.message == "No completion provider configured"


def test_aicomplete_inserts_reply_at_cursor() -> None:
    provider = FakeCompletion("value)")
    executor = make_executor(
        completion=provider, settings=EditorSettings(context_lines=0)
    )
    buffer = Buffer.from_text("print(", filename="script.py")
    buffer.set_cursor(0, 6)

    result = executor.execute("aicomplete", buffer)

    assert result.success is True
    assert result.message == "Inserted 6 characters"
    assert buffer.lines == ("print(value)",)
    request = provider.requests[0]
    assert request.prompt == "print("
    assert request.language == "python"
    assert request.context == ">>> print(\n"


def test_aicomplete_reports_provider_errors() -> None:
    provider = FakeCompletion(error=RuntimeError("quota exceeded"))
    buffer = Buffer.from_text("x")

    result = make_executor(completion=provider).execute("aic", buffer)

    assert result.success is False
    assert result.message == "AI error: quota exceeded"
    assert buffer.modified is False


def test_aicomplete_empty_reply_changes_nothing() -> None:
    buffer = Buffer.from_text("x")

    result = make_executor(completion=FakeCompletion("")).execute("aic", buffer)

    assert result.message == "No completion returned"
    assert buffer.modified is False


def test_hover_requires_language_service_and_file() -> None:
    executor = make_executor(language=FakeLanguage("doc"))

    assert make_executor().execute("hover", Buffer()).message == "LSP not available"
    assert executor.execute("hover", Buffer()).message == "No file associated with buffer"


def test_hover_returns_service_text() -> None:
    service = FakeLanguage("func main()")
    buffer = Buffer.from_text("package main", filename="main.go")
    buffer.set_cursor(0, 3)

    result = make_executor(language=service).execute("lsp-hover", buffer)

    assert result.success is True
    assert result.message == "func main()"
    assert service.calls == [("main.go", Position(0, 3))]


def test_hover_without_information() -> None:
    buffer = Buffer.from_text("x", filename="a.py")

    result = make_executor(language=FakeLanguage(None)).execute("hover", buffer)

    assert result.message == "No hover information available"


def test_aiexplain_sends_current_line() -> None:
    provider = FakeCompletion("It adds one.")
    buffer = Buffer.from_text("x = 1\ny = x + 1", filename="calc.py")
    buffer.set_cursor(1, 0)

    result = make_executor(completion=provider).execute("aie", buffer)

    assert result.success is True
    assert result.message == "It adds one."
    request = provider.requests[0]
    assert request.prompt == "Explain this code: y = x + 1"
    assert request.kind == "explanation"
    assert request.language == "python"
    assert buffer.modified is False


def test_aiexplain_uses_arguments_as_code() -> None:
    provider = FakeCompletion("A loop.")

    make_executor(completion=provider).execute("aiexplain for i in xs", Buffer())

    assert provider.requests[0].prompt == "Explain this code: for i in xs"


def test_aiexplain_without_provider_or_reply() -> None:
    assert make_executor().execute("aiexplain", Buffer()).success is False

    result = make_executor(completion=FakeCompletion("")).execute("aie", Buffer())

    assert result.message == "No explanation returned"


def test_definition_reports_first_location_one_based() -> None:
    service = FakeLanguage(
        locations=[Location("pkg/util.go", 9, 4), Location("pkg/other.go", 0, 0)]
    )
    buffer = Buffer.from_text("util.Do()", filename="main.go")
    buffer.set_cursor(0, 5)

    result = make_executor(language=service).execute("def", buffer)

    assert result.success is True
    assert result.message == "Definition at pkg/util.go:10:5"
    assert service.calls == [("main.go", Position(0, 5))]


def test_definition_not_found_and_failures() -> None:
    buffer = Buffer.from_text("x", filename="a.py")

    missing = make_executor(language=FakeLanguage()).execute("definition", buffer)
    broken = make_executor(
        language=FakeLanguage(error=RuntimeError("server crashed"))
    ).execute("lsp-definition", buffer)

    assert missing.message == "No definition found"
    assert broken.success is False
    assert broken.message == "Definition failed: server crashed"
    assert make_executor().execute("def", buffer).message == "LSP not available"


def test_references_lists_first_five() -> None:
    service = FakeLanguage(
        locations=[Location("a.py", line, 2) for line in range(7)]
    )
    buffer = Buffer.from_text("name", filename="a.py")

    result = make_executor(language=service).execute("refs", buffer)

    assert result.message.splitlines() == [
        "Found 7 references:",
        "  a.py:1:3",
        "  a.py:2:3",
        "  a.py:3:3",
        "  a.py:4:3",
        "  a.py:5:3",
        "  ... and 2 more",
    ]


def test_references_without_results_or_file() -> None:
    service = FakeLanguage()

    assert (
        make_executor(language=service).execute("references", Buffer()).message
        == "No file associated with buffer"
    )
    buffer = Buffer.from_text("x", filename="a.py")
    assert (
        make_executor(language=service).execute("references", buffer).message
        == "No references found"
    )
