from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List

import pytest

from aied_core.buffer import Buffer, BufferIOError, EditorBufferError
from aied_core.runtime import telemetry
from aied_core.settings import EditorSettings


class ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []
        self.levels: List[int] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())
        self.levels.append(record.levelno)


@pytest.fixture
def captured() -> Iterator[ListHandler]:
    root = logging.getLogger(telemetry.ROOT_LOGGER_NAME)
    handler = ListHandler()
    previous = root.level
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    try:
        yield handler
    finally:
        root.removeHandler(handler)
        root.setLevel(previous)


def test_settings_defaults_and_indent_unit() -> None:
    settings = EditorSettings()

    assert settings.tab_size == 4
    assert settings.indent_unit == "    "
    assert EditorSettings(indent_style="tabs").indent_unit == "\t"


def test_settings_reject_invalid_values() -> None:
    with pytest.raises(ValueError):
        EditorSettings(tab_size=0)
    with pytest.raises(ValueError):
        EditorSettings(indent_style="mixed")
    with pytest.raises(ValueError):
        EditorSettings(context_lines=-1)


def test_settings_from_env_overrides() -> None:
    settings = EditorSettings.from_env(
        {"AIED_TAB_SIZE": "2", "AIED_INDENT_STYLE": "TABS", "AIED_CONTEXT_LINES": "5"}
    )

    assert settings == EditorSettings(tab_size=2, indent_style="tabs", context_lines=5)


def test_settings_from_env_rejects_non_integer() -> None:
    with pytest.raises(ValueError, match="AIED_TAB_SIZE"):
        EditorSettings.from_env({"AIED_TAB_SIZE": "wide"})


def test_settings_from_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AIED_CONTEXT_LINES", "3")

    assert EditorSettings.from_env().context_lines == 3


def test_record_event_formats_payload(captured: ListHandler) -> None:
    telemetry.record_event("buffer.save", data={"path": "a.txt", "lines": 2})

    assert captured.messages[-1] == "event::buffer.save event=buffer.save path=a.txt lines=2"


def test_record_event_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("x", level="loud")


def test_span_logs_end_with_metadata(captured: ListHandler) -> None:
    with telemetry.span("unit::work", component=True, metadata={"k": 1}) as handle:
        handle.add_metadata("extra", "yes")

    end = captured.messages[-1]
    assert end.startswith("span::end span=unit::work k=1 extra=yes component=unit::work")
    assert "elapsed_ms=" in end


def test_span_logs_failure_and_reraises(captured: ListHandler) -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("unit::boom", component="tests"):
            raise RuntimeError("kaput")

    assert any(
        message.startswith("span::fail") and "reason=kaput" in message
        for message in captured.messages
    )


def test_span_logs_expected_errors_at_debug(captured: ListHandler) -> None:
    with pytest.raises(BufferIOError):
        with telemetry.span("unit::save", expected=(EditorBufferError,)):
            raise BufferIOError("disk full")

    assert logging.ERROR not in captured.levels
    assert any(
        message.startswith("span::reject") and "reason=disk full" in message
        for message in captured.messages
    )


def test_failed_save_is_not_reported_as_error(
    captured: ListHandler, tmp_path: Path
) -> None:
    buffer = Buffer.from_text("text")

    with pytest.raises(BufferIOError):
        buffer.save_as(tmp_path)

    assert logging.ERROR not in captured.levels
    assert any(message.startswith("span::reject") for message in captured.messages)


def test_configure_rejects_unknown_preset_and_level() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="staging")
    with pytest.raises(ValueError):
        telemetry.configure(level="chatty")


def test_get_logger_is_cached() -> None:
    assert telemetry.get_logger("aied_core.tests") is telemetry.get_logger("aied_core.tests")
