"""Telemetry services built on the standard ``logging`` package.

This module exposes a narrow surface area for the rest of the engine:

``configure(...)`` -- override or preset the logging configuration
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit structured events at a chosen level
``span(name, ...)`` -- context manager timing a block and tagging its component
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional

ENV_PREFIX = "AIED_"
ROOT_LOGGER_NAME = "aied_core"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", ROOT_LOGGER_NAME)
DEFAULT_LOG_FILE = os.getenv(f"{ENV_PREFIX}LOG_FILE", "")
LOG_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-24s - %(message)s"

_LOGGER_CACHE: MutableMapping[str, logging.Logger] = {}
_HANDLERS: list[logging.Handler] = []


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> str:
    return " ".join(f"{key}={_stringify(value)}" for key, value in data.items())


def _resolve_level(level: Optional[str] = None) -> int:
    name = (level or _env("LOG_LEVEL") or "WARNING").upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level '{name}'.")
    return resolved


def _file_handler(path: str) -> logging.Handler:
    return logging.handlers.RotatingFileHandler(
        path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )


def _build_preset_handlers(preset: str) -> tuple[int, list[logging.Handler]]:
    key = preset.lower()
    if key == "development":
        return logging.DEBUG, [logging.StreamHandler()]
    if key == "production":
        log_path = _env("LOG_FILE", DEFAULT_LOG_FILE) or "aied.log"
        return logging.INFO, [_file_handler(log_path)]
    raise ValueError(f"Unknown preset '{preset}'.")


def _build_default_handlers() -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if not _env_flag("DISABLE_CONSOLE", False):
        handlers.append(logging.StreamHandler())
    log_file = _env("LOG_FILE") or DEFAULT_LOG_FILE
    if log_file:
        handlers.append(_file_handler(log_file))
    return handlers


def configure(*, preset: Optional[str] = None, level: Optional[str] = None) -> None:
    """Replace the handlers attached to the ``aied_core`` logger namespace.

    Parameters
    ----------
    preset:
        Named preset (``"development"`` or ``"production"``).
    level:
        Explicit level name. Overrides the preset level and ``AIED_LOG_LEVEL``.
    """

    if preset:
        preset_level, handlers = _build_preset_handlers(preset)
        resolved = _resolve_level(level) if level else preset_level
    else:
        handlers = _build_default_handlers()
        resolved = _resolve_level(level)

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in _HANDLERS:
        root.removeHandler(handler)
        handler.close()
    _HANDLERS.clear()

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
        _HANDLERS.append(handler)
    root.setLevel(resolved)
    root.propagate = False
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a cached logger living under the engine namespace."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = logging.getLogger(logger_name)
    return _LOGGER_CACHE[logger_name]


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` line."""

    log = get_logger(logger_name)
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unsupported log level '{level}'.")
    if not log.isEnabledFor(numeric):
        return
    payload = {"event": name, **(data or {})}
    log.log(numeric, "event::%s %s", name, _format_pairs(payload))


@dataclass
class SpanHandle:
    """Handle returned from ``span`` for optional metadata updates."""

    logger: logging.Logger
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _emit(
        self, level: int, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        payload = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        self.logger.log(level, "%s %s", message, _format_pairs(payload))

    def fail(self, reason: str) -> None:
        self._emit(logging.ERROR, "span::fail", {"reason": reason})

    def reject(self, reason: str) -> None:
        self._emit(logging.DEBUG, "span::reject", {"reason": reason})

    def cancel(self, reason: str | None = None) -> None:
        extra = {"reason": reason} if reason else None
        self._emit(logging.WARNING, "span::cancel", extra)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
    expected: tuple[type[BaseException], ...] = (),
) -> Iterator[SpanHandle]:
    """Time a code block and (optionally) tag it with a component name.

    Parameters
    ----------
    name:
        Operation name written with every span line.
    logger_name:
        Target logger; defaults to the engine logger.
    component:
        If ``True`` use the same name as the span; if a string, use it as the
        component identifier.
    metadata:
        Optional key/value pairs attached to the span's log lines.
    expected:
        Exception types that signal a refused user request rather than a
        defect. They are logged at DEBUG as ``span::reject`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata={key: _stringify(value) for key, value in (metadata or {}).items()},
    )
    started = time.perf_counter()
    try:
        yield handle
    except Exception as exc:
        reason = str(exc) or type(exc).__name__
        if isinstance(exc, expected):
            handle.reject(reason)
        else:
            handle.fail(reason)
        raise
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        handle._emit(logging.DEBUG, "span::end", {"elapsed_ms": f"{elapsed_ms:.3f}"})


# Initialize the namespace handlers once at import time.
configure()
logger = get_logger()

__all__ = [
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
