"""Structured logging for lookup results.

Records carry key=value context and go to one process-wide renderer: a
console line for development, JSON Lines for production, or nothing. The
renderer and level come from the LOOKUPRESULT_LOG_* settings until
configure_logging() replaces them, and apply to every thread.

Quick Start:
    >>> from lookupresult.logging import configure_logging, get_logger
    >>>
    >>> configure_logging(format="console", level="DEBUG")
    >>> log = get_logger("repository")
    >>> log.debug("lookup missed", key="user:42")
"""

from __future__ import annotations

import logging
import sys
import threading
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol, TextIO, runtime_checkable

import orjson

from .settings import get_settings

if TYPE_CHECKING:
    from types import TracebackType

JsonDict = dict[str, Any]

# Scoped context only; renderer and level are process-wide below
_scoped: ContextVar[JsonDict] = ContextVar("lookupresult_log_scope", default={})


@dataclass(slots=True)
class LogEntry:
    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def when(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=UTC)


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    """Anything that can write a LogEntry somewhere."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """One line per record: HH:MM:SS.mmm [level] event key=value ..."""

    output: TextIO = field(default_factory=lambda: sys.stderr)

    def render(self, entry: LogEntry) -> None:
        pairs = (f"{k}={v!r}" if isinstance(v, str) and " " in v else f"{k}={v}"
                 for k, v in sorted(entry.context.items()))
        stamp = entry.when.strftime("%H:%M:%S.%f")[:-3]
        print(stamp, f"[{entry.level}]", entry.event, *pairs, file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines, one object per record."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        record = {"timestamp": entry.when.isoformat(), "level": entry.level, "event": entry.event,
                  **entry.context}
        self.output.write(orjson.dumps(record, option=orjson.OPT_NON_STR_KEYS, default=repr).decode() + "\n")


class NoOpRenderer:
    def render(self, entry: LogEntry) -> None:
        pass


def _make_renderer(format: str, output: TextIO | None) -> LogRenderer:  # noqa: A002
    match format:
        case "console": return ConsoleRenderer(output=output or sys.stderr)
        case "json": return JsonRenderer(output=output or sys.stdout)
        case "none": return NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")


# ─────────────────────────────────────────────────────────────────────────────
# Process-wide Configuration
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class _Config:
    renderer: LogRenderer
    level: int


_config: _Config | None = None
_config_lock = threading.Lock()


def configure_logging(
    format: str | None = None,  # noqa: A002 - shadows builtin but matches stdlib
    level: str | None = None,
    *,
    output: TextIO | None = None,
) -> LogRenderer:
    """Set the renderer and level for all threads. Format: "console", "json" or "none".

    Arguments left as None fall back to the LOOKUPRESULT_LOG_* settings.
    """
    global _config
    cfg = get_settings().logging
    new = _Config(_make_renderer(format or cfg.format, output), _level_value(level or cfg.level))
    with _config_lock:
        _config = new
    return new.renderer


def reset_logging() -> None:
    """Forget configure_logging(); the next record re-reads settings."""
    global _config
    with _config_lock:
        _config = None


def _current() -> _Config:
    global _config
    if (current := _config) is not None:
        return current
    with _config_lock:
        if _config is None:
            cfg = get_settings().logging
            _config = _Config(_make_renderer(cfg.format, None), _level_value(cfg.level))
        return _config


def _level_value(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


# ─────────────────────────────────────────────────────────────────────────────
# Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class BoundLogger:
    """Logger carrying fixed context. bind() returns a new logger with merged context.

    renderer and level override the process-wide configuration when set.
    """

    context: JsonDict = field(default_factory=dict)
    renderer: LogRenderer | None = None
    level: int | None = None

    def bind(self, **kw: Any) -> BoundLogger:
        return BoundLogger({**self.context, **kw}, self.renderer, self.level)

    def log(self, level: int, event: str, **kw: Any) -> None:
        current = _current()
        if level < (self.level if self.level is not None else current.level):
            return
        entry = LogEntry(time.time(), logging.getLevelName(level).lower(), event,
                         {**_scoped.get(), **self.context, **kw})
        (self.renderer or current.renderer).render(entry)

    def debug(self, event: str, **kw: Any) -> None:
        self.log(logging.DEBUG, event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self.log(logging.ERROR, event, **kw)


def get_logger(name: str | None = None, **initial_context: Any) -> BoundLogger:
    """Logger with initial context; name is recorded as 'logger'."""
    return BoundLogger({**initial_context, **({"logger": name} if name else {})})


class log_context:
    """Add key-value pairs to every record logged inside the with-block (current context only)."""

    __slots__ = ("_ctx", "_token")

    def __init__(self, **kw: Any) -> None:
        self._ctx: JsonDict = dict(kw)
        self._token: object | None = None

    def __enter__(self) -> log_context:
        self._token = _scoped.set({**_scoped.get(), **self._ctx})
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None,
                 exc_tb: TracebackType | None) -> None:
        if self._token is not None:
            _scoped.reset(self._token)  # type: ignore[arg-type]
