"""Structured logging for tool calls.

Key/value events with context that follows a call across awaits. stdout
carries the MCP protocol, so every renderer writes to stderr.

Quick Start:
    >>> from slack_mcp.foundation.logging import configure_logging, get_logger, log_context
    >>>
    >>> configure_logging(format="json", level="DEBUG")
    >>> log = get_logger("slack_mcp.dispatcher")
    >>> with log_context(tool="slack_post_message"):
    ...     log.info("tool call succeeded", duration_ms=84.2)
    {"timestamp": "...", "level": "info", "event": "tool call succeeded", "tool": "slack_post_message", ...}
"""

from __future__ import annotations

import logging
import sys
import time
import traceback
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol, TextIO, runtime_checkable

import orjson

from slack_mcp.foundation.errors import JsonDict, JsonValue

if TYPE_CHECKING:
    from types import TracebackType

# Scoped context (log_context) and process-wide configuration
_scope: ContextVar[JsonDict] = ContextVar("slack_mcp_log_scope", default={})
_renderer: ContextVar[LogRenderer | None] = ContextVar("slack_mcp_log_renderer", default=None)
_threshold: ContextVar[int] = ContextVar("slack_mcp_log_level", default=logging.INFO)


@dataclass(slots=True)
class LogEntry:
    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_short(self) -> str:
        """HH:MM:SS.mmm"""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


@dataclass(slots=True)
class BoundLogger:
    """Logger carrying fixed context. ``bind()`` returns a new logger; this one is never changed.

    Context precedence, lowest first: ``log_context`` scope, bound context, call-site keywords.
    """

    context: JsonDict = field(default_factory=dict)

    def bind(self, **kw: JsonValue) -> BoundLogger:
        return BoundLogger(context={**self.context, **kw})

    def debug(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.DEBUG, event, kw)

    def info(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.INFO, event, kw)

    def warning(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.WARNING, event, kw)

    def error(self, event: str, **kw: JsonValue) -> None:
        self._emit(logging.ERROR, event, kw)

    def exception(self, event: str, **kw: JsonValue) -> None:
        """Error entry with the active traceback under ``exc_info``."""
        self._emit(logging.ERROR, event, {**kw, "exc_info": traceback.format_exc()})

    def _emit(self, level: int, event: str, kw: JsonDict) -> None:
        if level < _threshold.get():
            return
        entry = LogEntry(time.time(), logging.getLevelName(level).lower(), event, {**_scope.get(), **self.context, **kw})
        _active_renderer().render(entry)


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    def render(self, entry: LogEntry) -> None: ...


_LEVEL_COLORS = {"debug": "\033[2m", "info": "\033[32m", "warning": "\033[33m", "error": "\033[31m"}
_RESET = "\033[0m"


@dataclass(slots=True)
class ConsoleRenderer:
    """One line per entry: ``12:00:01.250 [info] event key=value ...``."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None = colour when output is a TTY

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = bool(getattr(self.output, "isatty", lambda: False)())

    def render(self, entry: LogEntry) -> None:
        level = f"[{entry.level}]"
        if self.colors:
            level = f"{_LEVEL_COLORS.get(entry.level, '')}{level}{_RESET}"
        pairs = [f"{k}={_console_value(v)}" for k, v in sorted(entry.context.items()) if k != "exc_info"]
        print(" ".join([entry.ts_short, level, entry.event, *pairs]), file=self.output)
        if "exc_info" in entry.context:
            print(entry.context["exc_info"], file=self.output, end="")


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines for log shippers."""

    output: TextIO = field(default_factory=lambda: sys.stderr)

    def render(self, entry: LogEntry) -> None:
        record = {"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event, **entry.context}
        print(orjson.dumps(record, option=orjson.OPT_NON_STR_KEYS, default=str).decode(), file=self.output)


class NoOpRenderer:
    """Discards everything."""

    __slots__ = ()

    def render(self, entry: LogEntry) -> None:
        pass


def _console_value(v: object) -> str:
    match v:
        case str():
            return f'"{v}"'
        case bool():
            return str(v).lower()
        case list() | tuple():
            return f"[{len(v)} items]"
        case dict():
            return f"{{{len(v)} items}}"
        case _:
            return str(v)


# ─────────────────────────────────────────────────────────────────────────────
# Configuration
# ─────────────────────────────────────────────────────────────────────────────


def configure_logging(
    format: str = "console",  # noqa: A002 - matches the SLACK_MCP_LOG_FORMAT setting
    level: str = "INFO",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Select the renderer ("console", "json" or "none") and the minimum level."""
    match format:
        case "console":
            renderer: LogRenderer = ConsoleRenderer(output=output or sys.stderr, colors=colors)
        case "json":
            renderer = JsonRenderer(output=output or sys.stderr)
        case "none":
            renderer = NoOpRenderer()
        case _:
            raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    _threshold.set(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))
    _renderer.set(renderer)
    return renderer


def get_logger(name: str | None = None, **initial_context: JsonValue) -> BoundLogger:
    """Logger with optional initial context; ``name`` is recorded as ``logger``."""
    return BoundLogger(context={**initial_context, **({"logger": name} if name else {})})


def _active_renderer() -> LogRenderer:
    if (renderer := _renderer.get()) is None:
        _renderer.set(renderer := ConsoleRenderer())
    return renderer


class log_context:  # noqa: N801
    """Adds key/value pairs to every entry logged inside the ``with`` block."""

    __slots__ = ("_extra", "_token")

    def __init__(self, **kw: JsonValue) -> None:
        self._extra: JsonDict = kw
        self._token: object | None = None

    def __enter__(self) -> log_context:
        self._token = _scope.set({**_scope.get(), **self._extra})
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None,
                 exc_tb: TracebackType | None) -> None:
        if self._token is not None:
            _scope.reset(self._token)  # type: ignore[arg-type]
