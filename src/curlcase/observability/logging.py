"""Structured logging for the curl-api tools and servers.

An entry is an event name plus key/value fields ("making request",
method="GET", url=...). Entries are written to stderr only: when the MCP
server runs over stdio, stdout carries the protocol stream.

    >>> configure_logging("json", "INFO")
    >>> log = get_logger("curlcase.tools").bind(tool="curl")
    >>> log.info("making request", method="GET", url="https://example.com")
    {"timestamp": "...", "level": "info", "event": "making request", "logger": "curlcase.tools", ...}
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol, TextIO, runtime_checkable

import orjson

from curlcase.foundation.errors import JsonDict, JsonValue

LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


@dataclass(frozen=True, slots=True)
class LogEntry:
    level: str
    event: str
    fields: JsonDict
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@runtime_checkable
class LogRenderer(Protocol):
    def render(self, entry: LogEntry) -> None: ...


@runtime_checkable
class StructuredLogger(Protocol):
    """What tools and servers need from a logger. Injected through constructors."""

    def info(self, event: str, **fields: JsonValue) -> None: ...
    def warning(self, event: str, **fields: JsonValue) -> None: ...
    def error(self, event: str, **fields: JsonValue) -> None: ...
    def bind(self, **fields: JsonValue) -> StructuredLogger: ...


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


def _field_text(value: JsonValue) -> str:
    return orjson.dumps(value, option=orjson.OPT_NON_STR_KEYS, default=str).decode()


_RESET = "\033[0m"
_LEVEL_STYLES = {"debug": "\033[2m", "info": "\033[32m", "warning": "\033[33m", "error": "\033[31m"}


@dataclass(slots=True)
class ConsoleRenderer:
    """One line per entry: `12:00:01.250 [info] making request method="GET" url="..."`.

    Field values are shown as JSON, keys sorted. Colors default to on when the
    stream is a terminal.
    """

    stream: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None
    timestamps: bool = True

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = bool(getattr(self.stream, "isatty", lambda: False)())

    def render(self, entry: LogEntry) -> None:
        level = f"[{entry.level}]"
        if self.colors:
            level = f"{_LEVEL_STYLES.get(entry.level, '')}{level}{_RESET}"
        words = [entry.timestamp.strftime("%H:%M:%S.%f")[:-3]] if self.timestamps else []
        words += [level, entry.event]
        words += [f"{k}={_field_text(v)}" for k, v in sorted(entry.fields.items())]
        self.stream.write(" ".join(words) + "\n")


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines, for log shippers."""

    stream: TextIO = field(default_factory=lambda: sys.stderr)

    def render(self, entry: LogEntry) -> None:
        record = {
            "timestamp": entry.timestamp.isoformat(),
            "level": entry.level,
            "event": entry.event,
            **entry.fields,
        }
        self.stream.write(_field_text(record) + "\n")


class NoOpRenderer:
    def render(self, entry: LogEntry) -> None:
        pass


@dataclass(slots=True)
class CaptureRenderer:
    """Keeps entries in memory, for tests."""

    entries: list[LogEntry] = field(default_factory=list)

    def render(self, entry: LogEntry) -> None:
        self.entries.append(entry)

    def events(self, level: str | None = None) -> list[str]:
        return [e.event for e in self.entries if level is None or e.level == level]


# ─────────────────────────────────────────────────────────────────────────────
# Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class _Defaults:
    renderer: LogRenderer = field(default_factory=ConsoleRenderer)
    threshold: int = logging.INFO


_defaults = _Defaults()


@dataclass(frozen=True, slots=True)
class BoundLogger:
    """Logger carrying fixed fields. bind() returns a new logger.

    A logger without its own renderer or threshold follows whatever
    configure_logging() last installed, so loggers created at import time
    still honor the CLI flags.
    """

    fields: JsonDict = field(default_factory=dict)
    renderer: LogRenderer | None = None
    threshold: int | None = None

    def bind(self, **fields: JsonValue) -> BoundLogger:
        return BoundLogger({**self.fields, **fields}, self.renderer, self.threshold)

    def log(self, level: str, event: str, **fields: JsonValue) -> None:
        threshold = _defaults.threshold if self.threshold is None else self.threshold
        if LEVELS[level] < threshold:
            return
        (self.renderer or _defaults.renderer).render(LogEntry(level, event, {**self.fields, **fields}))

    def debug(self, event: str, **fields: JsonValue) -> None:
        self.log("debug", event, **fields)

    def info(self, event: str, **fields: JsonValue) -> None:
        self.log("info", event, **fields)

    def warning(self, event: str, **fields: JsonValue) -> None:
        self.log("warning", event, **fields)

    def error(self, event: str, **fields: JsonValue) -> None:
        self.log("error", event, **fields)


# ─────────────────────────────────────────────────────────────────────────────
# Configuration
# ─────────────────────────────────────────────────────────────────────────────


def configure_logging(
    format: str = "console",  # noqa: A002 - mirrors CURLCASE_LOG_FORMAT
    level: str = "INFO",
    *,
    stream: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Install the process-wide renderer and level. Format: "console", "json" or "none"."""
    threshold = LEVELS.get(level.lower())
    if threshold is None:
        raise ValueError(f"Unknown log level: {level}")
    renderer: LogRenderer
    match format:
        case "console":
            renderer = ConsoleRenderer(stream or sys.stderr, colors)
        case "json":
            renderer = JsonRenderer(stream or sys.stderr)
        case "none":
            renderer = NoOpRenderer()
        case _:
            raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    _defaults.renderer, _defaults.threshold = renderer, threshold
    return renderer


def get_logger(name: str | None = None, **fields: JsonValue) -> BoundLogger:
    """Logger following the configured renderer and level; `name` is logged as `logger`."""
    return BoundLogger({**fields, **({"logger": name} if name else {})})
