"""Structured logging for curlcase tools and servers."""

from .logging import (
    BoundLogger,
    CaptureRenderer,
    ConsoleRenderer,
    JsonRenderer,
    LogEntry,
    LogRenderer,
    NoOpRenderer,
    StructuredLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "BoundLogger", "StructuredLogger", "LogEntry",
    "LogRenderer", "ConsoleRenderer", "JsonRenderer", "NoOpRenderer", "CaptureRenderer",
    "configure_logging", "get_logger",
]
