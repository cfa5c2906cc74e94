"""JSON aliases and error provenance for Result-based error handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

# ═══════════════════════════════════════════════════════════════════════════════
# JSON Type Aliases
# ═══════════════════════════════════════════════════════════════════════════════

JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]  # Any for recursive slots
JsonDict = dict[str, Any]

# ═══════════════════════════════════════════════════════════════════════════════
# Error Context & Provenance
# ═══════════════════════════════════════════════════════════════════════════════

_EMPTY_META: JsonDict = {}


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Where an error happened: operation name plus optional location/metadata."""

    operation: str
    location: str = ""
    metadata: JsonDict = field(default_factory=dict)

    def __str__(self) -> str:
        loc = f" at {self.location}" if self.location else ""
        meta = f" ({', '.join(f'{k}={v}' for k, v in self.metadata.items())})" if self.metadata else ""
        return f"{self.operation}{loc}{meta}"


_EMPTY_CONTEXTS: tuple[ErrorContext, ...] = ()


@dataclass(frozen=True, slots=True)
class ErrorTrace:
    """Error message with the chain of operations it travelled through.

    The message is what callers see; contexts, code and details are
    diagnostics for logs and programmatic handling.
    """

    message: str
    contexts: tuple[ErrorContext, ...] = _EMPTY_CONTEXTS
    error_code: str | None = None
    recoverable: bool = True
    details: str | None = None

    def with_context(self, ctx: ErrorContext) -> ErrorTrace:
        return ErrorTrace(self.message, (*self.contexts, ctx), self.error_code, self.recoverable, self.details)

    def with_operation(self, operation: str, location: str = "", **metadata: JsonValue) -> ErrorTrace:
        """Append an operation context (returns a new trace)."""
        return self.with_context(ErrorContext(operation, location, metadata or _EMPTY_META))

    @property
    def root_operation(self) -> str | None:
        """First operation recorded (origin of the error)."""
        return self.contexts[0].operation if self.contexts else None

    def format(self, *, include_details: bool = False) -> str:
        """Human-readable rendering with code and context chain."""
        parts = [self.message]
        if self.error_code:
            parts.append(f" [{self.error_code}]")
        if self.contexts:
            parts.append("\nContext trace:\n" + "\n".join(f"  - {ctx}" for ctx in self.contexts))
        if include_details and self.details:
            parts.append(f"\nDetails:\n{self.details}")
        return "".join(parts)

    __str__ = format
