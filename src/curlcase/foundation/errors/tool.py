"""Glue between Result values, ToolError, and the caller-facing envelope."""

from __future__ import annotations

import traceback
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict

from .errors import ErrorCode, ToolError, classify_exception
from .result import Result, _ERR
from .types import ErrorTrace, JsonDict

ToolResult: TypeAlias = Result[str, ErrorTrace]


def tool_result(
    tool_name: str,
    message: str,
    *,
    code: ErrorCode = ErrorCode.UNKNOWN,
    recoverable: bool = True,
    details: str | None = None,
) -> ToolResult:
    """Create Err ToolResult from error parameters."""
    return Result(
        ErrorTrace(message, (), code.value, recoverable, details).with_operation(f"tool:{tool_name}"),
        _ERR,
    )


def from_tool_error(error: ToolError) -> ToolResult:
    return tool_result(error.tool_name, error.message, code=error.code, recoverable=error.recoverable, details=error.details)


def error_from_exception(tool_name: str, exc: Exception, context: str = "") -> ToolResult:
    """Build an Err from a caught exception, classified by type and message."""
    message = f"{context}: {exc}" if context else str(exc)
    trace = ErrorTrace(message, (), classify_exception(exc).value, True, traceback.format_exc())
    trace = trace.with_operation(f"tool:{tool_name}")
    return Result(trace.with_operation(context) if context else trace, _ERR)


def error_code_of(trace: ErrorTrace) -> ErrorCode:
    try:
        return ErrorCode(trace.error_code) if trace.error_code else ErrorCode.UNKNOWN
    except ValueError:
        return ErrorCode.UNKNOWN


def to_tool_error(result: ToolResult, tool_name: str) -> ToolError:
    """Convert Err Result to ToolError. Raises ValueError if Ok."""
    if result._is_ok:
        raise ValueError("Cannot convert Ok result to ToolError")
    trace: ErrorTrace = result._value  # type: ignore[assignment]
    return ToolError(
        tool_name=tool_name,
        message=trace.message,
        code=error_code_of(trace),
        recoverable=trace.recoverable,
        details=trace.details,
    )


def result_to_string(result: ToolResult, tool_name: str) -> str:
    """Ok returns value, Err renders as ToolError."""
    return result._value if result._is_ok else to_tool_error(result, tool_name).render()  # type: ignore[return-value]


# ═══════════════════════════════════════════════════════════════════════════════
# Envelope
# ═══════════════════════════════════════════════════════════════════════════════


class ToolEnvelope(BaseModel):
    """Uniform output of every tool invocation: text content or an error flag plus message."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    content: str
    is_error: bool = False
    code: ErrorCode | None = None

    @classmethod
    def from_result(cls, result: ToolResult) -> ToolEnvelope:
        if result._is_ok:
            return cls(content=result._value)  # type: ignore[arg-type]
        trace: ErrorTrace = result._value  # type: ignore[assignment]
        return cls(content=trace.message, is_error=True, code=error_code_of(trace))

    @classmethod
    def from_error(cls, error: ToolError) -> ToolEnvelope:
        return cls(content=error.render(), is_error=True, code=error.code)

    def to_mcp(self) -> JsonDict:
        """MCP CallToolResult shape."""
        out: JsonDict = {"content": [{"type": "text", "text": self.content}]}
        if self.is_error:
            out["isError"] = True
        return out
