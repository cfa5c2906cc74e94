"""Unified error handling for curlcase.

- ErrorCode: Standard error codes for tool failures
- ToolError/ToolException: Structured errors and exceptions
- Result/Ok/Err: Success-or-failure values returned by tools
- ErrorTrace/ErrorContext: Error context stacking and provenance tracking
- ToolEnvelope: The caller-facing output shape
"""

from .errors import ErrorCode, ToolError, ToolException, classify_exception
from .result import Err, Ok, Result
from .tool import (
    ToolEnvelope,
    ToolResult,
    error_code_of,
    error_from_exception,
    from_tool_error,
    result_to_string,
    to_tool_error,
    tool_result,
)
from .types import ErrorContext, ErrorTrace, JsonDict, JsonPrimitive, JsonValue

__all__ = [
    # Core errors
    "ErrorCode", "ToolError", "ToolException", "classify_exception",
    # Result
    "Result", "Ok", "Err",
    # Tool integration
    "ToolResult", "ToolEnvelope", "tool_result", "error_from_exception", "error_code_of",
    "from_tool_error", "to_tool_error", "result_to_string",
    # Error context
    "ErrorContext", "ErrorTrace",
    # JSON aliases
    "JsonDict", "JsonPrimitive", "JsonValue",
]
