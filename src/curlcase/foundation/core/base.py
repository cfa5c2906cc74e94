"""Core tool abstractions: BaseTool and ToolMetadata.

A tool is a typed parameter schema (a Pydantic model) plus an operation
returning a ToolResult. Failures travel as Err values; exceptions that
escape a tool are caught here and converted, so no invocation can take
the hosting process down.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..errors import (
    ErrorCode,
    ErrorTrace,
    Result,
    ToolException,
    ToolResult,
    error_from_exception,
    from_tool_error,
    result_to_string,
)
from ..errors.result import _ERR, _OK

if TYPE_CHECKING:
    from collections.abc import Coroutine


class ToolMetadata(BaseModel):
    """Metadata describing a tool to agents and servers.

    Attributes:
        name: Identifier exposed over the protocol (e.g., "curl", "parse-json")
        description: What the tool does (shown to the LLM for selection)
        category: Grouping category (e.g., "network", "data")
        enabled: Whether servers should expose the tool
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., pattern=r"^[a-z][a-z0-9_-]*$")
    description: str = Field(..., min_length=10)
    category: str = Field(default="general")
    enabled: bool = Field(default=True)


TParams = TypeVar("TParams", bound=BaseModel)


class BaseTool(ABC, Generic[TParams]):
    """Abstract base class for all tools.

    Subclasses must:
    - Define `metadata` class variable with ToolMetadata
    - Define `params_schema` class variable with the Pydantic model type
    - Implement `_run_result(params)` returning a ToolResult

    Tools doing I/O override `_async_run_result` with a native coroutine
    and implement `_run_result` through `_run_async_sync`.

    Example:
        >>> class EchoParams(BaseModel):
        ...     text: str = Field(..., description="Text to echo")
        ...
        >>> class EchoTool(BaseTool[EchoParams]):
        ...     metadata = ToolMetadata(name="echo", description="Echo text back to the caller")
        ...     params_schema = EchoParams
        ...
        ...     def _run_result(self, params: EchoParams) -> ToolResult:
        ...         return self._ok(params.text)
    """

    metadata: ClassVar[ToolMetadata]
    params_schema: ClassVar[type[BaseModel]]

    @property
    def enabled(self) -> bool:
        """Whether servers should expose this tool."""
        return self.metadata.enabled

    # ─────────────────────────────────────────────────────────────────
    # Result Helpers
    # ─────────────────────────────────────────────────────────────────

    def _ok(self, value: str) -> ToolResult:
        return Result(value, _OK)

    def _err(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        *,
        operation: str = "",
        recoverable: bool = True,
        details: str | None = None,
    ) -> ToolResult:
        """Create Err result attributed to this tool (and optionally an operation)."""
        trace = ErrorTrace(message, (), code.value, recoverable, details).with_operation(f"tool:{self.metadata.name}")
        return Result(trace.with_operation(operation) if operation else trace, _ERR)

    # ─────────────────────────────────────────────────────────────────
    # Async/Sync Interop
    # ─────────────────────────────────────────────────────────────────

    def _run_async_sync(self, coro: Coroutine[None, None, ToolResult]) -> ToolResult:
        """Run a coroutine from sync code, inside or outside a running event loop."""
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(coro)

        # Inside a running loop - use a worker thread with its own loop
        with ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()

    # ─────────────────────────────────────────────────────────────────
    # Core Execution
    # ─────────────────────────────────────────────────────────────────

    @abstractmethod
    def _run_result(self, params: TParams) -> ToolResult:
        """Execute the tool synchronously. The primary method to implement."""
        ...

    async def _async_run_result(self, params: TParams) -> ToolResult:
        """Execute asynchronously. Default runs `_run_result` in a worker thread."""
        return await asyncio.to_thread(self._run_result, params)

    def run_result(self, params: TParams) -> ToolResult:
        """Execute and return a ToolResult. Never raises."""
        try:
            return self._run_result(params)
        except ToolException as e:
            return from_tool_error(e.error)
        except Exception as e:
            return error_from_exception(self.metadata.name, e, "execution")

    async def arun_result(self, params: TParams, timeout: float | None = None) -> ToolResult:
        """Async execute with optional overall timeout (seconds). Never raises."""
        try:
            if timeout is None:
                return await self._async_run_result(params)
            return await asyncio.wait_for(self._async_run_result(params), timeout=timeout)
        except ToolException as e:
            return from_tool_error(e.error)
        except Exception as e:
            return error_from_exception(self.metadata.name, e, "async execution")

    def run(self, params: TParams) -> str:
        """Execute and render to text (error message on failure)."""
        return result_to_string(self.run_result(params), self.metadata.name)

    async def arun(self, params: TParams, timeout: float | None = None) -> str:
        return result_to_string(await self.arun_result(params, timeout), self.metadata.name)

    # ─────────────────────────────────────────────────────────────────
    # Invocation (kwargs interface)
    # ─────────────────────────────────────────────────────────────────

    def __call__(self, **kwargs: object) -> str:
        """Invoke with keyword arguments. Raises ValidationError on bad input."""
        params = self.params_schema(**kwargs)
        return self.run(params)  # type: ignore[arg-type]

    async def acall(self, **kwargs: object) -> str:
        params = self.params_schema(**kwargs)
        return await self.arun(params)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.metadata.name!r})"
