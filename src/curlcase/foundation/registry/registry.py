"""Central registry for tool lookup and validated execution.

The registry is the boundary every protocol adapter goes through:
it resolves the tool, validates raw parameters against the tool's
schema, and always answers with a ToolEnvelope.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ValidationError

from curlcase.observability import StructuredLogger, get_logger

from ..core import BaseTool
from ..errors import ErrorCode, ToolEnvelope, ToolError


def _format_validation_error(exc: ValidationError) -> str:
    """One line per problem: `field: message`."""
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'params'}: {err['msg']}" for err in exc.errors()
    )


class ToolRegistry:
    """Registry of available tools.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register(ParseJsonTool())
        >>> envelope = await registry.execute("parse-json", {"json": '{"a": 1}', "path": "a"})
        >>> envelope.content
        '1'
    """

    __slots__ = ("_tools", "_log")

    def __init__(self, log: StructuredLogger | None = None) -> None:
        self._tools: dict[str, BaseTool[BaseModel]] = {}
        self._log = log or get_logger("curlcase.registry")

    def register(self, tool: BaseTool[BaseModel]) -> None:
        """Register a tool instance. Names must be unique."""
        name = tool.metadata.name
        if name in self._tools:
            raise ValueError(f"Tool '{name}' already registered. Use unregister() first.")
        self._tools[name] = tool

    def register_all(self, *tools: BaseTool[BaseModel]) -> None:
        for tool in tools:
            self.register(tool)

    def unregister(self, name: str) -> bool:
        return self._tools.pop(name, None) is not None

    def get(self, name: str) -> BaseTool[BaseModel] | None:
        return self._tools.get(name)

    def __getitem__(self, name: str) -> BaseTool[BaseModel]:
        return self._tools[name]

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[BaseTool[BaseModel]]:
        return iter(self._tools.values())

    def enabled(self) -> list[BaseTool[BaseModel]]:
        return [t for t in self._tools.values() if t.enabled]

    def list_tools(self) -> list[str]:
        return list(self._tools)

    # ─────────────────────────────────────────────────────────────────
    # Execution
    # ─────────────────────────────────────────────────────────────────

    def validate(self, name: str, params: dict[str, object] | BaseModel) -> BaseModel | ToolError:
        """Resolve a tool and validate params. Returns a ToolError instead of raising."""
        tool = self._tools.get(name)
        if tool is None:
            return ToolError.create(name, f"Tool '{name}' not found", ErrorCode.NOT_FOUND, recoverable=False)
        if isinstance(params, BaseModel):
            return params
        try:
            return tool.params_schema(**params)
        except ValidationError as e:
            return ToolError.create(
                name, f"Invalid parameters for '{name}': {_format_validation_error(e)}",
                ErrorCode.INVALID_PARAMS, recoverable=False,
            )

    async def execute(self, name: str, params: dict[str, object] | BaseModel) -> ToolEnvelope:
        """Validate and run a tool, always returning an envelope.

        Example:
            >>> envelope = await registry.execute("curl", {"url": "https://example.com"})
            >>> envelope.is_error
            False
        """
        validated = self.validate(name, params)
        if isinstance(validated, ToolError):
            self._log.warning("invalid invocation", tool=name, error=validated.message)
            return ToolEnvelope.from_error(validated)

        return ToolEnvelope.from_result(await self._tools[name].arun_result(validated))

    def execute_sync(self, name: str, params: dict[str, object] | BaseModel) -> ToolEnvelope:
        """Synchronous execute() for callers without an event loop."""
        validated = self.validate(name, params)
        if isinstance(validated, ToolError):
            return ToolEnvelope.from_error(validated)
        return ToolEnvelope.from_result(self._tools[name].run_result(validated))
