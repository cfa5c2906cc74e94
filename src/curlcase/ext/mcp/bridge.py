"""Bridge between curlcase tools and MCP tool primitives.

Each registered tool is exposed to FastMCP as a RegistryTool: the input
schema is the tool's params_schema, and calls go through the registry,
which does the authoritative validation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastmcp.tools import Tool, ToolResult
from pydantic import BaseModel, PrivateAttr

from curlcase.foundation.registry import ToolRegistry

if TYPE_CHECKING:
    from curlcase.foundation.core import BaseTool


def get_tool_schema(tool: BaseTool[BaseModel]) -> dict[str, object]:
    """JSON schema of the tool's params, without pydantic-specific keys."""
    schema = tool.params_schema.model_json_schema()
    for key in ("title", "$defs", "definitions", "examples"):
        schema.pop(key, None)
    return schema


def get_tool_properties(tool: BaseTool[BaseModel]) -> dict[str, dict[str, object]]:
    """Property definitions with their `title` entries removed."""
    properties = tool.params_schema.model_json_schema().get("properties", {})
    return {
        name: {k: v for k, v in prop.items() if k != "title"}
        for name, prop in properties.items()
    }


def get_required_params(tool: BaseTool[BaseModel]) -> list[str]:
    return tool.params_schema.model_json_schema().get("required", [])


def describe_tool(tool: BaseTool[BaseModel]) -> dict[str, object]:
    return {
        "name": tool.metadata.name,
        "description": tool.metadata.description,
        "category": tool.metadata.category,
        "parameters": {
            "type": "object",
            "properties": get_tool_properties(tool),
            "required": get_required_params(tool),
        },
    }


# ─────────────────────────────────────────────────────────────────────────────
# FastMCP Tools
# ─────────────────────────────────────────────────────────────────────────────


class RegistryTool(Tool):
    """FastMCP tool that hands the client's arguments to the registry untouched.

    The advertised input schema comes from the tool's params_schema, but the
    registry does the validation. Only arguments the client actually sent
    reach it, so `"body": null` stays distinct from an omitted body.
    """

    _registry: ToolRegistry = PrivateAttr()

    @classmethod
    def from_tool(cls, tool: BaseTool[BaseModel], registry: ToolRegistry) -> RegistryTool:
        mcp_tool = cls(
            name=tool.metadata.name,
            description=tool.metadata.description,
            parameters=get_tool_schema(tool),
            tags={tool.metadata.category},
        )
        mcp_tool._registry = registry
        return mcp_tool

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        envelope = await self._registry.execute(self.name, arguments)
        return ToolResult(content=envelope.content, is_error=envelope.is_error)


def registry_to_mcp_tools(registry: ToolRegistry, *, enabled_only: bool = True) -> list[RegistryTool]:
    """One FastMCP tool per registered tool, in registration order."""
    return [
        RegistryTool.from_tool(tool, registry)
        for tool in registry
        if not enabled_only or tool.enabled
    ]
