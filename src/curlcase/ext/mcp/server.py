"""Server adapters exposing the registry's tools.

1. **FastMCP** - MCP protocol over stdio, SSE or streamable HTTP
2. **HTTP/REST** - plain JSON endpoints for web backends

Example - MCP (Claude Desktop, Cursor, ...):
    >>> from curlcase.ext.mcp import create_registry, serve_mcp
    >>> serve_mcp(create_registry())

Example - HTTP endpoints:
    >>> from curlcase.ext.mcp import create_http_app
    >>> app = create_http_app(create_registry())  # Starlette app
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Literal

import uvicorn
from fastmcp import FastMCP
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from curlcase.foundation.errors import ErrorCode, ToolEnvelope
from curlcase.foundation.registry import ToolRegistry
from curlcase.observability import StructuredLogger, get_logger

from .bridge import describe_tool, registry_to_mcp_tools

if TYPE_CHECKING:
    from curlcase.foundation.config import CurlcaseSettings
    from curlcase.tools import HttpTransport

Transport = Literal["stdio", "sse", "streamable-http"]

DEFAULT_NAME = "curl-api"
DEFAULT_VERSION = "1.0.0"


# ═══════════════════════════════════════════════════════════════════════════════
# Abstract Server Protocol
# ═══════════════════════════════════════════════════════════════════════════════


class ToolServer(ABC):
    """Shared base: a named server over one ToolRegistry."""

    __slots__ = ("_name", "_version", "_registry", "_log")

    def __init__(
        self,
        name: str,
        registry: ToolRegistry,
        *,
        version: str = DEFAULT_VERSION,
        log: StructuredLogger | None = None,
    ) -> None:
        self._name = name
        self._version = version
        self._registry = registry
        self._log = (log or get_logger("curlcase.server")).bind(server=name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def version(self) -> str:
        return self._version

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @abstractmethod
    def run(self, **kwargs: object) -> None:
        """Start the server (blocking)."""
        ...

    def list_tools(self) -> list[dict[str, object]]:
        """Enabled tools with their parameter schemas."""
        return [describe_tool(tool) for tool in self._registry.enabled()]

    async def invoke(self, tool_name: str, params: dict[str, object]) -> ToolEnvelope:
        """Run a tool by name. Failures come back as error envelopes, never raised."""
        return await self._registry.execute(tool_name, params)


# ═══════════════════════════════════════════════════════════════════════════════
# FastMCP Adapter
# ═══════════════════════════════════════════════════════════════════════════════


class MCPServer(ToolServer):
    """FastMCP-backed server for MCP clients.

    Example:
        >>> server = MCPServer("curl-api", registry)
        >>> server.run()  # stdio
    """

    __slots__ = ("_mcp",)

    def __init__(
        self,
        name: str,
        registry: ToolRegistry,
        *,
        version: str = DEFAULT_VERSION,
        log: StructuredLogger | None = None,
    ) -> None:
        super().__init__(name, registry, version=version, log=log)
        self._mcp = FastMCP(name, version=version)
        for mcp_tool in registry_to_mcp_tools(registry):
            self._mcp.add_tool(mcp_tool)

    def run(
        self,
        transport: Transport = "stdio",
        *,
        host: str = "127.0.0.1",
        port: int = 8080,
    ) -> None:
        """Start the MCP server. host/port only apply to the HTTP transports."""
        self._log.info("server running", version=self._version, transport=transport)
        if transport == "stdio":
            self._mcp.run()
        else:
            self._mcp.run(transport=transport, host=host, port=port)

    @property
    def fastmcp(self) -> FastMCP:
        return self._mcp


# ═══════════════════════════════════════════════════════════════════════════════
# HTTP REST Adapter
# ═══════════════════════════════════════════════════════════════════════════════

_ERROR_STATUS: dict[ErrorCode | None, int] = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.INVALID_PARAMS: 400,
    ErrorCode.PARSE_ERROR: 400,
    ErrorCode.NETWORK_ERROR: 502,
    ErrorCode.TIMEOUT: 502,
}


def status_for(envelope: ToolEnvelope) -> int:
    """HTTP status for an envelope: 200 on success, by error code otherwise."""
    return _ERROR_STATUS.get(envelope.code, 500) if envelope.is_error else 200


class HTTPToolServer(ToolServer):
    """Plain HTTP endpoints, no MCP session:

    - GET  /tools               → list tools
    - GET  /tools/{name}/schema → one tool's schema
    - POST /tools/{name}        → invoke with a JSON object body

    Invocation responses carry the MCP CallToolResult shape.

    Example:
        >>> server = HTTPToolServer("curl-api", registry)
        >>> server.run(host="0.0.0.0", port=8080)
    """

    __slots__ = ("_app",)

    def __init__(
        self,
        name: str,
        registry: ToolRegistry,
        *,
        version: str = DEFAULT_VERSION,
        log: StructuredLogger | None = None,
    ) -> None:
        super().__init__(name, registry, version=version, log=log)
        self._app = self._create_app()

    def _create_app(self) -> Starlette:
        async def list_tools(request: Request) -> JSONResponse:
            return JSONResponse({"server": self._name, "version": self._version, "tools": self.list_tools()})

        async def get_tool_schema(request: Request) -> JSONResponse:
            tool_name = request.path_params["name"]
            tool = self._registry.get(tool_name)
            if tool is None:
                return JSONResponse({"error": f"Tool '{tool_name}' not found"}, status_code=404)
            return JSONResponse(describe_tool(tool))

        async def invoke_tool(request: Request) -> JSONResponse:
            tool_name = request.path_params["name"]
            try:
                body = await request.json() if await request.body() else {}
            except ValueError:
                body = None
            if not isinstance(body, dict):
                envelope = ToolEnvelope(
                    content="Request body must be a JSON object", is_error=True, code=ErrorCode.INVALID_PARAMS,
                )
            else:
                envelope = await self.invoke(tool_name, body)
            return JSONResponse(envelope.to_mcp(), status_code=status_for(envelope))

        return Starlette(routes=[
            Route("/tools", list_tools, methods=["GET"]),
            Route("/tools/{name}", invoke_tool, methods=["POST"]),
            Route("/tools/{name}/schema", get_tool_schema, methods=["GET"]),
        ])

    def run(self, host: str = "127.0.0.1", port: int = 8080) -> None:
        """Start the HTTP server (uvicorn)."""
        self._log.info("server running", version=self._version, host=host, port=port)
        uvicorn.run(self._app, host=host, port=port, log_level="warning")

    @property
    def app(self) -> Starlette:
        """ASGI app, for embedding in a larger application."""
        return self._app


# ═══════════════════════════════════════════════════════════════════════════════
# Factory Functions
# ═══════════════════════════════════════════════════════════════════════════════


def create_registry(
    settings: CurlcaseSettings | None = None,
    *,
    transport: HttpTransport | None = None,
    log: StructuredLogger | None = None,
) -> ToolRegistry:
    """Registry holding the standard tools configured from settings."""
    from curlcase.tools import standard_tools

    registry = ToolRegistry(log=log)
    registry.register_all(*standard_tools(settings, transport=transport, log=log))
    return registry


def create_mcp_server(
    registry: ToolRegistry, name: str = DEFAULT_NAME, version: str = DEFAULT_VERSION,
) -> MCPServer:
    """Create an MCP server without starting it."""
    return MCPServer(name, registry, version=version)


def create_http_app(registry: ToolRegistry, name: str = DEFAULT_NAME) -> Starlette:
    """ASGI app without running it.

    Example:
        >>> from starlette.routing import Mount
        >>> app = Starlette(routes=[Mount("/api", app=create_http_app(registry))])
    """
    return HTTPToolServer(name, registry).app


def serve_mcp(
    registry: ToolRegistry,
    *,
    name: str = DEFAULT_NAME,
    version: str = DEFAULT_VERSION,
    transport: Transport = "stdio",
    host: str = "127.0.0.1",
    port: int = 8080,
) -> None:
    """Expose tools over MCP (blocking).

    Args:
        registry: Tool registry to expose
        name: Server name shown to clients
        version: Server version shown to clients
        transport: "stdio", "sse" or "streamable-http"
        host: Host for HTTP transports
        port: Port for HTTP transports
    """
    create_mcp_server(registry, name, version).run(transport=transport, host=host, port=port)


def serve_http(
    registry: ToolRegistry,
    *,
    name: str = DEFAULT_NAME,
    host: str = "127.0.0.1",
    port: int = 8080,
) -> None:
    """Expose tools over plain HTTP endpoints (blocking)."""
    HTTPToolServer(name, registry).run(host=host, port=port)
