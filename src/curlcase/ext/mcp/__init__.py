"""MCP and HTTP serving for curlcase tools.

    >>> from curlcase.ext.mcp import create_registry, serve_mcp
    >>> serve_mcp(create_registry(), transport="stdio")
"""

from .bridge import (
    RegistryTool,
    describe_tool,
    get_required_params,
    get_tool_properties,
    get_tool_schema,
    registry_to_mcp_tools,
)
from .server import (
    DEFAULT_NAME,
    DEFAULT_VERSION,
    HTTPToolServer,
    MCPServer,
    ToolServer,
    Transport,
    create_http_app,
    create_mcp_server,
    create_registry,
    serve_http,
    serve_mcp,
    status_for,
)

__all__ = [
    # Servers
    "ToolServer", "MCPServer", "HTTPToolServer", "Transport", "DEFAULT_NAME", "DEFAULT_VERSION",
    # Factories
    "create_registry", "create_mcp_server", "create_http_app", "serve_mcp", "serve_http", "status_for",
    # Bridge
    "RegistryTool", "registry_to_mcp_tools", "describe_tool",
    "get_tool_schema", "get_tool_properties", "get_required_params",
]
