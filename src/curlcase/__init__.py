"""curlcase - HTTP request and JSON extraction tools for AI agents.

Two tools, served over MCP or plain HTTP:

- **curl**: make one HTTP request, get back status, headers and body as JSON
- **parse-json**: parse a JSON document, optionally pulling out a dotted path

Quick Start:
    >>> from curlcase import create_registry
    >>>
    >>> registry = create_registry()
    >>> envelope = registry.execute_sync("parse-json", {"json": '{"a": {"b": 42}}', "path": "a.b"})
    >>> envelope.content
    '42'

Serving:
    >>> from curlcase import serve_mcp
    >>> serve_mcp(create_registry())  # stdio, for Claude Desktop / Cursor

    $ curlcase serve --transport sse --port 9000
"""

from .ext.mcp import HTTPToolServer, MCPServer, create_http_app, create_registry, serve_http, serve_mcp
from .foundation.config import CurlcaseSettings, get_settings
from .foundation.core import BaseTool, ToolMetadata
from .foundation.errors import Err, ErrorCode, Ok, Result, ToolEnvelope, ToolError, ToolException, ToolResult
from .foundation.registry import ToolRegistry
from .observability import configure_logging, get_logger
from .tools import (
    CurlConfig,
    CurlParams,
    CurlTool,
    HttpxTransport,
    ParseJsonParams,
    ParseJsonTool,
    standard_tools,
)

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Core
    "BaseTool", "ToolMetadata", "ToolRegistry",
    # Errors
    "ErrorCode", "ToolError", "ToolException", "ToolEnvelope", "ToolResult", "Result", "Ok", "Err",
    # Tools
    "CurlTool", "CurlConfig", "CurlParams", "HttpxTransport", "ParseJsonTool", "ParseJsonParams", "standard_tools",
    # Serving
    "MCPServer", "HTTPToolServer", "create_registry", "create_http_app", "serve_mcp", "serve_http",
    # Config & logging
    "CurlcaseSettings", "get_settings", "configure_logging", "get_logger",
]
