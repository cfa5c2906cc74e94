"""Built-in tools: curl and parse-json.

Quick Start:
    >>> from curlcase.foundation.registry import ToolRegistry
    >>> from curlcase.tools import standard_tools
    >>>
    >>> registry = ToolRegistry()
    >>> registry.register_all(*standard_tools())

Individual Tools:
    >>> from curlcase.tools import CurlConfig, CurlTool
    >>>
    >>> curl = CurlTool(CurlConfig(follow_redirects=False, default_headers={"Accept": "text/plain"}))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import ConfigurableTool, ToolConfig
from .extract import ABSENT, ParseJsonParams, ParseJsonTool, extract_path, get_property, render_value
from .http import DEFAULT_HEADERS, CurlConfig, CurlParams, CurlResponse, CurlTool, HttpMethod
from .transport import (
    HttpTransport,
    HttpxTransport,
    TransportError,
    TransportRequest,
    TransportResponse,
    TransportTimeout,
)

if TYPE_CHECKING:
    from pydantic import BaseModel

    from curlcase.foundation.config import CurlcaseSettings
    from curlcase.foundation.core import BaseTool
    from curlcase.observability import StructuredLogger


def standard_tools(
    settings: CurlcaseSettings | None = None,
    *,
    transport: HttpTransport | None = None,
    log: StructuredLogger | None = None,
) -> list[BaseTool[BaseModel]]:
    """Both tools, configured from settings (the process settings when omitted).

    Example:
        >>> registry.register_all(*standard_tools())
    """
    from curlcase.foundation.config import get_settings

    settings = settings or get_settings()
    return [
        CurlTool(CurlConfig.from_settings(settings.http), transport=transport, log=log),
        ParseJsonTool(),
    ]


__all__ = [
    # Factory
    "standard_tools",
    # Base
    "ToolConfig", "ConfigurableTool",
    # curl
    "CurlTool", "CurlConfig", "CurlParams", "CurlResponse", "HttpMethod", "DEFAULT_HEADERS",
    # Transport
    "HttpTransport", "HttpxTransport", "TransportRequest", "TransportResponse",
    "TransportError", "TransportTimeout",
    # parse-json
    "ParseJsonTool", "ParseJsonParams", "ABSENT", "get_property", "extract_path", "render_value",
]
