"""curl tool - one HTTP request, normalized into a JSON envelope.

Any HTTP status is a successful call: the caller gets the status, reason
phrase, response headers and body back. Only transport failures
(connection, DNS, timeout) are errors.

Example:
    >>> curl = CurlTool()
    >>> print(await curl.acall(url="https://api.example.com/users/1"))
    {
      "status": 200,
      "statusText": "OK",
      "headers": {
        "content-type": "application/json"
      },
      "data": "{\\n  \\"id\\": 1\\n}"
    }

    >>> # Restrict redirect handling
    >>> curl = CurlTool(CurlConfig(follow_redirects=False))
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any, ClassVar, Literal

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from curlcase.foundation.codec import JSONEncodeError, Parsed, Raw, dumps, dumps_pretty, sniff_json
from curlcase.foundation.core import ToolMetadata
from curlcase.foundation.errors import ErrorCode, ToolResult, classify_exception
from curlcase.observability import StructuredLogger, get_logger

from .base import ConfigurableTool, ToolConfig
from .transport import (
    HttpTransport,
    HttpxTransport,
    TransportError,
    TransportRequest,
    TransportResponse,
    TransportTimeout,
)

if TYPE_CHECKING:
    from curlcase.foundation.config import HttpSettings

HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH"]

DEFAULT_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

_URL: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


# ─────────────────────────────────────────────────────────────────────────────
# Configuration
# ─────────────────────────────────────────────────────────────────────────────


class CurlConfig(ToolConfig):
    """Instance-level settings for CurlTool.

    Attributes:
        default_headers: Sent when a call supplies no headers at all
        follow_redirects: Follow 3xx responses
        max_redirects: Redirect hops before giving up
        verify_ssl: Verify TLS certificates
    """

    default_headers: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_HEADERS))
    follow_redirects: bool = True
    max_redirects: Annotated[int, Field(ge=0, le=50)] = 20
    verify_ssl: bool = True

    @classmethod
    def from_settings(cls, settings: HttpSettings) -> CurlConfig:
        return cls(
            follow_redirects=settings.follow_redirects,
            max_redirects=settings.max_redirects,
            verify_ssl=settings.verify_ssl,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Parameters
# ─────────────────────────────────────────────────────────────────────────────


class CurlParams(BaseModel):
    """Parameters for one HTTP request.

    Attributes:
        url: Absolute URL (checked before any network call)
        method: HTTP method, GET by default
        headers: Request headers; when given they replace the defaults entirely
        body: Request body for non-GET methods (strings sent verbatim, anything else as JSON)
        timeout: Timeout in milliseconds
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "examples": [
                {"url": "https://api.example.com/data"},
                {"url": "https://api.example.com/users", "method": "POST", "body": {"name": "Ada"}},
            ],
        },
    )

    url: str = Field(..., description="The URL to make a request to", json_schema_extra={"format": "uri"})
    method: HttpMethod = Field(default="GET", description="HTTP method to use")
    headers: dict[str, str] | None = Field(default=None, description="HTTP headers to include with the request")
    body: Any = Field(default=None, description="Request body (for POST, PUT, PATCH requests)")
    timeout: Annotated[int, Field(ge=1000, le=30000)] = Field(
        default=10000, description="Request timeout in milliseconds",
    )

    @field_validator("url")
    @classmethod
    def _check_url(cls, v: str) -> str:
        """Must parse as an absolute URL. The caller's string is kept unnormalized."""
        try:
            _URL.validate_python(v)
        except ValidationError as e:
            raise ValueError(f"Invalid URL: {e.errors()[0]['msg']}") from e
        return v

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @property
    def has_body(self) -> bool:
        """Whether the caller supplied a body (an explicit null counts)."""
        return "body" in self.model_fields_set


# ─────────────────────────────────────────────────────────────────────────────
# Response Envelope
# ─────────────────────────────────────────────────────────────────────────────


class CurlResponse(BaseModel):
    """What the caller gets back for any completed request."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    status: int
    status_text: str = Field(alias="statusText")
    headers: dict[str, str] = Field(repr=False)
    data: str = Field(repr=False)

    @classmethod
    def from_transport(cls, response: TransportResponse) -> CurlResponse:
        match sniff_json(response.text):
            case Parsed(value):
                data = dumps_pretty(value)
            case Raw(text):
                data = text
        return cls(
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=response.headers,
            data=data,
        )

    def to_output(self) -> str:
        return dumps_pretty(self.model_dump(by_alias=True))


# ─────────────────────────────────────────────────────────────────────────────
# Tool
# ─────────────────────────────────────────────────────────────────────────────


class CurlTool(ConfigurableTool[CurlParams, CurlConfig]):
    """Makes one HTTP request and returns the normalized response.

    The transport is injectable; without one, an HttpxTransport is built
    from the current config for each call.

    Example:
        >>> curl = CurlTool(transport=HttpxTransport(verify_ssl=False))
        >>> result = await curl.arun_result(CurlParams(url="https://self-signed.local"))
    """

    metadata: ClassVar[ToolMetadata] = ToolMetadata(
        name="curl",
        description="Makes an HTTP request to a URL and returns the response",
        category="network",
    )
    params_schema: ClassVar[type[CurlParams]] = CurlParams
    config_class: ClassVar[type[CurlConfig]] = CurlConfig

    def __init__(
        self,
        config: CurlConfig | None = None,
        *,
        transport: HttpTransport | None = None,
        log: StructuredLogger | None = None,
    ) -> None:
        super().__init__(config)
        self._transport = transport
        self._log = (log or get_logger("curlcase.tools")).bind(tool=self.metadata.name)

    @property
    def transport(self) -> HttpTransport:
        if self._transport is not None:
            return self._transport
        return HttpxTransport(
            follow_redirects=self.config.follow_redirects,
            max_redirects=self.config.max_redirects,
            verify_ssl=self.config.verify_ssl,
        )

    def build_request(self, params: CurlParams) -> TransportRequest:
        """Resolve headers and body into the outbound request."""
        headers = dict(params.headers) if params.headers is not None else dict(self.config.default_headers)
        body: str | None = None
        if params.method != "GET" and params.has_body:
            body = params.body if isinstance(params.body, str) else dumps(params.body)
        return TransportRequest(params.method, params.url, headers, body, params.timeout)

    def _run_result(self, params: CurlParams) -> ToolResult:
        return self._run_async_sync(self._async_run_result(params))

    async def _async_run_result(self, params: CurlParams) -> ToolResult:
        self._log.info("making request", method=params.method, url=params.url)

        try:
            response = await self.transport.send(self.build_request(params))
        except Exception as e:
            reason = str(e) or type(e).__name__
            self._log.error("request failed", method=params.method, url=params.url, error=reason)
            return self._err(f"Error making request: {reason}", _failure_code(e), operation="request")

        return self._ok(CurlResponse.from_transport(response).to_output())


def _failure_code(exc: Exception) -> ErrorCode:
    if isinstance(exc, TransportTimeout):
        return ErrorCode.TIMEOUT
    if isinstance(exc, TransportError):
        return ErrorCode.NETWORK_ERROR
    if isinstance(exc, JSONEncodeError):
        return ErrorCode.INVALID_PARAMS
    return classify_exception(exc)
