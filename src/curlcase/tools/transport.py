"""Outbound HTTP transport used by the curl tool.

The tool talks to an `HttpTransport`: one awaitable call taking a
TransportRequest and returning a TransportResponse, or raising
TransportError. `HttpxTransport` is the production implementation;
tests substitute fakes or an `httpx.MockTransport`.

Example:
    >>> transport = HttpxTransport(follow_redirects=True)
    >>> response = await transport.send(TransportRequest("GET", "https://example.com", {}, None, 10_000))
    >>> response.status_code
    200
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import httpx


@dataclass(frozen=True, slots=True)
class TransportRequest:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None
    timeout_ms: int = 10_000

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


@dataclass(frozen=True, slots=True)
class TransportResponse:
    status_code: int
    reason_phrase: str
    headers: dict[str, str] = field(default_factory=dict)
    text: str = ""


class TransportError(Exception):
    """The request could not be completed (connection, DNS, protocol, scheme)."""


class TransportTimeout(TransportError):
    """The request did not complete within its timeout."""


@runtime_checkable
class HttpTransport(Protocol):
    async def send(self, request: TransportRequest) -> TransportResponse: ...


class HttpxTransport:
    """httpx-backed transport. A fresh AsyncClient per request, closed afterwards."""

    __slots__ = ("_follow_redirects", "_max_redirects", "_verify", "_transport")

    def __init__(
        self,
        *,
        follow_redirects: bool = True,
        max_redirects: int = 20,
        verify_ssl: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._follow_redirects = follow_redirects
        self._max_redirects = max_redirects
        self._verify = verify_ssl
        self._transport = transport

    async def send(self, request: TransportRequest) -> TransportResponse:
        try:
            return await asyncio.wait_for(self._send(request), timeout=request.timeout_seconds)
        except (httpx.TimeoutException, TimeoutError) as e:
            raise TransportTimeout(f"Request timed out after {request.timeout_ms}ms") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(str(e) or type(e).__name__) from e

    async def _send(self, request: TransportRequest) -> TransportResponse:
        async with httpx.AsyncClient(
            follow_redirects=self._follow_redirects,
            max_redirects=self._max_redirects,
            verify=self._verify,
            timeout=request.timeout_seconds,
            transport=self._transport,
        ) as client:
            response = await client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
            return TransportResponse(
                status_code=response.status_code,
                reason_phrase=response.reason_phrase,
                headers=_header_map(response.headers),
                text=response.text,
            )


def _header_map(headers: httpx.Headers) -> dict[str, str]:
    """Lower-cased names; repeated headers joined with ", " in arrival order."""
    merged: dict[str, str] = {}
    for name, value in headers.multi_items():
        key = name.lower()
        merged[key] = f"{merged[key]}, {value}" if key in merged else value
    return merged
