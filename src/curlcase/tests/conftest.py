"""Shared fixtures: fake transports, captured logs, isolated settings."""

from __future__ import annotations

import pytest

from curlcase.foundation.config import clear_settings_cache
from curlcase.observability import BoundLogger, CaptureRenderer, configure_logging
from curlcase.tools import TransportError, TransportRequest, TransportResponse


class FakeTransport:
    """Records every request and answers with a canned response (or raises)."""

    def __init__(
        self,
        response: TransportResponse | None = None,
        *,
        error: Exception | None = None,
    ) -> None:
        self.response = response or TransportResponse(200, "OK", {"content-type": "application/json"}, '{"ok": true}')
        self.error = error
        self.requests: list[TransportRequest] = []

    async def send(self, request: TransportRequest) -> TransportResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last(self) -> TransportRequest:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def _quiet_logs_and_fresh_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("CURLCASE_DEBUG", "CURLCASE_LOG_LEVEL", "CURLCASE_LOG_FORMAT", "CURLCASE_HTTP_FOLLOW_REDIRECTS",
                "CURLCASE_HTTP_MAX_REDIRECTS", "CURLCASE_HTTP_VERIFY_SSL", "CURLCASE_SERVER_NAME",
                "CURLCASE_SERVER_TRANSPORT", "CURLCASE_SERVER_PORT", "CURLCASE_ENVIRONMENT"):
        monkeypatch.delenv(var, raising=False)
    configure_logging(format="none")
    clear_settings_cache()


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def capture() -> CaptureRenderer:
    return CaptureRenderer()


@pytest.fixture
def captured_log(capture: CaptureRenderer) -> BoundLogger:
    return BoundLogger({"logger": "test"}, capture)


@pytest.fixture
def connection_reset() -> TransportError:
    return TransportError("Connection reset by peer")
