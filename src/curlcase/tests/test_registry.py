"""Tests for ToolRegistry, BaseTool boundary handling and ToolEnvelope."""

from __future__ import annotations

import asyncio
from typing import ClassVar

import pytest
from pydantic import BaseModel, Field

from curlcase.foundation.core import BaseTool, ToolMetadata
from curlcase.foundation.errors import ErrorCode, ToolEnvelope, ToolError, ToolException, ToolResult
from curlcase.foundation.registry import ToolRegistry
from curlcase.observability import CaptureRenderer
from curlcase.tools import ParseJsonTool


class EchoParams(BaseModel):
    text: str = Field(..., description="Text to echo")


class EchoTool(BaseTool[EchoParams]):
    metadata: ClassVar[ToolMetadata] = ToolMetadata(name="echo", description="Echo text back to the caller")
    params_schema: ClassVar[type[EchoParams]] = EchoParams

    def _run_result(self, params: EchoParams) -> ToolResult:
        return self._ok(params.text)


class ExplodingTool(BaseTool[EchoParams]):
    metadata: ClassVar[ToolMetadata] = ToolMetadata(name="explode", description="Always raises an exception")
    params_schema: ClassVar[type[EchoParams]] = EchoParams

    def _run_result(self, params: EchoParams) -> ToolResult:
        raise ValueError(f"bad input: {params.text}")


class RaisingToolErrorTool(BaseTool[EchoParams]):
    metadata: ClassVar[ToolMetadata] = ToolMetadata(name="refuse", description="Raises a structured tool error")
    params_schema: ClassVar[type[EchoParams]] = EchoParams

    def _run_result(self, params: EchoParams) -> ToolResult:
        raise ToolException(ToolError.create("refuse", "Refusing politely", ErrorCode.INVALID_PARAMS, recoverable=False))


class SlowTool(BaseTool[EchoParams]):
    metadata: ClassVar[ToolMetadata] = ToolMetadata(name="slow", description="Sleeps before answering")
    params_schema: ClassVar[type[EchoParams]] = EchoParams

    def _run_result(self, params: EchoParams) -> ToolResult:
        return self._ok(params.text)

    async def _async_run_result(self, params: EchoParams) -> ToolResult:
        await asyncio.sleep(1)
        return self._ok(params.text)


class DisabledTool(EchoTool):
    metadata: ClassVar[ToolMetadata] = ToolMetadata(
        name="disabled", description="Registered but not exposed", enabled=False,
    )


@pytest.fixture
def registry() -> ToolRegistry:
    registry = ToolRegistry()
    registry.register_all(EchoTool(), ExplodingTool(), RaisingToolErrorTool(), DisabledTool())
    return registry


# ─────────────────────────────────────────────────────────────────────────────
# Registration
# ─────────────────────────────────────────────────────────────────────────────


def test_lookup(registry: ToolRegistry) -> None:
    assert "echo" in registry
    assert len(registry) == 4
    assert isinstance(registry["echo"], EchoTool)
    assert registry.get("missing") is None
    assert registry.list_tools() == ["echo", "explode", "refuse", "disabled"]


def test_duplicate_registration_rejected(registry: ToolRegistry) -> None:
    with pytest.raises(ValueError, match="already registered"):
        registry.register(EchoTool())


def test_unregister(registry: ToolRegistry) -> None:
    assert registry.unregister("echo")
    assert not registry.unregister("echo")
    assert "echo" not in registry


def test_enabled_filters_disabled_tools(registry: ToolRegistry) -> None:
    assert [t.metadata.name for t in registry.enabled()] == ["echo", "explode", "refuse"]


def test_metadata_name_pattern() -> None:
    with pytest.raises(ValueError):
        ToolMetadata(name="Not Valid", description="Some description here")


# ─────────────────────────────────────────────────────────────────────────────
# Execution
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_execute_success(registry: ToolRegistry) -> None:
    envelope = await registry.execute("echo", {"text": "hi"})
    assert envelope == ToolEnvelope(content="hi")
    assert envelope.to_mcp() == {"content": [{"type": "text", "text": "hi"}]}


@pytest.mark.asyncio
async def test_execute_accepts_validated_model(registry: ToolRegistry) -> None:
    envelope = await registry.execute("echo", EchoParams(text="model"))
    assert envelope.content == "model"


@pytest.mark.asyncio
async def test_unknown_tool(registry: ToolRegistry) -> None:
    envelope = await registry.execute("nope", {})
    assert envelope.is_error
    assert envelope.code == ErrorCode.NOT_FOUND
    assert envelope.content == "Tool 'nope' not found"


@pytest.mark.asyncio
async def test_invalid_params_are_logged(capture: CaptureRenderer, captured_log) -> None:
    registry = ToolRegistry(log=captured_log)
    registry.register(EchoTool())

    envelope = await registry.execute("echo", {"text": 5})

    assert envelope.code == ErrorCode.INVALID_PARAMS
    assert envelope.content.startswith("Invalid parameters for 'echo': text: ")
    assert capture.events("warning") == ["invalid invocation"]


@pytest.mark.asyncio
async def test_escaped_exception_becomes_error_envelope(registry: ToolRegistry) -> None:
    envelope = await registry.execute("explode", {"text": "x"})
    assert envelope.is_error
    assert "bad input: x" in envelope.content
    assert envelope.code == ErrorCode.INVALID_PARAMS


@pytest.mark.asyncio
async def test_tool_exception_keeps_its_error(registry: ToolRegistry) -> None:
    envelope = await registry.execute("refuse", {"text": "x"})
    assert envelope == ToolEnvelope(content="Refusing politely", is_error=True, code=ErrorCode.INVALID_PARAMS)


def test_execute_sync(registry: ToolRegistry) -> None:
    assert registry.execute_sync("echo", {"text": "sync"}).content == "sync"
    assert registry.execute_sync("nope", {}).code == ErrorCode.NOT_FOUND
    assert registry.execute_sync("explode", {"text": "y"}).is_error


@pytest.mark.asyncio
async def test_arun_result_timeout() -> None:
    result = await SlowTool().arun_result(EchoParams(text="late"), timeout=0.01)
    assert result.is_err()
    assert result.unwrap_err().error_code == ErrorCode.TIMEOUT


@pytest.mark.asyncio
async def test_concurrent_invocations_are_independent() -> None:
    registry = ToolRegistry()
    registry.register(ParseJsonTool())

    envelopes = await asyncio.gather(*(
        registry.execute("parse-json", {"json": f'{{"n": {i}}}', "path": "n"}) for i in range(20)
    ))
    assert [e.content for e in envelopes] == [str(i) for i in range(20)]


# ─────────────────────────────────────────────────────────────────────────────
# ToolError / Envelope
# ─────────────────────────────────────────────────────────────────────────────


def test_tool_error_render_is_message_only() -> None:
    error = ToolError.create("curl", "Error making request: boom", ErrorCode.NETWORK_ERROR)
    assert error.render() == "Error making request: boom"


def test_envelope_from_error() -> None:
    envelope = ToolEnvelope.from_error(ToolError.create("x", "Tool 'x' not found", ErrorCode.NOT_FOUND))
    assert envelope.to_mcp() == {"content": [{"type": "text", "text": "Tool 'x' not found"}], "isError": True}


def test_envelope_forbids_unknown_fields() -> None:
    with pytest.raises(ValueError):
        ToolEnvelope(content="x", extra="nope")
