"""Tests for the curlcase command line."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from curlcase import cli as cli_module
from curlcase.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_tools_lists_both(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--log-format", "none", "tools"])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0].startswith("curl ")
    assert lines[1].startswith("parse-json ")


def test_call_parse_json(runner: CliRunner) -> None:
    result = runner.invoke(
        cli, ["--log-format", "none", "call", "parse-json", "--params", '{"json": "{\\"a\\": [1, 2]}", "path": "a.1"}'],
    )
    assert result.exit_code == 0
    assert result.stdout == "2\n"


def test_call_error_exits_nonzero(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--log-format", "none", "call", "parse-json", "--params", '{"json": "{nope"}'])
    assert result.exit_code == 1
    assert "Error parsing JSON: " in result.output


def test_call_unknown_tool(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--log-format", "none", "call", "wget"])
    assert result.exit_code == 1


@pytest.mark.parametrize("params", ["{bad", "[1]"])
def test_call_rejects_bad_params(runner: CliRunner, params: str) -> None:
    result = runner.invoke(cli, ["--log-format", "none", "call", "parse-json", "--params", params])
    assert result.exit_code == 1
    assert "--params" in result.output


def test_serve_passes_settings(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []

    def fake_serve(registry, **kwargs: object) -> None:
        calls.append({"tools": registry.list_tools(), **kwargs})

    monkeypatch.setattr("curlcase.ext.mcp.serve_mcp", fake_serve)
    monkeypatch.setenv("CURLCASE_SERVER_PORT", "9100")

    result = runner.invoke(cli, ["--log-format", "none", "serve", "--transport", "sse"])

    assert result.exit_code == 0
    assert calls == [{
        "tools": ["curl", "parse-json"],
        "name": "curl-api",
        "version": "1.0.0",
        "transport": "sse",
        "host": "127.0.0.1",
        "port": 9100,
    }]


def test_serve_startup_failure_exits_1(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(registry, **kwargs: object) -> None:
        raise OSError("address already in use")

    monkeypatch.setattr("curlcase.ext.mcp.serve_mcp", broken)
    result = runner.invoke(cli, ["--log-format", "json", "serve"])

    assert result.exit_code == 1
    assert "error starting server" in result.output


def test_serve_http_passes_host_and_port(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []
    monkeypatch.setattr("curlcase.ext.mcp.serve_http", lambda registry, **kw: calls.append(kw))

    result = runner.invoke(cli, ["--log-format", "none", "serve-http", "--host", "0.0.0.0", "--port", "8181"])

    assert result.exit_code == 0
    assert calls == [{"name": "curl-api", "host": "0.0.0.0", "port": 8181}]


def test_main_is_the_console_entry_point() -> None:
    assert callable(cli_module.main)
