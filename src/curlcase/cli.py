"""`curlcase` command line.

    curlcase serve                       # MCP over stdio
    curlcase serve --transport sse --port 9000
    curlcase serve-http --port 8080      # plain HTTP endpoints
    curlcase tools
    curlcase call parse-json --params '{"json": "{\\"a\\": 1}", "path": "a"}'
"""

from __future__ import annotations

import click

from curlcase.foundation.codec import JSONDecodeError, loads
from curlcase.foundation.config import CurlcaseSettings, get_settings
from curlcase.observability import configure_logging, get_logger


@click.group()
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              default=None, help="Override CURLCASE_LOG_LEVEL")
@click.option("--log-format", type=click.Choice(["console", "json", "none"]), default=None,
              help="Override CURLCASE_LOG_FORMAT")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, log_format: str | None) -> None:
    """Curl API tools for MCP clients."""
    settings = get_settings()
    configure_logging(log_format or settings.logging.format, log_level or settings.log_level)
    ctx.obj = settings


@cli.command()
@click.option("--transport", "-t", type=click.Choice(["stdio", "sse", "streamable-http"]), default=None,
              help="MCP transport (default from CURLCASE_SERVER_TRANSPORT)")
@click.option("--host", type=str, default=None, help="Bind host for HTTP transports")
@click.option("--port", "-p", type=int, default=None, help="Bind port for HTTP transports")
@click.pass_obj
def serve(settings: CurlcaseSettings, transport: str | None, host: str | None, port: int | None) -> None:
    """Run the MCP server."""
    from curlcase.ext.mcp import create_registry, serve_mcp

    log = get_logger("curlcase.cli")
    try:
        serve_mcp(
            create_registry(settings),
            name=settings.server.name,
            version=settings.server.version,
            transport=transport or settings.server.transport,  # type: ignore[arg-type]
            host=host or settings.server.host,
            port=port or settings.server.port,
        )
    except Exception as e:
        log.error("error starting server", error=str(e) or type(e).__name__)
        raise SystemExit(1) from e


@cli.command("serve-http")
@click.option("--host", type=str, default=None, help="Bind host (default from CURLCASE_SERVER_HOST)")
@click.option("--port", "-p", type=int, default=None, help="Bind port (default from CURLCASE_SERVER_PORT)")
@click.pass_obj
def serve_http_command(settings: CurlcaseSettings, host: str | None, port: int | None) -> None:
    """Run the plain HTTP tool server."""
    from curlcase.ext.mcp import create_registry, serve_http

    log = get_logger("curlcase.cli")
    try:
        serve_http(
            create_registry(settings),
            name=settings.server.name,
            host=host or settings.server.host,
            port=port or settings.server.port,
        )
    except Exception as e:
        log.error("error starting server", error=str(e) or type(e).__name__)
        raise SystemExit(1) from e


@cli.command()
@click.pass_obj
def tools(settings: CurlcaseSettings) -> None:
    """List the available tools."""
    from curlcase.ext.mcp import create_registry

    for tool in create_registry(settings).enabled():
        click.echo(f"{tool.metadata.name:<12} {tool.metadata.description}")


@cli.command()
@click.argument("name")
@click.option("--params", "params_json", type=str, default="{}", help="Tool parameters as a JSON object")
@click.pass_obj
def call(settings: CurlcaseSettings, name: str, params_json: str) -> None:
    """Invoke one tool and print its output."""
    from curlcase.ext.mcp import create_registry

    try:
        params = loads(params_json)
    except JSONDecodeError as e:
        raise click.ClickException(f"--params is not valid JSON: {e}") from e
    if not isinstance(params, dict):
        raise click.ClickException("--params must be a JSON object")

    envelope = create_registry(settings).execute_sync(name, params)
    if envelope.is_error:
        click.echo(envelope.content, err=True)
        raise SystemExit(1)
    click.echo(envelope.content)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
