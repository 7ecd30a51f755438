"""``ehq-mcp serve``: run the server on the configured transports."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from ehq_mcp.cli_commands._output import err_console, print_banner

if TYPE_CHECKING:
    from ehq_mcp.config import TransportSettings
    from ehq_mcp.transports import ServerRunner


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML config file.",
)
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.option("--http", "http_port", type=click.IntRange(1, 65535), default=None, help="Serve HTTP on this port.")
@click.option("--ws", "ws_port", type=click.IntRange(1, 65535), default=None, help="Serve WebSocket on this port.")
@click.option("--stdio-only", is_flag=True, help="Serve stdio only, ignoring any configured ports.")
@click.option("--host", default=None, help="Bind address for network transports.")
@click.option("--telemetry", is_flag=True, help="Enable telemetry.")
def serve(
    config_path: str | None,
    debug: bool,
    http_port: int | None,
    ws_port: int | None,
    stdio_only: bool,
    host: str | None,
    telemetry: bool,
) -> None:
    """Start the MCP server.

    With no ports the server speaks line-delimited JSON-RPC on stdin/stdout.
    """
    from ehq_mcp.config import ConfigError, ServerSettings, SettingsLoader
    from ehq_mcp.server import build_dispatcher
    from ehq_mcp.transports import ServerRunner
    from ehq_mcp.utils.logging import configure_logging

    try:
        settings = SettingsLoader(Path(config_path)).load() if config_path else ServerSettings()
        settings = settings.with_env()
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    transports = settings.transports
    if stdio_only:
        transports = transports.model_copy(update={"http_port": None, "ws_port": None})
    else:
        updates: dict[str, object] = {}
        if http_port is not None:
            updates["http_port"] = http_port
        if ws_port is not None:
            updates["ws_port"] = ws_port
        if host is not None:
            updates["host"] = host
        transports = transports.model_copy(update=updates)

    debug = debug or settings.debug
    configure_logging(debug=debug)

    if telemetry or settings.telemetry.enabled:
        from ehq_mcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(settings.telemetry, export_to_console=debug)
        except ImportError as exc:
            err_console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    settings = settings.model_copy(update={"debug": debug, "transports": transports})
    dispatcher = build_dispatcher(settings)
    runner = ServerRunner(dispatcher, transports, log_level="debug" if debug else "info")

    print_banner(dispatcher.state, _describe_transports(runner, transports))

    asyncio.run(runner.run())


def _describe_transports(runner: ServerRunner, transports: TransportSettings) -> list[str]:
    names: list[str] = []
    if runner.serves_stdio:
        names.append("stdio")
    if transports.http_port is not None:
        names.append(f"http://{transports.host}:{transports.http_port}/mcp")
    if transports.ws_port is not None:
        names.append(f"ws://{transports.host}:{transports.ws_port}/ws")
    return names
