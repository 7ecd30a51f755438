"""``ehq-mcp call``: send one request through the dispatcher in-process."""

from __future__ import annotations

import asyncio
import json
import sys

import click

from ehq_mcp.cli_commands._output import err_console


@click.command()
@click.argument("method")
@click.option("--params", "-p", default=None, help="Request params as a JSON object.")
@click.option("--id", "request_id", default="1", show_default=True, help="Request id.")
def call(method: str, params: str | None, request_id: str) -> None:
    """Dispatch METHOD once and print the raw JSON-RPC response.

    Upstream credentials are read from the EHQ_* environment variables.
    """
    from ehq_mcp.config import ConfigError, ServerSettings
    from ehq_mcp.protocol import Envelope, encode
    from ehq_mcp.server import build_dispatcher

    try:
        parsed = json.loads(params) if params else None
    except json.JSONDecodeError as exc:
        err_console.print(f"[red]Invalid --params:[/red] {exc}")
        sys.exit(1)

    try:
        settings = ServerSettings().with_env()
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    rid: int | str = int(request_id) if request_id.isdigit() else request_id
    dispatcher = build_dispatcher(settings)
    response = asyncio.run(dispatcher.dispatch(Envelope.request(method, parsed, id=rid)))
    click.echo(encode(response).decode("utf-8"))
    if response.is_error:
        sys.exit(2)
