"""``ehq-mcp tools`` / ``ehq-mcp resources``: inspect the built-in catalog."""

from __future__ import annotations

import json

import click

from ehq_mcp.cli_commands._output import console, print_resources_table, print_tools_table


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output the tools/list payload as JSON.")
def tools(as_json: bool) -> None:
    """List the tools the server registers."""
    from ehq_mcp.server import build_dispatcher

    descriptors = build_dispatcher().state.catalog.list_tools()
    if as_json:
        payload = {"tools": [d.to_wire() for d in descriptors]}
        console.print_json(json.dumps(payload))
        return

    print_tools_table(descriptors)


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output the resources/list payload as JSON.")
def resources(as_json: bool) -> None:
    """List the resources the server registers."""
    from ehq_mcp.server import build_dispatcher

    descriptors = build_dispatcher().state.catalog.list_resources()
    if as_json:
        payload = {"resources": [d.to_wire() for d in descriptors]}
        console.print_json(json.dumps(payload))
        return

    print_resources_table(descriptors)
