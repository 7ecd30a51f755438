"""Shared CLI output formatters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from ehq_mcp.protocol.models import PROTOCOL_VERSION

if TYPE_CHECKING:
    from ehq_mcp.protocol.models import ResourceDescriptor, ToolDescriptor
    from ehq_mcp.protocol.state import ServerState

console = Console()
# stdout belongs to the stdio transport while serving.
err_console = Console(stderr=True)


def print_banner(state: ServerState, transports: list[str]) -> None:
    """Print the startup banner to stderr."""
    err_console.print(f"[bold]{state.name}[/bold] v{state.version}")
    err_console.print(f"  Protocol: {PROTOCOL_VERSION}")
    err_console.print(f"  Tools: {state.catalog.tool_count}")
    err_console.print(f"  Resources: {state.catalog.resource_count}")
    err_console.print(f"  Transports: {', '.join(transports)}")


def print_tools_table(tools: list[ToolDescriptor]) -> None:
    """Pretty-print registered tools as a table."""
    table = Table(title="Registered Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Required")

    for tool in tools:
        required = tool.input_schema.get("required") or []
        table.add_row(
            tool.name,
            _truncate(tool.description),
            ", ".join(required) or "-",
        )

    console.print(table)


def print_resources_table(resources: list[ResourceDescriptor]) -> None:
    """Pretty-print registered resources as a table."""
    table = Table(title="Registered Resources")
    table.add_column("URI", style="cyan")
    table.add_column("Name")
    table.add_column("MIME type")
    table.add_column("Description")

    for resource in resources:
        table.add_row(
            resource.uri,
            resource.name,
            resource.mime_type or "-",
            _truncate(resource.description or ""),
        )

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
