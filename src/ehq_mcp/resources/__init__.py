"""Built-in resources.

Each resource is registered together with the function that produces its
content.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ehq_mcp.protocol.models import PROTOCOL_VERSION, ResourceDescriptor

if TYPE_CHECKING:
    from ehq_mcp.protocol.catalog import Catalog, ResourceReader
    from ehq_mcp.protocol.models import Implementation

HELLO_WORLD = ResourceDescriptor(
    uri="hello://world",
    name="Hello World",
    description="A simple hello world resource",
    mime_type="text/plain",
)

SERVER_INFO = ResourceDescriptor(
    uri="info://server",
    name="Server Information",
    description="Information about this MCP server",
    mime_type="text/plain",
)

HELLO_WORLD_TEXT = "Hello, World! This is a sample resource from the MCP server."


def read_hello_world() -> str:
    return HELLO_WORLD_TEXT


def server_info_reader(info: Implementation) -> ResourceReader:
    """Build the reader for ``info://server`` bound to *info*."""

    def read() -> str:
        return f"Server: {info.name} v{info.version}\nProtocol: {PROTOCOL_VERSION}"

    return read


def register_builtin_resources(catalog: Catalog, info: Implementation) -> None:
    """Register ``hello://world`` and ``info://server``."""
    catalog.register_resource(HELLO_WORLD, read_hello_world)
    catalog.register_resource(SERVER_INFO, server_info_reader(info))


__all__ = [
    "HELLO_WORLD",
    "HELLO_WORLD_TEXT",
    "SERVER_INFO",
    "read_hello_world",
    "register_builtin_resources",
    "server_info_reader",
]
