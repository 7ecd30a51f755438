"""Built-in tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ehq_mcp.tools.basic import ECHO, GET_TIME, HELLO_WORLD, echo, get_time, hello_world
from ehq_mcp.tools.projects import GET_PROJECTS, ProjectsTool

if TYPE_CHECKING:
    import httpx

    from ehq_mcp.config import UpstreamSettings
    from ehq_mcp.protocol.catalog import Catalog


def register_builtin_tools(
    catalog: Catalog,
    upstream: UpstreamSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Register ``hello_world``, ``echo``, ``get_time`` and ``get_projects``."""
    catalog.register_tool(HELLO_WORLD, hello_world)
    catalog.register_tool(ECHO, echo)
    catalog.register_tool(GET_TIME, get_time)
    catalog.register_tool(GET_PROJECTS, ProjectsTool(upstream, transport=transport))


__all__ = [
    "ECHO",
    "GET_PROJECTS",
    "GET_TIME",
    "HELLO_WORLD",
    "ProjectsTool",
    "echo",
    "get_time",
    "hello_world",
    "register_builtin_tools",
]
