"""Server assembly: state, built-in catalog entries and dispatcher."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ehq_mcp.config import ServerSettings
from ehq_mcp.protocol.dispatcher import Dispatcher
from ehq_mcp.protocol.state import ServerState
from ehq_mcp.resources import register_builtin_resources
from ehq_mcp.tools import register_builtin_tools

if TYPE_CHECKING:
    import httpx


def build_dispatcher(
    settings: ServerSettings | None = None,
    *,
    upstream_transport: httpx.AsyncBaseTransport | None = None,
) -> Dispatcher:
    """Create a dispatcher with the built-in tools and resources registered.

    *upstream_transport* replaces the network layer of the EngagementHQ
    client; tests pass an ``httpx.MockTransport``.
    """
    settings = settings or ServerSettings()
    state = ServerState(settings.name, settings.version)
    register_builtin_tools(state.catalog, settings.upstream, transport=upstream_transport)
    register_builtin_resources(state.catalog, state.info)
    return Dispatcher(state)
