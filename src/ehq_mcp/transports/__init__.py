"""Transport bindings: thin drivers that feed raw envelopes to the dispatcher."""

from ehq_mcp.transports.runner import ServerRunner
from ehq_mcp.transports.stdio import StdioTransport
from ehq_mcp.transports.web import create_app

__all__ = [
    "ServerRunner",
    "StdioTransport",
    "create_app",
]
