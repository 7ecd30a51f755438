"""EHQ MCP Server: Model Context Protocol server for EngagementHQ."""

from __future__ import annotations

__version__ = "1.0.0"

SERVER_NAME = "EHQ MCP Server"
