"""``get_projects``: lists EngagementHQ projects through the upstream API.

Upstream failures never become protocol errors.  They are returned as a
JSON text result carrying an ``error`` key.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx

from ehq_mcp.protocol.models import ToolDescriptor
from ehq_mcp.upstream.client import EHQClient
from ehq_mcp.upstream.errors import UpstreamError

if TYPE_CHECKING:
    from ehq_mcp.config import UpstreamSettings

logger = logging.getLogger(__name__)

GET_PROJECTS = ToolDescriptor(
    name="get_projects",
    description="Fetches projects from the EHQ API using authentication",
    input_schema={
        "type": "object",
        "properties": {
            "search": {
                "type": "string",
                "description": "Search term to filter projects by name or description (optional)",
            },
        },
    },
)


class ProjectsTool:
    """Callable tool handler bound to the upstream settings it authenticates with."""

    def __init__(
        self,
        settings: UpstreamSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    async def __call__(self, arguments: dict[str, Any]) -> str:
        search = arguments.get("search")
        if not isinstance(search, str):
            search = ""
        return json.dumps(await self._fetch(search), ensure_ascii=False)

    async def _fetch(self, search: str) -> dict[str, Any]:
        settings = self._settings
        if not settings.login or not settings.password:
            return {"error": "Authentication failed: upstream credentials are not configured"}

        async with EHQClient(
            settings.base_url, timeout=settings.timeout, transport=self._transport
        ) as client:
            try:
                await client.authenticate(settings.login, settings.password)
            except UpstreamError as exc:
                logger.warning("EHQ authentication failed: %s", exc)
                return {"error": f"Authentication failed: {exc}"}

            try:
                projects = await client.get_projects(search)
            except UpstreamError as exc:
                logger.warning("EHQ projects request failed: %s", exc)
                return {"error": f"Failed to fetch projects: {exc}"}

        logger.info("Projects fetched successfully: %d", len(projects.data))
        return {
            "success": True,
            "data": [project.model_dump(exclude_none=True) for project in projects.data],
            "count": len(projects.data),
        }
