"""EngagementHQ API client used by the ``get_projects`` tool."""

from ehq_mcp.upstream.client import EHQClient
from ehq_mcp.upstream.errors import (
    AuthenticationError,
    NotAuthenticatedError,
    UpstreamConnectionError,
    UpstreamError,
    UpstreamRequestError,
)
from ehq_mcp.upstream.models import ProjectData, ProjectsResponse

__all__ = [
    "AuthenticationError",
    "EHQClient",
    "NotAuthenticatedError",
    "ProjectData",
    "ProjectsResponse",
    "UpstreamConnectionError",
    "UpstreamError",
    "UpstreamRequestError",
]
