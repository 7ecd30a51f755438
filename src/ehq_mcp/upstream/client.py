"""EHQClient: authenticates against the EngagementHQ API and lists projects."""

from __future__ import annotations

import logging

import httpx

from ehq_mcp.upstream.errors import (
    AuthenticationError,
    NotAuthenticatedError,
    UpstreamConnectionError,
    UpstreamRequestError,
)
from ehq_mcp.upstream.models import AuthRequest, AuthResponse, ProjectsResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class EHQClient:
    """Async client for the EngagementHQ v2 API.

    Usage::

        async with EHQClient("https://dev.ehq.test") as client:
            await client.authenticate(login, password)
            projects = await client.get_projects(search="park")
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self.token: str | None = None

    async def __aenter__(self) -> EHQClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def base_url(self) -> str:
        return self._base_url

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "EHQClient must be used as an async context manager"
            raise RuntimeError(msg)
        return self._client

    async def authenticate(self, login: str, password: str) -> str:
        """POST ``/api/v2/tokens`` and keep the returned bearer token."""
        body = AuthRequest.for_credentials(login, password).model_dump()
        try:
            response = await self._http().post("/api/v2/tokens", json=body)
        except httpx.HTTPError as exc:
            raise UpstreamConnectionError(f"failed to send auth request: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            msg = f"authentication failed with status {response.status_code}: {response.text}"
            raise AuthenticationError(msg)

        try:
            auth = AuthResponse.model_validate(response.json())
        except ValueError as exc:
            raise AuthenticationError(f"failed to decode auth response: {exc}") from exc

        self.token = auth.token
        logger.debug("Authenticated against %s", self._base_url)
        return self.token

    async def get_projects(self, search: str = "") -> ProjectsResponse:
        """GET ``/api/v2/projects``, optionally filtered by *search*."""
        if not self.token:
            raise NotAuthenticatedError

        params = {"filterable": "true"}
        if search:
            params["filters[search]"] = search
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

        try:
            response = await self._http().get("/api/v2/projects", params=params, headers=headers)
        except httpx.HTTPError as exc:
            raise UpstreamConnectionError(f"failed to send projects request: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            msg = f"projects request failed with status {response.status_code}: {response.text}"
            raise UpstreamRequestError(msg, status_code=response.status_code)

        try:
            return ProjectsResponse.model_validate(response.json())
        except ValueError as exc:
            msg = f"failed to decode projects response: {exc}"
            raise UpstreamRequestError(msg, status_code=response.status_code) from exc
