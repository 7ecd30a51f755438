"""JSON:API shaped payloads of the EngagementHQ v2 API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# POST /api/v2/tokens
# ---------------------------------------------------------------------------


class AuthAttributes(BaseModel):
    login: str
    password: str


class AuthData(BaseModel):
    attributes: AuthAttributes


class AuthRequest(BaseModel):
    """Body of the token request."""

    data: AuthData

    @classmethod
    def for_credentials(cls, login: str, password: str) -> AuthRequest:
        return cls(data=AuthData(attributes=AuthAttributes(login=login, password=password)))


class TokenAttributes(BaseModel):
    token: str


class TokenData(BaseModel):
    attributes: TokenAttributes


class AuthResponse(BaseModel):
    data: TokenData

    @property
    def token(self) -> str:
        return self.data.attributes.token


# ---------------------------------------------------------------------------
# GET /api/v2/projects
# ---------------------------------------------------------------------------


class ProjectData(BaseModel):
    """A single project resource object."""

    type: str
    id: str | int | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)


class ProjectsResponse(BaseModel):
    data: list[ProjectData] = Field(default_factory=list)
