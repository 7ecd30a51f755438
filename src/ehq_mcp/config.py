"""Server configuration: pydantic models plus a YAML loader.

A config file is optional; every field has a default.  Upstream
credentials are never baked in: they come from the file or from the
``EHQ_*`` environment variables.

Example YAML::

    name: EHQ MCP Server
    debug: false
    transports:
      stdio: false
      http_port: 8080
      ws_port: 8081
    upstream:
      base_url: https://dev.ehq.test
      login: ${EHQ_LOGIN}
      password: ${EHQ_PASSWORD}
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from ehq_mcp import SERVER_NAME, __version__


class ConfigError(Exception):
    """Raised when a config file fails parsing or validation."""


class UpstreamSettings(BaseModel):
    """Where and how the ``get_projects`` tool reaches the EngagementHQ API."""

    base_url: str = "https://dev.ehq.test"
    login: str | None = None
    password: str | None = None
    timeout: float = Field(default=30.0, gt=0)

    @property
    def has_credentials(self) -> bool:
        return bool(self.login and self.password)


class TransportSettings(BaseModel):
    """Which transports to start.

    stdio runs when no network port is given, or alongside the network
    transports when ``stdio`` is set.
    """

    stdio: bool = False
    http_port: int | None = Field(default=None, ge=1, le=65535)
    ws_port: int | None = Field(default=None, ge=1, le=65535)
    host: str = "0.0.0.0"

    @property
    def network_enabled(self) -> bool:
        return self.http_port is not None or self.ws_port is not None


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    service_name: str = "ehq-mcp-server"
    otlp_endpoint: str | None = None


class ServerSettings(BaseModel):
    """Top-level server configuration."""

    name: str = SERVER_NAME
    version: str = __version__
    debug: bool = False
    transports: TransportSettings = Field(default_factory=TransportSettings)
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    def with_env(self, environ: Mapping[str, str] | None = None) -> ServerSettings:
        """Return a copy with ``EHQ_BASE_URL``, ``EHQ_LOGIN``, ``EHQ_PASSWORD``
        and ``EHQ_TIMEOUT`` applied over the upstream settings."""
        env = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}
        for var, field in (
            ("EHQ_BASE_URL", "base_url"),
            ("EHQ_LOGIN", "login"),
            ("EHQ_PASSWORD", "password"),
            ("EHQ_TIMEOUT", "timeout"),
        ):
            value = env.get(var)
            if value:
                overrides[field] = value
        if not overrides:
            return self

        merged = self.upstream.model_dump() | overrides
        try:
            upstream = UpstreamSettings.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(f"Invalid EHQ_* environment: {exc}") from exc
        return self.model_copy(update={"upstream": upstream})


class SettingsLoader:
    """Load and validate a YAML config file into :class:`ServerSettings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> ServerSettings:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.

        Raises:
            ConfigError: On read errors, YAML parse errors or schema validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            return ServerSettings()
        if not isinstance(data, dict):
            raise ConfigError("Config YAML must be a mapping")

        try:
            return ServerSettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc
