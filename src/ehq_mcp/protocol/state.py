"""ServerState: identity, declared capabilities and catalog of one server."""

from __future__ import annotations

from ehq_mcp.protocol.catalog import Catalog
from ehq_mcp.protocol.models import Implementation, ServerCapabilities


class ServerState:
    """Everything a dispatch reads.

    Built once at process start; the catalog is filled by registration
    calls before serving begins.  Nothing is persisted.
    """

    def __init__(
        self,
        name: str,
        version: str,
        *,
        capabilities: ServerCapabilities | None = None,
        catalog: Catalog | None = None,
    ) -> None:
        self.info = Implementation(name=name, version=version)
        self.capabilities = capabilities or ServerCapabilities()
        self.catalog = catalog if catalog is not None else Catalog()

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def version(self) -> str:
        return self.info.version
