"""Catalog: the tool and resource registries held by the server.

Each entry owns both its descriptor and the function that produces its
output, so what ``tools/list`` advertises and what ``tools/call`` runs
cannot drift apart.

Registration swaps in a fresh copy of the affected mapping under a lock;
readers only ever see a complete snapshot and never need to lock.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from ehq_mcp.protocol.models import ResourceDescriptor, ToolDescriptor

logger = logging.getLogger(__name__)

ToolHandler = Callable[[dict[str, Any]], Awaitable[str]]
"""Executes a tool with its call arguments and returns the result text."""

ResourceReader = Callable[[], str]
"""Produces the text content of a resource."""


@dataclass(frozen=True)
class ToolEntry:
    descriptor: ToolDescriptor
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.descriptor.name


@dataclass(frozen=True)
class ResourceEntry:
    descriptor: ResourceDescriptor
    reader: ResourceReader

    @property
    def uri(self) -> str:
        return self.descriptor.uri


class Catalog:
    """Name-to-tool and URI-to-resource registries.

    Re-registering an existing key replaces the previous entry.

    Usage::

        catalog = Catalog()
        catalog.register_tool(ToolDescriptor(name="echo"), echo)
        entry = catalog.get_tool("echo")
        text = await entry.handler({"message": "hi"})
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tools: dict[str, ToolEntry] = {}
        self._resources: dict[str, ResourceEntry] = {}

    def register_tool(self, descriptor: ToolDescriptor, handler: ToolHandler) -> None:
        """Add *descriptor* with its *handler*, replacing any tool of the same name."""
        entry = ToolEntry(descriptor=descriptor, handler=handler)
        with self._lock:
            tools = dict(self._tools)
            replaced = descriptor.name in tools
            tools[descriptor.name] = entry
            self._tools = tools
        logger.info(
            "%s tool: %s", "Re-registered" if replaced else "Registered", descriptor.name
        )

    def register_resource(self, descriptor: ResourceDescriptor, reader: ResourceReader) -> None:
        """Add *descriptor* with its content *reader*, replacing any resource at the same URI."""
        entry = ResourceEntry(descriptor=descriptor, reader=reader)
        with self._lock:
            resources = dict(self._resources)
            replaced = descriptor.uri in resources
            resources[descriptor.uri] = entry
            self._resources = resources
        logger.info(
            "%s resource: %s", "Re-registered" if replaced else "Registered", descriptor.uri
        )

    def get_tool(self, name: str) -> ToolEntry | None:
        return self._tools.get(name)

    def get_resource(self, uri: str) -> ResourceEntry | None:
        return self._resources.get(uri)

    def list_tools(self) -> list[ToolDescriptor]:
        """Return every tool descriptor, sorted by name."""
        tools = self._tools
        return [tools[name].descriptor for name in sorted(tools)]

    def list_resources(self) -> list[ResourceDescriptor]:
        """Return every resource descriptor, sorted by URI."""
        resources = self._resources
        return [resources[uri].descriptor for uri in sorted(resources)]

    @property
    def tool_count(self) -> int:
        return len(self._tools)

    @property
    def resource_count(self) -> int:
        return len(self._resources)
