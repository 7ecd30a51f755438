"""Tests for the tool/resource catalog."""

from __future__ import annotations

from typing import Any

from ehq_mcp.protocol.catalog import Catalog
from ehq_mcp.protocol.models import ResourceDescriptor, ToolDescriptor


async def _first(arguments: dict[str, Any]) -> str:
    return "first"


async def _second(arguments: dict[str, Any]) -> str:
    return "second"


class TestToolRegistration:
    def test_empty_catalog(self) -> None:
        catalog = Catalog()
        assert catalog.tool_count == 0
        assert catalog.list_tools() == []
        assert catalog.get_tool("echo") is None

    async def test_register_and_get(self) -> None:
        catalog = Catalog()
        catalog.register_tool(ToolDescriptor(name="t"), _first)
        entry = catalog.get_tool("t")
        assert entry is not None
        assert entry.name == "t"
        assert await entry.handler({}) == "first"

    async def test_duplicate_name_second_wins(self) -> None:
        catalog = Catalog()
        catalog.register_tool(ToolDescriptor(name="t", description="one"), _first)
        catalog.register_tool(ToolDescriptor(name="t", description="two"), _second)

        assert catalog.tool_count == 1
        listed = [d for d in catalog.list_tools() if d.name == "t"]
        assert len(listed) == 1
        assert listed[0].description == "two"
        entry = catalog.get_tool("t")
        assert entry is not None
        assert await entry.handler({}) == "second"

    def test_list_sorted_by_name(self) -> None:
        catalog = Catalog()
        for name in ("zeta", "alpha", "mid"):
            catalog.register_tool(ToolDescriptor(name=name), _first)
        assert [d.name for d in catalog.list_tools()] == ["alpha", "mid", "zeta"]

    def test_listing_is_a_snapshot(self) -> None:
        catalog = Catalog()
        catalog.register_tool(ToolDescriptor(name="a"), _first)
        snapshot = catalog.list_tools()
        catalog.register_tool(ToolDescriptor(name="b"), _first)
        assert len(snapshot) == 1
        assert catalog.tool_count == 2


class TestResourceRegistration:
    def test_register_and_read(self) -> None:
        catalog = Catalog()
        catalog.register_resource(ResourceDescriptor(uri="a://1", name="One"), lambda: "one")
        entry = catalog.get_resource("a://1")
        assert entry is not None
        assert entry.uri == "a://1"
        assert entry.reader() == "one"

    def test_duplicate_uri_second_wins(self) -> None:
        catalog = Catalog()
        catalog.register_resource(ResourceDescriptor(uri="a://1", name="Old"), lambda: "old")
        catalog.register_resource(ResourceDescriptor(uri="a://1", name="New"), lambda: "new")
        assert catalog.resource_count == 1
        assert catalog.list_resources()[0].name == "New"
        entry = catalog.get_resource("a://1")
        assert entry is not None
        assert entry.reader() == "new"

    def test_list_sorted_by_uri(self) -> None:
        catalog = Catalog()
        catalog.register_resource(ResourceDescriptor(uri="b://x", name="B"), lambda: "")
        catalog.register_resource(ResourceDescriptor(uri="a://x", name="A"), lambda: "")
        assert [d.uri for d in catalog.list_resources()] == ["a://x", "b://x"]
