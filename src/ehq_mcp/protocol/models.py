"""MCP models: the JSON-RPC 2.0 envelope and the payloads of the built-in methods.

Implements the message format used by the Model Context Protocol for
``initialize``, tool discovery and execution (``tools/list``,
``tools/call``) and resource access (``resources/list``,
``resources/read``).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from ehq_mcp.protocol.errors import ErrorCode, default_message

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"

RequestId = Any
"""Correlation id: any JSON value, echoed back exactly as received."""

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class ErrorObject(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class Envelope(BaseModel):
    """One protocol message: a request, a success response or an error response.

    Requests carry ``method``; responses carry exactly one of ``result`` and
    ``error``.  There is no separate type tag.
    """

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId = None
    method: str | None = None
    params: Any = None
    result: Any = None
    error: ErrorObject | None = None

    @model_validator(mode="after")
    def _result_xor_error(self) -> Envelope:
        if self.result is not None and self.error is not None:
            msg = "an envelope cannot carry both 'result' and 'error'"
            raise ValueError(msg)
        return self

    @property
    def is_request(self) -> bool:
        return self.method is not None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def request(
        cls,
        method: str,
        params: Any = None,
        id: RequestId = None,  # noqa: A002
    ) -> Envelope:
        """Build a request envelope."""
        return cls(id=id, method=method, params=params)

    @classmethod
    def response(cls, id: RequestId, result: Any) -> Envelope:  # noqa: A002
        """Build a success response envelope."""
        return cls(id=id, result=result)

    @classmethod
    def failure(
        cls,
        id: RequestId,  # noqa: A002
        code: int,
        message: str | None = None,
        data: Any = None,
    ) -> Envelope:
        """Build an error response envelope."""
        return cls(
            id=id,
            error=ErrorObject(code=code, message=message or default_message(code), data=data),
        )


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class _WireModel(BaseModel):
    model_config = {"populate_by_name": True}

    def to_wire(self) -> dict[str, Any]:
        """Dump with wire field names, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Implementation(_WireModel):
    """Name and version of a protocol participant (``serverInfo``)."""

    name: str
    version: str


class ToolsCapability(_WireModel):
    list_changed: bool = Field(default=False, alias="listChanged")


class ResourcesCapability(_WireModel):
    subscribe: bool = False
    list_changed: bool = Field(default=False, alias="listChanged")


class LoggingCapability(_WireModel):
    pass


class ServerCapabilities(_WireModel):
    """Capability set advertised by ``initialize``."""

    tools: ToolsCapability | None = Field(default_factory=ToolsCapability)
    resources: ResourcesCapability | None = Field(default_factory=ResourcesCapability)
    logging: LoggingCapability | None = Field(default_factory=LoggingCapability)


class InitializeResult(_WireModel):
    protocol_version: str = Field(default=PROTOCOL_VERSION, alias="protocolVersion")
    capabilities: ServerCapabilities
    server_info: Implementation = Field(alias="serverInfo")


class ToolDescriptor(_WireModel):
    """A tool definition as returned by ``tools/list``.

    ``input_schema`` is passed through untouched for client-side
    introspection; the server never validates arguments against it.
    """

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object"}, alias="inputSchema"
    )


class ResourceDescriptor(_WireModel):
    """A resource definition as returned by ``resources/list``."""

    uri: str
    name: str
    description: str | None = None
    mime_type: str | None = Field(default=None, alias="mimeType")


class ToolsCallParams(BaseModel):
    name: str
    arguments: dict[str, Any] | None = None


class ResourcesReadParams(BaseModel):
    uri: str


class TextContent(_WireModel):
    type: Literal["text"] = "text"
    text: str


class ToolsCallResult(_WireModel):
    content: list[TextContent]
    is_error: bool | None = Field(default=None, alias="isError")


class ToolsListResult(_WireModel):
    tools: list[ToolDescriptor]


class ResourceContents(_WireModel):
    uri: str
    mime_type: str | None = Field(default=None, alias="mimeType")
    text: str


class ResourcesReadResult(_WireModel):
    contents: list[ResourceContents]


class ResourcesListResult(_WireModel):
    resources: list[ResourceDescriptor]


__all__ = [
    "JSONRPC_VERSION",
    "PROTOCOL_VERSION",
    "Envelope",
    "ErrorCode",
    "ErrorObject",
    "Implementation",
    "InitializeResult",
    "LoggingCapability",
    "ResourceContents",
    "ResourceDescriptor",
    "ResourcesCapability",
    "ResourcesListResult",
    "ResourcesReadParams",
    "ResourcesReadResult",
    "ServerCapabilities",
    "TextContent",
    "ToolDescriptor",
    "ToolsCallParams",
    "ToolsCallResult",
    "ToolsCapability",
    "ToolsListResult",
]
