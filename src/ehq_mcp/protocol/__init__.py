"""Protocol core: envelope codec, catalog, server state and dispatcher."""

from ehq_mcp.protocol.catalog import Catalog, ResourceEntry, ToolEntry
from ehq_mcp.protocol.codec import DecodeFailure, decode, encode
from ehq_mcp.protocol.dispatcher import Dispatcher, Method
from ehq_mcp.protocol.errors import (
    ErrorCode,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ProtocolError,
    ResourceNotFoundError,
    ToolNotFoundError,
)
from ehq_mcp.protocol.models import (
    PROTOCOL_VERSION,
    Envelope,
    ErrorObject,
    ResourceDescriptor,
    ToolDescriptor,
)
from ehq_mcp.protocol.state import ServerState

__all__ = [
    "PROTOCOL_VERSION",
    "Catalog",
    "DecodeFailure",
    "Dispatcher",
    "Envelope",
    "ErrorCode",
    "ErrorObject",
    "InvalidParamsError",
    "InvalidRequestError",
    "Method",
    "MethodNotFoundError",
    "ProtocolError",
    "ResourceDescriptor",
    "ResourceEntry",
    "ResourceNotFoundError",
    "ServerState",
    "ToolDescriptor",
    "ToolEntry",
    "ToolNotFoundError",
    "decode",
    "encode",
]
