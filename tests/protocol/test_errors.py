"""Tests for protocol error codes and exceptions."""

from __future__ import annotations

from ehq_mcp.protocol.errors import (
    ErrorCode,
    InvalidParamsError,
    MethodNotFoundError,
    ProtocolError,
    ResourceNotFoundError,
    ToolNotFoundError,
    default_message,
)


class TestErrorCode:
    def test_values(self) -> None:
        assert ErrorCode.PARSE_ERROR == -32700
        assert ErrorCode.INVALID_REQUEST == -32600
        assert ErrorCode.METHOD_NOT_FOUND == -32601
        assert ErrorCode.INVALID_PARAMS == -32602
        assert ErrorCode.INTERNAL_ERROR == -32603

    def test_default_message_unknown_code(self) -> None:
        assert default_message(-1) == "Unknown error (-1)"


class TestProtocolErrors:
    def test_base_defaults_to_internal_error(self) -> None:
        err = ProtocolError()
        assert err.code == ErrorCode.INTERNAL_ERROR
        assert err.message == "Internal error"

    def test_invalid_params_carries_data(self) -> None:
        err = InvalidParamsError("Invalid parameters", data=["name"])
        assert err.code == ErrorCode.INVALID_PARAMS
        assert err.data == ["name"]

    def test_method_not_found(self) -> None:
        err = MethodNotFoundError("nope")
        assert err.message == "Method not found: nope"
        assert str(err) == "Method not found: nope"

    def test_lookup_misses_share_method_not_found_code(self) -> None:
        tool = ToolNotFoundError("ghost")
        resource = ResourceNotFoundError("x://y")
        assert tool.code == resource.code == ErrorCode.METHOD_NOT_FOUND
        assert tool.message == "Tool not found: ghost"
        assert resource.message == "Resource not found: x://y"
        assert isinstance(tool, MethodNotFoundError)
