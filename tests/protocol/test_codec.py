"""Tests for the envelope codec."""

from __future__ import annotations

import json

import pytest

from ehq_mcp.protocol.codec import DecodeFailure, decode, encode, to_payload
from ehq_mcp.protocol.errors import ErrorCode
from ehq_mcp.protocol.models import Envelope


class TestDecode:
    def test_request(self) -> None:
        env = decode(b'{"jsonrpc":"2.0","id":7,"method":"tools/list"}')
        assert isinstance(env, Envelope)
        assert env.id == 7
        assert env.method == "tools/list"
        assert env.is_request

    def test_string_id(self) -> None:
        env = decode('{"jsonrpc":"2.0","id":"abc","method":"initialize","params":{}}')
        assert isinstance(env, Envelope)
        assert env.id == "abc"
        assert env.params == {}

    def test_syntax_error_is_parse_error(self) -> None:
        failure = decode(b"{not json")
        assert isinstance(failure, DecodeFailure)
        assert failure.code == ErrorCode.PARSE_ERROR
        assert failure.message == "Parse error"
        assert failure.detail

    def test_invalid_utf8_is_parse_error(self) -> None:
        failure = decode(b"\xff\xfe{}")
        assert isinstance(failure, DecodeFailure)
        assert failure.code == ErrorCode.PARSE_ERROR

    @pytest.mark.parametrize("depth", [10_000, 100_000])
    def test_deep_nesting_is_parse_error(self, depth: int) -> None:
        failure = decode(b"[" * depth)
        assert isinstance(failure, DecodeFailure)
        assert failure.code == ErrorCode.PARSE_ERROR

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_json_constants_are_parse_errors(self, literal: str) -> None:
        failure = decode(f'{{"jsonrpc":"2.0","id":1,"method":"x","params":[{literal}]}}')
        assert isinstance(failure, DecodeFailure)
        assert failure.code == ErrorCode.PARSE_ERROR

    @pytest.mark.parametrize(
        ("raw_id", "expected"),
        [("true", True), ("2.0", 2.0), ("1.5", 1.5), ("[1]", [1]), ("{\"k\":\"v\"}", {"k": "v"})],
    )
    def test_id_kept_as_sent(self, raw_id: str, expected: object) -> None:
        env = decode(f'{{"jsonrpc":"2.0","id":{raw_id},"method":"tools/list"}}')
        assert isinstance(env, Envelope)
        assert env.id == expected
        assert type(env.id) is type(expected)

    @pytest.mark.parametrize("raw", ["[1, 2]", "42", '"text"', "null"])
    def test_non_object_is_invalid_request(self, raw: str) -> None:
        failure = decode(raw)
        assert isinstance(failure, DecodeFailure)
        assert failure.code == ErrorCode.INVALID_REQUEST

    def test_wrong_field_types_are_invalid_request(self) -> None:
        failure = decode('{"jsonrpc":"2.0","id":1,"method":42}')
        assert isinstance(failure, DecodeFailure)
        assert failure.code == ErrorCode.INVALID_REQUEST

    def test_result_and_error_together_are_invalid_request(self) -> None:
        failure = decode(
            '{"jsonrpc":"2.0","id":1,"result":{},"error":{"code":-32603,"message":"x"}}'
        )
        assert isinstance(failure, DecodeFailure)
        assert failure.code == ErrorCode.INVALID_REQUEST

    def test_failure_envelope_has_no_id(self) -> None:
        failure = decode(b"garbage")
        assert isinstance(failure, DecodeFailure)
        payload = json.loads(encode(failure.to_envelope()))
        assert "id" not in payload
        assert payload["error"]["code"] == -32700


class TestEncode:
    def test_omits_absent_fields(self) -> None:
        payload = json.loads(encode(Envelope.response(1, {"tools": []})))
        assert payload == {"jsonrpc": "2.0", "id": 1, "result": {"tools": []}}

    def test_error_without_data(self) -> None:
        env = Envelope.failure("x", ErrorCode.METHOD_NOT_FOUND, "Method not found: nope")
        payload = to_payload(env)
        assert payload["error"] == {"code": -32601, "message": "Method not found: nope"}
        assert "result" not in payload

    def test_error_with_data(self) -> None:
        env = Envelope.failure(3, ErrorCode.INVALID_PARAMS, data=[{"loc": ["name"]}])
        payload = to_payload(env)
        assert payload["error"]["message"] == "Invalid params"
        assert payload["error"]["data"] == [{"loc": ["name"]}]

    def test_compact_utf8(self) -> None:
        data = encode(Envelope.response(1, {"text": "Hello 🌍"}))
        assert b" " not in data.replace("Hello 🌍".encode(), b"")
        assert "🌍".encode() in data

    def test_unencodable_payload_raises(self) -> None:
        with pytest.raises(TypeError):
            encode(Envelope.response(1, {"tags": {1, 2}}))
        with pytest.raises(ValueError, match="Out of range"):
            encode(Envelope.response(1, {"ratio": float("inf")}))

    @pytest.mark.parametrize(
        "raw",
        [
            {"jsonrpc": "2.0", "id": "r-1", "method": "tools/call", "params": {"name": "echo"}},
            {"jsonrpc": "2.0", "id": 4, "method": "resources/list"},
            {"jsonrpc": "2.0", "method": "notifications/initialized"},
            {"jsonrpc": "2.0", "id": 1, "result": {"tools": [{"name": "echo"}]}},
            {"jsonrpc": "2.0", "id": 2, "error": {"code": -32601, "message": "No such method"}},
            {
                "jsonrpc": "2.0",
                "id": "e",
                "error": {"code": -32602, "message": "Invalid params", "data": [{"loc": ["uri"]}]},
            },
        ],
        ids=["request", "int-id", "no-id", "result", "error", "error-data"],
    )
    def test_round_trip(self, raw: dict[str, object]) -> None:
        env = decode(json.dumps(raw))
        assert isinstance(env, Envelope)
        assert json.loads(encode(env)) == raw
