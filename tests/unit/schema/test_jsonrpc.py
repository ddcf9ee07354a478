"""Unit tests for JSON-RPC message construction."""

import uuid

import pytest
from pydantic import ValidationError

from mcp_http_client.errors import SchemaError
from mcp_http_client.schema.jsonrpc import (
    METHOD_NOT_FOUND,
    JSONRPCErrorObject,
    JSONRPCErrorResponse,
    JSONRPCNotification,
    JSONRPCRequest,
    JSONRPCResponse,
    new_request_id,
)


class TestRequestIds:
    def test_request_id_is_uuid_string(self):
        request_id = new_request_id()

        assert isinstance(request_id, str)
        assert uuid.UUID(request_id).version == 4

    def test_request_ids_are_unique(self):
        ids = {new_request_id() for _ in range(1000)}
        assert len(ids) == 1000


class TestJSONRPCRequest:
    def test_to_dict_omits_missing_params(self):
        request = JSONRPCRequest(id="abc", method="tools/list")

        assert request.to_dict() == {"jsonrpc": "2.0", "id": "abc", "method": "tools/list"}

    def test_to_dict_includes_params(self):
        request = JSONRPCRequest(id=7, method="tools/call", params={"name": "echo"})

        assert request.to_dict() == {
            "jsonrpc": "2.0",
            "id": 7,
            "method": "tools/call",
            "params": {"name": "echo"},
        }

    @pytest.mark.parametrize("bad_id", [None, True, 1.5, ["x"]])
    def test_rejects_invalid_ids(self, bad_id):
        with pytest.raises(SchemaError, match="id"):
            JSONRPCRequest(id=bad_id, method="ping")

    def test_rejects_empty_method(self):
        with pytest.raises(SchemaError):
            JSONRPCRequest(id="1", method="")

    def test_rejects_non_object_params(self):
        with pytest.raises(ValueError, match="params"):
            JSONRPCRequest(id="1", method="ping", params=["positional"])


class TestJSONRPCNotification:
    def test_notification_has_no_id(self):
        notification = JSONRPCNotification(method="notifications/initialized")

        assert notification.to_dict() == {"jsonrpc": "2.0", "method": "notifications/initialized"}

    def test_notification_validates_method(self):
        with pytest.raises(SchemaError):
            JSONRPCNotification(method=None)


class TestResponses:
    def test_error_object_from_dict(self):
        error = JSONRPCErrorObject.from_dict({"code": METHOD_NOT_FOUND, "message": "Method not found", "data": {"m": "x"}})

        assert error.code == -32601
        assert error.message == "Method not found"
        assert error.data == {"m": "x"}

    def test_error_object_to_dict_omits_missing_data(self):
        assert JSONRPCErrorObject(code=1, message="boom").to_dict() == {"code": 1, "message": "boom"}

    @pytest.mark.parametrize(
        "payload",
        [
            "not an object",
            {"message": "missing code"},
            {"code": "1", "message": "string code"},
            {"code": 1},
        ],
    )
    def test_error_object_rejects_malformed(self, payload):
        with pytest.raises(SchemaError):
            JSONRPCErrorObject.from_dict(payload)

    def test_response_from_dict_tolerates_extra_fields(self):
        response = JSONRPCResponse.from_dict({"jsonrpc": "2.0", "id": "1", "result": {"ok": True}, "extra": 1})

        assert response.id == "1"
        assert response.result == {"ok": True}

    def test_response_requires_result(self):
        with pytest.raises(SchemaError):
            JSONRPCResponse.from_dict({"jsonrpc": "2.0", "id": "1"})

    def test_error_response_allows_null_id(self):
        response = JSONRPCErrorResponse.from_dict(
            {"jsonrpc": "2.0", "id": None, "error": {"code": -32700, "message": "Parse error"}}
        )

        assert response.id is None
        assert response.error.message == "Parse error"

    def test_response_id_may_be_absent(self):
        assert JSONRPCResponse.from_dict({"result": 3}).id is None

    def test_response_rejects_other_protocol_versions(self):
        with pytest.raises(SchemaError, match="jsonrpc"):
            JSONRPCResponse.from_dict({"jsonrpc": "1.0", "id": 1, "result": {}})

    def test_null_result_is_a_result(self):
        assert JSONRPCResponse.from_dict({"jsonrpc": "2.0", "id": 1, "result": None}).result is None


class TestNotificationParsing:
    def test_from_dict_ignores_unknown_fields(self):
        notification = JSONRPCNotification.from_dict(
            {"jsonrpc": "2.0", "method": "notifications/message", "params": {"level": "info"}, "extra": True}
        )

        assert notification.method == "notifications/message"
        assert notification.params == {"level": "info"}

    def test_from_dict_rejects_non_object_params(self):
        with pytest.raises(SchemaError):
            JSONRPCNotification.from_dict({"method": "notifications/progress", "params": [1, 2]})

    def test_models_are_frozen(self):
        notification = JSONRPCNotification(method="ping")

        with pytest.raises(ValidationError):
            notification.method = "pong"
