"""Tests for RequestDispatcher."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

from rulebook.protocol.models import JsonRpcRequest
from tests.conftest import RULES_MARKDOWN

if TYPE_CHECKING:
    from rulebook.server.context import ServerContext
    from rulebook.server.dispatcher import RequestDispatcher


def _call(dispatcher: RequestDispatcher, message: dict[str, Any]) -> dict[str, Any] | None:
    response = dispatcher.handle_line(json.dumps(message) + "\n")
    return None if response is None else response.to_wire()


def _request(method: str, params: Any = None, id: Any = 1) -> dict[str, Any]:
    message: dict[str, Any] = {"jsonrpc": "2.0", "id": id, "method": method}
    if params is not None:
        message["params"] = params
    return message


class TestInitialize:
    def test_initialize(self, dispatcher: RequestDispatcher) -> None:
        response = _call(dispatcher, _request("initialize", {"protocolVersion": "2024-11-05"}))
        assert response == {
            "jsonrpc": "2.0",
            "id": 1,
            "result": {
                "protocolVersion": "2024-11-05",
                "capabilities": {
                    "tools": {"listChanged": False},
                    "prompts": {"listChanged": False},
                },
                "serverInfo": {"name": "TestServer", "version": "1.2.3"},
            },
        }

    def test_initialized_notification_no_output(self, dispatcher: RequestDispatcher) -> None:
        assert _call(dispatcher, {"jsonrpc": "2.0", "method": "initialized"}) is None

    def test_initialized_with_id_no_output(self, dispatcher: RequestDispatcher) -> None:
        assert _call(dispatcher, _request("initialized", id=7)) is None


class TestTools:
    def test_list(self, dispatcher: RequestDispatcher) -> None:
        response = _call(dispatcher, _request("tools/list"))
        assert response is not None
        assert response["result"] == {
            "tools": [
                {
                    "name": "rules",
                    "description": "Coding rules",
                    "inputSchema": {"type": "object", "properties": {}},
                },
                {
                    "name": "notes",
                    "description": "Notes",
                    "inputSchema": {"type": "object", "properties": {}},
                },
            ]
        }

    def test_call(self, dispatcher: RequestDispatcher) -> None:
        response = _call(dispatcher, _request("tools/call", {"name": "rules"}))
        assert response is not None
        assert "error" not in response
        assert response["result"] == {"content": [{"type": "text", "text": RULES_MARKDOWN}]}

    def test_call_is_idempotent(self, dispatcher: RequestDispatcher) -> None:
        line = json.dumps(_request("tools/call", {"name": "notes"}, id=3))
        first = dispatcher.handle_line(line)
        second = dispatcher.handle_line(line)
        assert first is not None and second is not None
        assert first.to_json() == second.to_json()

    def test_call_unknown_tool(self, dispatcher: RequestDispatcher) -> None:
        response = _call(dispatcher, _request("tools/call", {"name": "nope"}))
        assert response is not None
        assert "result" not in response
        assert response["error"]["code"] == -32601
        assert "nope" in response["error"]["message"]
        assert response["error"]["message"] == "Unknown tool: nope"

    def test_call_missing_name(self, dispatcher: RequestDispatcher) -> None:
        response = _call(dispatcher, _request("tools/call", {}))
        assert response is not None
        assert response["error"] == {"code": -32602, "message": "Invalid params: missing 'name'"}

    def test_call_without_params(self, dispatcher: RequestDispatcher) -> None:
        response = _call(dispatcher, _request("tools/call"))
        assert response is not None
        assert response["error"]["code"] == -32602

    def test_call_params_not_object(self, dispatcher: RequestDispatcher) -> None:
        response = _call(dispatcher, _request("tools/call", ["rules"]))
        assert response is not None
        assert response["error"]["code"] == -32602
        assert "'params' must be an object" in response["error"]["message"]


class TestPrompts:
    def test_list(self, dispatcher: RequestDispatcher) -> None:
        response = _call(dispatcher, _request("prompts/list"))
        assert response is not None
        assert response["result"] == {
            "prompts": [
                {
                    "name": "code_review",
                    "description": "Review code",
                    "arguments": [
                        {"name": "code", "required": True, "description": "Code to review"},
                        {"name": "language", "required": False, "description": ""},
                        {"name": "focus_areas", "required": False, "description": ""},
                    ],
                }
            ]
        }

    def test_get(self, dispatcher: RequestDispatcher) -> None:
        params = {"name": "code_review", "arguments": {"code": "x = 1", "language": "ruby"}}
        response = _call(dispatcher, _request("prompts/get", params))
        assert response is not None
        assert response["result"] == {
            "messages": [
                {
                    "role": "user",
                    "content": {"type": "text", "text": "Review:\nx = 1\nLanguage: ruby"},
                }
            ]
        }

    def test_get_without_arguments(self, dispatcher: RequestDispatcher) -> None:
        response = _call(dispatcher, _request("prompts/get", {"name": "code_review"}))
        assert response is not None
        assert response["result"]["messages"][0]["content"]["text"] == "Review:\n"

    def test_get_null_arguments(self, dispatcher: RequestDispatcher) -> None:
        params = {"name": "code_review", "arguments": None}
        response = _call(dispatcher, _request("prompts/get", params))
        assert response is not None
        assert "result" in response

    def test_get_unknown_prompt(self, dispatcher: RequestDispatcher) -> None:
        response = _call(dispatcher, _request("prompts/get", {"name": "nope"}))
        assert response is not None
        assert response["error"] == {"code": -32601, "message": "Unknown prompt: nope"}

    def test_get_missing_name(self, dispatcher: RequestDispatcher) -> None:
        response = _call(dispatcher, _request("prompts/get", {"arguments": {}}))
        assert response is not None
        assert response["error"]["code"] == -32602

    def test_get_arguments_not_object(self, dispatcher: RequestDispatcher) -> None:
        params = {"name": "code_review", "arguments": ["x"]}
        response = _call(dispatcher, _request("prompts/get", params))
        assert response is not None
        assert response["error"]["code"] == -32602
        assert "'arguments' must be an object" in response["error"]["message"]


class TestEnvelope:
    def test_unparsable_line_dropped(self, dispatcher: RequestDispatcher) -> None:
        assert dispatcher.handle_line("not json\n") is None

    def test_non_object_dropped(self, dispatcher: RequestDispatcher) -> None:
        assert dispatcher.handle_line("[1, 2, 3]\n") is None
        assert dispatcher.handle_line('"text"\n') is None

    def test_blank_line_ignored(self, dispatcher: RequestDispatcher) -> None:
        assert dispatcher.handle_line("   \n") is None

    def test_notification_never_answered(self, dispatcher: RequestDispatcher) -> None:
        for method in ("tools/list", "unknown/method", ""):
            assert _call(dispatcher, {"jsonrpc": "2.0", "method": method}) is None

    def test_null_id_is_notification(self, dispatcher: RequestDispatcher) -> None:
        assert _call(dispatcher, {"jsonrpc": "2.0", "id": None, "method": "tools/list"}) is None

    def test_missing_method(self, dispatcher: RequestDispatcher) -> None:
        response = _call(dispatcher, {"jsonrpc": "2.0", "id": 4})
        assert response == {
            "jsonrpc": "2.0",
            "id": 4,
            "error": {"code": -32600, "message": "Invalid Request: missing 'method'"},
        }

    def test_empty_method(self, dispatcher: RequestDispatcher) -> None:
        response = _call(dispatcher, _request(""))
        assert response is not None
        assert response["error"]["code"] == -32600

    def test_unknown_method(self, dispatcher: RequestDispatcher) -> None:
        response = _call(dispatcher, _request("resources/list"))
        assert response is not None
        assert response["error"] == {
            "code": -32601,
            "message": "Unknown JSON-RPC method: resources/list",
        }

    def test_non_string_method(self, dispatcher: RequestDispatcher) -> None:
        response = _call(dispatcher, {"jsonrpc": "2.0", "id": 1, "method": 42})
        assert response is not None
        assert response["error"]["code"] == -32601

    @pytest.mark.parametrize("request_id", [0, "abc", 9.5])
    def test_id_echoed(self, dispatcher: RequestDispatcher, request_id: Any) -> None:
        response = _call(dispatcher, _request("tools/list", id=request_id))
        assert response is not None
        assert response["id"] == request_id

    def test_internal_error(
        self,
        dispatcher: RequestDispatcher,
        context: ServerContext,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def _boom(name: str) -> None:
            raise RuntimeError("boom")

        monkeypatch.setattr(context.resolver, "resolve_tool", _boom)
        response = _call(dispatcher, _request("tools/call", {"name": "rules"}))
        assert response == {
            "jsonrpc": "2.0",
            "id": 1,
            "error": {"code": -32000, "message": "Server execution error: boom"},
        }

        # The dispatcher keeps working after a failure.
        follow_up = _call(dispatcher, _request("tools/list", id=2))
        assert follow_up is not None
        assert "result" in follow_up

    def test_handle_parsed_request(self, dispatcher: RequestDispatcher) -> None:
        response = dispatcher.handle(JsonRpcRequest(id="x", method="tools/list"))
        assert response is not None
        assert response.id == "x"
