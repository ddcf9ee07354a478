"""Shared fixtures and fakes for unit tests."""

from __future__ import annotations

import json
import typing as t

import httpx
import pytest

from mcp_http_client.core.client import MCPClient
from mcp_http_client.monitoring import reset_all

ENDPOINT = "http://mcp.test/mcp"

Reply = t.Callable[[t.Dict[str, t.Any]], httpx.Response]


class FakeMCPServer:
    """Scriptable MCP endpoint served through ``httpx.MockTransport``.

    Every request is recorded. Replies default to a well-behaved server;
    tests override them per method via ``replies`` or per tool via
    ``tool_replies``.
    """

    def __init__(self) -> None:
        self.requests: t.List[httpx.Request] = []
        self.replies: t.Dict[str, Reply] = {}
        self.tool_replies: t.Dict[str, Reply] = {}
        self.notification_status = 202
        self.session_id: t.Optional[str] = None
        self.tools: t.List[t.Dict[str, t.Any]] = [
            {
                "name": "echo",
                "description": "Echo the input text",
                "inputSchema": {
                    "type": "object",
                    "properties": {"text": {"type": "string"}},
                    "required": ["text"],
                },
            },
            {
                "name": "slow-task",
                "inputSchema": {"type": "object"},
            },
        ]

    @property
    def messages(self) -> t.List[t.Dict[str, t.Any]]:
        return [json.loads(request.content) for request in self.requests]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        message = json.loads(request.content)
        method = message.get("method")
        if "id" not in message:
            return httpx.Response(self.notification_status)
        if method in self.replies:
            return self.replies[method](message)
        if method == "initialize":
            headers = {"Mcp-Session-Id": self.session_id} if self.session_id else None
            return self.json_reply(
                message["id"],
                {
                    "protocolVersion": "2025-06-18",
                    "capabilities": {"tools": {}},
                    "serverInfo": {"name": "fake-server", "version": "1.0.0"},
                },
                headers=headers,
            )
        if method == "tools/list":
            return self.json_reply(message["id"], {"tools": self.tools})
        if method == "tools/call":
            name = message["params"]["name"]
            if name in self.tool_replies:
                return self.tool_replies[name](message)
            return self.json_reply(message["id"], {"content": [{"type": "text", "text": f"called {name}"}]})
        return self.error_reply(message["id"], -32601, "Method not found")

    def client(self, endpoint: str = ENDPOINT, **kwargs: t.Any) -> MCPClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(self.handle))
        return MCPClient(endpoint, http_client=http_client, **kwargs)

    @staticmethod
    def json_reply(
        msg_id: t.Any, result: t.Any, headers: t.Optional[t.Dict[str, str]] = None
    ) -> httpx.Response:
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": msg_id, "result": result}, headers=headers)

    @staticmethod
    def error_reply(msg_id: t.Any, code: int, message: str, data: t.Any = None) -> httpx.Response:
        error: t.Dict[str, t.Any] = {"code": code, "message": message}
        if data is not None:
            error["data"] = data
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": msg_id, "error": error})

    @staticmethod
    def sse_reply(events: t.Iterable[t.Any], extra_lines: t.Iterable[str] = ()) -> httpx.Response:
        lines = list(extra_lines)
        for event in events:
            lines.append("data: " + (event if isinstance(event, str) else json.dumps(event)))
            lines.append("")
        return httpx.Response(
            200,
            headers={"content-type": "text/event-stream"},
            content=("\n".join(lines) + "\n").encode("utf-8"),
        )


@pytest.fixture
def fake_server() -> FakeMCPServer:
    return FakeMCPServer()


@pytest.fixture(autouse=True)
def clean_metrics():
    reset_all()
    yield
    reset_all()


@pytest.fixture
def progress_events():
    """Three progress notifications followed by the final result."""
    return [
        {
            "jsonrpc": "2.0",
            "method": "notifications/progress",
            "params": {"progressToken": "tok", "progress": value, "total": 1.0, "message": f"step {i}"},
        }
        for i, value in enumerate((0.1, 0.5, 0.9), start=1)
    ] + [
        {"jsonrpc": "2.0", "id": "1", "result": {"content": [{"type": "text", "text": "completed"}]}},
    ]


@pytest.fixture
def tool_descriptor():
    return {
        "name": "search",
        "title": "Search",
        "description": "Full-text search",
        "inputSchema": {
            "type": "object",
            "properties": {"query": {"type": "string"}, "limit": {"type": "integer"}},
            "required": ["query"],
        },
        "annotations": {"readOnlyHint": True},
    }


@pytest.fixture
def server_factory():
    return FakeMCPServer
