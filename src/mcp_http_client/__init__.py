"""mcp_http_client

An MCP client speaking JSON-RPC 2.0 over HTTP POST, reading replies either
as a single JSON document or as a Server-Sent-Events stream that carries
progress notifications ahead of the final result.
"""

from ._version import __version__
from .core.client import MCPClient
from .core.lifecycle import ClientState
from .errors import (
    HTTPStatusError,
    MCPError,
    RPCError,
    SchemaError,
    ShapeError,
    StateError,
    TransportError,
)
from .schema import (
    LATEST_PROTOCOL_VERSION,
    CallToolResult,
    ContentBlock,
    InitializeResult,
    ListToolsResult,
    ProgressNotification,
    Tool,
)
from .utils.config import ClientConfig, ProtocolConfig, TransportConfig

__all__ = [
    "MCPClient",
    "ClientState",
    "ClientConfig",
    "TransportConfig",
    "ProtocolConfig",
    "LATEST_PROTOCOL_VERSION",
    "Tool",
    "ContentBlock",
    "CallToolResult",
    "ListToolsResult",
    "InitializeResult",
    "ProgressNotification",
    "MCPError",
    "StateError",
    "TransportError",
    "HTTPStatusError",
    "RPCError",
    "ShapeError",
    "SchemaError",
]
