"""Message shapes for JSON-RPC and the MCP lifecycle, tools and notifications."""

from .base import SchemaModel
from .initialization import (
    INITIALIZE_METHOD,
    INITIALIZED_METHOD,
    LATEST_PROTOCOL_VERSION,
    ClientCapabilities,
    Implementation,
    InitializeParams,
    InitializeResult,
    ServerCapabilities,
    initialize_request,
    initialized_notification,
)
from .jsonrpc import (
    JSONRPC_VERSION,
    JSONRPCErrorObject,
    JSONRPCErrorResponse,
    JSONRPCNotification,
    JSONRPCRequest,
    JSONRPCResponse,
    RequestId,
    new_request_id,
)
from .notifications import (
    CANCELLED_METHOD,
    PROGRESS_METHOD,
    CancelledParams,
    ProgressNotification,
    cancelled_notification,
)
from .tools import (
    CALL_TOOL_METHOD,
    LIST_TOOLS_METHOD,
    CallToolParams,
    CallToolResult,
    ContentBlock,
    ListToolsParams,
    ListToolsResult,
    Tool,
    ToolInputSchema,
    call_tool_request,
    list_tools_request,
)

__all__ = [
    "SchemaModel",
    # JSON-RPC
    "JSONRPC_VERSION",
    "RequestId",
    "JSONRPCRequest",
    "JSONRPCNotification",
    "JSONRPCResponse",
    "JSONRPCErrorResponse",
    "JSONRPCErrorObject",
    "new_request_id",
    # Lifecycle
    "LATEST_PROTOCOL_VERSION",
    "INITIALIZE_METHOD",
    "INITIALIZED_METHOD",
    "Implementation",
    "ClientCapabilities",
    "ServerCapabilities",
    "InitializeParams",
    "InitializeResult",
    "initialize_request",
    "initialized_notification",
    # Tools
    "LIST_TOOLS_METHOD",
    "CALL_TOOL_METHOD",
    "Tool",
    "ToolInputSchema",
    "ContentBlock",
    "ListToolsResult",
    "CallToolResult",
    "ListToolsParams",
    "CallToolParams",
    "list_tools_request",
    "call_tool_request",
    # Notifications
    "PROGRESS_METHOD",
    "CANCELLED_METHOD",
    "ProgressNotification",
    "CancelledParams",
    "cancelled_notification",
]
