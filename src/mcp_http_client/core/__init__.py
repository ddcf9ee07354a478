"""Core module for the MCP protocol engine: lifecycle, response parsing and the client."""

from .client import DEFAULT_HEADERS, SESSION_HEADER, MCPClient
from .lifecycle import NOT_INITIALIZED_MESSAGE, ClientState, Lifecycle
from .responses import (
    ErrorPayload,
    ParsedResponse,
    RawPayload,
    ResultPayload,
    SSEParser,
    StreamPayload,
    classify_json,
    is_event_stream,
    parse_json_body,
)

__all__ = [
    # Client
    "MCPClient",
    "DEFAULT_HEADERS",
    "SESSION_HEADER",
    # Lifecycle
    "ClientState",
    "Lifecycle",
    "NOT_INITIALIZED_MESSAGE",
    # Response parsing
    "ParsedResponse",
    "ResultPayload",
    "ErrorPayload",
    "RawPayload",
    "StreamPayload",
    "SSEParser",
    "classify_json",
    "is_event_stream",
    "parse_json_body",
]
