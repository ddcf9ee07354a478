from __future__ import annotations

import typing as t


class MCPError(Exception):
    """Base exception for all client failures."""


class StateError(MCPError):
    """An operation was invoked in a lifecycle state that does not allow it."""


class TransportError(MCPError):
    """The HTTP exchange itself failed (connection, timeout, bad status)."""


class HTTPStatusError(TransportError):
    """The server answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP {status_code}: {body}")


class RPCError(MCPError):
    """JSON-RPC error object returned by the server.

    ``str(err)`` is exactly the server supplied message; ``code`` and ``data``
    are kept as attributes for programmatic handling.
    """

    def __init__(self, code: int, message: str, data: t.Any = None) -> None:
        self.code = code
        self.message = message
        self.data = data
        super().__init__(message)


class ShapeError(MCPError):
    """Well-formed JSON that lacks a field the call cannot do without."""


class SchemaError(MCPError, ValueError):
    """An outgoing message (or a strictly validated payload) is malformed."""
