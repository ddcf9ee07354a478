"""JSON-RPC 2.0 envelopes.

Outgoing requests and notifications validate on construction so a malformed
message never reaches the wire. Incoming responses tolerate fields they do
not know about, and their ``id`` may be absent or null.
"""

from __future__ import annotations

import typing as t
import uuid

from pydantic import ConfigDict, Field, StrictInt, StrictStr

from .base import JSON, SchemaModel

JSONRPC_VERSION = "2.0"

# Standard JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# bool is rejected by the strict int
RequestId = t.Union[StrictStr, StrictInt]


def new_request_id() -> str:
    """Return a fresh 128-bit random request id rendered as a string."""
    return str(uuid.uuid4())


class JSONRPCRequest(SchemaModel):
    """A request that expects a correlated response."""

    jsonrpc: t.Literal["2.0"] = JSONRPC_VERSION
    id: RequestId
    method: str = Field(min_length=1)
    params: t.Optional[JSON] = None


class JSONRPCNotification(SchemaModel):
    """A fire-and-forget message; carries no id and gets no correlated reply."""

    jsonrpc: t.Literal["2.0"] = JSONRPC_VERSION
    method: str = Field(min_length=1)
    params: t.Optional[JSON] = None


class JSONRPCErrorObject(SchemaModel):
    code: StrictInt
    message: StrictStr
    data: t.Any = None


class JSONRPCResponse(SchemaModel):
    model_config = ConfigDict(extra="allow")

    jsonrpc: t.Literal["2.0"] = JSONRPC_VERSION
    id: t.Optional[RequestId] = None
    result: t.Any


class JSONRPCErrorResponse(SchemaModel):
    model_config = ConfigDict(extra="allow")

    jsonrpc: t.Literal["2.0"] = JSONRPC_VERSION
    # null when the server could not parse the request
    id: t.Optional[RequestId] = None
    error: JSONRPCErrorObject
