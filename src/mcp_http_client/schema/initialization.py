from __future__ import annotations

import typing as t

from pydantic import ConfigDict, Field, StrictStr

from .base import JSON, SchemaModel
from .jsonrpc import JSONRPCNotification, JSONRPCRequest, RequestId

LATEST_PROTOCOL_VERSION = "2025-06-18"

INITIALIZE_METHOD = "initialize"
INITIALIZED_METHOD = "notifications/initialized"


class Implementation(SchemaModel):
    """Name and version of a protocol participant (clientInfo / serverInfo)."""

    name: str = Field(min_length=1)
    version: StrictStr
    title: t.Optional[str] = None


class ClientCapabilities(SchemaModel):
    model_config = ConfigDict(extra="allow")

    experimental: t.Optional[JSON] = None
    roots: t.Optional[JSON] = None
    sampling: t.Optional[JSON] = None
    elicitation: t.Optional[JSON] = None


class ServerCapabilities(SchemaModel):
    model_config = ConfigDict(extra="allow")

    experimental: t.Optional[JSON] = None
    logging: t.Optional[JSON] = None
    completions: t.Optional[JSON] = None
    prompts: t.Optional[JSON] = None
    resources: t.Optional[JSON] = None
    tools: t.Optional[JSON] = None


class InitializeParams(SchemaModel):
    protocol_version: str = Field(alias="protocolVersion", min_length=1)
    capabilities: ClientCapabilities = Field(default_factory=ClientCapabilities)
    client_info: Implementation = Field(alias="clientInfo")


class InitializeResult(SchemaModel):
    model_config = ConfigDict(extra="allow")

    protocol_version: StrictStr = Field(alias="protocolVersion")
    capabilities: ServerCapabilities = Field(default_factory=ServerCapabilities)
    server_info: Implementation = Field(alias="serverInfo")
    instructions: t.Optional[str] = None


def initialize_request(
    request_id: RequestId,
    client_info: Implementation,
    *,
    protocol_version: str = LATEST_PROTOCOL_VERSION,
    capabilities: t.Optional[ClientCapabilities] = None,
) -> JSONRPCRequest:
    params = InitializeParams(
        protocol_version=protocol_version,
        capabilities=capabilities or ClientCapabilities(),
        client_info=client_info,
    )
    return JSONRPCRequest(id=request_id, method=INITIALIZE_METHOD, params=params.to_dict())


def initialized_notification() -> JSONRPCNotification:
    return JSONRPCNotification(method=INITIALIZED_METHOD)
