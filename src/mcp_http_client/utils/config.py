from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Optional

from mcp_http_client._version import __version__
from mcp_http_client.schema.initialization import LATEST_PROTOCOL_VERSION


@dataclass
class TransportConfig:
    timeout_seconds: Optional[float] = 30.0  # None disables httpx timeouts
    follow_redirects: bool = True
    # Merged over the protocol headers; caller values win on collision
    headers: Dict[str, str] = dataclasses.field(default_factory=dict)


@dataclass
class ProtocolConfig:
    protocol_version: str = LATEST_PROTOCOL_VERSION
    client_name: str = "mcp-http-client"
    client_version: str = __version__
    capabilities: Dict[str, Any] = dataclasses.field(default_factory=dict)


@dataclass
class ClientConfig:
    transport: TransportConfig = dataclasses.field(default_factory=TransportConfig)
    protocol: ProtocolConfig = dataclasses.field(default_factory=ProtocolConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClientConfig":
        def build(dc_cls, key):
            values = data.get(key, {})
            return dc_cls(**values)

        return cls(
            transport=build(TransportConfig, "transport"),
            protocol=build(ProtocolConfig, "protocol"),
        )
