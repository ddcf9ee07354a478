"""Unit tests for the client configuration dataclasses."""

from mcp_http_client import __version__
from mcp_http_client.utils.config import ClientConfig, ProtocolConfig, TransportConfig


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig()

        assert config.transport == TransportConfig(timeout_seconds=30.0, follow_redirects=True, headers={})
        assert config.protocol.protocol_version == "2025-06-18"
        assert config.protocol.client_name == "mcp-http-client"
        assert config.protocol.client_version == __version__
        assert config.protocol.capabilities == {}

    def test_default_headers_are_not_shared(self):
        first, second = ClientConfig(), ClientConfig()
        first.transport.headers["X-Trace"] = "1"

        assert second.transport.headers == {}

    def test_from_dict_nested_sections(self):
        config = ClientConfig.from_dict(
            {
                "transport": {"timeout_seconds": 5, "headers": {"Authorization": "Bearer abc"}},
                "protocol": {"client_name": "inspector", "protocol_version": "2025-03-26"},
            }
        )

        assert config.transport.timeout_seconds == 5
        assert config.transport.follow_redirects is True
        assert config.transport.headers == {"Authorization": "Bearer abc"}
        assert config.protocol == ProtocolConfig(
            protocol_version="2025-03-26", client_name="inspector", client_version=__version__
        )

    def test_from_dict_missing_sections_use_defaults(self):
        assert ClientConfig.from_dict({}) == ClientConfig()

    def test_timeout_can_be_disabled(self):
        assert ClientConfig.from_dict({"transport": {"timeout_seconds": None}}).transport.timeout_seconds is None
