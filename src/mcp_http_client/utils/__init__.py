"""Utility module for client configuration."""

from .config import ClientConfig, ProtocolConfig, TransportConfig

__all__ = [
    "ClientConfig",
    "ProtocolConfig",
    "TransportConfig",
]
