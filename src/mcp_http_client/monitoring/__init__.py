from .metrics import (
    Counter,
    Histogram,
    mcp_client_progress_events_total,
    mcp_client_request_latency_seconds,
    mcp_client_requests_total,
    reset_all,
)

__all__ = [
    "Counter",
    "Histogram",
    "mcp_client_requests_total",
    "mcp_client_request_latency_seconds",
    "mcp_client_progress_events_total",
    "reset_all",
]
