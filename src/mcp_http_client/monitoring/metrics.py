from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass
class Counter:
    name: str
    help: str
    values: Dict[Tuple, float] = field(default_factory=dict)

    def inc(self, value: float = 1.0, **labels: Any) -> None:
        key = tuple(sorted(labels.items()))
        self.values[key] = self.values.get(key, 0.0) + value

    def get(self, **labels: Any) -> float:
        return self.values.get(tuple(sorted(labels.items())), 0.0)

    def reset(self) -> None:
        self.values.clear()


@dataclass
class Histogram:
    name: str
    help: str
    buckets: List[float]
    counts: Dict[Tuple, List[int]] = field(default_factory=dict)

    def observe(self, val: float, **labels: Any) -> None:
        key = tuple(sorted(labels.items()))
        if key not in self.counts:
            # last slot counts observations above the largest bucket
            self.counts[key] = [0 for _ in range(len(self.buckets) + 1)]
        for i, b in enumerate(self.buckets):
            if val <= b:
                self.counts[key][i] += 1
                break
        else:
            self.counts[key][-1] += 1

    def total(self, **labels: Any) -> int:
        return sum(self.counts.get(tuple(sorted(labels.items())), []))

    def reset(self) -> None:
        self.counts.clear()


# Predefined metrics
mcp_client_requests_total = Counter(
    "mcp_client_requests_total", "Outgoing JSON-RPC messages by method and outcome"
)
mcp_client_request_latency_seconds = Histogram(
    "mcp_client_request_latency_seconds",
    "Round-trip latency of outgoing JSON-RPC messages",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
mcp_client_progress_events_total = Counter(
    "mcp_client_progress_events_total", "Progress notifications received in SSE streams"
)


def reset_all() -> None:
    for metric in (
        mcp_client_requests_total,
        mcp_client_request_latency_seconds,
        mcp_client_progress_events_total,
    ):
        metric.reset()
