"""Prometheus metrics export."""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Request metrics
request_count = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

request_duration = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
)

# Tool run metrics
tool_runs_total = Counter(
    "tool_runs_total",
    "Total tool runs by final outcome",
    ["tool", "outcome"],  # outcome: completed | truncated | cancelled | <error category>
)

tool_first_chunk_duration = Histogram(
    "tool_first_chunk_seconds",
    "Time from opening the upstream stream to its first unit",
    ["tool"],
)

tool_stream_bytes_total = Counter(
    "tool_stream_bytes_total",
    "Total bytes relayed to clients",
    ["tool"],
)


def get_metrics_response() -> Response:
    """Get Prometheus metrics as HTTP response."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
