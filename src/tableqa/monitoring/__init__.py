"""Monitoring and metrics instrumentation for tableqa.

Exports Prometheus metrics for the table builder and the inference connectors.
"""

from tableqa.monitoring.metrics import (
    inference_latency_seconds,
    inference_requests_total,
    table_parse_failures_total,
)

__all__ = [
    "inference_requests_total",
    "inference_latency_seconds",
    "table_parse_failures_total",
]
