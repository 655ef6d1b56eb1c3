"""Custom Prometheus metrics for tableqa.

Metrics live in the default prometheus_client registry; a host process that
embeds tableqa exposes them with its own /metrics endpoint or push gateway.
"""

from prometheus_client import Counter, Histogram

# === Connector Metrics ===

inference_requests_total = Counter(
    "tableqa_inference_requests_total",
    "Total inference calls by connector and outcome",
    ["connector", "outcome"],
)
"""
Inference calls counter.

Labels:
- connector: TableQAConnector, SummarizationConnector
- outcome: success, invalid_payload, encoding_error, transport_error,
  timeout, cancelled, backend_error, decoding_error
"""

inference_latency_seconds = Histogram(
    "tableqa_inference_latency_seconds",
    "Inference call latency in seconds",
    ["connector", "outcome"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)
"""
Latency histogram for a whole infer() call: request validation, encoding,
the transport round trip and response decoding. Failed calls are observed
too, under their outcome label.

Buckets cover fast hosted endpoints through cold-starting models (60s).
"""

# === Table Metrics ===

table_parse_failures_total = Counter(
    "tableqa_table_parse_failures_total",
    "Total CSV-to-table failures by reason",
    ["reason"],
)
"""
Table build failures.

Labels:
- reason: malformed_csv, ragged_row, duplicate_header
"""
