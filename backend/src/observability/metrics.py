"""Prometheus metrics for the matching service.

Defines operational metrics for monitoring and alerting; exposed on /metrics.
"""

from prometheus_client import Counter, Histogram

# Matching metrics
match_decisions_total = Counter(
    "teklif_match_decisions_total",
    "Total matching decisions",
    ["strategy", "method"]  # strategy: exact|lexical|generative|none
)

match_duration_ms = Histogram(
    "teklif_match_duration_ms",
    "End-to-end matching time in milliseconds",
    ["strategy"],
    buckets=[5, 10, 25, 50, 100, 250, 500, 1000, 2500, 5000, 10000]
)

match_confidence = Histogram(
    "teklif_match_confidence",
    "Top candidate confidence distribution",
    buckets=[0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0]
)

multi_match_total = Counter(
    "teklif_multi_match_total",
    "Decisions returned as near-tied candidate sets"
)

# Oracle call metrics
oracle_calls_total = Counter(
    "teklif_oracle_calls_total",
    "Total generative oracle calls",
    ["provider", "status"]  # status: success|error|rejected
)

oracle_latency_ms = Histogram(
    "teklif_oracle_latency_ms",
    "Oracle call latency in milliseconds",
    ["provider"],
    buckets=[50, 100, 250, 500, 1000, 2500, 5000, 10000, 30000]
)

oracle_tokens_total = Counter(
    "teklif_oracle_tokens_total",
    "Total oracle tokens consumed",
    ["provider", "direction"]  # direction: input|output
)

oracle_cost_micros_total = Counter(
    "teklif_oracle_cost_micros_total",
    "Total oracle cost in micros (1 micro = 0.000001 USD)",
    ["provider"]
)
