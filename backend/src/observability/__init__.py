"""Observability module.

Provides structured logging, request correlation, metrics, and health checks.
"""

from .logging_config import configure_logging, get_logger
from .metrics import (
    match_decisions_total,
    match_duration_ms,
    match_confidence,
    multi_match_total,
    oracle_calls_total,
    oracle_latency_ms,
    oracle_tokens_total,
    oracle_cost_micros_total,
)
from .request_id import (
    request_id_var,
    get_request_id,
    set_request_id,
    reset_request_id,
    resolve_request_id,
    generate_request_id,
)
from .health import HealthStatus, ComponentHealth
from .middleware import RequestIDMiddleware

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "match_decisions_total",
    "match_duration_ms",
    "match_confidence",
    "multi_match_total",
    "oracle_calls_total",
    "oracle_latency_ms",
    "oracle_tokens_total",
    "oracle_cost_micros_total",
    # Request ID
    "request_id_var",
    "get_request_id",
    "set_request_id",
    "reset_request_id",
    "resolve_request_id",
    "generate_request_id",
    # Health
    "HealthStatus",
    "ComponentHealth",
    # Middleware
    "RequestIDMiddleware",
]
