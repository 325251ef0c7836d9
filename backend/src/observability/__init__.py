"""Observability: structured logging, request correlation, metrics and health checks."""

from .logging_config import configure_logging, get_logger
from .metrics import (
    authorization_decisions_total,
    list_scope_total,
    product_mutations_total,
    http_request_duration_seconds,
)
from .request_id import request_id_var, accept_request_id, get_request_id, set_request_id
from .health import HealthStatus, ComponentHealth
from .middleware import RequestIDMiddleware

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "authorization_decisions_total",
    "list_scope_total",
    "product_mutations_total",
    "http_request_duration_seconds",
    # Request ID
    "request_id_var",
    "get_request_id",
    "set_request_id",
    "accept_request_id",
    # Health
    "HealthStatus",
    "ComponentHealth",
    # Middleware
    "RequestIDMiddleware",
]
