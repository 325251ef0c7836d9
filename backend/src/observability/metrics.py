"""Prometheus metrics for the catalog admin.

Defines operational metrics exposed on /metrics.
"""

from prometheus_client import Counter, Histogram

# Access policy decisions
authorization_decisions_total = Counter(
    "catalog_authorization_decisions_total",
    "Product access decisions taken by the access policy",
    ["action", "outcome"]  # action: view|edit|delete, outcome: allowed|denied
)

list_scope_total = Counter(
    "catalog_list_scope_total",
    "Product list queries by applied scope",
    ["scope"]  # scope: organization|unscoped
)

# Product lifecycle
product_mutations_total = Counter(
    "catalog_product_mutations_total",
    "Product create/update/delete operations",
    ["operation"]  # operation: create|update|delete
)

# HTTP
http_request_duration_seconds = Histogram(
    "catalog_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "status_code"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0]
)
