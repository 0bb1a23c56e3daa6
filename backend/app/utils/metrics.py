"""Prometheus metrics for organization-scoped user operations."""

from prometheus_client import Counter

scoped_user_ops_total = Counter(
    "scoped_user_ops_total",
    "Total organization-scoped user store operations",
    ["op", "outcome"],
)


class PrometheusUserStoreMetrics:
    """Prometheus-based scoped user store metrics implementation."""

    def record(self, op: str, outcome: str) -> None:
        """Count one operation outcome."""
        scoped_user_ops_total.labels(op=op, outcome=outcome).inc()
