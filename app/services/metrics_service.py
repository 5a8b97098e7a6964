"""Prometheus metrics service for application monitoring."""

import logging

from prometheus_client import Counter, generate_latest

logger = logging.getLogger(__name__)

HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests handled, by method and status code",
    ["method", "status"],
)


class MetricsService:
    """Records request metrics and renders the Prometheus exposition."""

    def record_request(self, method: str, status_code: int) -> None:
        HTTP_REQUESTS_TOTAL.labels(method=method, status=str(status_code)).inc()

    def get_metrics_text(self) -> str:
        return generate_latest().decode("utf-8")
