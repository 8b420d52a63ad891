"""
Prometheus metrics for csrfguard.
"""
from prometheus_client import Counter, Histogram, Info, CollectorRegistry


class Metrics:
    """
    Centralized metrics for csrfguard.
    """

    def __init__(self, service_name: str = "csrfguard", version: str = "0.1.0", registry=None):
        self.service_name = service_name
        self.version = version
        self.registry = registry or CollectorRegistry()

        # HTTP Metrics
        self.http_requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["service", "method", "path", "status"],
            registry=self.registry,
        )

        self.http_request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["service", "method", "path"],
            registry=self.registry,
        )

        # Application Info
        self.app_info = Info(
            "app",
            "Application information",
            registry=self.registry,
        )
        self.app_info.info({"service": service_name, "version": version})

        # CSRF Metrics
        self.csrf_gate_decisions_total = Counter(
            "csrf_gate_decisions_total",
            "Request gate decisions",
            ["outcome"],
            registry=self.registry,
        )

        self.csrf_tokens_issued_total = Counter(
            "csrf_tokens_issued_total",
            "Total CSRF tokens issued",
            registry=self.registry,
        )

        self.csrf_issuance_denied_total = Counter(
            "csrf_issuance_denied_total",
            "Token issuance requests denied",
            ["reason"],
            registry=self.registry,
        )

    def record_gate_decision(self, outcome: str):
        """Record a request gate outcome (excluded, verified, missing, invalid)."""
        self.csrf_gate_decisions_total.labels(outcome=outcome).inc()

    def record_token_issued(self):
        """Record a successful token issuance."""
        self.csrf_tokens_issued_total.inc()

    def record_issuance_denied(self, reason: str):
        """Record a denied issuance request (unauthenticated, unauthorized)."""
        self.csrf_issuance_denied_total.labels(reason=reason).inc()
