"""HTTP metrics middleware."""
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
import structlog

log = structlog.get_logger()


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Middleware to collect HTTP metrics for Prometheus.

    - Records request count by method, path, status
    - Records request duration histogram
    - Counts unhandled exceptions as status 500 before re-raising
    """

    def __init__(self, app, metrics):
        super().__init__(app)
        self.metrics = metrics

    def _record(self, request: Request, status: int, duration: float):
        self.metrics.http_requests_total.labels(
            service=self.metrics.service_name,
            method=request.method,
            path=request.url.path,
            status=status,
        ).inc()

        self.metrics.http_request_duration.labels(
            service=self.metrics.service_name,
            method=request.method,
            path=request.url.path,
        ).observe(duration)

    async def dispatch(self, request: Request, call_next):
        # Skip metrics endpoint to avoid recursion
        if request.url.path == "/metrics":
            return await call_next(request)

        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            self._record(request, 500, duration)

            log.error(
                "http_request_error",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration * 1000, 2),
            )

            raise

        duration = time.time() - start_time
        self._record(request, response.status_code, duration)

        log.info(
            "http_request",
            http_status=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )

        return response
