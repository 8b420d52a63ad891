"""
Application factory for csrfguard.

Importing this module has no side effects: nothing is read from the
environment and logging is left as the host configured it.
"""
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .api.token_router import ISSUANCE_PATH, router as token_router
from .config import Settings, get_settings
from .crypto import CsrfTokenCodec
from .errors import CsrfGuardError, csrf_error_handler
from .logging import SERVICE_NAME, get_logger
from .metrics import Metrics
from .middleware import (
    CorrelationMiddleware,
    CSRFMiddleware,
    ErrorHandlerMiddleware,
    MetricsMiddleware,
    RequestGate,
)

VERSION = "0.1.0"

# Operational routes that never carry CSRF headers
ALWAYS_EXCLUDED_PATHS = (ISSUANCE_PATH, "/health", "/metrics")

logger = get_logger()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the csrfguard application.

    The encryption key is derived here, once, before any request is served.

    Args:
        settings: Settings to use; defaults to get_settings()

    Raises:
        ConfigurationError: If a required secret is not configured
    """
    settings = settings or get_settings()
    settings.validate_secrets()

    codec = CsrfTokenCodec.from_secret(settings.CSRF_TOKEN_SECRET)
    metrics = Metrics(service_name=SERVICE_NAME, version=VERSION)

    excluded_paths = list(settings.csrf_excluded_paths)
    for path in ALWAYS_EXCLUDED_PATHS:
        if path not in excluded_paths:
            excluded_paths.append(path)
    gate = RequestGate(codec, excluded_paths=excluded_paths)

    app = FastAPI(
        title="csrfguard",
        version=VERSION,
        description="Double-submit CSRF token issuance and validation",
    )
    app.state.settings = settings
    app.state.codec = codec
    app.state.metrics = metrics
    app.state.gate = gate

    # Last added runs first: correlation -> errors -> metrics -> csrf
    app.add_middleware(
        CSRFMiddleware,
        gate=gate,
        metrics=metrics,
        cookie_fallback=settings.CSRF_COOKIE_FALLBACK,
    )
    app.add_middleware(MetricsMiddleware, metrics=metrics)
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_exception_handler(CsrfGuardError, csrf_error_handler)

    app.include_router(token_router)

    @app.get("/health")
    async def health():
        """
        Liveness probe - basic health check.

        Returns 200 if service is running.
        """
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "version": VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/metrics")
    async def prometheus_metrics():
        return Response(generate_latest(metrics.registry), media_type=CONTENT_TYPE_LATEST)

    logger.info(
        "service_configured",
        version=VERSION,
        env=settings.ENV,
        excluded_paths=list(gate.excluded_paths),
        cookie_fallback=settings.CSRF_COOKIE_FALLBACK,
    )
    return app
