"""Structured error response middleware."""
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import structlog
from ..errors import INTERNAL_SERVER_ERROR
from .correlation import get_correlation_id

log = structlog.get_logger()


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turns unhandled exceptions into structured 500 responses."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            correlation_id = get_correlation_id()
            log.error(
                "unhandled.exception",
                error=str(exc),
                error_type=exc.__class__.__name__,
                path=request.url.path,
                exc_info=True
            )
            return JSONResponse(
                status_code=500,
                content={
                    "status": 500,
                    "message": "An unexpected error occurred",
                    "code": INTERNAL_SERVER_ERROR,
                    "correlation_id": correlation_id,
                }
            )
