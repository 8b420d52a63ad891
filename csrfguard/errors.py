"""
Error taxonomy for csrfguard.

Request-level errors carry the HTTP status, a machine-readable code and a
human-readable message, and all render to the same JSON body:

    {"status": 403, "message": "Invalid CSRF token", "code": "INVALID_CSRF_TOKEN"}
"""
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
import structlog

# Re-exported so callers can import every csrfguard exception from here
from .config import ConfigurationError
from .crypto.errors import CodecError, DecryptionError

log = structlog.get_logger()

CSRF_TOKEN_MISSING = "CSRF_TOKEN_MISSING"
INVALID_CSRF_TOKEN = "INVALID_CSRF_TOKEN"
UNAUTHENTICATED = "UNAUTHENTICATED"
INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class CsrfGuardError(Exception):
    """Base exception for requests rejected by csrfguard"""

    status_code: int = 403
    code: str = INVALID_CSRF_TOKEN
    message: str = "Forbidden"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status_code,
            "message": self.message,
            "code": self.code,
        }

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.status_code,
            content=self.to_dict(),
            headers=self.headers,
        )


class MissingCsrfToken(CsrfGuardError):
    """One or both verification inputs are absent"""

    code = CSRF_TOKEN_MISSING
    message = "CSRF token or cookie missing"


class InvalidCsrfToken(CsrfGuardError):
    """Verification ran and failed"""

    code = INVALID_CSRF_TOKEN
    message = "Invalid CSRF token"


class Unauthenticated(CsrfGuardError):
    """Issuance request without a usable Authorization header"""

    status_code = 401
    code = UNAUTHENTICATED
    message = "Unauthenticated"
    headers = {"WWW-Authenticate": "Bearer"}


class Unauthorized(CsrfGuardError):
    """Issuance shared secret does not match"""

    code = INVALID_CSRF_TOKEN
    message = "Invalid CSRF token"


async def csrf_error_handler(request: Request, exc: CsrfGuardError) -> JSONResponse:
    """Render a CsrfGuardError raised from a route or dependency."""
    log.warning(
        "request.rejected",
        status_code=exc.status_code,
        code=exc.code,
        path=request.url.path,
    )
    return exc.to_response()
