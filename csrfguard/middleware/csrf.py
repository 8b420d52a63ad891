"""
CSRF request gate.

Every request not on the exclusion list must carry both halves of an issued
token pair:

- ``x-csrf-token``: the encrypted token
- ``x-csrf-raw``: the raw companion value

The request proceeds only if the token decrypts to exactly the raw value.
Otherwise a 403 is returned with code ``CSRF_TOKEN_MISSING`` or
``INVALID_CSRF_TOKEN``.
"""
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
import structlog

from ..crypto import CsrfTokenCodec
from ..errors import CsrfGuardError, InvalidCsrfToken, MissingCsrfToken

log = structlog.get_logger()

TOKEN_HEADER = "x-csrf-token"
RAW_HEADER = "x-csrf-raw"
CSRF_COOKIE_NAME = "csrf_token"


class GateOutcome(str, Enum):
    EXCLUDED = "excluded"
    VERIFIED = "verified"
    MISSING = "missing"
    INVALID = "invalid"


class GateDecision(BaseModel):
    """Terminal state of the gate for one request."""
    outcome: GateOutcome

    @property
    def allowed(self) -> bool:
        return self.outcome in (GateOutcome.EXCLUDED, GateOutcome.VERIFIED)

    def error(self) -> Optional[CsrfGuardError]:
        """The error to respond with, or None if the request is allowed."""
        if self.outcome == GateOutcome.MISSING:
            return MissingCsrfToken()
        if self.outcome == GateOutcome.INVALID:
            return InvalidCsrfToken()
        return None


class RequestGate:
    """
    Accept/reject decision for a single request.

    The exclusion list is matched exactly against the request path.
    """

    def __init__(self, codec: CsrfTokenCodec, excluded_paths: Iterable[str] = ()):
        self._codec = codec
        self._excluded_paths: tuple[str, ...] = tuple(excluded_paths)

    @property
    def excluded_paths(self) -> tuple[str, ...]:
        return self._excluded_paths

    def is_excluded(self, path: str) -> bool:
        return path in self._excluded_paths

    def evaluate(self, path: str, token: Optional[str], raw: Optional[str]) -> GateDecision:
        """
        Decide whether a request may proceed.

        Args:
            path: Request path, without query string
            token: Submitted encrypted token, if any
            raw: Submitted raw companion value, if any

        Returns:
            GateDecision with the terminal outcome
        """
        if self.is_excluded(path):
            return GateDecision(outcome=GateOutcome.EXCLUDED)

        if not token or not raw:
            return GateDecision(outcome=GateOutcome.MISSING)

        if not self._codec.verify(token, raw):
            return GateDecision(outcome=GateOutcome.INVALID)

        return GateDecision(outcome=GateOutcome.VERIFIED)


class CSRFMiddleware(BaseHTTPMiddleware):
    """
    Applies the RequestGate to every incoming request.

    Args:
        gate: Configured RequestGate
        metrics: Optional Metrics instance for decision counters
        cookie_fallback: Read the raw value from the csrf_token cookie when
            the x-csrf-raw header is absent
    """

    def __init__(self, app, gate: RequestGate, metrics=None, cookie_fallback: bool = False):
        super().__init__(app)
        self.gate = gate
        self.metrics = metrics
        self.cookie_fallback = cookie_fallback

    def _raw_value(self, request: Request) -> Optional[str]:
        raw = request.headers.get(RAW_HEADER)
        if not raw and self.cookie_fallback:
            raw = request.cookies.get(CSRF_COOKIE_NAME)
        return raw

    async def dispatch(self, request: Request, call_next):
        decision = self.gate.evaluate(
            request.url.path,
            request.headers.get(TOKEN_HEADER),
            self._raw_value(request),
        )

        if self.metrics is not None:
            self.metrics.record_gate_decision(decision.outcome.value)

        error = decision.error()
        if error is not None:
            log.warning(
                "csrf.rejected",
                reason=decision.outcome.value,
                code=error.code,
                path=request.url.path,
            )
            return error.to_response()

        log.debug("csrf.allowed", outcome=decision.outcome.value)
        return await call_next(request)
