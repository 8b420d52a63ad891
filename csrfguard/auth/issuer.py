"""Shared-secret authorization for CSRF token issuance."""
import secrets
from typing import Optional

from fastapi import Header, Request
import structlog

from ..errors import Unauthenticated, Unauthorized

log = structlog.get_logger()


def extract_credential(authorization: Optional[str]) -> str:
    """
    Extract the credential from an ``Authorization: <scheme> <value>`` header.

    The scheme is not checked.

    Raises:
        Unauthenticated: If the header is absent, has no value after the
            scheme, or cannot be parsed
    """
    if not authorization:
        raise Unauthenticated()
    try:
        value = authorization.split(" ")[1]
    except (AttributeError, IndexError):
        raise Unauthenticated()
    if not value:
        raise Unauthenticated()
    return value


async def require_issuer(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> None:
    """
    Dependency gating who may request a fresh CSRF token.

    Raises:
        Unauthenticated: If no usable credential is presented
        Unauthorized: If the credential does not match the issuance secret
    """
    metrics = getattr(request.app.state, "metrics", None)
    expected = request.app.state.settings.CSRF_ISSUER_SECRET

    try:
        credential = extract_credential(authorization)
    except Unauthenticated:
        log.warning("issuer.auth_failed", reason="unauthenticated")
        if metrics is not None:
            metrics.record_issuance_denied("unauthenticated")
        raise

    if not secrets.compare_digest(credential.encode("utf-8"), expected.encode("utf-8")):
        log.warning("issuer.auth_failed", reason="unauthorized")
        if metrics is not None:
            metrics.record_issuance_denied("unauthorized")
        raise Unauthorized()

    log.debug("issuer.auth_success")
