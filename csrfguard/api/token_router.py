"""
API Router for CSRF token issuance
"""

from fastapi import APIRouter, Depends, Request, Response
import structlog

from ..auth.issuer import require_issuer
from ..crypto import CsrfTokenCodec
from ..middleware.csrf import CSRF_COOKIE_NAME
from .schemas import CsrfTokenResponse

log = structlog.get_logger()

ISSUANCE_PATH = "/csrf/token"

router = APIRouter(tags=["csrf"])


def get_codec(request: Request) -> CsrfTokenCodec:
    """Get the codec built at application startup"""
    return request.app.state.codec


@router.get(
    ISSUANCE_PATH,
    response_model=CsrfTokenResponse,
    dependencies=[Depends(require_issuer)],
    summary="Issue CSRF token",
    description="Mint a token pair and set the raw value as an HttpOnly cookie"
)
async def issue_csrf_token(
    request: Request,
    response: Response,
    codec: CsrfTokenCodec = Depends(get_codec),
) -> CsrfTokenResponse:
    """
    Issue a new CSRF token pair

    Requires `Authorization: <scheme> <issuer secret>`.

    Returns the encrypted token (`csrfToken`) and the raw value (`cookie`).
    Both must be resent as `x-csrf-token` and `x-csrf-raw` on protected
    requests.
    """
    issued = codec.generate()
    settings = request.app.state.settings

    response.set_cookie(
        key=CSRF_COOKIE_NAME,
        value=issued.raw,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        path="/",
    )

    metrics = getattr(request.app.state, "metrics", None)
    if metrics is not None:
        metrics.record_token_issued()
    log.info("csrf.token_issued", secure_cookie=settings.is_production)

    return CsrfTokenResponse(csrf_token=issued.token, cookie=issued.raw)
