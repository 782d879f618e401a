"""
FixNexus Backend: Authentication Gate & Ownership Check
=========================================================

Two layers, kept separate:

    require_token  (gate, FastAPI dependency)
        Authentication only. Rejects a missing or invalid `token` cookie
        with 401 and hands the decoded claims to the handler.

    ensure_owner   (called inside each protected handler)
        Authorization. Compares the email in the path with the email in the
        claims and raises 403 on mismatch, before any query runs.

The gate has no knowledge of per-resource ownership rules, so it is reused
unchanged by every protected route.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Cookie, Depends, Request

from fixnexus.exceptions import ForbiddenError, InvalidTokenError, UnauthorizedError
from fixnexus.middleware.request_id import request_id_var
from fixnexus.schemas.documents import ErrorResponse
from fixnexus.services.token_service import TokenService, get_token_service

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "token"

# OpenAPI docs for every gated route
GATED_RESPONSES = {
    401: {"description": "Missing or invalid token cookie", "model": ErrorResponse},
    403: {"description": "Token belongs to a different email", "model": ErrorResponse},
}


async def require_token(
    request: Request,
    token: Optional[str] = Cookie(default=None),
    token_service: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    """
    Gate for protected routes.

    Returns:
        The decoded claims, also attached to ``request.state.user``.

    Raises:
        UnauthorizedError: cookie absent (token is not validated at all),
                           or validation failed for any reason.
    """
    if not token:
        raise UnauthorizedError(context={"reason": "missing_cookie"})

    try:
        claims = token_service.validate(token)
    except InvalidTokenError as e:
        logger.warning("[%s] Rejected token on %s: %s",
                       request_id_var.get(""), request.url.path, e.context.get("reason"))
        raise UnauthorizedError(context=e.context)

    request.state.user = claims
    return claims


def ensure_owner(email: str, claims: Dict[str, Any]) -> None:
    """Raise ForbiddenError unless ``email`` is the authenticated identity."""
    if email != claims.get("email"):
        raise ForbiddenError(context={"requested": email})
