"""
FixNexus Backend: Auth Route Handlers
=======================================

What:  POST /jwt issues the token cookie; GET /logout clears it.
How:   The request body becomes the token claims verbatim. Cookie attributes
       depend on NODE_ENV:
           production → Secure, SameSite=None (frontend on another site)
           otherwise  → not Secure, SameSite=Strict (localhost dev)
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Response

from fixnexus.config import settings
from fixnexus.dependencies import TOKEN_COOKIE
from fixnexus.schemas.documents import SuccessResponse
from fixnexus.services.token_service import TokenService, get_token_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


def _cookie_options() -> Dict[str, Any]:
    return {
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "none" if settings.is_production else "strict",
    }


@router.post(
    "/jwt",
    response_model=SuccessResponse,
    summary="Issue an access token cookie",
)
async def issue_token(
    response: Response,
    claims: Dict[str, Any] = Body(..., examples=[{"email": "provider@example.com"}]),
    token_service: TokenService = Depends(get_token_service),
) -> SuccessResponse:
    token = token_service.issue(claims)
    response.set_cookie(TOKEN_COOKIE, token, **_cookie_options())
    logger.info("Issued token for %s", claims.get("email", "<no email>"))
    return SuccessResponse()


@router.get(
    "/logout",
    response_model=SuccessResponse,
    summary="Clear the access token cookie",
)
async def logout(response: Response) -> SuccessResponse:
    # The token itself stays valid until expiry; only the client copy is dropped
    response.set_cookie(TOKEN_COOKIE, "", max_age=0, **_cookie_options())
    return SuccessResponse()
