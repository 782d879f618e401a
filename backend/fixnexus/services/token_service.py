"""
FixNexus Backend: Auth Token Service
======================================

What:  Issues and validates the signed, time-limited access tokens carried in
       the `token` cookie.
How:   PyJWT with an HMAC secret (HS256 by default). The claims posted to
       POST /jwt (minimally {"email": ...}) are embedded verbatim, plus
       `iat` and `exp` (issuance + token_lifetime_days).
Who:   POST /jwt issues; the auth gate validates.

Tokens are stateless: nothing is stored server-side and there is no
revocation list. Logging out only clears the cookie.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

import jwt

from fixnexus.config import settings
from fixnexus.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)


class TokenService:
    """
    Stateless token issuer/validator bound to one secret.

    Attributes:
        secret:    HMAC signing key (ACCESS_TOKEN_SECRET)
        lifetime:  Validity window measured from issuance
        algorithm: JWS algorithm; validation accepts only this one
    """

    def __init__(
        self,
        secret: str,
        lifetime: timedelta = timedelta(days=1),
        algorithm: str = "HS256",
    ):
        self.secret = secret
        self.lifetime = lifetime
        self.algorithm = algorithm

    def issue(self, claims: Mapping[str, Any], now: Optional[datetime] = None) -> str:
        """
        Sign ``claims`` into a token expiring ``lifetime`` after ``now``.

        ``now`` defaults to the current UTC time.
        """
        issued_at = now or datetime.now(timezone.utc)
        payload = dict(claims)
        payload["iat"] = issued_at
        payload["exp"] = issued_at + self.lifetime
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def validate(self, token: str) -> Dict[str, Any]:
        """
        Return the embedded claims of a valid token.

        Raises:
            InvalidTokenError: bad signature, malformed token, or expired.
        """
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.InvalidTokenError as e:
            # ExpiredSignatureError, DecodeError, InvalidSignatureError, ...
            raise InvalidTokenError(context={"reason": type(e).__name__})


def get_token_service() -> TokenService:
    """FastAPI dependency building the service from current settings."""
    return TokenService(
        secret=settings.access_token_secret,
        lifetime=timedelta(days=settings.token_lifetime_days),
        algorithm=settings.token_algorithm,
    )
