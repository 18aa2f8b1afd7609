"""Signed, time-limited access tokens (JWT, HS256)."""

import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
from pydantic import ValidationError

from gatekeep.core.errors import SigningError, TokenExpired, TokenInvalid
from gatekeep.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

TOKEN_ISSUER = "gatekeep"
TOKEN_TTL = timedelta(hours=1)
TOKEN_ALGORITHM = "HS256"

REQUIRED_CLAIMS = ["exp", "iat", "iss"]


def utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """
    Issues and validates stateless identity tokens.

    Validity depends only on the signature and the expiry at the moment of
    validation; there is no revocation.
    """

    def __init__(
        self,
        secret: str | bytes | None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._secret = secret
        self._clock = clock

    def _key(self) -> str | bytes:
        if self._secret is None:
            raise SigningError("Token signing secret is not configured.")
        if not self._secret.strip():
            raise SigningError("Token signing secret is empty.")
        return self._secret

    def issue(self, user_id: UUID, username: str, role: str) -> str:
        """Create a token for the subject that expires TOKEN_TTL from now."""
        key = self._key()
        now = self._clock()
        claims = TokenClaims(
            user_id=user_id,
            username=username,
            role=role,
            iss=TOKEN_ISSUER,
            iat=int(now.timestamp()),
            exp=int((now + TOKEN_TTL).timestamp()),
            jti=uuid.uuid4().hex,
        )
        try:
            return jwt.encode(claims.model_dump(mode="json"), key, algorithm=TOKEN_ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            logger.exception("Token signing failed")
            raise SigningError("Token could not be signed.") from e

    def validate(self, token: str) -> TokenClaims:
        """
        Verify signature and issuer, then expiry; return the typed claims.

        Raises TokenInvalid for a bad signature or malformed token and
        TokenExpired once now >= exp.
        """
        if not token:
            raise TokenInvalid("Token is missing.")
        try:
            key = self._key()
        except SigningError as e:
            raise TokenInvalid("Token cannot be verified.") from e
        try:
            payload = jwt.decode(
                token,
                key,
                algorithms=[TOKEN_ALGORITHM],
                issuer=TOKEN_ISSUER,
                # Expiry is checked below against the injected clock.
                options={
                    "require": REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.PyJWTError as e:
            raise TokenInvalid("Invalid token.") from e
        try:
            claims = TokenClaims.model_validate(payload)
        except ValidationError as e:
            raise TokenInvalid("Invalid token payload.") from e
        if self._clock().timestamp() >= claims.exp:
            raise TokenExpired("Token has expired.")
        return claims
