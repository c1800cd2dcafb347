"""
Token Utilities

JWT encoding and decoding with PyJWT. Tokens are issued by the identity
service; this API only needs to verify them. create_access_token exists
for local tooling and tests.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from kinderadmin.core.config import settings

logger = logging.getLogger(__name__)


def create_access_token(
    subject: str,
    claims: dict[str, Any] | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed access token.

    Args:
        subject: User identifier stored in the "sub" claim
        claims: Extra claims (email, role, name)
        expires_delta: Lifetime; defaults to settings.access_token_expire_minutes
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))

    payload: dict[str, Any] = {
        "sub": str(subject),
        "type": "access",
        "iat": now,
        "exp": expire,
    }
    if claims:
        payload.update(claims)

    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict[str, Any] | None:
    """
    Verify a token's signature and expiry.

    Returns:
        The payload, or None if the token is invalid or expired
    """
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": True},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token")
        return None
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected invalid token: {e}")
        return None
