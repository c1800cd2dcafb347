"""
Authentication and Authorization Module

FastAPI dependencies that turn a bearer token into the current user.

Identity is owned by an external service: this module verifies the JWT it
issued (see security.py) and checks the role claim. Roles are "admin",
"professor" and "parent". Decision, notification and enrollment endpoints
are restricted to admins.

SECURITY NOTE:
- The "dev-token" shortcut is ONLY enabled when PYTHON_ENV=development
- Staging and production must never run with PYTHON_ENV=development
"""

import enum
import logging
import os
from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from kinderadmin.core.config import settings
from kinderadmin.core.security import decode_token

logger = logging.getLogger(__name__)

# Security scheme for OpenAPI documentation
security = HTTPBearer(
    auto_error=True,
    description="JWT Bearer token issued by the identity service",
)

DEV_TOKEN = "dev-token"


class Role(str, enum.Enum):
    ADMIN = "admin"
    PROFESSOR = "professor"
    PARENT = "parent"


@dataclass
class CurrentUser:
    """
    The authenticated caller, populated from JWT claims.

    Attributes:
        id: User identifier ("sub" claim)
        email: User's email address
        role: One of the Role values
        name: Display name (optional)
    """

    id: str
    email: str
    role: str
    name: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def __str__(self) -> str:
        return f"CurrentUser(id={self.id}, email={self.email}, role={self.role})"


def _is_dev_mode_safe() -> bool:
    """
    Check whether the development token may be accepted.

    Both the settings and the raw PYTHON_ENV variable must agree that this
    is a development environment.
    """
    env_var = os.getenv("PYTHON_ENV", "").lower()

    is_safe = settings.is_development and not settings.is_production and env_var not in (
        "production",
        "staging",
    )

    if is_safe:
        logger.warning("SECURITY: Development auth mode is ENABLED. Do not use in production!")

    return is_safe


_DEVELOPMENT_MODE = _is_dev_mode_safe()

_DEV_ADMIN = CurrentUser(
    id="dev-admin",
    email="admin@kinderadminpro.dev",
    role=Role.ADMIN.value,
    name="Development Admin",
)


def _unauthorized(error: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"failed": True, "error": error, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_user(token: str) -> CurrentUser:
    """
    Validate a bearer token and build the user from its claims.

    Raises:
        HTTPException 401: If the token is invalid, expired or lacks claims
    """
    if _DEVELOPMENT_MODE and token == DEV_TOKEN:
        logger.debug("Development mode: using dev admin")
        return _DEV_ADMIN

    payload = decode_token(token)
    if payload is None:
        logger.warning("Invalid or expired JWT token")
        raise _unauthorized("INVALID_TOKEN", "Invalid or expired authentication token.")

    if payload.get("type", "access") != "access":
        logger.warning(f"Invalid token type: {payload.get('type')}")
        raise _unauthorized("INVALID_TOKEN_TYPE", "This endpoint requires an access token.")

    user_id = payload.get("sub")
    role = payload.get("role", "")
    if not user_id or role not in {r.value for r in Role}:
        logger.warning(f"Invalid token claims: sub={user_id!r} role={role!r}")
        raise _unauthorized("INVALID_TOKEN_CLAIMS", "Token contains invalid or missing claims.")

    return CurrentUser(
        id=str(user_id),
        email=payload.get("email", ""),
        role=role,
        name=payload.get("name"),
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> CurrentUser:
    """FastAPI dependency returning the authenticated user, whatever the role."""
    return resolve_user(credentials.credentials)


async def get_current_admin_user(
    user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """
    FastAPI dependency that only lets administrators through.

    Usage:
        @router.post("/admin/endpoint")
        async def admin_endpoint(admin: CurrentUser = Depends(get_current_admin_user)):
            ...

    Raises:
        HTTPException 401: If the token is missing, invalid or expired
        HTTPException 403: If the user is not an admin
    """
    if not user.is_admin:
        logger.warning(
            f"Access denied: user {user.id} ({user.email}) has role '{user.role}', "
            "but 'admin' is required"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "failed": True,
                "error": "ADMIN_ACCESS_REQUIRED",
                "message": "Administrator access is required for this endpoint.",
            },
        )

    logger.debug(f"Authenticated admin: {user.id} ({user.email})")
    return user


__all__ = [
    "CurrentUser",
    "Role",
    "get_current_user",
    "get_current_admin_user",
]
