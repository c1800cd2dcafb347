"""
Tests for token validation and the admin guard.
"""

from datetime import timedelta

import pytest
from fastapi import HTTPException

from kinderadmin.core.auth import CurrentUser, get_current_admin_user, resolve_user
from kinderadmin.core.security import create_access_token, decode_token


def test_token_round_trip():
    token = create_access_token("u-1", {"email": "p@test.com", "role": "professor"})

    user = resolve_user(token)

    assert user == CurrentUser(id="u-1", email="p@test.com", role="professor", name=None)


def test_expired_token():
    token = create_access_token("u-1", {"role": "admin"}, expires_delta=timedelta(seconds=-5))

    assert decode_token(token) is None
    with pytest.raises(HTTPException) as exc_info:
        resolve_user(token)

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail["error"] == "INVALID_TOKEN"


def test_unknown_role():
    token = create_access_token("u-1", {"role": "super_admin"})

    with pytest.raises(HTTPException) as exc_info:
        resolve_user(token)

    assert exc_info.value.detail["error"] == "INVALID_TOKEN_CLAIMS"


def test_refresh_token_rejected():
    token = create_access_token("u-1", {"role": "admin", "type": "refresh"})

    with pytest.raises(HTTPException) as exc_info:
        resolve_user(token)

    assert exc_info.value.detail["error"] == "INVALID_TOKEN_TYPE"


def test_dev_token_disabled_outside_development():
    with pytest.raises(HTTPException):
        resolve_user("dev-token")


@pytest.mark.asyncio
async def test_admin_guard():
    admin = CurrentUser(id="a", email="a@test.com", role="admin")
    parent = CurrentUser(id="p", email="p@test.com", role="parent")

    assert await get_current_admin_user(admin) is admin
    with pytest.raises(HTTPException) as exc_info:
        await get_current_admin_user(parent)

    assert exc_info.value.status_code == 403
