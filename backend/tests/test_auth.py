"""Tests for bearer-token verification and the platform-admin guard."""
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient, ASGITransport
from jose import jwt

from auvora.core.config import settings
from auvora.core.security import create_access_token, decode_token
from auvora.db.session import get_session
from auvora.main import app

ADMIN_ID = "f96955d0-752f-4e0c-b1dc-d26d8dd1460e"


# ─── Helpers ──────────────────────────────────────────────────────────────────

def make_session_override():
    mock_result = MagicMock()
    mock_result.scalar_one.return_value = 0
    mock_result.scalars.return_value.all.return_value = []
    mock_session = AsyncMock()
    mock_session.execute = AsyncMock(return_value=mock_result)

    async def _override():
        yield mock_session
    return _override


async def _get_jobs(headers: dict | None = None):
    app.dependency_overrides[get_session] = make_session_override()
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            return await client.get("/api/v1/admin/import/jobs", headers=headers or {})
    finally:
        app.dependency_overrides.clear()


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


# ─── Token helpers ────────────────────────────────────────────────────────────

def test_access_token_round_trip():
    payload = decode_token(create_access_token(ADMIN_ID, "platform_admin"))
    assert payload["sub"] == ADMIN_ID
    assert payload["role"] == "platform_admin"
    assert payload["type"] == "access"


# ─── Admin guard ──────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_platform_admin_token_is_accepted():
    response = await _get_jobs(_bearer(create_access_token(ADMIN_ID, settings.PLATFORM_ADMIN_ROLE)))
    assert response.status_code == 200
    assert response.json()["items"] == []


@pytest.mark.asyncio
async def test_missing_token_returns_401():
    response = await _get_jobs()
    assert response.status_code == 401
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_tenant_role_returns_403():
    response = await _get_jobs(_bearer(create_access_token(ADMIN_ID, "owner")))
    assert response.status_code == 403
    assert response.json() == {"error": "Role 'owner' is not permitted for this action."}


@pytest.mark.asyncio
async def test_expired_token_returns_401():
    response = await _get_jobs(_bearer(create_access_token(ADMIN_ID, "platform_admin", expires_minutes=-5)))
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_refresh_token_is_not_an_access_token():
    token = jwt.encode(
        {
            "sub": ADMIN_ID,
            "role": "platform_admin",
            "type": "refresh",
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        },
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )
    response = await _get_jobs(_bearer(token))
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_token_signed_with_other_secret_returns_401():
    token = jwt.encode(
        {"sub": ADMIN_ID, "role": "platform_admin", "type": "access"},
        "not-the-secret",
        algorithm=settings.JWT_ALGORITHM,
    )
    response = await _get_jobs(_bearer(token))
    assert response.status_code == 401
