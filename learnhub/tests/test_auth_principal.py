"""Tests for resolving a session user id into a Principal."""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from learnhub.auth import Principal, get_principal
from learnhub.enums import UserRole
from learnhub.progress.errors import PersistenceError


def mock_db():
    mock_conn = AsyncMock()
    mock_conn.__aenter__.return_value = mock_conn
    mock_conn.__aexit__.return_value = None
    return mock_conn


@pytest.mark.asyncio
async def test_active_user():
    with (
        patch("learnhub.auth.get_connection", return_value=mock_db()),
        patch(
            "learnhub.auth.get_user",
            new_callable=AsyncMock,
            return_value={"user_id": 7, "role": "admin", "is_active": True},
        ),
    ):
        principal = await get_principal(7)

    assert principal == Principal(user_id=7, role=UserRole.admin)
    assert principal.is_admin is True


@pytest.mark.asyncio
async def test_disabled_user_is_anonymous():
    with (
        patch("learnhub.auth.get_connection", return_value=mock_db()),
        patch(
            "learnhub.auth.get_user",
            new_callable=AsyncMock,
            return_value={"user_id": 7, "role": "student", "is_active": False},
        ),
    ):
        assert await get_principal(7) is None


@pytest.mark.asyncio
async def test_lookup_failure_becomes_persistence_error():
    with (
        patch("learnhub.auth.get_connection", return_value=mock_db()),
        patch(
            "learnhub.auth.get_user",
            new_callable=AsyncMock,
            side_effect=OperationalError("SELECT", {}, Exception("db down")),
        ),
        patch("learnhub.auth.sentry_sdk.capture_exception") as mock_capture,
    ):
        with pytest.raises(PersistenceError):
            await get_principal(7)

    mock_capture.assert_called_once()
