"""
JWT session authentication for the web API.

Security measures implemented:
- HS256 signing algorithm with 256-bit secret
- Token expiration (24 hours)
- HttpOnly session cookie (set by the sign-in service)

Sign-in itself lives outside this service; it only verifies the session
cookie and turns it into a Principal for the business layer.
"""

import os
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends, HTTPException, Request

from learnhub.auth import Principal, get_principal
from learnhub.enums import UserRole
from learnhub.progress.errors import ProgressError
from web_api.errors import http_error

JWT_SECRET = os.environ.get("JWT_SECRET")
JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_HOURS = 24
SESSION_COOKIE = "session"


def create_jwt(user_id: int, role: UserRole = UserRole.student) -> str:
    """
    Create a signed session token.

    Args:
        user_id: The user's database id
        role: The user's role at sign-in time

    Returns:
        Signed JWT token string
    """
    if not JWT_SECRET:
        raise ValueError("JWT_SECRET environment variable not set")

    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": role.value,
        "iat": now,
        "exp": now + timedelta(hours=JWT_EXPIRATION_HOURS),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_jwt(token: str) -> dict | None:
    """
    Verify and decode a JWT token.

    Returns:
        Decoded payload dict if valid, None if invalid
    """
    if not JWT_SECRET:
        raise ValueError("JWT_SECRET environment variable not set")

    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None


async def get_current_principal(request: Request) -> Principal | None:
    """
    FastAPI dependency: the signed-in caller, or None for anonymous requests.

    A missing, invalid or expired cookie, or a token for a user that no
    longer exists or was deactivated, all count as anonymous. A failed user
    lookup is a 503.
    """
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        return None

    payload = verify_jwt(token)
    if not payload:
        return None

    try:
        user_id = int(payload["sub"])
    except (KeyError, ValueError):
        return None

    try:
        return await get_principal(user_id)
    except ProgressError as e:
        raise http_error(e)


async def require_principal(
    principal: Principal | None = Depends(get_current_principal),
) -> Principal:
    """
    FastAPI dependency: the signed-in caller.

    Raises:
        HTTPException: 401 if not authenticated
    """
    if principal is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return principal
