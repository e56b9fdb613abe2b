"""User-related database queries using SQLAlchemy Core."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncConnection

from ..tables import users


async def get_user(conn: AsyncConnection, user_id: int) -> dict[str, Any] | None:
    """Get a user by id."""
    result = await conn.execute(select(users).where(users.c.user_id == user_id))
    row = result.mappings().first()
    return dict(row) if row else None
