"""Resolve the signed-in caller into an explicit principal.

Session tokens are issued and verified by the web layer; business code only
ever sees a Principal (or None) passed in as an argument.
"""

import logging
from dataclasses import dataclass

import sentry_sdk
from sqlalchemy.exc import SQLAlchemyError

from .database import get_connection
from .enums import UserRole
from .queries.users import get_user

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """An authenticated, active user."""

    user_id: int
    role: UserRole = UserRole.student

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin


async def get_principal(user_id: int) -> Principal | None:
    """
    Load the principal for a user id taken from a verified session.

    Returns:
        Principal, or None if the user no longer exists or is disabled

    Raises:
        PersistenceError: The user lookup failed
    """
    # Imported here: learnhub.progress imports this module
    from .progress.errors import PersistenceError

    try:
        async with get_connection() as conn:
            user = await get_user(conn, user_id)
    except SQLAlchemyError as e:
        logger.error(f"Loading user {user_id} failed: {e}")
        sentry_sdk.capture_exception(e)
        raise PersistenceError("get_principal failed") from e

    if not user or not user.get("is_active", True):
        return None
    return Principal(user_id=user["user_id"], role=UserRole(user["role"]))
