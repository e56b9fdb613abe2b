"""Saved courses (bookmarks). Independent of enrollment and progress."""

import logging
from typing import Any

from .database import get_connection, get_transaction
from .progress.errors import CourseNotFoundError
from .queries import saved_courses as saved_queries
from .queries.courses import course_exists

logger = logging.getLogger(__name__)


async def toggle_saved_course(user_id: int, course_id: int) -> bool:
    """
    Save the course if it isn't saved, unsave it if it is.

    Returns:
        The new saved state

    Raises:
        CourseNotFoundError: Course does not exist
    """
    async with get_transaction() as conn:
        if not await course_exists(conn, course_id):
            raise CourseNotFoundError(course_id)

        if await saved_queries.unsave_course(conn, user_id, course_id):
            return False

        await saved_queries.save_course(conn, user_id, course_id)
        return True


async def list_saved_courses(user_id: int) -> list[dict[str, Any]]:
    """A user's saved courses, most recently saved first."""
    async with get_connection() as conn:
        return await saved_queries.list_saved_courses(conn, user_id)
