"""
Course enrollment.

An enrollment is what unlocks lesson content and progress tracking for a
(user, course) pair.
"""

import logging

from .database import get_transaction
from .progress.errors import CourseNotFoundError
from .queries import enrollments as enrollment_queries

logger = logging.getLogger(__name__)


async def enroll_in_course(user_id: int, course_id: int) -> bool:
    """
    Enroll a user in a published course. Safe to call twice.

    Args:
        user_id: The user to enroll
        course_id: The course to enroll in

    Returns:
        True if a new enrollment was created, False if one already existed

    Raises:
        CourseNotFoundError: Course missing or not published
    """
    async with get_transaction() as conn:
        if not await enrollment_queries.is_course_published(conn, course_id):
            raise CourseNotFoundError(course_id)
        created = await enrollment_queries.create_enrollment(conn, user_id, course_id)

    if created:
        logger.info(f"User {user_id} enrolled in course {course_id}")
    return created
