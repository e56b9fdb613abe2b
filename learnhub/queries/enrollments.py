"""Enrollment queries: the gate for lesson access and progress writes."""

from typing import Any

from sqlalchemy import and_, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncConnection

from ..tables import courses, enrollments


async def find_enrollment(
    conn: AsyncConnection, user_id: int, course_id: int
) -> dict[str, Any] | None:
    """Get the enrollment row for (user, course), or None."""
    result = await conn.execute(
        select(enrollments).where(
            and_(
                enrollments.c.user_id == user_id,
                enrollments.c.course_id == course_id,
            )
        )
    )
    row = result.mappings().first()
    return dict(row) if row else None


async def is_enrolled(conn: AsyncConnection, user_id: int, course_id: int) -> bool:
    return await find_enrollment(conn, user_id, course_id) is not None


async def is_course_published(conn: AsyncConnection, course_id: int) -> bool:
    """True if the course exists and is published."""
    result = await conn.execute(
        select(courses.c.is_published).where(courses.c.course_id == course_id)
    )
    return bool(result.scalar())


async def create_enrollment(
    conn: AsyncConnection, user_id: int, course_id: int
) -> bool:
    """Enroll a user, doing nothing if the enrollment already exists.

    Uses INSERT ... ON CONFLICT DO NOTHING so concurrent enroll clicks can't
    trip the (user_id, course_id) unique constraint.

    Returns:
        True if a new enrollment was created, False if it already existed
    """
    stmt = (
        pg_insert(enrollments)
        .values(user_id=user_id, course_id=course_id)
        .on_conflict_do_nothing(index_elements=["user_id", "course_id"])
        .returning(enrollments.c.enrollment_id)
    )
    result = await conn.execute(stmt)
    # No explicit commit - let the caller's transaction context handle it
    return result.first() is not None


async def get_user_enrollments(
    conn: AsyncConnection, user_id: int
) -> list[dict[str, Any]]:
    """Get a user's enrollments, most recent first."""
    result = await conn.execute(
        select(enrollments.c.course_id, enrollments.c.enrolled_at)
        .where(enrollments.c.user_id == user_id)
        .order_by(enrollments.c.enrolled_at.desc(), enrollments.c.enrollment_id.desc())
    )
    return [dict(row) for row in result.mappings()]
