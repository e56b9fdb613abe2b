"""Saved-course (bookmark) queries."""

from typing import Any

from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncConnection

from ..tables import categories, courses, saved_courses, users


async def is_saved(conn: AsyncConnection, user_id: int, course_id: int) -> bool:
    result = await conn.execute(
        select(saved_courses.c.saved_course_id).where(
            and_(
                saved_courses.c.user_id == user_id,
                saved_courses.c.course_id == course_id,
            )
        )
    )
    return result.first() is not None


async def save_course(conn: AsyncConnection, user_id: int, course_id: int) -> None:
    """Bookmark a course; saving twice is a no-op."""
    await conn.execute(
        pg_insert(saved_courses)
        .values(user_id=user_id, course_id=course_id)
        .on_conflict_do_nothing(index_elements=["user_id", "course_id"])
    )


async def unsave_course(conn: AsyncConnection, user_id: int, course_id: int) -> int:
    """Remove a bookmark. Returns number of rows deleted."""
    result = await conn.execute(
        delete(saved_courses).where(
            and_(
                saved_courses.c.user_id == user_id,
                saved_courses.c.course_id == course_id,
            )
        )
    )
    return result.rowcount


async def list_saved_courses(
    conn: AsyncConnection, user_id: int
) -> list[dict[str, Any]]:
    """A user's saved courses, most recently saved first."""
    result = await conn.execute(
        select(
            courses.c.course_id,
            courses.c.title,
            courses.c.subtitle,
            courses.c.image,
            courses.c.description,
            courses.c.duration_hours,
            courses.c.is_published,
            categories.c.name.label("category_name"),
            users.c.name.label("instructor_name"),
            saved_courses.c.saved_at,
        )
        .select_from(saved_courses)
        .join(courses, saved_courses.c.course_id == courses.c.course_id)
        .join(categories, courses.c.category_id == categories.c.category_id)
        .outerjoin(users, courses.c.created_by == users.c.user_id)
        .where(saved_courses.c.user_id == user_id)
        .order_by(saved_courses.c.saved_at.desc())
    )
    return [dict(row) for row in result.mappings()]
