"""Queries for per-lesson completion records."""

from datetime import datetime
from typing import Any

from sqlalchemy import and_, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncConnection

from ..tables import lesson_progress, lessons, sections


async def load_completed_lesson_ids(
    conn: AsyncConnection, user_id: int, course_id: int
) -> set[int]:
    """Ids of lessons in the course that the user has completed."""
    result = await conn.execute(
        select(lesson_progress.c.lesson_id)
        .select_from(lesson_progress)
        .join(lessons, lesson_progress.c.lesson_id == lessons.c.lesson_id)
        .join(sections, lessons.c.section_id == sections.c.section_id)
        .where(
            and_(
                lesson_progress.c.user_id == user_id,
                lesson_progress.c.completed.is_(True),
                sections.c.course_id == course_id,
            )
        )
    )
    return {row.lesson_id for row in result}


async def load_completion_times(
    conn: AsyncConnection, user_id: int
) -> dict[int, datetime | None]:
    """All of a user's completed lessons, as lesson_id -> completed_at."""
    result = await conn.execute(
        select(lesson_progress.c.lesson_id, lesson_progress.c.completed_at).where(
            and_(
                lesson_progress.c.user_id == user_id,
                lesson_progress.c.completed.is_(True),
            )
        )
    )
    return {row.lesson_id: row.completed_at for row in result}


async def upsert_progress(
    conn: AsyncConnection,
    *,
    user_id: int,
    lesson_id: int,
    completed: bool,
    completed_at: datetime | None,
) -> dict[str, Any]:
    """Set a lesson's completion flag for a user in one statement.

    Uses INSERT ... ON CONFLICT DO UPDATE so two concurrent toggles for the
    same (user, lesson) resolve to whichever write lands last, without a
    separate read.

    Returns:
        The stored progress row
    """
    stmt = pg_insert(lesson_progress).values(
        user_id=user_id,
        lesson_id=lesson_id,
        completed=completed,
        completed_at=completed_at,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "lesson_id"],
        set_={
            "completed": stmt.excluded.completed,
            "completed_at": stmt.excluded.completed_at,
            "updated_at": func.now(),
        },
    ).returning(lesson_progress)

    result = await conn.execute(stmt)
    row = result.mappings().first()
    # No explicit commit - let the caller's transaction context handle it
    return dict(row)
