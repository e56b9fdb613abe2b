"""Published course catalog."""

from typing import Any

from .database import get_connection
from .queries.courses import list_published_courses as _list_published_courses


async def list_published_courses() -> list[dict[str, Any]]:
    """
    All published courses, newest first.

    Returns:
        List of dicts with course fields plus category_name, instructor_name,
        section_count, enrollment_count and total_lessons
    """
    async with get_connection() as conn:
        return await _list_published_courses(conn)
