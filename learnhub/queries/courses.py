"""Course catalog and course content queries."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncConnection

from ..content import CourseContent, LessonNode, SectionNode
from ..tables import categories, courses, enrollments, lessons, sections, users


def _enrollment_counts():
    return (
        select(
            enrollments.c.course_id,
            func.count(enrollments.c.enrollment_id).label("enrollment_count"),
        )
        .group_by(enrollments.c.course_id)
        .subquery()
    )


def _course_rows_query(course_ids: list[int], published_only: bool):
    counts = _enrollment_counts()
    query = (
        select(
            courses,
            categories.c.name.label("category_name"),
            categories.c.slug.label("category_slug"),
            users.c.name.label("instructor_name"),
            func.coalesce(counts.c.enrollment_count, 0).label("enrollment_count"),
        )
        .select_from(courses)
        .join(categories, courses.c.category_id == categories.c.category_id)
        .outerjoin(users, courses.c.created_by == users.c.user_id)
        .outerjoin(counts, courses.c.course_id == counts.c.course_id)
        .where(courses.c.course_id.in_(course_ids))
    )
    if published_only:
        query = query.where(courses.c.is_published.is_(True))
    return query


def _content_rows_query(course_ids: list[int]):
    # Outer join so empty sections still show up
    return (
        select(
            sections.c.course_id,
            sections.c.section_id,
            sections.c.title.label("section_title"),
            sections.c.order.label("section_order"),
            lessons.c.lesson_id,
            lessons.c.title.label("lesson_title"),
            lessons.c.order.label("lesson_order"),
            lessons.c.duration,
            lessons.c.content,
            lessons.c.video_url,
        )
        .select_from(sections)
        .outerjoin(lessons, lessons.c.section_id == sections.c.section_id)
        .where(sections.c.course_id.in_(course_ids))
        .order_by(
            sections.c.course_id,
            sections.c.order,
            sections.c.section_id,
            lessons.c.order,
            lessons.c.lesson_id,
        )
    )


async def load_courses_with_content(
    conn: AsyncConnection,
    course_ids: list[int],
    *,
    published_only: bool = True,
) -> dict[int, CourseContent]:
    """
    Load several courses with sections and lessons in two queries.

    Returns:
        Dict of course_id -> CourseContent. Missing (or unpublished, when
        published_only) courses are simply absent.
    """
    if not course_ids:
        return {}

    result = await conn.execute(_course_rows_query(course_ids, published_only))
    loaded: dict[int, CourseContent] = {}
    for row in result.mappings():
        loaded[row["course_id"]] = CourseContent(
            course_id=row["course_id"],
            title=row["title"],
            subtitle=row["subtitle"],
            description=row["description"] or "",
            image=row["image"],
            duration_hours=row["duration_hours"] or 0,
            is_published=row["is_published"],
            instructor_name=row["instructor_name"],
            category={
                "id": row["category_id"],
                "name": row["category_name"],
                "slug": row["category_slug"],
            },
            enrollment_count=row["enrollment_count"],
        )

    if not loaded:
        return {}

    result = await conn.execute(_content_rows_query(list(loaded)))
    section_index: dict[int, SectionNode] = {}
    for row in result.mappings():
        course = loaded.get(row["course_id"])
        if course is None:
            continue
        section = section_index.get(row["section_id"])
        if section is None:
            section = SectionNode(
                section_id=row["section_id"],
                title=row["section_title"],
                order=row["section_order"],
            )
            section_index[row["section_id"]] = section
            course.sections.append(section)
        if row["lesson_id"] is not None:
            section.lessons.append(
                LessonNode(
                    lesson_id=row["lesson_id"],
                    title=row["lesson_title"],
                    order=row["lesson_order"],
                    duration=row["duration"] or 0,
                    content=row["content"] or "",
                    video_url=row["video_url"],
                )
            )

    return loaded


async def load_course_with_content(
    conn: AsyncConnection,
    course_id: int,
    *,
    published_only: bool = True,
) -> CourseContent | None:
    """Load one course with sections and lessons, or None if not found."""
    loaded = await load_courses_with_content(
        conn, [course_id], published_only=published_only
    )
    return loaded.get(course_id)


async def get_lesson_course_id(conn: AsyncConnection, lesson_id: int) -> int | None:
    """Get the id of the course that owns a lesson (via its section)."""
    result = await conn.execute(
        select(sections.c.course_id)
        .select_from(lessons)
        .join(sections, lessons.c.section_id == sections.c.section_id)
        .where(lessons.c.lesson_id == lesson_id)
    )
    return result.scalar()


async def course_exists(conn: AsyncConnection, course_id: int) -> bool:
    """Check whether a course row exists, published or not."""
    result = await conn.execute(
        select(courses.c.course_id).where(courses.c.course_id == course_id)
    )
    return result.first() is not None


async def list_published_courses(conn: AsyncConnection) -> list[dict[str, Any]]:
    """
    List published courses for the catalog, newest first.

    Each row carries category, instructor name, section/enrollment counts and
    the total number of lessons across all sections.
    """
    counts = _enrollment_counts()
    lesson_counts = (
        select(
            sections.c.course_id,
            func.count(func.distinct(sections.c.section_id)).label("section_count"),
            func.count(lessons.c.lesson_id).label("total_lessons"),
        )
        .select_from(sections)
        .outerjoin(lessons, lessons.c.section_id == sections.c.section_id)
        .group_by(sections.c.course_id)
        .subquery()
    )
    query = (
        select(
            courses.c.course_id,
            courses.c.title,
            courses.c.subtitle,
            courses.c.image,
            courses.c.description,
            courses.c.duration_hours,
            courses.c.created_at,
            categories.c.category_id,
            categories.c.name.label("category_name"),
            categories.c.slug.label("category_slug"),
            users.c.name.label("instructor_name"),
            users.c.image.label("instructor_image"),
            func.coalesce(lesson_counts.c.section_count, 0).label("section_count"),
            func.coalesce(lesson_counts.c.total_lessons, 0).label("total_lessons"),
            func.coalesce(counts.c.enrollment_count, 0).label("enrollment_count"),
        )
        .select_from(courses)
        .join(categories, courses.c.category_id == categories.c.category_id)
        .outerjoin(users, courses.c.created_by == users.c.user_id)
        .outerjoin(lesson_counts, courses.c.course_id == lesson_counts.c.course_id)
        .outerjoin(counts, courses.c.course_id == counts.c.course_id)
        .where(courses.c.is_published.is_(True))
        .order_by(courses.c.created_at.desc(), courses.c.course_id.desc())
    )
    result = await conn.execute(query)
    return [dict(row) for row in result.mappings()]
