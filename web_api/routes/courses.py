# web_api/routes/courses.py
"""Course API routes.

Endpoints:
- GET  /api/courses - Published course catalog
- GET  /api/courses/{course_id} - Course detail with the viewer's progress
- POST /api/courses/{course_id}/enroll - Enroll the signed-in user
- GET  /api/courses/{course_id}/lessons/{lesson_id} - Lesson player
"""

from fastapi import APIRouter, Depends

from learnhub.auth import Principal
from learnhub.catalog import list_published_courses
from learnhub.enrollment import enroll_in_course
from learnhub.progress import (
    ProgressError,
    get_course_detail,
    get_lesson_player,
)
from web_api.auth import get_current_principal, require_principal
from web_api.errors import http_error
from web_api.serialize import (
    course_outline,
    course_summary,
    iso,
    lesson_body,
    navigation,
    progress_view,
)

router = APIRouter(prefix="/api/courses", tags=["courses"])


def _catalog_row(row: dict) -> dict:
    return {
        "id": row["course_id"],
        "title": row["title"],
        "subtitle": row["subtitle"],
        "description": row["description"],
        "image": row["image"],
        "durationHours": row["duration_hours"],
        "createdAt": iso(row["created_at"]),
        "category": {
            "id": row["category_id"],
            "name": row["category_name"],
            "slug": row["category_slug"],
        },
        "instructor": {
            "name": row["instructor_name"],
            "image": row["instructor_image"],
        },
        "sectionCount": row["section_count"],
        "totalLessons": row["total_lessons"],
        "enrollmentCount": row["enrollment_count"],
    }


@router.get("")
async def list_courses():
    """List published courses, newest first."""
    rows = await list_published_courses()
    return {"courses": [_catalog_row(row) for row in rows]}


@router.get("/{course_id}")
async def get_course(
    course_id: int,
    principal: Principal | None = Depends(get_current_principal),
):
    """Course page: outline plus viewer state. Anonymous viewers see 0%."""
    user_id = principal.user_id if principal else None
    try:
        detail = await get_course_detail(user_id, course_id)
    except ProgressError as e:
        raise http_error(e)

    return {
        "course": {
            **course_summary(detail.course),
            "sections": course_outline(detail.course),
        },
        "progress": progress_view(detail.progress),
        "isAuthenticated": detail.is_authenticated,
        "isEnrolled": detail.is_enrolled,
        "isSaved": detail.is_saved,
    }


@router.post("/{course_id}/enroll")
async def enroll(course_id: int, principal: Principal = Depends(require_principal)):
    """Enroll the signed-in user. Enrolling twice is not an error."""
    try:
        created = await enroll_in_course(principal.user_id, course_id)
    except ProgressError as e:
        raise http_error(e)

    return {"courseId": course_id, "enrolled": True, "created": created}


@router.get("/{course_id}/lessons/{lesson_id}")
async def get_lesson(
    course_id: int,
    lesson_id: int,
    principal: Principal = Depends(require_principal),
):
    """Lesson player: lesson body, prev/next, sidebar list and progress."""
    try:
        player = await get_lesson_player(principal.user_id, course_id, lesson_id)
    except ProgressError as e:
        raise http_error(e)

    return {
        "course": course_summary(player.course),
        "lesson": lesson_body(player.lesson),
        "navigation": navigation(player.navigation),
        "progress": progress_view(player.progress),
    }
