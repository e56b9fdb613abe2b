"""Saved courses API routes.

Endpoints:
- GET  /api/saved - The signed-in user's saved courses
- POST /api/saved/{course_id}/toggle - Save or unsave a course
"""

from fastapi import APIRouter, Depends

from learnhub.auth import Principal
from learnhub.progress import ProgressError
from learnhub.saved_courses import list_saved_courses, toggle_saved_course
from web_api.auth import require_principal
from web_api.errors import http_error
from web_api.serialize import iso

router = APIRouter(prefix="/api/saved", tags=["saved"])


@router.get("")
async def get_saved(principal: Principal = Depends(require_principal)):
    rows = await list_saved_courses(principal.user_id)
    return {
        "courses": [
            {
                "id": row["course_id"],
                "title": row["title"],
                "subtitle": row["subtitle"],
                "description": row["description"],
                "image": row["image"],
                "durationHours": row["duration_hours"],
                "isPublished": row["is_published"],
                "categoryName": row["category_name"],
                "instructorName": row["instructor_name"],
                "savedAt": iso(row["saved_at"]),
            }
            for row in rows
        ]
    }


@router.post("/{course_id}/toggle")
async def toggle_saved(
    course_id: int, principal: Principal = Depends(require_principal)
):
    """Flip the saved state of a course. Returns the new state."""
    try:
        is_saved = await toggle_saved_course(principal.user_id, course_id)
    except ProgressError as e:
        raise http_error(e)

    return {"courseId": course_id, "isSaved": is_saved}
