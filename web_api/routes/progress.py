"""Progress tracking API routes.

Endpoints:
- POST /api/progress/toggle - Mark a lesson complete or incomplete
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from learnhub.auth import Principal
from learnhub.progress import ProgressError, toggle_lesson_completion
from web_api.auth import get_current_principal
from web_api.errors import http_error
from web_api.serialize import iso

router = APIRouter(prefix="/api/progress", tags=["progress"])


class ToggleRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lesson_id: int = Field(alias="lessonId")
    course_id: int = Field(alias="courseId")
    completed: bool


class ToggleResponse(BaseModel):
    lessonId: int
    courseId: int
    completed: bool
    completedAt: str | None


@router.post("/toggle", response_model=ToggleResponse)
async def toggle_progress(
    body: ToggleRequest,
    principal: Principal | None = Depends(get_current_principal),
):
    """Set a lesson's completion state for the signed-in user.

    The client sends the state it wants, not a flip, so a retried request
    lands on the same stored state. Only enrolled users can record progress,
    and the lesson must belong to the given course.
    """
    try:
        result = await toggle_lesson_completion(
            principal, body.lesson_id, body.course_id, body.completed
        )
    except ProgressError as e:
        raise http_error(e)

    return ToggleResponse(
        lessonId=result.lesson_id,
        courseId=result.course_id,
        completed=result.completed,
        completedAt=iso(result.completed_at),
    )
