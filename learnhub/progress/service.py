# learnhub/progress/service.py
"""Progress reads and the lesson-completion toggle.

Each function is one unit of work: it opens its own connection (or
transaction), loads what the engine needs through learnhub.queries, and
returns an engine view. Database failures surface as PersistenceError.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator

import sentry_sdk
from sqlalchemy.exc import SQLAlchemyError

from ..auth import Principal
from ..database import get_connection, get_transaction
from ..queries import courses as course_queries
from ..queries import enrollments as enrollment_queries
from ..queries import progress as progress_queries
from ..queries import saved_courses as saved_queries
from .engine import (
    compute_course_progress,
    compute_dashboard_aggregate,
    compute_lesson_navigation,
)
from .errors import (
    CourseNotFoundError,
    LessonNotFoundError,
    LessonNotInCourseError,
    NotEnrolledError,
    PersistenceError,
    Unauthenticated,
)
from .types import (
    CourseDetail,
    DashboardAggregate,
    EnrollmentSnapshot,
    LessonPlayer,
    ToggleResult,
)

logger = logging.getLogger(__name__)


@contextmanager
def _persistence_errors(operation: str) -> Iterator[None]:
    """Re-raise database failures as PersistenceError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"{operation} failed: {e}")
        sentry_sdk.capture_exception(e)
        raise PersistenceError(f"{operation} failed") from e


async def toggle_lesson_completion(
    principal: Principal | None,
    lesson_id: int,
    course_id: int,
    desired_state: bool,
) -> ToggleResult:
    """
    Mark a lesson complete or incomplete for the caller.

    Checks, in order: the caller is signed in, the caller is enrolled in
    course_id, and lesson_id really belongs to course_id (looked up from the
    lesson's section, never trusted from the caller). Only then is the
    progress row upserted. Calling twice with the same desired_state leaves
    the same stored state.

    Args:
        principal: The signed-in caller, or None
        lesson_id: Lesson to update
        course_id: Course the caller believes the lesson belongs to
        desired_state: True to complete, False to clear

    Returns:
        ToggleResult with the stored completion state

    Raises:
        Unauthenticated: No signed-in caller
        NotEnrolledError: Caller is not enrolled in course_id
        LessonNotFoundError: Lesson does not exist
        LessonNotInCourseError: Lesson belongs to another course
        PersistenceError: The database failed; nothing is retried
    """
    if principal is None:
        raise Unauthenticated("Sign in to track progress")

    user_id = principal.user_id

    with _persistence_errors("toggle_lesson_completion"):
        async with get_transaction() as conn:
            if not await enrollment_queries.is_enrolled(conn, user_id, course_id):
                raise NotEnrolledError(user_id, course_id)

            owning_course_id = await course_queries.get_lesson_course_id(
                conn, lesson_id
            )
            if owning_course_id is None:
                raise LessonNotFoundError(lesson_id, course_id)
            if owning_course_id != course_id:
                raise LessonNotInCourseError(lesson_id, course_id, owning_course_id)

            row = await progress_queries.upsert_progress(
                conn,
                user_id=user_id,
                lesson_id=lesson_id,
                completed=desired_state,
                completed_at=datetime.now(timezone.utc) if desired_state else None,
            )

    logger.info(
        f"User {user_id} set lesson {lesson_id} (course {course_id}) "
        f"completed={desired_state}"
    )
    return ToggleResult(
        user_id=user_id,
        lesson_id=lesson_id,
        course_id=course_id,
        completed=row["completed"],
        completed_at=row["completed_at"],
    )


async def get_course_detail(user_id: int | None, course_id: int) -> CourseDetail:
    """
    Course page data. Public: anonymous viewers get 0% and no viewer state.

    Raises:
        CourseNotFoundError: Course missing or unpublished
    """
    with _persistence_errors("get_course_detail"):
        async with get_connection() as conn:
            course = await course_queries.load_course_with_content(conn, course_id)
            if course is None:
                raise CourseNotFoundError(course_id)

            is_enrolled = False
            is_saved = False
            completed: set[int] = set()
            if user_id is not None:
                is_enrolled = await enrollment_queries.is_enrolled(
                    conn, user_id, course_id
                )
                is_saved = await saved_queries.is_saved(conn, user_id, course_id)
                completed = await progress_queries.load_completed_lesson_ids(
                    conn, user_id, course_id
                )

    return CourseDetail(
        course=course,
        progress=compute_course_progress(user_id, course, completed),
        is_authenticated=user_id is not None,
        is_enrolled=is_enrolled,
        is_saved=is_saved,
    )


async def get_lesson_player(
    user_id: int, course_id: int, lesson_id: int
) -> LessonPlayer:
    """
    Lesson page data: lesson body, neighbours and course progress.

    Raises:
        NotEnrolledError: Lesson content is only shown to enrolled users
        CourseNotFoundError: Course missing or unpublished
        LessonNotFoundError: Lesson is not part of the course
    """
    with _persistence_errors("get_lesson_player"):
        async with get_connection() as conn:
            if not await enrollment_queries.is_enrolled(conn, user_id, course_id):
                raise NotEnrolledError(user_id, course_id)

            course = await course_queries.load_course_with_content(conn, course_id)
            if course is None:
                raise CourseNotFoundError(course_id)

            completed = await progress_queries.load_completed_lesson_ids(
                conn, user_id, course_id
            )

    view = compute_course_progress(user_id, course, completed)
    navigation = compute_lesson_navigation(view, lesson_id)
    lesson = next(
        lesson
        for section in course.sections
        for lesson in section.lessons
        if lesson.lesson_id == lesson_id
    )
    return LessonPlayer(
        course=course, lesson=lesson, navigation=navigation, progress=view
    )


async def get_dashboard(user_id: int) -> DashboardAggregate:
    """Dashboard stats, enrolled courses and certificates for a user."""
    with _persistence_errors("get_dashboard"):
        async with get_connection() as conn:
            enrollment_rows = await enrollment_queries.get_user_enrollments(
                conn, user_id
            )
            # Unpublishing a course must not hide progress the user already has
            contents = await course_queries.load_courses_with_content(
                conn,
                [row["course_id"] for row in enrollment_rows],
                published_only=False,
            )
            completions = await progress_queries.load_completion_times(conn, user_id)

    snapshots = [
        EnrollmentSnapshot(
            course=contents[row["course_id"]], enrolled_at=row["enrolled_at"]
        )
        for row in enrollment_rows
        if row["course_id"] in contents
    ]
    return compute_dashboard_aggregate(user_id, snapshots, completions)
