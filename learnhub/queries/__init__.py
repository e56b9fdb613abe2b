"""Query layer for database operations using SQLAlchemy Core."""

from .courses import (
    course_exists,
    get_lesson_course_id,
    list_published_courses,
    load_course_with_content,
    load_courses_with_content,
)
from .enrollments import (
    create_enrollment,
    find_enrollment,
    get_user_enrollments,
    is_course_published,
    is_enrolled,
)
from .progress import (
    load_completed_lesson_ids,
    load_completion_times,
    upsert_progress,
)
from .saved_courses import is_saved, list_saved_courses, save_course, unsave_course
from .users import get_user

__all__ = [
    # Courses
    "course_exists",
    "get_lesson_course_id",
    "list_published_courses",
    "load_course_with_content",
    "load_courses_with_content",
    # Enrollments
    "create_enrollment",
    "find_enrollment",
    "get_user_enrollments",
    "is_course_published",
    "is_enrolled",
    # Progress
    "load_completed_lesson_ids",
    "load_completion_times",
    "upsert_progress",
    # Saved courses
    "is_saved",
    "list_saved_courses",
    "save_course",
    "unsave_course",
    # Users
    "get_user",
]
