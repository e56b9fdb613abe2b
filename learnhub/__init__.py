"""
LearnHub business logic - framework-agnostic.
Used by the web API; every function takes the current user explicitly.
"""

# Database (SQLAlchemy)
from .database import get_connection, get_transaction, close_engine, is_configured

# Course content
from .content import CourseContent, SectionNode, LessonNode

# Current user
from .auth import Principal, get_principal
from .enums import UserRole

# Catalog, enrollment and bookmarks (async functions - must be awaited)
from .catalog import list_published_courses
from .enrollment import enroll_in_course
from .saved_courses import toggle_saved_course, list_saved_courses

# Progress tracking
from .progress import (
    toggle_lesson_completion, get_course_detail, get_lesson_player, get_dashboard,
    compute_course_progress, compute_lesson_navigation, compute_dashboard_aggregate,
    ProgressError, Unauthenticated, NotEnrolledError, NotFoundError,
    CourseNotFoundError, LessonNotFoundError, LessonNotInCourseError, PersistenceError,
)

__all__ = [
    # Database
    'get_connection', 'get_transaction', 'close_engine', 'is_configured',
    # Content
    'CourseContent', 'SectionNode', 'LessonNode',
    # Current user
    'Principal', 'get_principal', 'UserRole',
    # Catalog / enrollment / bookmarks
    'list_published_courses', 'enroll_in_course',
    'toggle_saved_course', 'list_saved_courses',
    # Progress
    'toggle_lesson_completion', 'get_course_detail', 'get_lesson_player', 'get_dashboard',
    'compute_course_progress', 'compute_lesson_navigation', 'compute_dashboard_aggregate',
    'ProgressError', 'Unauthenticated', 'NotEnrolledError', 'NotFoundError',
    'CourseNotFoundError', 'LessonNotFoundError', 'LessonNotInCourseError', 'PersistenceError',
]
