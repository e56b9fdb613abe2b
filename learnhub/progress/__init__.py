"""Learner progress: reconciliation engine, toggle mutation and read paths."""

from ..content import CourseContent, LessonNode, SectionNode
from .engine import (
    compute_course_progress,
    compute_dashboard_aggregate,
    compute_lesson_navigation,
    flatten_lessons,
    progress_percent,
)
from .errors import (
    CourseNotFoundError,
    LessonNotFoundError,
    LessonNotInCourseError,
    NotEnrolledError,
    NotFoundError,
    PersistenceError,
    ProgressError,
    Unauthenticated,
)
from .service import (
    get_course_detail,
    get_dashboard,
    get_lesson_player,
    toggle_lesson_completion,
)
from .types import (
    Certificate,
    CourseDetail,
    CourseProgressView,
    DashboardAggregate,
    DashboardStats,
    EnrolledCourse,
    EnrollmentSnapshot,
    LessonNavigation,
    LessonPlayer,
    LessonState,
    SectionProgress,
    ToggleResult,
)

__all__ = [
    # Engine
    "compute_course_progress",
    "compute_dashboard_aggregate",
    "compute_lesson_navigation",
    "flatten_lessons",
    "progress_percent",
    # Service
    "get_course_detail",
    "get_dashboard",
    "get_lesson_player",
    "toggle_lesson_completion",
    # Errors
    "CourseNotFoundError",
    "LessonNotFoundError",
    "LessonNotInCourseError",
    "NotEnrolledError",
    "NotFoundError",
    "PersistenceError",
    "ProgressError",
    "Unauthenticated",
    # Types
    "Certificate",
    "CourseContent",
    "CourseDetail",
    "CourseProgressView",
    "DashboardAggregate",
    "DashboardStats",
    "EnrolledCourse",
    "EnrollmentSnapshot",
    "LessonNavigation",
    "LessonNode",
    "LessonPlayer",
    "LessonState",
    "SectionNode",
    "SectionProgress",
    "ToggleResult",
]
