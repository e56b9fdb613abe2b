# learnhub/progress/types.py
"""Progress views derived from course content.

These are what the engine computes from course content plus a user's
completion records. None of them are persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime

from ..content import CourseContent, LessonNode


@dataclass
class LessonState:
    """A lesson in flattened course order, annotated for one user."""

    lesson_id: int
    title: str
    order: int
    duration: int
    section_id: int
    section_title: str
    completed: bool = False


@dataclass
class SectionProgress:
    """Completion counts for one section (used for display banding)."""

    section_id: int
    title: str
    order: int
    completed_count: int
    lesson_count: int
    lessons: list[LessonState] = field(default_factory=list)


@dataclass
class CourseProgressView:
    """A user's reconciled completion state for one course."""

    course_id: int
    course_title: str
    lessons: list[LessonState]
    sections: list[SectionProgress]
    total_lessons: int
    total_minutes: int
    completed_count: int
    progress_percent: int
    is_fully_complete: bool


@dataclass
class LessonNavigation:
    """Neighbours of the current lesson plus the full sidebar list."""

    current: LessonState
    prev: LessonState | None
    next: LessonState | None
    lessons: list[LessonState]


@dataclass
class EnrollmentSnapshot:
    """One enrollment with the content of its course."""

    course: CourseContent
    enrolled_at: datetime | None = None


@dataclass
class Certificate:
    """A derived fact: the user completed every lesson of the course."""

    course_id: int
    course_title: str
    completed_at: datetime | None


@dataclass
class DashboardStats:
    courses_enrolled: int = 0
    total_lessons: int = 0
    completed_lessons: int = 0
    avg_progress: int = 0
    learning_minutes: int = 0


@dataclass
class EnrolledCourse:
    """Dashboard row: an enrolled course and the user's progress in it."""

    course: CourseContent
    enrolled_at: datetime | None
    progress: CourseProgressView


@dataclass
class DashboardAggregate:
    """Everything the dashboard shows for one user."""

    user_id: int
    stats: DashboardStats
    enrolled_courses: list[EnrolledCourse] = field(default_factory=list)
    certificates: list[Certificate] = field(default_factory=list)


@dataclass
class ToggleResult:
    """Stored state of a (user, lesson) progress row after a toggle."""

    user_id: int
    lesson_id: int
    course_id: int
    completed: bool
    completed_at: datetime | None


@dataclass
class CourseDetail:
    """Course page data: content, viewer state and the viewer's progress."""

    course: CourseContent
    progress: CourseProgressView
    is_authenticated: bool = False
    is_enrolled: bool = False
    is_saved: bool = False


@dataclass
class LessonPlayer:
    """Lesson page data for an enrolled user."""

    course: CourseContent
    lesson: LessonNode
    navigation: LessonNavigation
    progress: CourseProgressView
