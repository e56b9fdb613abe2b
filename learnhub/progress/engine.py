# learnhub/progress/engine.py
"""Progress reconciliation.

Pure functions that turn course content plus a user's completion records
into the views the course page, lesson player and dashboard render. Nothing
here touches the database; callers load inputs through learnhub.queries.
"""

import logging
import math
from datetime import datetime
from typing import Collection, Iterable, Mapping

from ..content import CourseContent, SectionNode
from .errors import LessonNotFoundError
from .types import (
    Certificate,
    CourseProgressView,
    DashboardAggregate,
    DashboardStats,
    EnrolledCourse,
    EnrollmentSnapshot,
    LessonNavigation,
    LessonState,
    SectionProgress,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round a non-negative number to the nearest int, .5 going up."""
    return int(math.floor(value + 0.5))


def progress_percent(completed: int, total: int) -> int:
    """Whole-number completion percentage; 0 for an empty course."""
    if total <= 0:
        return 0
    return round_half_up(100 * completed / total)


def ordered_sections(course: CourseContent) -> list[SectionNode]:
    """Sections by `order`, then by id so duplicate orders stay deterministic."""
    return sorted(course.sections, key=lambda s: (s.order, s.section_id))


def flatten_lessons(
    course: CourseContent, completed_lesson_ids: Collection[int] = ()
) -> list[LessonState]:
    """Flatten a course into reading order, marking completed lessons."""
    completed = set(completed_lesson_ids)
    flat = []
    for section in ordered_sections(course):
        for lesson in sorted(
            section.lessons, key=lambda lesson: (lesson.order, lesson.lesson_id)
        ):
            flat.append(
                LessonState(
                    lesson_id=lesson.lesson_id,
                    title=lesson.title,
                    order=lesson.order,
                    duration=lesson.duration or 0,
                    section_id=section.section_id,
                    section_title=section.title,
                    completed=lesson.lesson_id in completed,
                )
            )
    return flat


def compute_course_progress(
    user_id: int | None,
    course: CourseContent,
    completed_lesson_ids: Collection[int],
) -> CourseProgressView:
    """Compute a user's completion view for one course.

    Ids in completed_lesson_ids that are not lessons of this course are
    ignored, so a caller may pass the user's full completion set.

    Args:
        user_id: The viewer (None for anonymous visitors, who see 0%)
        course: Course content with sections and lessons
        completed_lesson_ids: Ids of lessons the user has completed

    Returns:
        CourseProgressView with zeroed statistics for an empty course
    """
    if user_id is None:
        completed_lesson_ids = ()

    lessons = flatten_lessons(course, completed_lesson_ids)

    sections = []
    by_section: dict[int, list[LessonState]] = {}
    for lesson in lessons:
        by_section.setdefault(lesson.section_id, []).append(lesson)
    for section in ordered_sections(course):
        section_lessons = by_section.get(section.section_id, [])
        sections.append(
            SectionProgress(
                section_id=section.section_id,
                title=section.title,
                order=section.order,
                completed_count=sum(
                    1 for lesson in section_lessons if lesson.completed
                ),
                lesson_count=len(section_lessons),
                lessons=section_lessons,
            )
        )

    total = len(lessons)
    completed_count = sum(1 for lesson in lessons if lesson.completed)
    percent = progress_percent(completed_count, total)

    return CourseProgressView(
        course_id=course.course_id,
        course_title=course.title,
        lessons=lessons,
        sections=sections,
        total_lessons=total,
        total_minutes=sum(lesson.duration for lesson in lessons),
        completed_count=completed_count,
        progress_percent=percent,
        is_fully_complete=percent == 100 and total > 0,
    )


def compute_lesson_navigation(
    view: CourseProgressView, current_lesson_id: int
) -> LessonNavigation:
    """Find the lessons before and after the current one.

    Raises:
        LessonNotFoundError: If the lesson is not part of this course
    """
    lessons = view.lessons
    index = next(
        (i for i, lesson in enumerate(lessons) if lesson.lesson_id == current_lesson_id),
        None,
    )
    if index is None:
        raise LessonNotFoundError(current_lesson_id, view.course_id)

    return LessonNavigation(
        current=lessons[index],
        prev=lessons[index - 1] if index > 0 else None,
        next=lessons[index + 1] if index < len(lessons) - 1 else None,
        lessons=lessons,
    )


def _latest_completion(
    lesson_ids: Iterable[int], completions: Mapping[int, datetime | None]
) -> datetime | None:
    times = [completions[lid] for lid in lesson_ids if completions.get(lid)]
    return max(times) if times else None


def compute_dashboard_aggregate(
    user_id: int,
    enrollments: list[EnrollmentSnapshot],
    completions: Mapping[int, datetime | None],
) -> DashboardAggregate:
    """Aggregate progress across every course a user is enrolled in.

    Args:
        user_id: The user
        enrollments: The user's enrollments with course content, in display order
        completions: lesson_id -> completed_at for the user's completed lessons

    Returns:
        DashboardAggregate whose stats always equal the sum of the per-course
        views it contains
    """
    enrolled = [
        EnrolledCourse(
            course=snapshot.course,
            enrolled_at=snapshot.enrolled_at,
            progress=compute_course_progress(user_id, snapshot.course, completions),
        )
        for snapshot in enrollments
    ]

    # A lesson can only belong to one course, but two enrollment rows could
    # still carry the same course; count each completed lesson once.
    minutes_by_lesson: dict[int, int] = {}
    for row in enrolled:
        for lesson in row.progress.lessons:
            if lesson.completed:
                minutes_by_lesson[lesson.lesson_id] = lesson.duration

    certificates = []
    for row in enrolled:
        view = row.progress
        if not view.is_fully_complete:
            continue
        completed_at = _latest_completion(
            (lesson.lesson_id for lesson in view.lessons), completions
        )
        if completed_at is None:
            logger.warning(
                f"Course {view.course_id} is complete for user {user_id} "
                f"but has no completion timestamps"
            )
        certificates.append(
            Certificate(
                course_id=view.course_id,
                course_title=view.course_title,
                completed_at=completed_at,
            )
        )

    percents = [row.progress.progress_percent for row in enrolled]
    stats = DashboardStats(
        courses_enrolled=len(enrolled),
        total_lessons=sum(row.progress.total_lessons for row in enrolled),
        completed_lessons=sum(row.progress.completed_count for row in enrolled),
        avg_progress=round_half_up(sum(percents) / len(percents)) if percents else 0,
        learning_minutes=sum(minutes_by_lesson.values()),
    )

    return DashboardAggregate(
        user_id=user_id,
        stats=stats,
        enrolled_courses=enrolled,
        certificates=certificates,
    )
