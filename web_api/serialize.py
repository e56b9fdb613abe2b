"""camelCase JSON shapes for learnhub views."""

from datetime import datetime
from typing import Any

from learnhub.content import CourseContent, LessonNode
from learnhub.progress.types import (
    Certificate,
    CourseProgressView,
    DashboardAggregate,
    LessonNavigation,
    LessonState,
)


def iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def course_summary(course: CourseContent) -> dict[str, Any]:
    return {
        "id": course.course_id,
        "title": course.title,
        "subtitle": course.subtitle,
        "description": course.description,
        "image": course.image,
        "durationHours": course.duration_hours,
        "isPublished": course.is_published,
        "instructorName": course.instructor_name,
        "category": course.category,
        "enrollmentCount": course.enrollment_count,
    }


def course_outline(course: CourseContent) -> list[dict[str, Any]]:
    """Sections and lessons without lesson bodies."""
    return [
        {
            "id": section.section_id,
            "title": section.title,
            "order": section.order,
            "lessons": [
                {
                    "id": lesson.lesson_id,
                    "title": lesson.title,
                    "order": lesson.order,
                    "duration": lesson.duration,
                }
                for lesson in section.lessons
            ],
        }
        for section in course.sections
    ]


def lesson_state(state: LessonState | None) -> dict[str, Any] | None:
    if state is None:
        return None
    return {
        "id": state.lesson_id,
        "title": state.title,
        "order": state.order,
        "duration": state.duration,
        "sectionId": state.section_id,
        "sectionTitle": state.section_title,
        "completed": state.completed,
    }


def progress_view(view: CourseProgressView) -> dict[str, Any]:
    return {
        "courseId": view.course_id,
        "totalLessons": view.total_lessons,
        "totalMinutes": view.total_minutes,
        "completedCount": view.completed_count,
        "progressPercent": view.progress_percent,
        "isFullyComplete": view.is_fully_complete,
        "completedLessonIds": [
            lesson.lesson_id for lesson in view.lessons if lesson.completed
        ],
        "sections": [
            {
                "id": section.section_id,
                "title": section.title,
                "completedCount": section.completed_count,
                "lessonCount": section.lesson_count,
            }
            for section in view.sections
        ],
    }


def lesson_body(lesson: LessonNode) -> dict[str, Any]:
    return {
        "id": lesson.lesson_id,
        "title": lesson.title,
        "order": lesson.order,
        "duration": lesson.duration,
        "content": lesson.content,
        "videoUrl": lesson.video_url,
    }


def navigation(nav: LessonNavigation) -> dict[str, Any]:
    return {
        "current": lesson_state(nav.current),
        "prev": lesson_state(nav.prev),
        "next": lesson_state(nav.next),
        "lessons": [lesson_state(lesson) for lesson in nav.lessons],
    }


def certificate(cert: Certificate) -> dict[str, Any]:
    return {
        "courseId": cert.course_id,
        "courseTitle": cert.course_title,
        "completedAt": iso(cert.completed_at),
    }


def dashboard(aggregate: DashboardAggregate) -> dict[str, Any]:
    stats = aggregate.stats
    return {
        "stats": {
            "coursesEnrolled": stats.courses_enrolled,
            "totalLessons": stats.total_lessons,
            "completedLessons": stats.completed_lessons,
            "avgProgress": stats.avg_progress,
            "learningMinutes": stats.learning_minutes,
        },
        "enrolledCourses": [
            {
                **course_summary(item.course),
                "enrolledAt": iso(item.enrolled_at),
                "progress": progress_view(item.progress),
            }
            for item in aggregate.enrolled_courses
        ],
        "certificates": [certificate(cert) for cert in aggregate.certificates],
    }
