# learnhub/content.py
"""Course content types.

These mirror the rows the query layer loads: a course, its ordered sections
and their ordered lessons, with no per-user state attached.
"""

from dataclasses import dataclass, field


@dataclass
class LessonNode:
    """A lesson as stored, without any per-user state."""

    lesson_id: int
    title: str
    order: int
    duration: int = 0  # minutes
    content: str = ""
    video_url: str | None = None


@dataclass
class SectionNode:
    """An ordered group of lessons within a course."""

    section_id: int
    title: str
    order: int
    lessons: list[LessonNode] = field(default_factory=list)


@dataclass
class CourseContent:
    """A course with its sections and lessons eagerly loaded."""

    course_id: int
    title: str
    sections: list[SectionNode] = field(default_factory=list)
    subtitle: str | None = None
    description: str = ""
    image: str | None = None
    duration_hours: int = 0
    is_published: bool = True
    instructor_name: str | None = None
    category: dict | None = None  # {"id", "name", "slug"}
    enrollment_count: int = 0
