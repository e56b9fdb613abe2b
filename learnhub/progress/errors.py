"""Failure types raised by progress reads and mutations.

The web layer maps each of these to an HTTP status; none of them is fatal to
the process.
"""


class ProgressError(Exception):
    """Base class for progress failures."""

    pass


class Unauthenticated(ProgressError):
    """Raised when an operation needs a signed-in user and there is none."""

    pass


class NotEnrolledError(ProgressError):
    """Raised when the user has no enrollment for the lesson's course."""

    def __init__(self, user_id: int, course_id: int):
        self.user_id = user_id
        self.course_id = course_id
        super().__init__(f"User {user_id} is not enrolled in course {course_id}")


class NotFoundError(ProgressError):
    """Raised when a course or lesson cannot be found."""

    pass


class CourseNotFoundError(NotFoundError):
    """Raised when a course does not exist or is not published."""

    def __init__(self, course_id: int):
        self.course_id = course_id
        super().__init__(f"Course not found: {course_id}")


class LessonNotFoundError(NotFoundError):
    """Raised when a lesson is not part of the course's lesson list."""

    def __init__(self, lesson_id: int, course_id: int | None = None):
        self.lesson_id = lesson_id
        self.course_id = course_id
        where = f" in course {course_id}" if course_id is not None else ""
        super().__init__(f"Lesson not found{where}: {lesson_id}")


class LessonNotInCourseError(ProgressError):
    """Raised when a caller-supplied course id does not own the lesson."""

    def __init__(self, lesson_id: int, course_id: int, actual_course_id: int):
        self.lesson_id = lesson_id
        self.course_id = course_id
        self.actual_course_id = actual_course_id
        super().__init__(
            f"Lesson {lesson_id} belongs to course {actual_course_id}, "
            f"not {course_id}"
        )


class PersistenceError(ProgressError):
    """Raised when the database rejects or fails a progress operation."""

    pass
