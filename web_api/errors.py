"""Translate learnhub failures into HTTP errors."""

import logging

from fastapi import HTTPException

from learnhub.progress.errors import (
    LessonNotInCourseError,
    NotEnrolledError,
    NotFoundError,
    PersistenceError,
    ProgressError,
    Unauthenticated,
)

logger = logging.getLogger(__name__)


def http_error(error: ProgressError) -> HTTPException:
    """
    Map a ProgressError to the HTTPException the route should raise.

    Unauthenticated -> 401, NotEnrolledError -> 403, NotFoundError -> 404,
    LessonNotInCourseError -> 400, PersistenceError -> 503.
    """
    if isinstance(error, Unauthenticated):
        return HTTPException(status_code=401, detail="Not authenticated")
    if isinstance(error, NotEnrolledError):
        return HTTPException(status_code=403, detail="Not enrolled in this course")
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, LessonNotInCourseError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, PersistenceError):
        return HTTPException(
            status_code=503, detail="Could not save your progress, please retry"
        )

    logger.error(f"Unmapped progress error: {error!r}")
    return HTTPException(status_code=500, detail="Internal error")
