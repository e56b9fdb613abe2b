"""Tests for the query layer.

Each query function is called with a mock connection; the executed
statements are captured and compiled to PostgreSQL SQL for inspection.
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.dialects import postgresql

from learnhub.queries.courses import (
    get_lesson_course_id,
    list_published_courses,
    load_courses_with_content,
)
from learnhub.queries.enrollments import create_enrollment, is_course_published
from learnhub.queries.progress import load_completed_lesson_ids, upsert_progress
from learnhub.queries.saved_courses import unsave_course


def _make_mapping_result(rows):
    """Helper to create a mock result supporting .mappings() and iteration."""
    mock_result = Mock()
    mock_mappings = Mock()
    mock_mappings.first.return_value = rows[0] if rows else None
    mock_mappings.all.return_value = rows
    mock_mappings.__iter__ = Mock(return_value=iter(rows))
    mock_result.mappings.return_value = mock_mappings
    mock_result.first.return_value = rows[0] if rows else None
    mock_result.rowcount = len(rows)
    mock_result.__iter__ = Mock(return_value=iter(rows))
    return mock_result


def _compile_sql(query, literal_binds: bool = True) -> str:
    """Compile a SQLAlchemy query to SQL string for inspection."""
    compile_kwargs = {"literal_binds": True} if literal_binds else {}
    return str(
        query.compile(dialect=postgresql.dialect(), compile_kwargs=compile_kwargs)
    )


def _executed_sql(conn, call_index: int = 0, literal_binds: bool = True) -> str:
    return _compile_sql(conn.execute.call_args_list[call_index][0][0], literal_binds)


class TestUpsertProgress:
    @pytest.mark.asyncio
    async def test_single_statement_upsert(self):
        stored = {
            "progress_id": 1,
            "user_id": 7,
            "lesson_id": 2,
            "completed": True,
            "completed_at": datetime(2026, 3, 1, tzinfo=timezone.utc),
        }
        conn = AsyncMock()
        conn.execute = AsyncMock(return_value=_make_mapping_result([stored]))

        row = await upsert_progress(
            conn,
            user_id=7,
            lesson_id=2,
            completed=True,
            completed_at=stored["completed_at"],
        )

        assert conn.execute.call_count == 1
        sql = _executed_sql(conn, literal_binds=False)
        assert "INSERT INTO lesson_progress" in sql
        assert "ON CONFLICT (user_id, lesson_id) DO UPDATE" in sql
        assert "completed_at = excluded.completed_at" in sql
        assert "RETURNING" in sql
        assert row == stored


class TestEnrollmentQueries:
    @pytest.mark.asyncio
    async def test_create_enrollment_ignores_duplicates(self):
        conn = AsyncMock()
        conn.execute = AsyncMock(return_value=_make_mapping_result([]))

        created = await create_enrollment(conn, user_id=7, course_id=1)

        sql = _executed_sql(conn)
        assert "ON CONFLICT (user_id, course_id) DO NOTHING" in sql
        assert created is False

    @pytest.mark.asyncio
    async def test_create_enrollment_reports_new_row(self):
        conn = AsyncMock()
        conn.execute = AsyncMock(
            return_value=_make_mapping_result([SimpleNamespace(enrollment_id=3)])
        )

        assert await create_enrollment(conn, user_id=7, course_id=1) is True

    @pytest.mark.asyncio
    async def test_is_course_published(self):
        result = Mock()
        result.scalar.return_value = None
        conn = AsyncMock()
        conn.execute = AsyncMock(return_value=result)

        assert await is_course_published(conn, 404) is False


class TestCourseQueries:
    @pytest.mark.asyncio
    async def test_lesson_course_is_derived_through_section(self):
        result = Mock()
        result.scalar.return_value = 3
        conn = AsyncMock()
        conn.execute = AsyncMock(return_value=result)

        assert await get_lesson_course_id(conn, 12) == 3
        sql = _executed_sql(conn)
        assert "JOIN sections ON lessons.section_id = sections.section_id" in sql
        assert "lessons.lesson_id = 12" in sql

    @pytest.mark.asyncio
    async def test_load_no_ids_skips_database(self):
        conn = AsyncMock()

        assert await load_courses_with_content(conn, []) == {}
        conn.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_load_builds_nested_content(self):
        course_row = {
            "course_id": 1,
            "title": "Python Basics",
            "subtitle": None,
            "description": None,
            "image": None,
            "duration_hours": 4,
            "is_published": True,
            "category_id": 2,
            "category_name": "Programming",
            "category_slug": "programming",
            "instructor_name": "Ada",
            "enrollment_count": 5,
        }

        def content_row(section_id, section_order, lesson_id, lesson_order):
            return {
                "course_id": 1,
                "section_id": section_id,
                "section_title": f"S{section_id}",
                "section_order": section_order,
                "lesson_id": lesson_id,
                "lesson_title": f"L{lesson_id}" if lesson_id else None,
                "lesson_order": lesson_order,
                "duration": 10 if lesson_id else None,
                "content": "",
                "video_url": None,
            }

        conn = AsyncMock()
        conn.execute = AsyncMock(
            side_effect=[
                _make_mapping_result([course_row]),
                _make_mapping_result(
                    [
                        content_row(1, 1, 1, 1),
                        content_row(1, 1, 2, 2),
                        content_row(2, 2, None, None),
                    ]
                ),
            ]
        )

        loaded = await load_courses_with_content(conn, [1])

        course = loaded[1]
        assert course.description == ""
        assert course.category == {
            "id": 2,
            "name": "Programming",
            "slug": "programming",
        }
        assert [s.section_id for s in course.sections] == [1, 2]
        assert [lesson.lesson_id for lesson in course.sections[0].lessons] == [1, 2]
        # Empty section is kept, without a phantom lesson
        assert course.sections[1].lessons == []

        assert "courses.is_published IS true" in _executed_sql(conn, 0)
        assert "LEFT OUTER JOIN lessons" in _executed_sql(conn, 1)

    @pytest.mark.asyncio
    async def test_load_can_include_unpublished(self):
        conn = AsyncMock()
        conn.execute = AsyncMock(return_value=_make_mapping_result([]))

        assert await load_courses_with_content(conn, [1], published_only=False) == {}
        assert conn.execute.call_count == 1
        assert "is_published IS true" not in _executed_sql(conn)

    @pytest.mark.asyncio
    async def test_catalog_lists_published_newest_first(self):
        conn = AsyncMock()
        conn.execute = AsyncMock(return_value=_make_mapping_result([]))

        assert await list_published_courses(conn) == []
        sql = _executed_sql(conn)
        assert "courses.is_published IS true" in sql
        assert "ORDER BY courses.created_at DESC" in sql


class TestProgressAndSavedQueries:
    @pytest.mark.asyncio
    async def test_completed_ids_scoped_to_course(self):
        conn = AsyncMock()
        conn.execute = AsyncMock(
            return_value=_make_mapping_result(
                [SimpleNamespace(lesson_id=1), SimpleNamespace(lesson_id=3)]
            )
        )

        assert await load_completed_lesson_ids(conn, 7, 1) == {1, 3}
        sql = _executed_sql(conn)
        assert "sections.course_id = 1" in sql
        assert "lesson_progress.completed IS true" in sql

    @pytest.mark.asyncio
    async def test_unsave_returns_deleted_count(self):
        result = Mock()
        result.rowcount = 1
        conn = AsyncMock()
        conn.execute = AsyncMock(return_value=result)

        assert await unsave_course(conn, 7, 1) == 1
        assert "DELETE FROM saved_courses" in _executed_sql(conn)
