# web_api/tests/conftest.py
"""Pytest fixtures for web API tests.

Routes are exercised through the real app with the learnhub calls patched,
so no database is needed.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from learnhub.auth import Principal
from learnhub.content import CourseContent, LessonNode, SectionNode
from web_api.auth import get_current_principal


@pytest.fixture(autouse=True)
def _jwt_secret():
    """Ensure JWT_SECRET is set so verify_jwt can attempt decoding."""
    with patch("web_api.auth.JWT_SECRET", "test-secret"):
        yield


@pytest.fixture
def app():
    from main import app

    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def signed_in(app):
    """Sign in as user 7 by overriding the session dependency."""
    principal = Principal(user_id=7)
    app.dependency_overrides[get_current_principal] = lambda: principal
    return principal


@pytest.fixture
def sample_course():
    """Section A [L1 10m, L2 20m], section B [L3 30m]."""
    return CourseContent(
        course_id=1,
        title="Python Basics",
        category={"id": 2, "name": "Programming", "slug": "programming"},
        sections=[
            SectionNode(
                section_id=1,
                title="A",
                order=1,
                lessons=[
                    LessonNode(lesson_id=1, title="L1", order=1, duration=10),
                    LessonNode(lesson_id=2, title="L2", order=2, duration=20),
                ],
            ),
            SectionNode(
                section_id=2,
                title="B",
                order=2,
                lessons=[LessonNode(lesson_id=3, title="L3", order=1, duration=30)],
            ),
        ],
    )
