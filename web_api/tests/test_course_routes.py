"""Tests for course, dashboard, saved-course and chat endpoints."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

from learnhub.auth import Principal
from learnhub.enums import UserRole
from learnhub.progress import (
    CourseDetail,
    CourseNotFoundError,
    LessonNotFoundError,
    NotEnrolledError,
    compute_course_progress,
    compute_dashboard_aggregate,
    compute_lesson_navigation,
)
from learnhub.progress.types import EnrollmentSnapshot, LessonPlayer
from web_api.auth import get_current_principal

DONE_AT = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestCatalog:
    def test_lists_published_courses(self, client):
        row = {
            "course_id": 1,
            "title": "Python Basics",
            "subtitle": None,
            "description": "Learn Python",
            "image": None,
            "duration_hours": 4,
            "created_at": DONE_AT,
            "category_id": 2,
            "category_name": "Programming",
            "category_slug": "programming",
            "instructor_name": "Ada",
            "instructor_image": None,
            "section_count": 2,
            "total_lessons": 3,
            "enrollment_count": 5,
        }
        with patch(
            "web_api.routes.courses.list_published_courses",
            new_callable=AsyncMock,
            return_value=[row],
        ):
            response = client.get("/api/courses")

        assert response.status_code == 200
        course = response.json()["courses"][0]
        assert course["id"] == 1
        assert course["totalLessons"] == 3
        assert course["category"]["slug"] == "programming"
        assert course["instructor"]["name"] == "Ada"


class TestCourseDetail:
    def test_anonymous_viewer(self, client, sample_course):
        detail = CourseDetail(
            course=sample_course,
            progress=compute_course_progress(None, sample_course, set()),
        )
        with patch(
            "web_api.routes.courses.get_course_detail",
            new_callable=AsyncMock,
            return_value=detail,
        ) as mock_detail:
            response = client.get("/api/courses/1")

        assert response.status_code == 200
        mock_detail.assert_awaited_once_with(None, 1)
        data = response.json()
        assert data["isAuthenticated"] is False
        assert data["progress"]["progressPercent"] == 0
        assert len(data["course"]["sections"]) == 2

    def test_enrolled_viewer_sees_progress(self, client, signed_in, sample_course):
        detail = CourseDetail(
            course=sample_course,
            progress=compute_course_progress(7, sample_course, {1, 3}),
            is_authenticated=True,
            is_enrolled=True,
        )
        with patch(
            "web_api.routes.courses.get_course_detail",
            new_callable=AsyncMock,
            return_value=detail,
        ) as mock_detail:
            response = client.get("/api/courses/1")

        mock_detail.assert_awaited_once_with(7, 1)
        progress = response.json()["progress"]
        assert progress["progressPercent"] == 67
        assert progress["totalMinutes"] == 60
        assert progress["completedLessonIds"] == [1, 3]

    def test_missing_course_gets_404(self, client):
        with patch(
            "web_api.routes.courses.get_course_detail",
            new_callable=AsyncMock,
            side_effect=CourseNotFoundError(404),
        ):
            response = client.get("/api/courses/404")

        assert response.status_code == 404


class TestEnroll:
    def test_requires_sign_in(self, client):
        response = client.post("/api/courses/1/enroll")
        assert response.status_code == 401

    def test_enrolls(self, client, signed_in):
        with patch(
            "web_api.routes.courses.enroll_in_course",
            new_callable=AsyncMock,
            return_value=True,
        ) as mock_enroll:
            response = client.post("/api/courses/1/enroll")

        assert response.status_code == 200
        assert response.json()["enrolled"] is True
        mock_enroll.assert_awaited_once_with(7, 1)

    def test_unpublished_course_gets_404(self, client, signed_in):
        with patch(
            "web_api.routes.courses.enroll_in_course",
            new_callable=AsyncMock,
            side_effect=CourseNotFoundError(1),
        ):
            response = client.post("/api/courses/1/enroll")

        assert response.status_code == 404


class TestLessonPlayer:
    def test_returns_navigation(self, client, signed_in, sample_course):
        view = compute_course_progress(7, sample_course, {1})
        player = LessonPlayer(
            course=sample_course,
            lesson=sample_course.sections[0].lessons[1],
            navigation=compute_lesson_navigation(view, 2),
            progress=view,
        )
        with patch(
            "web_api.routes.courses.get_lesson_player",
            new_callable=AsyncMock,
            return_value=player,
        ):
            response = client.get("/api/courses/1/lessons/2")

        assert response.status_code == 200
        data = response.json()
        assert data["lesson"]["title"] == "L2"
        assert data["navigation"]["prev"]["id"] == 1
        assert data["navigation"]["next"]["id"] == 3
        assert data["navigation"]["next"]["sectionTitle"] == "B"

    def test_not_enrolled_gets_403(self, client, signed_in):
        with patch(
            "web_api.routes.courses.get_lesson_player",
            new_callable=AsyncMock,
            side_effect=NotEnrolledError(7, 1),
        ):
            response = client.get("/api/courses/1/lessons/2")

        assert response.status_code == 403

    def test_unknown_lesson_gets_404(self, client, signed_in):
        with patch(
            "web_api.routes.courses.get_lesson_player",
            new_callable=AsyncMock,
            side_effect=LessonNotFoundError(42, 1),
        ):
            response = client.get("/api/courses/1/lessons/42")

        assert response.status_code == 404


class TestDashboard:
    def test_requires_sign_in(self, client):
        assert client.get("/api/dashboard").status_code == 401

    def test_admin_has_no_dashboard(self, app, client):
        app.dependency_overrides[get_current_principal] = lambda: Principal(
            user_id=1, role=UserRole.admin
        )
        with patch(
            "web_api.routes.dashboard.get_dashboard", new_callable=AsyncMock
        ) as mock_dashboard:
            response = client.get("/api/dashboard")

        assert response.status_code == 403
        mock_dashboard.assert_not_called()

    def test_stats_and_certificates(self, client, signed_in, sample_course):
        aggregate = compute_dashboard_aggregate(
            7,
            [EnrollmentSnapshot(course=sample_course, enrolled_at=DONE_AT)],
            {1: DONE_AT, 2: DONE_AT, 3: DONE_AT},
        )
        with patch(
            "web_api.routes.dashboard.get_dashboard",
            new_callable=AsyncMock,
            return_value=aggregate,
        ):
            response = client.get("/api/dashboard")

        assert response.status_code == 200
        data = response.json()
        assert data["stats"] == {
            "coursesEnrolled": 1,
            "totalLessons": 3,
            "completedLessons": 3,
            "avgProgress": 100,
            "learningMinutes": 60,
        }
        assert data["certificates"] == [
            {
                "courseId": 1,
                "courseTitle": "Python Basics",
                "completedAt": DONE_AT.isoformat(),
            }
        ]
        assert data["enrolledCourses"][0]["progress"]["isFullyComplete"] is True


class TestSaved:
    def test_toggle(self, client, signed_in):
        with patch(
            "web_api.routes.saved.toggle_saved_course",
            new_callable=AsyncMock,
            return_value=True,
        ):
            response = client.post("/api/saved/1/toggle")

        assert response.json() == {"courseId": 1, "isSaved": True}

    def test_toggle_unknown_course(self, client, signed_in):
        with patch(
            "web_api.routes.saved.toggle_saved_course",
            new_callable=AsyncMock,
            side_effect=CourseNotFoundError(9),
        ):
            response = client.post("/api/saved/9/toggle")

        assert response.status_code == 404

    def test_list(self, client, signed_in):
        row = {
            "course_id": 1,
            "title": "Python Basics",
            "subtitle": None,
            "description": "",
            "image": None,
            "duration_hours": 4,
            "is_published": True,
            "category_name": "Programming",
            "instructor_name": "Ada",
            "saved_at": DONE_AT,
        }
        with patch(
            "web_api.routes.saved.list_saved_courses",
            new_callable=AsyncMock,
            return_value=[row],
        ):
            response = client.get("/api/saved")

        assert response.json()["courses"][0]["savedAt"] == DONE_AT.isoformat()


class TestChat:
    def test_faq_endpoint(self, client):
        response = client.post("/api/chat/faq", json={"message": "dashboard"})

        assert response.status_code == 200
        assert "/dashboard" in response.json()["reply"]

    def test_faq_endpoint_empty_body(self, client):
        response = client.post("/api/chat/faq", json={})

        assert response.status_code == 200
        assert response.json()["reply"]

    def test_chat_endpoint(self, client):
        with patch(
            "web_api.routes.chat.answer",
            new_callable=AsyncMock,
            return_value={"reply": "Hi!", "source": "llm"},
        ) as mock_answer:
            response = client.post(
                "/api/chat", json={"messages": [{"role": "user", "content": "hi"}]}
            )

        assert response.json() == {"reply": "Hi!", "source": "llm"}
        mock_answer.assert_awaited_once_with([{"role": "user", "content": "hi"}])

    def test_chat_rejects_bad_messages(self, client):
        response = client.post("/api/chat", json={"messages": "hello"})

        assert response.status_code == 422
