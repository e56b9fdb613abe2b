"""SQLAlchemy Core table definitions for the database schema."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

from .enums import user_role_enum

# Naming convention for constraints (helps Alembic generate better names)
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}
metadata = MetaData(naming_convention=convention)


# =====================================================
# 1. USERS
# =====================================================
users = Table(
    "users",
    metadata,
    Column("user_id", Integer, primary_key=True, autoincrement=True),
    Column("email", Text, nullable=False),
    Column("name", Text),
    Column("image", Text),
    Column("role", user_role_enum, server_default="student", nullable=False),
    Column("is_active", Boolean, server_default="true", nullable=False),
    Column("created_at", TIMESTAMP(timezone=True), server_default=func.now()),
    Column("updated_at", TIMESTAMP(timezone=True), server_default=func.now()),
    UniqueConstraint("email"),
    Index("idx_users_role", "role"),
)


# =====================================================
# 2. CATEGORIES
# =====================================================
categories = Table(
    "categories",
    metadata,
    Column("category_id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("slug", Text, nullable=False),
    UniqueConstraint("slug"),
)


# =====================================================
# 3. COURSES
# =====================================================
courses = Table(
    "courses",
    metadata,
    Column("course_id", Integer, primary_key=True, autoincrement=True),
    Column("title", Text, nullable=False),
    Column("subtitle", Text),
    Column("description", Text, nullable=False, server_default=""),
    Column("image", Text),
    Column("duration_hours", Integer, server_default="0", nullable=False),
    Column("is_published", Boolean, server_default="false", nullable=False),
    Column(
        "created_by",
        Integer,
        ForeignKey("users.user_id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "category_id",
        Integer,
        ForeignKey("categories.category_id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column("created_at", TIMESTAMP(timezone=True), server_default=func.now()),
    Column("updated_at", TIMESTAMP(timezone=True), server_default=func.now()),
    Index("idx_courses_category_id", "category_id"),
    Index("idx_courses_is_published", "is_published"),
)


# =====================================================
# 4. SECTIONS
# =====================================================
sections = Table(
    "sections",
    metadata,
    Column("section_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "course_id",
        Integer,
        ForeignKey("courses.course_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("title", Text, nullable=False),
    Column("order", Integer, nullable=False),
    UniqueConstraint("course_id", "order", name="uq_sections_course_id_order"),
    Index("idx_sections_course_id", "course_id"),
)


# =====================================================
# 5. LESSONS
# =====================================================
lessons = Table(
    "lessons",
    metadata,
    Column("lesson_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "section_id",
        Integer,
        ForeignKey("sections.section_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("title", Text, nullable=False),
    Column("content", Text, nullable=False, server_default=""),
    Column("video_url", Text),
    Column("duration", Integer, server_default="0", nullable=False),  # minutes
    Column("order", Integer, nullable=False),
    UniqueConstraint("section_id", "order", name="uq_lessons_section_id_order"),
    Index("idx_lessons_section_id", "section_id"),
    CheckConstraint("duration >= 0", name="non_negative_duration"),
)


# =====================================================
# 6. ENROLLMENTS
# =====================================================
enrollments = Table(
    "enrollments",
    metadata,
    Column("enrollment_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "user_id",
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "course_id",
        Integer,
        ForeignKey("courses.course_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "enrolled_at",
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        nullable=False,
    ),
    UniqueConstraint("user_id", "course_id", name="uq_enrollments_user_course"),
    Index("idx_enrollments_course_id", "course_id"),
)


# =====================================================
# 7. LESSON_PROGRESS
# =====================================================
# One row per (user, lesson); rows are created lazily on first toggle.
lesson_progress = Table(
    "lesson_progress",
    metadata,
    Column("progress_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "user_id",
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "lesson_id",
        Integer,
        ForeignKey("lessons.lesson_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("completed", Boolean, server_default="false", nullable=False),
    Column("completed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("updated_at", TIMESTAMP(timezone=True), server_default=func.now()),
    UniqueConstraint("user_id", "lesson_id", name="uq_lesson_progress_user_lesson"),
    Index("idx_lesson_progress_lesson_id", "lesson_id"),
    CheckConstraint(
        "(completed AND completed_at IS NOT NULL) "
        "OR (NOT completed AND completed_at IS NULL)",
        name="completed_at_matches_completed",
    ),
)


# =====================================================
# 8. SAVED_COURSES
# =====================================================
saved_courses = Table(
    "saved_courses",
    metadata,
    Column("saved_course_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "user_id",
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "course_id",
        Integer,
        ForeignKey("courses.course_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "saved_at", TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    ),
    UniqueConstraint("user_id", "course_id", name="uq_saved_courses_user_course"),
)
