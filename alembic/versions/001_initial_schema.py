"""Initial LearnHub schema.

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates users, categories, courses, sections, lessons, enrollments,
lesson_progress and saved_courses.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = postgresql.ENUM("student", "admin", name="user_role", create_type=False)


def _timestamp(name: str, nullable: bool = True) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        server_default=sa.func.now(),
        nullable=nullable,
    )


def upgrade() -> None:
    user_role.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("role", user_role, server_default="student", nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default="true", nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("user_id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_index("idx_users_role", "users", ["role"])

    op.create_table(
        "categories",
        sa.Column("category_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("slug", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("category_id", name="pk_categories"),
        sa.UniqueConstraint("slug", name="uq_categories_slug"),
    )

    op.create_table(
        "courses",
        sa.Column("course_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("subtitle", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), server_default="", nullable=False),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("duration_hours", sa.Integer(), server_default="0", nullable=False),
        sa.Column("is_published", sa.Boolean(), server_default="false", nullable=False),
        sa.Column(
            "created_by",
            sa.Integer(),
            sa.ForeignKey(
                "users.user_id",
                ondelete="SET NULL",
                name="fk_courses_created_by_users",
            ),
            nullable=True,
        ),
        sa.Column(
            "category_id",
            sa.Integer(),
            sa.ForeignKey(
                "categories.category_id",
                ondelete="RESTRICT",
                name="fk_courses_category_id_categories",
            ),
            nullable=False,
        ),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("course_id", name="pk_courses"),
    )
    op.create_index("idx_courses_category_id", "courses", ["category_id"])
    op.create_index("idx_courses_is_published", "courses", ["is_published"])

    op.create_table(
        "sections",
        sa.Column("section_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "course_id",
            sa.Integer(),
            sa.ForeignKey(
                "courses.course_id",
                ondelete="CASCADE",
                name="fk_sections_course_id_courses",
            ),
            nullable=False,
        ),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("section_id", name="pk_sections"),
        sa.UniqueConstraint("course_id", "order", name="uq_sections_course_id_order"),
    )
    op.create_index("idx_sections_course_id", "sections", ["course_id"])

    op.create_table(
        "lessons",
        sa.Column("lesson_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "section_id",
            sa.Integer(),
            sa.ForeignKey(
                "sections.section_id",
                ondelete="CASCADE",
                name="fk_lessons_section_id_sections",
            ),
            nullable=False,
        ),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), server_default="", nullable=False),
        sa.Column("video_url", sa.Text(), nullable=True),
        sa.Column("duration", sa.Integer(), server_default="0", nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("lesson_id", name="pk_lessons"),
        sa.UniqueConstraint("section_id", "order", name="uq_lessons_section_id_order"),
        sa.CheckConstraint(
            "duration >= 0", name="ck_lessons_non_negative_duration"
        ),
    )
    op.create_index("idx_lessons_section_id", "lessons", ["section_id"])

    op.create_table(
        "enrollments",
        sa.Column("enrollment_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey(
                "users.user_id",
                ondelete="CASCADE",
                name="fk_enrollments_user_id_users",
            ),
            nullable=False,
        ),
        sa.Column(
            "course_id",
            sa.Integer(),
            sa.ForeignKey(
                "courses.course_id",
                ondelete="CASCADE",
                name="fk_enrollments_course_id_courses",
            ),
            nullable=False,
        ),
        _timestamp("enrolled_at", nullable=False),
        sa.PrimaryKeyConstraint("enrollment_id", name="pk_enrollments"),
        sa.UniqueConstraint("user_id", "course_id", name="uq_enrollments_user_course"),
    )
    op.create_index("idx_enrollments_course_id", "enrollments", ["course_id"])

    op.create_table(
        "lesson_progress",
        sa.Column("progress_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey(
                "users.user_id",
                ondelete="CASCADE",
                name="fk_lesson_progress_user_id_users",
            ),
            nullable=False,
        ),
        sa.Column(
            "lesson_id",
            sa.Integer(),
            sa.ForeignKey(
                "lessons.lesson_id",
                ondelete="CASCADE",
                name="fk_lesson_progress_lesson_id_lessons",
            ),
            nullable=False,
        ),
        sa.Column("completed", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("completed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("progress_id", name="pk_lesson_progress"),
        sa.UniqueConstraint(
            "user_id", "lesson_id", name="uq_lesson_progress_user_lesson"
        ),
        sa.CheckConstraint(
            "(completed AND completed_at IS NOT NULL) "
            "OR (NOT completed AND completed_at IS NULL)",
            name="ck_lesson_progress_completed_at_matches_completed",
        ),
    )
    op.create_index(
        "idx_lesson_progress_lesson_id", "lesson_progress", ["lesson_id"]
    )

    op.create_table(
        "saved_courses",
        sa.Column("saved_course_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey(
                "users.user_id",
                ondelete="CASCADE",
                name="fk_saved_courses_user_id_users",
            ),
            nullable=False,
        ),
        sa.Column(
            "course_id",
            sa.Integer(),
            sa.ForeignKey(
                "courses.course_id",
                ondelete="CASCADE",
                name="fk_saved_courses_course_id_courses",
            ),
            nullable=False,
        ),
        _timestamp("saved_at", nullable=False),
        sa.PrimaryKeyConstraint("saved_course_id", name="pk_saved_courses"),
        sa.UniqueConstraint(
            "user_id", "course_id", name="uq_saved_courses_user_course"
        ),
    )


def downgrade() -> None:
    op.drop_table("saved_courses")
    op.drop_index("idx_lesson_progress_lesson_id", table_name="lesson_progress")
    op.drop_table("lesson_progress")
    op.drop_index("idx_enrollments_course_id", table_name="enrollments")
    op.drop_table("enrollments")
    op.drop_index("idx_lessons_section_id", table_name="lessons")
    op.drop_table("lessons")
    op.drop_index("idx_sections_course_id", table_name="sections")
    op.drop_table("sections")
    op.drop_index("idx_courses_is_published", table_name="courses")
    op.drop_index("idx_courses_category_id", table_name="courses")
    op.drop_table("courses")
    op.drop_table("categories")
    op.drop_index("idx_users_role", table_name="users")
    op.drop_table("users")
    user_role.drop(op.get_bind(), checkfirst=True)
