"""create enrollment tables

Revision ID: a7c1e9d4b2f0
Revises:
Create Date: 2026-10-19 09:00:00.000000

This migration:
1. Creates the grades and guardian_types directories and seeds them
2. Creates the students and guardians tables and their link table
3. Creates the student_applications table for pending applications

Directories are created first so the other tables can reference them.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a7c1e9d4b2f0"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create directory, enrollment and application tables."""
    # Directories
    grades = op.create_table(
        "grades",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    guardian_types = op.create_table(
        "guardian_types",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.PrimaryKeyConstraint("id"),
    )

    op.bulk_insert(
        grades,
        [
            {"id": "grade-prek", "name": "prek", "display_name": "Pre-Kinder"},
            {"id": "grade-kg1", "name": "kg1", "display_name": "Kindergarten 1"},
            {"id": "grade-kg2", "name": "kg2", "display_name": "Kindergarten 2"},
        ],
    )
    op.bulk_insert(
        guardian_types,
        [
            {
                "id": "1",
                "name": "father",
                "display_name": "Padre",
                "description": "Biological or legal male guardian of the student",
            },
            {
                "id": "2",
                "name": "mother",
                "display_name": "Madre",
                "description": "Biological or legal female guardian of the student",
            },
            {
                "id": "3",
                "name": "tutor",
                "display_name": "Tutor Legal",
                "description": "Appointed legal representative or caregiver for the student",
            },
        ],
    )

    # Enrollment
    op.create_table(
        "guardians",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("full_name", sa.String(length=200), nullable=False),
        sa.Column("document_number", sa.String(length=50), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=False),
        sa.Column("profession", sa.String(length=200), nullable=False),
        sa.Column("company", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=500), nullable=False),
        sa.Column("type_id", sa.String(length=64), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["type_id"], ["guardian_types.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_guardians_email", "guardians", ["email"])

    op.create_table(
        "students",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("full_name", sa.String(length=200), nullable=False),
        sa.Column("birth_date", sa.Date(), nullable=False),
        sa.Column("birth_place", sa.String(length=200), nullable=False),
        sa.Column("department", sa.String(length=200), nullable=False),
        sa.Column("document_number", sa.String(length=50), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("height", sa.Float(), nullable=False),
        sa.Column("blood_type", sa.String(length=3), nullable=False),
        sa.Column("social_security", sa.String(length=200), nullable=False),
        sa.Column("allergies", sa.JSON(), nullable=False),
        sa.Column("grade_id", sa.String(length=64), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["grade_id"], ["grades.id"]),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "guardians_students",
        sa.Column("student_id", sa.String(length=64), nullable=False),
        sa.Column("guardian_id", sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["guardian_id"], ["guardians.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("student_id", "guardian_id"),
    )

    # Pending applications
    op.create_table(
        "student_applications",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("student_name", sa.String(length=200), nullable=False),
        sa.Column("birth_date", sa.Date(), nullable=False),
        sa.Column("birth_place", sa.String(length=200), nullable=False),
        sa.Column("department", sa.String(length=200), nullable=False),
        sa.Column("student_document", sa.String(length=50), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("height", sa.Float(), nullable=False),
        sa.Column("blood_type", sa.String(length=3), nullable=False),
        sa.Column("social_security", sa.String(length=200), nullable=False),
        sa.Column("allergies", sa.JSON(), nullable=False),
        sa.Column("grade_id", sa.String(length=64), nullable=False),
        sa.Column("guardian_name", sa.String(length=200), nullable=False),
        sa.Column("guardian_document", sa.String(length=50), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=False),
        sa.Column("profession", sa.String(length=200), nullable=False),
        sa.Column("company", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=500), nullable=False),
        sa.Column("type_id", sa.String(length=64), nullable=False),
        sa.Column(
            "submitted_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["grade_id"], ["grades.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["type_id"], ["guardian_types.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_student_applications_email", "student_applications", ["email"])
    op.create_index(
        "ix_student_applications_submitted_at", "student_applications", ["submitted_at"]
    )


def downgrade() -> None:
    """Drop all enrollment tables."""
    op.drop_index("ix_student_applications_submitted_at", table_name="student_applications")
    op.drop_index("ix_student_applications_email", table_name="student_applications")
    op.drop_table("student_applications")
    op.drop_table("guardians_students")
    op.drop_table("students")
    op.drop_index("ix_guardians_email", table_name="guardians")
    op.drop_table("guardians")
    op.drop_table("guardian_types")
    op.drop_table("grades")
