"""
Student Applications Models

Database model for pending enrollment applications submitted by guardians.

An application holds the student's biographical data and the guardian's
contact data in one flat row. It lives only until an administrator
decides on it: acceptance turns it into a Student and a Guardian,
rejection simply removes it.
"""

from datetime import date, datetime

from sqlalchemy import JSON, Date, DateTime, Float, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from kinderadmin.core.database import Base


class StudentApplication(Base):
    """Pending application awaiting an accept/reject decision."""

    __tablename__ = "student_applications"

    # Primary key
    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    # Student information
    student_name: Mapped[str] = mapped_column(String(200), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    birth_place: Mapped[str] = mapped_column(String(200), nullable=False)
    department: Mapped[str] = mapped_column(String(200), nullable=False)
    student_document: Mapped[str] = mapped_column(String(50), nullable=False)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    height: Mapped[float] = mapped_column(Float, nullable=False)
    blood_type: Mapped[str] = mapped_column(String(3), nullable=False)
    social_security: Mapped[str] = mapped_column(String(200), nullable=False)
    allergies: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    grade_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("grades.id", ondelete="RESTRICT"), nullable=False
    )

    # Guardian information
    guardian_name: Mapped[str] = mapped_column(String(200), nullable=False)
    guardian_document: Mapped[str] = mapped_column(String(50), nullable=False)
    phone: Mapped[str] = mapped_column(String(30), nullable=False)
    profession: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    company: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    type_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("guardian_types.id", ondelete="RESTRICT"), nullable=False
    )

    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("ix_student_applications_email", "email"),
        Index("ix_student_applications_submitted_at", "submitted_at"),
    )
