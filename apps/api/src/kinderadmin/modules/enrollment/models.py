"""
Enrollment Models

Enrolled students, their guardians and the link table between them.
Students and guardians are created by accepting a student application.
Administrators may later update or delete them.
"""

from datetime import date, datetime

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    String,
    Table,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kinderadmin.core.database import Base

guardians_students = Table(
    "guardians_students",
    Base.metadata,
    Column(
        "student_id",
        String(64),
        ForeignKey("students.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "guardian_id",
        String(64),
        ForeignKey("guardians.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Guardian(Base):
    """
    Guardian (father, mother or legal tutor) of one or more students.

    The relationship to the student is tagged by type_id, which points at
    a GuardianType directory entry.
    """

    __tablename__ = "guardians"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    document_number: Mapped[str] = mapped_column(String(50), nullable=False)
    phone: Mapped[str] = mapped_column(String(30), nullable=False)
    profession: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    company: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    type_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("guardian_types.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    students: Mapped[list["Student"]] = relationship(
        "Student", secondary=guardians_students, back_populates="guardians", lazy="selectin"
    )


class Student(Base):
    """An enrolled student."""

    __tablename__ = "students"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    birth_place: Mapped[str] = mapped_column(String(200), nullable=False)
    department: Mapped[str] = mapped_column(String(200), nullable=False)
    document_number: Mapped[str] = mapped_column(String(50), nullable=False)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    height: Mapped[float] = mapped_column(Float, nullable=False)
    blood_type: Mapped[str] = mapped_column(String(3), nullable=False)
    social_security: Mapped[str] = mapped_column(String(200), nullable=False)
    allergies: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    grade_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("grades.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    guardians: Mapped[list[Guardian]] = relationship(
        Guardian, secondary=guardians_students, back_populates="students", lazy="selectin"
    )
