"""
Directory Models

Read-only reference data used by the intake form and the decision
workflow: grades, guardian relationship types and blood types.
"""

import enum

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kinderadmin.core.database import Base


class BloodType(str, enum.Enum):
    """Blood types accepted on a student application."""

    A_POSITIVE = "A+"
    A_NEGATIVE = "A-"
    B_POSITIVE = "B+"
    B_NEGATIVE = "B-"
    AB_POSITIVE = "AB+"
    AB_NEGATIVE = "AB-"
    O_POSITIVE = "O+"
    O_NEGATIVE = "O-"


class Grade(Base):
    """A grade (course level) a student can be enrolled in."""

    __tablename__ = "grades"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)


class GuardianType(Base):
    """Relationship between a guardian and a student (father, mother, tutor)."""

    __tablename__ = "guardian_types"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
