"""
Student Applications Schemas

Pydantic schemas for request validation and response serialization.

Intake rules mirror the paper enrollment form and are shared with the
student and guardian update forms (see enrollment.schemas). Weight and
height must be positive numbers.
"""

import enum
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from kinderadmin.modules.directories.models import BloodType
from kinderadmin.modules.enrollment.schemas import (
    AddressStr,
    OptionalStr,
    RequiredStr,
    StudentResponse,
    check_birth_date,
    check_document,
    check_phone,
    split_allergies,
)
from kinderadmin.modules.notifications.schemas import NotificationOutcome


class Decision(str, enum.Enum):
    """Outcome of an administrator's review."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"


class StudentApplicationCreate(BaseModel):
    """Request body for POST /student-applications."""

    # Student information
    student_name: RequiredStr
    birth_date: date
    birth_place: RequiredStr
    department: RequiredStr
    student_document: str
    weight: float = Field(..., gt=0, description="Weight in kilograms")
    height: float = Field(..., gt=0, description="Height in centimeters")
    blood_type: BloodType
    social_security: RequiredStr
    allergies: list[str] = Field(default_factory=list)
    grade_id: RequiredStr

    # Guardian information
    guardian_name: RequiredStr
    guardian_document: str
    phone: str
    profession: OptionalStr = ""
    company: OptionalStr = ""
    email: EmailStr
    address: AddressStr
    type_id: RequiredStr

    @field_validator("birth_date")
    @classmethod
    def validate_birth_date(cls, value: date) -> date:
        return check_birth_date(value)

    @field_validator("student_document", "guardian_document")
    @classmethod
    def validate_document(cls, value: str) -> str:
        return check_document(value)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str) -> str:
        return check_phone(value)

    @field_validator("allergies", mode="before")
    @classmethod
    def validate_allergies(cls, value):
        return split_allergies(value)


class StudentApplicationResponse(BaseModel):
    """A stored application, pending a decision."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    student_name: str
    birth_date: date
    birth_place: str
    department: str
    student_document: str
    weight: float
    height: float
    blood_type: str
    social_security: str
    allergies: list[str] = Field(default_factory=list)
    grade_id: str
    guardian_name: str
    guardian_document: str
    phone: str
    profession: str
    company: str
    email: str
    address: str
    type_id: str
    submitted_at: datetime | None = None


class DecisionResponse(BaseModel):
    """
    Result of accepting or rejecting an application.

    The decision and the follow-up notification are reported separately:
    `decision` is final once returned, `notification.sent` tells whether
    the guardian was told about it.
    """

    application_id: str
    decision: Decision
    student_name: str
    email: str
    student: StudentResponse | None = None
    notification: NotificationOutcome
    message: str
