"""
Enrollment Schemas

Pydantic models for students and guardians, and the field rules shared
with the intake form:
- A student must be between 1 and 6 years old
- Identity documents are numeric and at least 6 digits long
- Phone numbers are numeric
- Allergies may be sent as a list or as a comma-separated string
"""

from datetime import date, datetime
from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    field_validator,
)

from kinderadmin.modules.directories.models import BloodType

MIN_STUDENT_AGE = 1
MAX_STUDENT_AGE = 6
MIN_DOCUMENT_LENGTH = 6
MAX_DOCUMENT_LENGTH = 50
MAX_PHONE_LENGTH = 30

RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
OptionalStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=200)]
AddressStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)]


# ============================================
# Field rules
# ============================================


def age_on(birth_date: date, today: date) -> int:
    """Completed years between birth_date and today."""
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def check_birth_date(value: date) -> date:
    today = date.today()
    if value > today:
        raise ValueError("birth_date cannot be in the future")
    age = age_on(value, today)
    if not MIN_STUDENT_AGE <= age <= MAX_STUDENT_AGE:
        raise ValueError(
            f"student must be between {MIN_STUDENT_AGE} and {MAX_STUDENT_AGE} years old"
        )
    return value


def check_document(value: str) -> str:
    value = value.strip()
    if not (value.isascii() and value.isdigit()):
        raise ValueError("document must contain only digits")
    if len(value) < MIN_DOCUMENT_LENGTH:
        raise ValueError(f"document must have at least {MIN_DOCUMENT_LENGTH} digits")
    if len(value) > MAX_DOCUMENT_LENGTH:
        raise ValueError(f"document must have at most {MAX_DOCUMENT_LENGTH} digits")
    return value


def check_phone(value: str) -> str:
    value = value.strip()
    if not (value.isascii() and value.isdigit()):
        raise ValueError("phone must contain only digits")
    if len(value) > MAX_PHONE_LENGTH:
        raise ValueError(f"phone must have at most {MAX_PHONE_LENGTH} digits")
    return value


def split_allergies(value):
    # Accept "nuts, dairy" as well as ["nuts", "dairy"]
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if isinstance(value, list):
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return value


# ============================================
# Responses
# ============================================


class GuardianResponse(BaseModel):
    """Guardian as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    document_number: str
    phone: str
    profession: str
    company: str
    email: str
    address: str
    type_id: str
    created_at: datetime | None = None


class GuardianWithStudentsResponse(GuardianResponse):
    """Guardian with the names of the students linked to them."""

    student_names: list[str] = Field(default_factory=list)


class StudentResponse(BaseModel):
    """Enrolled student with their guardians."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    birth_date: date
    birth_place: str
    department: str
    document_number: str
    weight: float
    height: float
    blood_type: str
    social_security: str
    allergies: list[str] = Field(default_factory=list)
    grade_id: str | None = None
    guardians: list[GuardianResponse] = Field(default_factory=list)


# ============================================
# Updates
# ============================================


class StudentUpdate(BaseModel):
    """
    Request body for PATCH /enrollment/students/{id}.

    Omitted fields keep their current value. guardian_ids, when given,
    replaces the student's guardian links.
    """

    full_name: RequiredStr | None = None
    birth_date: date | None = None
    birth_place: RequiredStr | None = None
    department: RequiredStr | None = None
    document_number: str | None = None
    weight: float | None = Field(default=None, gt=0, description="Weight in kilograms")
    height: float | None = Field(default=None, gt=0, description="Height in centimeters")
    blood_type: BloodType | None = None
    social_security: RequiredStr | None = None
    allergies: list[str] | None = None
    grade_id: RequiredStr | None = None
    guardian_ids: list[str] | None = Field(default=None, min_length=1)

    @field_validator("birth_date")
    @classmethod
    def validate_birth_date(cls, value: date | None) -> date | None:
        return None if value is None else check_birth_date(value)

    @field_validator("document_number")
    @classmethod
    def validate_document(cls, value: str | None) -> str | None:
        return None if value is None else check_document(value)

    @field_validator("allergies", mode="before")
    @classmethod
    def validate_allergies(cls, value):
        return None if value is None else split_allergies(value)

    @field_validator("guardian_ids")
    @classmethod
    def validate_guardian_ids(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        ids = list(dict.fromkeys(item.strip() for item in value if item.strip()))
        if not ids:
            raise ValueError("at least one guardian is required")
        return ids


class GuardianUpdate(BaseModel):
    """Request body for PATCH /enrollment/guardians/{id}. Omitted fields are kept."""

    full_name: RequiredStr | None = None
    document_number: str | None = None
    phone: str | None = None
    profession: OptionalStr | None = None
    company: OptionalStr | None = None
    email: EmailStr | None = None
    address: AddressStr | None = None
    type_id: RequiredStr | None = None

    @field_validator("document_number")
    @classmethod
    def validate_document(cls, value: str | None) -> str | None:
        return None if value is None else check_document(value)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str | None) -> str | None:
        return None if value is None else check_phone(value)
