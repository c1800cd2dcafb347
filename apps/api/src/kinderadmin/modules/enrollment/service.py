"""
Enrollment Service Layer

Maintenance of enrolled students and their guardians.

This module implements:
1. Reads:
   - Students ordered by name, with their guardians
   - Guardians with the names of their students
2. Updates:
   - Partial updates validated like the intake form
   - Grade, guardian type and guardian references checked before writing
3. Deletes:
   - Deleting a student also removes its guardian links
   - A guardian cannot be deleted while students are linked to them
"""

import logging

from kinderadmin.core.exceptions import NotFoundError, ServiceError, ServiceValidationError
from kinderadmin.core.repository import Repository
from kinderadmin.dependencies import EnrollmentStores
from kinderadmin.modules.enrollment.models import Guardian, Student
from kinderadmin.modules.enrollment.schemas import (
    GuardianUpdate,
    GuardianWithStudentsResponse,
    StudentUpdate,
)

logger = logging.getLogger(__name__)


class StudentNotFoundError(NotFoundError):
    def __init__(self, student_id: str | None = None):
        super().__init__("Student", student_id)


class GuardianNotFoundError(NotFoundError):
    def __init__(self, guardian_id: str | None = None):
        super().__init__("Guardian", guardian_id)


class EnrollmentValidationError(ServiceValidationError):
    """Raised when an update references unknown grades, guardian types or guardians."""


class GuardianHasStudentsError(ServiceError):
    """Raised when deleting a guardian that still has linked students."""

    def __init__(self):
        super().__init__(
            message="No es posible eliminar el tutor ya que hay niños asociados a él.",
            error_code="GUARDIAN_HAS_STUDENTS",
            status_code=400,
        )


# ============================================
# Students
# ============================================


async def list_students(students: Repository[Student]) -> list[Student]:
    """List enrolled students ordered by name."""
    records = await students.list()
    return sorted(records, key=lambda student: student.full_name.lower())


async def get_student(students: Repository[Student], student_id: str) -> Student:
    student = await students.get(student_id)
    if student is None:
        logger.warning(f"Student not found: {student_id}")
        raise StudentNotFoundError(student_id)
    return student


async def update_student(
    stores: EnrollmentStores,
    student_id: str,
    data: StudentUpdate,
) -> Student:
    """
    Apply a partial update to a student.

    Every reference in the update is checked before anything is written.

    Args:
        stores: Enrollment stores
        student_id: ID of the student
        data: Validated fields to change

    Returns:
        The updated student

    Raises:
        StudentNotFoundError: If the student does not exist
        EnrollmentValidationError: If grade_id or a guardian id is unknown
    """
    student = await get_student(stores.students, student_id)
    changes = data.model_dump(exclude_none=True)
    guardian_ids = changes.pop("guardian_ids", None)

    field_errors: dict[str, list[str]] = {}
    if "grade_id" in changes and await stores.grades.get(changes["grade_id"]) is None:
        field_errors["grade_id"] = [f"Unknown grade: {changes['grade_id']}"]

    guardians: list[Guardian] = []
    if guardian_ids is not None:
        for guardian_id in guardian_ids:
            guardian = await stores.guardians.get(guardian_id)
            if guardian is None:
                field_errors.setdefault("guardian_ids", []).append(
                    f"Unknown guardian: {guardian_id}"
                )
            else:
                guardians.append(guardian)

    if field_errors:
        logger.warning(f"Rejected student update {student_id}: {sorted(field_errors)}")
        raise EnrollmentValidationError("Invalid student update", field_errors=field_errors)

    if "blood_type" in changes:
        changes["blood_type"] = changes["blood_type"].value
    for name, value in changes.items():
        setattr(student, name, value)
    if guardian_ids is not None:
        student.guardians = guardians

    student = await stores.students.update(student)
    logger.info(f"Student {student_id} updated: {sorted(changes)}")
    return student


async def delete_student(stores: EnrollmentStores, student_id: str) -> Student:
    """
    Delete a student and its guardian links.

    The guardians themselves are kept.

    Raises:
        StudentNotFoundError: If the student does not exist
    """
    student = await get_student(stores.students, student_id)
    student.guardians = []
    await stores.students.remove(student_id)

    logger.info(f"Student {student_id} deleted")
    return student


# ============================================
# Guardians
# ============================================


def with_student_names(guardian: Guardian) -> GuardianWithStudentsResponse:
    """
    Attach the names of the guardian's students.

    Names are de-duplicated and keep link order.
    """
    names: list[str] = []
    for student in guardian.students or []:
        if student.full_name and student.full_name not in names:
            names.append(student.full_name)

    response = GuardianWithStudentsResponse.model_validate(guardian)
    response.student_names = names
    return response


async def list_guardians(guardians: Repository[Guardian]) -> list[GuardianWithStudentsResponse]:
    records = await guardians.list()
    ordered = sorted(records, key=lambda guardian: guardian.full_name.lower())
    return [with_student_names(guardian) for guardian in ordered]


async def _get_guardian(guardians: Repository[Guardian], guardian_id: str) -> Guardian:
    guardian = await guardians.get(guardian_id)
    if guardian is None:
        logger.warning(f"Guardian not found: {guardian_id}")
        raise GuardianNotFoundError(guardian_id)
    return guardian


async def get_guardian(
    guardians: Repository[Guardian], guardian_id: str
) -> GuardianWithStudentsResponse:
    return with_student_names(await _get_guardian(guardians, guardian_id))


async def update_guardian(
    stores: EnrollmentStores,
    guardian_id: str,
    data: GuardianUpdate,
) -> GuardianWithStudentsResponse:
    """
    Apply a partial update to a guardian.

    Raises:
        GuardianNotFoundError: If the guardian does not exist
        EnrollmentValidationError: If type_id is unknown
    """
    guardian = await _get_guardian(stores.guardians, guardian_id)
    changes = data.model_dump(exclude_none=True)

    if "type_id" in changes and await stores.guardian_types.get(changes["type_id"]) is None:
        logger.warning(f"Rejected guardian update {guardian_id}: unknown type")
        raise EnrollmentValidationError(
            "Invalid guardian update",
            field_errors={"type_id": [f"Unknown guardian type: {changes['type_id']}"]},
        )

    if "email" in changes:
        changes["email"] = str(changes["email"])
    for name, value in changes.items():
        setattr(guardian, name, value)

    guardian = await stores.guardians.update(guardian)
    logger.info(f"Guardian {guardian_id} updated: {sorted(changes)}")
    return with_student_names(guardian)


async def delete_guardian(stores: EnrollmentStores, guardian_id: str) -> Guardian:
    """
    Delete a guardian with no linked students.

    Raises:
        GuardianNotFoundError: If the guardian does not exist
        GuardianHasStudentsError: If any student is still linked
    """
    guardian = await _get_guardian(stores.guardians, guardian_id)
    if guardian.students:
        logger.warning(
            f"Refused to delete guardian {guardian_id}: {len(guardian.students)} linked student(s)"
        )
        raise GuardianHasStudentsError()

    await stores.guardians.remove(guardian_id)

    logger.info(f"Guardian {guardian_id} deleted")
    return guardian
