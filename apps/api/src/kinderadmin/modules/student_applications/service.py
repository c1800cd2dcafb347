"""
Student Applications Service Layer

Business logic for enrollment applications: intake, review and the
accept/reject decision.

This module implements:
1. Intake:
   - Check the requested grade and guardian type exist in the directories
   - Store the application until an administrator decides on it

2. Acceptance:
   - Re-check the directory references before anything is written
   - Create the Guardian, then the Student linked to it
   - Remove the application from the pending store

3. Rejection:
   - Remove the application and hand it back to the caller

4. Decision notification:
   - Tell the guardian about the decision through the dispatcher
   - Report delivery problems without undoing the decision

Each store write commits on its own. There is no transaction spanning
the steps of an acceptance and no guard against two administrators
deciding on the same application at once: the second one gets
ApplicationNotFoundError.
"""

import logging
from datetime import UTC, datetime

from kinderadmin.core.exceptions import NotFoundError, ServiceValidationError
from kinderadmin.dependencies import EnrollmentStores
from kinderadmin.modules.enrollment.models import Guardian, Student
from kinderadmin.modules.notifications.dispatcher import (
    DeliveryFailureError,
    NotificationDispatcher,
    NotificationValidationError,
)
from kinderadmin.modules.notifications.schemas import NotificationOutcome
from kinderadmin.modules.student_applications.models import StudentApplication
from kinderadmin.modules.student_applications.schemas import (
    Decision,
    StudentApplicationCreate,
)

logger = logging.getLogger(__name__)

ACCEPTED_SUBJECT = "Estudiante Aceptado"
REJECTED_SUBJECT = "Estudiante rechazado"
NOTIFICATION_FAILED_MESSAGE = "No pudimos enviar la notificación al acudiente!"


class ApplicationNotFoundError(NotFoundError):
    """Raised when an application is not in the pending store."""

    def __init__(self, application_id: str | None = None):
        super().__init__("Application", application_id)
        self.error_code = "APPLICATION_NOT_FOUND"


class ApplicationValidationError(ServiceValidationError):
    """Raised when an application references unknown directory entries."""


# ============================================
# Internal helpers
# ============================================


async def _check_references(stores: EnrollmentStores, grade_id: str, type_id: str) -> None:
    """
    Verify grade_id and type_id against the directories.

    Raises:
        ApplicationValidationError: If either reference is unknown
    """
    field_errors: dict[str, list[str]] = {}

    if await stores.grades.get(grade_id) is None:
        field_errors["grade_id"] = [f"Unknown grade: {grade_id}"]
    if await stores.guardian_types.get(type_id) is None:
        field_errors["type_id"] = [f"Unknown guardian type: {type_id}"]

    if field_errors:
        logger.warning(f"Rejected unknown directory references: {sorted(field_errors)}")
        raise ApplicationValidationError(
            "Application references unknown directory entries",
            field_errors=field_errors,
        )


async def _get_pending(stores: EnrollmentStores, application_id: str) -> StudentApplication:
    application = await stores.applications.get(application_id)
    if application is None:
        logger.warning(f"Application not found: {application_id}")
        raise ApplicationNotFoundError(application_id)
    return application


def _guardian_from_application(application: StudentApplication) -> Guardian:
    return Guardian(
        full_name=application.guardian_name,
        document_number=application.guardian_document,
        phone=application.phone,
        profession=application.profession or "",
        company=application.company or "",
        email=application.email,
        address=application.address,
        type_id=application.type_id,
    )


def _student_from_application(application: StudentApplication, guardian: Guardian) -> Student:
    return Student(
        full_name=application.student_name,
        birth_date=application.birth_date,
        birth_place=application.birth_place,
        department=application.department,
        document_number=application.student_document,
        weight=application.weight,
        height=application.height,
        blood_type=application.blood_type,
        social_security=application.social_security,
        allergies=list(application.allergies or []),
        grade_id=application.grade_id,
        guardians=[guardian],
    )


# ============================================
# Intake
# ============================================


async def submit_application(
    stores: EnrollmentStores,
    data: StudentApplicationCreate,
) -> StudentApplication:
    """
    Store a new application.

    Args:
        stores: Enrollment stores
        data: Validated intake form

    Returns:
        The stored application

    Raises:
        ApplicationValidationError: If grade_id or type_id is unknown
    """
    await _check_references(stores, data.grade_id, data.type_id)

    application = StudentApplication(
        student_name=data.student_name,
        birth_date=data.birth_date,
        birth_place=data.birth_place,
        department=data.department,
        student_document=data.student_document,
        weight=data.weight,
        height=data.height,
        blood_type=data.blood_type.value,
        social_security=data.social_security,
        allergies=list(data.allergies),
        grade_id=data.grade_id,
        guardian_name=data.guardian_name,
        guardian_document=data.guardian_document,
        phone=data.phone,
        profession=data.profession,
        company=data.company,
        email=str(data.email),
        address=data.address,
        type_id=data.type_id,
        submitted_at=datetime.now(UTC),
    )
    application = await stores.applications.add(application)

    logger.info(f"Application submitted: {application.id} (grade {application.grade_id})")
    return application


async def list_applications(stores: EnrollmentStores) -> list[StudentApplication]:
    """List pending applications, oldest first."""
    return await stores.applications.list()


async def get_application(stores: EnrollmentStores, application_id: str) -> StudentApplication:
    """
    Get one pending application.

    Raises:
        ApplicationNotFoundError: If the application does not exist
    """
    return await _get_pending(stores, application_id)


# ============================================
# Decisions
# ============================================


async def accept_application(stores: EnrollmentStores, application_id: str) -> Student:
    """
    Accept an application and enroll the student.

    Creates one Guardian (tagged with the application's type_id) and one
    Student linked to it, then removes the application. References are
    checked first, so an invalid application leaves every store untouched.
    Later steps are not rolled back: if removing the application fails,
    the new Student and Guardian remain.

    Args:
        stores: Enrollment stores
        application_id: ID of the pending application

    Returns:
        The newly created Student

    Raises:
        ApplicationNotFoundError: If the application does not exist
        ApplicationValidationError: If grade_id or type_id is unknown
    """
    application = await _get_pending(stores, application_id)
    await _check_references(stores, application.grade_id, application.type_id)

    guardian = await stores.guardians.add(_guardian_from_application(application))
    student = await stores.students.add(_student_from_application(application, guardian))
    await stores.applications.remove(application_id)

    logger.info(
        f"Application {application_id} accepted: student {student.id}, guardian {guardian.id}"
    )
    return student


async def reject_application(
    stores: EnrollmentStores, application_id: str
) -> StudentApplication:
    """
    Reject an application.

    Removes it from the pending store without creating any Student or
    Guardian.

    Returns:
        The removed application, so the caller can notify the guardian

    Raises:
        ApplicationNotFoundError: If the application does not exist
    """
    application = await _get_pending(stores, application_id)
    await stores.applications.remove(application_id)

    logger.info(f"Application {application_id} rejected")
    return application


def decision_message(decision: Decision, student_name: str) -> tuple[str, str]:
    """Subject and body of the notification for a decision."""
    if decision == Decision.ACCEPTED:
        return (
            ACCEPTED_SUBJECT,
            f"Le informamos que el estudiante: {student_name} ha sido aceptado;",
        )
    return (
        REJECTED_SUBJECT,
        f"Le informamos que el estudiante: {student_name} ha sido rechazado;",
    )


async def notify_decision(
    dispatcher: NotificationDispatcher,
    decision: Decision,
    email: str,
    student_name: str,
) -> NotificationOutcome:
    """
    Tell the guardian about a decision.

    Never raises for delivery problems: the decision is already final,
    so a failure is returned as an outcome with sent=False.
    """
    subject, body = decision_message(decision, student_name)

    try:
        report = await dispatcher.send_notification([email], subject, body)
    except (DeliveryFailureError, NotificationValidationError) as e:
        logger.error(f"Could not notify guardian about {decision.value} decision: {e.message}")
        return NotificationOutcome(sent=False, message=NOTIFICATION_FAILED_MESSAGE)

    return NotificationOutcome(sent=True, recipients=report.recipients)
