"""
Student Applications Admin Router

API endpoints for administrators to review and decide on applications.
All endpoints require a valid token with the admin role.

Endpoints:
- GET /admin/student-applications - List pending applications
- GET /admin/student-applications/{id} - Get one application
- POST /admin/student-applications/{id}/accept - Enroll the student
- POST /admin/student-applications/{id}/reject - Reject the application

A decision is final once it is returned. The guardian notification that
follows is reported in the response's `notification` field: a failed
notification is not an error response.
"""

import logging

from fastapi import APIRouter, Depends

from kinderadmin.core.auth import CurrentUser, get_current_admin_user
from kinderadmin.core.exceptions import ServiceError, to_http_exception
from kinderadmin.core.rate_limit import enforce_user_rate_limit
from kinderadmin.dependencies import EnrollmentStores, get_dispatcher, get_stores
from kinderadmin.modules.enrollment.schemas import StudentResponse
from kinderadmin.modules.notifications.dispatcher import NotificationDispatcher
from kinderadmin.modules.student_applications import service
from kinderadmin.modules.student_applications.schemas import (
    Decision,
    DecisionResponse,
    StudentApplicationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================
# Rate Limiting Configuration
# ============================================

RATE_LIMIT_ACCEPT = (10, 60)  # 10 acceptances per minute
RATE_LIMIT_REJECT = (10, 60)  # 10 rejections per minute


# ============================================
# Read Endpoints
# ============================================


@router.get(
    "",
    response_model=list[StudentApplicationResponse],
    summary="List Pending Applications",
)
async def list_applications(
    stores: EnrollmentStores = Depends(get_stores),
    admin: CurrentUser = Depends(get_current_admin_user),
) -> list[StudentApplicationResponse]:
    applications = await service.list_applications(stores)
    return [StudentApplicationResponse.model_validate(app) for app in applications]


@router.get(
    "/{application_id}",
    response_model=StudentApplicationResponse,
    summary="Get Application",
    responses={404: {"description": "Application not found"}},
)
async def get_application(
    application_id: str,
    stores: EnrollmentStores = Depends(get_stores),
    admin: CurrentUser = Depends(get_current_admin_user),
) -> StudentApplicationResponse:
    try:
        application = await service.get_application(stores, application_id)
    except ServiceError as e:
        raise to_http_exception(e) from e

    return StudentApplicationResponse.model_validate(application)


# ============================================
# Decision Endpoints
# ============================================


@router.post(
    "/{application_id}/accept",
    response_model=DecisionResponse,
    summary="Accept Application",
    description="""
Accept an application and enroll the student.

**Effects:**
- New Guardian created from the guardian section, tagged with `type_id`
- New Student created and linked to that guardian
- Application removed from the pending list
- Guardian notified by email ("Estudiante Aceptado")

**Access:** Admin only
""",
    responses={
        401: {"description": "Unauthorized - invalid or missing token"},
        403: {"description": "Forbidden - not an admin"},
        404: {"description": "Application not found"},
        422: {"description": "Application references unknown grade or guardian type"},
        429: {"description": "Rate limit exceeded"},
    },
)
async def accept_application(
    application_id: str,
    stores: EnrollmentStores = Depends(get_stores),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    admin: CurrentUser = Depends(get_current_admin_user),
) -> DecisionResponse:
    await enforce_user_rate_limit(admin.id, "accept", *RATE_LIMIT_ACCEPT)

    try:
        student = await service.accept_application(stores, application_id)
    except ServiceError as e:
        raise to_http_exception(e) from e

    logger.info(f"Admin {admin.id} accepted application {application_id}")

    guardian = student.guardians[0]
    outcome = await service.notify_decision(
        dispatcher, Decision.ACCEPTED, guardian.email, student.full_name
    )

    return DecisionResponse(
        application_id=application_id,
        decision=Decision.ACCEPTED,
        student_name=student.full_name,
        email=guardian.email,
        student=StudentResponse.model_validate(student),
        notification=outcome,
        message=f"{student.full_name} ha sido aceptado.",
    )


@router.post(
    "/{application_id}/reject",
    response_model=DecisionResponse,
    summary="Reject Application",
    description="""
Reject an application.

**Effects:**
- Application removed from the pending list
- No Student or Guardian is created
- Guardian notified by email ("Estudiante rechazado")

**Access:** Admin only
""",
    responses={
        401: {"description": "Unauthorized - invalid or missing token"},
        403: {"description": "Forbidden - not an admin"},
        404: {"description": "Application not found"},
        429: {"description": "Rate limit exceeded"},
    },
)
async def reject_application(
    application_id: str,
    stores: EnrollmentStores = Depends(get_stores),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    admin: CurrentUser = Depends(get_current_admin_user),
) -> DecisionResponse:
    await enforce_user_rate_limit(admin.id, "reject", *RATE_LIMIT_REJECT)

    try:
        application = await service.reject_application(stores, application_id)
    except ServiceError as e:
        raise to_http_exception(e) from e

    logger.info(f"Admin {admin.id} rejected application {application_id}")

    outcome = await service.notify_decision(
        dispatcher, Decision.REJECTED, application.email, application.student_name
    )

    return DecisionResponse(
        application_id=application_id,
        decision=Decision.REJECTED,
        student_name=application.student_name,
        email=application.email,
        notification=outcome,
        message=f"{application.student_name} ha sido rechazado.",
    )
