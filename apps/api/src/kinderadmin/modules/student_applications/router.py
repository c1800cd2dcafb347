"""
Student Applications Router

Public intake endpoint. Guardians submit the enrollment form without an
account, so no authentication is required.

Endpoints:
- POST /student-applications - Submit a new application
"""

import logging

from fastapi import APIRouter, Depends, status

from kinderadmin.core.exceptions import ServiceError, to_http_exception
from kinderadmin.dependencies import EnrollmentStores, get_stores
from kinderadmin.modules.student_applications import service
from kinderadmin.modules.student_applications.schemas import (
    StudentApplicationCreate,
    StudentApplicationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=StudentApplicationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Student Application",
    description="""
Submit a new enrollment application.

The application stays pending until an administrator accepts or rejects
it. The guardian is notified by email of the decision.

**Validation:**
- Student must be between 1 and 6 years old
- Documents are numeric, at least 6 digits
- Weight and height must be positive
- `grade_id` and `type_id` must exist in the directories
""",
    responses={
        201: {"description": "Application stored", "model": StudentApplicationResponse},
        422: {
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "failed": True,
                        "error": "VALIDATION_ERROR",
                        "message": "Application references unknown directory entries",
                        "field_errors": {"grade_id": ["Unknown grade: grade-x"]},
                    }
                }
            },
        },
    },
)
async def submit_application(
    data: StudentApplicationCreate,
    stores: EnrollmentStores = Depends(get_stores),
) -> StudentApplicationResponse:
    try:
        application = await service.submit_application(stores, data)
    except ServiceError as e:
        raise to_http_exception(e) from e

    return StudentApplicationResponse.model_validate(application)
