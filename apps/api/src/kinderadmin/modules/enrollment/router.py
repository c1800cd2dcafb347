"""
Enrollment Router

Admin endpoints over enrolled students and their guardians.

Endpoints:
- GET /enrollment/students - Students with their guardians
- GET /enrollment/students/{id} - One student
- PATCH /enrollment/students/{id} - Update a student
- DELETE /enrollment/students/{id} - Delete a student
- GET /enrollment/guardians - Guardians with their students' names
- GET /enrollment/guardians/{id} - One guardian
- PATCH /enrollment/guardians/{id} - Update a guardian
- DELETE /enrollment/guardians/{id} - Delete a guardian with no students
"""

import logging

from fastapi import APIRouter, Depends

from kinderadmin.core.auth import CurrentUser, get_current_admin_user
from kinderadmin.core.exceptions import ServiceError, to_http_exception
from kinderadmin.dependencies import EnrollmentStores, get_stores
from kinderadmin.modules.enrollment import service
from kinderadmin.modules.enrollment.schemas import (
    GuardianResponse,
    GuardianUpdate,
    GuardianWithStudentsResponse,
    StudentResponse,
    StudentUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/students", response_model=list[StudentResponse], summary="List Students")
async def list_students(
    stores: EnrollmentStores = Depends(get_stores),
    admin: CurrentUser = Depends(get_current_admin_user),
) -> list[StudentResponse]:
    students = await service.list_students(stores.students)
    return [StudentResponse.model_validate(student) for student in students]


@router.get(
    "/students/{student_id}",
    response_model=StudentResponse,
    summary="Get Student",
    responses={404: {"description": "Student not found"}},
)
async def get_student(
    student_id: str,
    stores: EnrollmentStores = Depends(get_stores),
    admin: CurrentUser = Depends(get_current_admin_user),
) -> StudentResponse:
    try:
        student = await service.get_student(stores.students, student_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    return StudentResponse.model_validate(student)


@router.patch(
    "/students/{student_id}",
    response_model=StudentResponse,
    summary="Update Student",
    responses={
        404: {"description": "Student not found"},
        422: {"description": "Invalid fields, unknown grade or unknown guardian"},
    },
)
async def update_student(
    student_id: str,
    data: StudentUpdate,
    stores: EnrollmentStores = Depends(get_stores),
    admin: CurrentUser = Depends(get_current_admin_user),
) -> StudentResponse:
    try:
        student = await service.update_student(stores, student_id, data)
    except ServiceError as e:
        raise to_http_exception(e) from e

    logger.info(f"Admin {admin.id} updated student {student_id}")
    return StudentResponse.model_validate(student)


@router.delete(
    "/students/{student_id}",
    response_model=StudentResponse,
    summary="Delete Student",
    responses={404: {"description": "Student not found"}},
)
async def delete_student(
    student_id: str,
    stores: EnrollmentStores = Depends(get_stores),
    admin: CurrentUser = Depends(get_current_admin_user),
) -> StudentResponse:
    try:
        student = await service.delete_student(stores, student_id)
    except ServiceError as e:
        raise to_http_exception(e) from e

    logger.info(f"Admin {admin.id} deleted student {student_id}")
    return StudentResponse.model_validate(student)


@router.get(
    "/guardians",
    response_model=list[GuardianWithStudentsResponse],
    summary="List Guardians",
)
async def list_guardians(
    stores: EnrollmentStores = Depends(get_stores),
    admin: CurrentUser = Depends(get_current_admin_user),
) -> list[GuardianWithStudentsResponse]:
    return await service.list_guardians(stores.guardians)


@router.get(
    "/guardians/{guardian_id}",
    response_model=GuardianWithStudentsResponse,
    summary="Get Guardian",
    responses={404: {"description": "Guardian not found"}},
)
async def get_guardian(
    guardian_id: str,
    stores: EnrollmentStores = Depends(get_stores),
    admin: CurrentUser = Depends(get_current_admin_user),
) -> GuardianWithStudentsResponse:
    try:
        return await service.get_guardian(stores.guardians, guardian_id)
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.patch(
    "/guardians/{guardian_id}",
    response_model=GuardianWithStudentsResponse,
    summary="Update Guardian",
    responses={
        404: {"description": "Guardian not found"},
        422: {"description": "Invalid fields or unknown guardian type"},
    },
)
async def update_guardian(
    guardian_id: str,
    data: GuardianUpdate,
    stores: EnrollmentStores = Depends(get_stores),
    admin: CurrentUser = Depends(get_current_admin_user),
) -> GuardianWithStudentsResponse:
    try:
        guardian = await service.update_guardian(stores, guardian_id, data)
    except ServiceError as e:
        raise to_http_exception(e) from e

    logger.info(f"Admin {admin.id} updated guardian {guardian_id}")
    return guardian


@router.delete(
    "/guardians/{guardian_id}",
    response_model=GuardianResponse,
    summary="Delete Guardian",
    responses={
        400: {"description": "Guardian still has linked students"},
        404: {"description": "Guardian not found"},
    },
)
async def delete_guardian(
    guardian_id: str,
    stores: EnrollmentStores = Depends(get_stores),
    admin: CurrentUser = Depends(get_current_admin_user),
) -> GuardianResponse:
    try:
        guardian = await service.delete_guardian(stores, guardian_id)
    except ServiceError as e:
        raise to_http_exception(e) from e

    logger.info(f"Admin {admin.id} deleted guardian {guardian_id}")
    return GuardianResponse.model_validate(guardian)
