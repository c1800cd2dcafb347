"""
Directories Router

Public, read-only endpoints backing the intake form's drop-downs.

Endpoints:
- GET /directories/grades - List grades
- GET /directories/guardian-types - List guardian relationship types
- GET /directories/blood-types - List blood types
"""

from fastapi import APIRouter, Depends

from kinderadmin.dependencies import EnrollmentStores, get_stores
from kinderadmin.modules.directories import service
from kinderadmin.modules.directories.schemas import (
    BloodTypeResponse,
    GradeResponse,
    GuardianTypeResponse,
)

router = APIRouter()


@router.get("/grades", response_model=list[GradeResponse], summary="List Grades")
async def list_grades(stores: EnrollmentStores = Depends(get_stores)) -> list[GradeResponse]:
    grades = await service.list_grades(stores.grades)
    return [GradeResponse.model_validate(grade) for grade in grades]


@router.get(
    "/guardian-types",
    response_model=list[GuardianTypeResponse],
    summary="List Guardian Types",
)
async def list_guardian_types(
    stores: EnrollmentStores = Depends(get_stores),
) -> list[GuardianTypeResponse]:
    guardian_types = await service.list_guardian_types(stores.guardian_types)
    return [GuardianTypeResponse.model_validate(item) for item in guardian_types]


@router.get("/blood-types", response_model=list[BloodTypeResponse], summary="List Blood Types")
async def list_blood_types() -> list[BloodTypeResponse]:
    return [
        BloodTypeResponse(name=blood_type.name, value=blood_type.value)
        for blood_type in service.list_blood_types()
    ]
