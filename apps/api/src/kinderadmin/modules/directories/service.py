"""
Directory Service

Lookups over the grade and guardian-type directories.
"""

from kinderadmin.core.repository import Repository
from kinderadmin.modules.directories.models import BloodType, Grade, GuardianType


async def list_grades(grades: Repository[Grade]) -> list[Grade]:
    return await grades.list()


async def list_guardian_types(guardian_types: Repository[GuardianType]) -> list[GuardianType]:
    return await guardian_types.list()


def list_blood_types() -> list[BloodType]:
    """Blood types in declaration order (A+, A-, ..., O-)."""
    return list(BloodType)
