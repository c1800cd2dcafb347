"""
Default directory contents.

Used to seed the database on startup and to populate the in-memory
storage backend.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from kinderadmin.modules.directories.models import Grade, GuardianType

logger = logging.getLogger(__name__)


def default_grades() -> list[Grade]:
    return [
        Grade(id="grade-prek", name="prek", display_name="Pre-Kinder"),
        Grade(id="grade-kg1", name="kg1", display_name="Kindergarten 1"),
        Grade(id="grade-kg2", name="kg2", display_name="Kindergarten 2"),
    ]


def default_guardian_types() -> list[GuardianType]:
    return [
        GuardianType(
            id="1",
            name="father",
            display_name="Padre",
            description="Biological or legal male guardian of the student",
        ),
        GuardianType(
            id="2",
            name="mother",
            display_name="Madre",
            description="Biological or legal female guardian of the student",
        ),
        GuardianType(
            id="3",
            name="tutor",
            display_name="Tutor Legal",
            description="Appointed legal representative or caregiver for the student",
        ),
    ]


async def seed_directories(db: AsyncSession) -> int:
    """
    Insert any default grade or guardian type that is missing.

    Existing rows are left untouched.

    Returns:
        Number of rows created
    """
    created = 0
    for entity in [*default_grades(), *default_guardian_types()]:
        existing = await db.get(type(entity), entity.id)
        if existing is None:
            db.add(entity)
            created += 1

    if created:
        await db.commit()
        logger.info(f"Inserted {created} default directory rows")

    return created
