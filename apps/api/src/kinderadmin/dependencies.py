"""
Shared FastAPI Dependencies

Builds the store bundle for each request and the notification
dispatcher on top of it.

Two storage backends are supported (settings.storage_backend):
- database: SQLAlchemy repositories over the request's session
- memory: process-wide in-memory collections, seeded with the default
  directories; contents are lost when the process exits
"""

from dataclasses import dataclass

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from kinderadmin.core.config import settings
from kinderadmin.core.database import get_db
from kinderadmin.core.repository import InMemoryRepository, Repository, SqlAlchemyRepository
from kinderadmin.modules.directories.models import Grade, GuardianType
from kinderadmin.modules.directories.seed import default_grades, default_guardian_types
from kinderadmin.modules.enrollment.models import Guardian, Student
from kinderadmin.modules.notifications.dispatcher import NotificationDispatcher
from kinderadmin.modules.student_applications.models import StudentApplication


@dataclass
class EnrollmentStores:
    """The collections the enrollment workflow reads and mutates."""

    applications: Repository[StudentApplication]
    students: Repository[Student]
    guardians: Repository[Guardian]
    grades: Repository[Grade]
    guardian_types: Repository[GuardianType]


def build_memory_stores() -> EnrollmentStores:
    """Create a fresh set of in-memory stores with the default directories."""
    return EnrollmentStores(
        applications=InMemoryRepository(),
        students=InMemoryRepository(),
        guardians=InMemoryRepository(),
        grades=InMemoryRepository(default_grades()),
        guardian_types=InMemoryRepository(default_guardian_types()),
    )


_memory_stores: EnrollmentStores | None = None


def get_memory_stores() -> EnrollmentStores:
    """Return the process-wide in-memory stores, creating them on first use."""
    global _memory_stores
    if _memory_stores is None:
        _memory_stores = build_memory_stores()
    return _memory_stores


def build_database_stores(db: AsyncSession) -> EnrollmentStores:
    """Create SQLAlchemy-backed stores over one session."""
    return EnrollmentStores(
        applications=SqlAlchemyRepository(
            db, StudentApplication, order_by=StudentApplication.submitted_at
        ),
        students=SqlAlchemyRepository(db, Student, order_by=Student.full_name),
        guardians=SqlAlchemyRepository(db, Guardian, order_by=Guardian.full_name),
        grades=SqlAlchemyRepository(db, Grade, order_by=Grade.id),
        guardian_types=SqlAlchemyRepository(db, GuardianType, order_by=GuardianType.id),
    )


async def get_stores(db: AsyncSession = Depends(get_db)) -> EnrollmentStores:
    """FastAPI dependency returning the stores for the configured backend."""
    if settings.storage_backend == "memory":
        return get_memory_stores()
    return build_database_stores(db)


async def get_dispatcher(
    stores: EnrollmentStores = Depends(get_stores),
) -> NotificationDispatcher:
    """FastAPI dependency returning a dispatcher bound to the guardian directory."""
    return NotificationDispatcher(stores.guardians)
