"""
Seed Directories

Inserts the default grades and guardian types into the database.
Existing rows are kept as they are, so the script can be re-run safely.

Usage:
    cd apps/api
    python scripts/seed_directories.py
"""

import asyncio
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from kinderadmin.core.config import settings
from kinderadmin.modules.directories.models import Grade, GuardianType
from kinderadmin.modules.directories.seed import seed_directories


async def main() -> None:
    engine = create_async_engine(settings.database_url, echo=False)
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as db:
        created = await seed_directories(db)
        print(f"Inserted {created} directory row(s)")

        grades = (await db.execute(select(Grade).order_by(Grade.id))).scalars().all()
        guardian_types = (
            (await db.execute(select(GuardianType).order_by(GuardianType.id))).scalars().all()
        )

        print("Grades:")
        for grade in grades:
            print(f"  {grade.id}: {grade.display_name}")
        print("Guardian types:")
        for guardian_type in guardian_types:
            print(f"  {guardian_type.id}: {guardian_type.display_name}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
