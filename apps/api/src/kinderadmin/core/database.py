"""
Database Configuration

Async SQLAlchemy engine, session factory and declarative base.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from kinderadmin.core.config import settings


class Base(DeclarativeBase):
    """Declarative base shared by every model."""


engine = create_async_engine(
    settings.database_url,
    echo=False,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a database session.

    The session is closed when the request finishes. Repositories
    commit their own writes.
    """
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """
    Create tables and seed the reference directories.

    Call this on application startup.
    """
    # Import models so every table is registered on Base.metadata
    from kinderadmin.modules.directories import models as _directories  # noqa: F401
    from kinderadmin.modules.enrollment import models as _enrollment  # noqa: F401
    from kinderadmin.modules.student_applications import models as _applications  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if settings.seed_directories:
        from kinderadmin.modules.directories.seed import seed_directories

        async with async_session_maker() as session:
            await seed_directories(session)


async def close_db() -> None:
    """Dispose of the engine connection pool."""
    await engine.dispose()
