"""
Shared fixtures.

The environment is fixed BEFORE importing kinderadmin so the cached
settings use the in-memory backend, a test secret and no email API key.
The db_* fixtures run the same stores against an in-memory SQLite
database through aiosqlite.
"""

import os

os.environ["PYTHON_ENV"] = "test"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["RESEND_API_KEY"] = ""

from datetime import date  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from kinderadmin.core.auth import CurrentUser, get_current_admin_user  # noqa: E402
from kinderadmin.core.database import Base  # noqa: E402
from kinderadmin.core.rate_limit import reset_memory_store  # noqa: E402
from kinderadmin.dependencies import (  # noqa: E402
    EnrollmentStores,
    build_database_stores,
    build_memory_stores,
    get_dispatcher,
    get_stores,
)
from kinderadmin.main import app  # noqa: E402
from kinderadmin.modules.directories.seed import seed_directories  # noqa: E402
from kinderadmin.modules.enrollment.models import Guardian  # noqa: E402
from kinderadmin.modules.notifications.dispatcher import NotificationDispatcher  # noqa: E402
from kinderadmin.modules.student_applications.models import StudentApplication  # noqa: E402


@pytest.fixture(autouse=True)
def clear_rate_limits():
    """Start every test with empty rate-limit windows."""
    reset_memory_store()
    yield
    reset_memory_store()


@pytest.fixture
def stores() -> EnrollmentStores:
    """Fresh in-memory stores with the default directories."""
    return build_memory_stores()


@pytest.fixture
def transport():
    """Email transport that reports success."""
    return AsyncMock(return_value=True)


@pytest.fixture
def dispatcher(stores, transport) -> NotificationDispatcher:
    return NotificationDispatcher(stores.guardians, transport=transport)


@pytest.fixture
def make_application():
    """Factory for pending applications; defaults describe Ana Ruiz (app-42)."""

    def _make(**overrides) -> StudentApplication:
        fields = {
            "id": "app-42",
            "student_name": "Ana Ruiz",
            "birth_date": date(2021, 3, 14),
            "birth_place": "Medellín",
            "department": "Antioquia",
            "student_document": "1020304050",
            "weight": 16.5,
            "height": 102.0,
            "blood_type": "O+",
            "social_security": "Sura EPS",
            "allergies": ["maní"],
            "grade_id": "grade-kg1",
            "guardian_name": "Gloria Ruiz",
            "guardian_document": "43123456",
            "phone": "3001234567",
            "profession": "Ingeniera",
            "company": "Acme",
            "email": "ana.g@test.com",
            "address": "Calle 10 # 20-30",
            "type_id": "2",
        }
        fields.update(overrides)
        return StudentApplication(**fields)

    return _make


@pytest.fixture
def make_guardian():
    """Factory for guardians already in the directory."""

    def _make(email: str, **overrides) -> Guardian:
        fields = {
            "full_name": "Guardian",
            "document_number": "12345678",
            "phone": "3000000000",
            "profession": "",
            "company": "",
            "email": email,
            "address": "Calle 1",
            "type_id": "1",
        }
        fields.update(overrides)
        return Guardian(**fields)

    return _make


@pytest.fixture
def intake_payload() -> dict:
    """A valid POST /student-applications body for a four-year-old."""
    today = date.today()
    return {
        "student_name": "Luis Pérez",
        "birth_date": date(today.year - 4, 1, 15).isoformat(),
        "birth_place": "Bogotá",
        "department": "Cundinamarca",
        "student_document": "1122334455",
        "weight": 17.2,
        "height": 104,
        "blood_type": "A+",
        "social_security": "Sanitas",
        "allergies": "polen, lactosa",
        "grade_id": "grade-prek",
        "guardian_name": "Marta Pérez",
        "guardian_document": "52123456",
        "phone": "3109876543",
        "profession": "",
        "company": "",
        "email": "marta.p@test.com",
        "address": "Carrera 7 # 45-10",
        "type_id": "2",
    }


@pytest.fixture
def admin_user() -> CurrentUser:
    return CurrentUser(id="admin-1", email="admin@test.com", role="admin", name="Test Admin")


@pytest_asyncio.fixture
async def anonymous_client(stores, dispatcher):
    """Client over the app with test stores but real authentication."""
    app.dependency_overrides[get_stores] = lambda: stores
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(anonymous_client, admin_user):
    """Client authenticated as an administrator."""
    app.dependency_overrides[get_current_admin_user] = lambda: admin_user
    yield anonymous_client


# ============================================
# SQLite-backed stores
# ============================================


@pytest_asyncio.fixture
async def db_session_maker():
    """Session factory over a fresh in-memory SQLite database with seeded directories."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        await seed_directories(session)

    yield session_maker
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_session_maker):
    async with db_session_maker() as session:
        yield session


@pytest.fixture
def db_stores(db_session) -> EnrollmentStores:
    return build_database_stores(db_session)


@pytest.fixture
def db_dispatcher(db_stores, transport) -> NotificationDispatcher:
    return NotificationDispatcher(db_stores.guardians, transport=transport)


@pytest_asyncio.fixture
async def db_client(db_stores, db_dispatcher, admin_user):
    """Administrator client over the SQLite-backed stores."""
    app.dependency_overrides[get_stores] = lambda: db_stores
    app.dependency_overrides[get_dispatcher] = lambda: db_dispatcher
    app.dependency_overrides[get_current_admin_user] = lambda: admin_user
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()
