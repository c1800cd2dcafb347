"""
Tests for directory seeding.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from kinderadmin.modules.directories.models import Grade
from kinderadmin.modules.directories.seed import seed_directories


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.add = MagicMock()
    db.commit = AsyncMock()
    return db


@pytest.mark.asyncio
async def test_inserts_missing_rows(mock_db):
    mock_db.get = AsyncMock(return_value=None)

    created = await seed_directories(mock_db)

    assert created == 6
    assert mock_db.add.call_count == 6
    mock_db.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_keeps_existing_rows(mock_db):
    mock_db.get = AsyncMock(return_value=Grade(id="x", name="x", display_name="x"))

    created = await seed_directories(mock_db)

    assert created == 0
    mock_db.add.assert_not_called()
    mock_db.commit.assert_not_awaited()
