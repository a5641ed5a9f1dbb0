from datetime import UTC, datetime

import pytest

from eimusic.config import settings

# Tests never touch the configured database file
settings.database.url = "sqlite+aiosqlite:///:memory:"

from eimusic.infrastructure.persistence.database.db_connection import (  # noqa: E402
    get_session,
    reset_engine,
)
from eimusic.infrastructure.persistence.database.db_models import init_db  # noqa: E402
from eimusic.infrastructure.persistence.unit_of_work import (  # noqa: E402
    get_unit_of_work,
)


@pytest.fixture(scope="function")
async def initialize_db():
    """Create the schema in a fresh in-memory database; dropped after the test."""
    try:
        await init_db()
    except Exception as e:
        pytest.fail(f"Database initialization failed: {e}")
    yield
    await reset_engine()


@pytest.fixture
async def db_session(initialize_db):
    """Provide a database session committed when the test finishes."""
    async with get_session() as session:
        yield session


@pytest.fixture
async def uow(db_session):
    """Unit of work sharing the test session."""
    return get_unit_of_work(db_session)


@pytest.fixture
def fixed_now():
    """Reference time for dashboard and analytics computations."""
    return datetime(2024, 3, 15, 12, 0, tzinfo=UTC)
