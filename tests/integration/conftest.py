"""Integration fixtures: use cases running against a seeded in-memory database."""

import pytest

from eimusic.application.notifications import NotificationCenter
from eimusic.infrastructure.persistence.seed import seed_demo_data


@pytest.fixture
async def seeded_uow(uow):
    """Unit of work over a database holding the demo data set."""
    await seed_demo_data(uow)
    return uow


@pytest.fixture
def notifications():
    return NotificationCenter()
