"""Unit test fixtures - Import domain fixtures for application layer tests.

Application components and use case helpers are tested over the same plain
records and entities as the domain layer.
"""

from datetime import UTC, date, datetime

import pytest

from eimusic.domain.entities import Artist, RevenueTransaction, Track, User

# Import domain fixtures to make them available to unit tests
from tests.domain.conftest import artist, track_records, twelve_records

# Re-export for pytest discovery
__all__ = ["artist", "track_records", "twelve_records"]


@pytest.fixture
def users():
    return [
        User(
            id=1,
            name="João Machava",
            email="joao@gmail.com",
            plan="premium",
            has_active_subscription=True,
            created_at=datetime(2024, 3, 15, 9, 0, tzinfo=UTC),
        ),
        User(
            id=2,
            name="Luísa Cossa",
            email="luisa@outlook.com",
            created_at=datetime(2024, 3, 13, 18, 0, tzinfo=UTC),
        ),
        User(
            id=3,
            name="Carlos Tembe",
            email="carlos@gmail.com",
            plan="vip",
            has_active_subscription=True,
            created_at=datetime(2024, 1, 20, tzinfo=UTC),
        ),
    ]


@pytest.fixture
def artists():
    return [
        Artist(
            id=1,
            name="Lizha James",
            genre="pandza",
            verified=True,
            joined_date=date(2023, 4, 15),
            created_at=datetime(2024, 3, 14, 8, 0, tzinfo=UTC),
        ),
        Artist(
            id=2,
            name="MC Roger",
            genre="marrabenta",
            verified=True,
            joined_date=date(2023, 6, 10),
            created_at=datetime(2024, 2, 1, tzinfo=UTC),
        ),
        Artist(
            id=3,
            name="Marllen",
            genre="pandza",
            joined_date=None,
            created_at=datetime(2023, 12, 5, tzinfo=UTC),
        ),
    ]


@pytest.fixture
def tracks():
    return [
        Track(
            id=1,
            title="Nita Famba",
            artist_name="Lizha James",
            plays=45600,
            streams=45600,
            created_at=datetime(2024, 3, 15, 11, 0, tzinfo=UTC),
        ),
        Track(
            id=2,
            title="Tsovani Wanga",
            artist_name="MC Roger",
            plays=32000,
            streams=32000,
            created_at=datetime(2024, 2, 10, tzinfo=UTC),
        ),
        Track(
            id=3,
            title="Eparaka",
            artist_name="Valter Artístico",
            plays=28500,
            streams=28500,
            created_at=datetime(2024, 1, 5, tzinfo=UTC),
        ),
    ]


@pytest.fixture
def transactions():
    return [
        RevenueTransaction(
            user_name="João Machava",
            amount=199,
            type="subscription",
            payment_method="mpesa",
            status="completed",
            transaction_date=date(2024, 3, 10),
            transaction_fee=1.99,
        ),
        RevenueTransaction(
            user_name="Carlos Tembe",
            amount=299,
            type="subscription",
            payment_method="visa",
            status="completed",
            transaction_date=date(2024, 2, 1),
            transaction_fee=7.48,
        ),
        RevenueTransaction(
            user_name="Ana Sitoe",
            amount=-199,
            type="refund",
            payment_method="visa",
            status="refunded",
            transaction_date=date(2024, 3, 12),
            transaction_fee=-4.98,
        ),
        RevenueTransaction(
            user_name="Carlos Mundlovo",
            amount=199,
            type="subscription",
            payment_method="paypal",
            status="pending",
            transaction_date=date(2024, 3, 11),
        ),
    ]
