"""SQLAlchemy database models for the EiMusic platform.

This module defines the persisted entities using SQLAlchemy 2.0 patterns with
proper type annotations. Every table carries timestamps and soft-delete
columns through the shared base class.
"""

from datetime import UTC, date, datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Text,
)
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from eimusic.config import get_logger

# Create module logger
logger = get_logger(__name__)

# Define naming convention for constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",  # Index
    "uq": "uq_%(table_name)s_%(column_0_label)s",  # Unique constraint
    "ck": "ck_%(table_name)s_%(constraint_name)s",  # Check constraint
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",  # Foreign key
    "pk": "pk_%(table_name)s",  # Primary key
}

# Create metadata with naming convention
metadata = MetaData(naming_convention=convention)


class EiMusicDBBase(AsyncAttrs, DeclarativeBase):
    """Base class for all database models with timestamps and soft delete."""

    metadata = metadata

    id: Mapped[int] = mapped_column(primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)


class DBArtist(EiMusicDBBase):
    """Performer account."""

    __tablename__ = "artists"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), default="")
    genre: Mapped[str] = mapped_column(String(64), default="")
    verified: Mapped[bool] = mapped_column(Boolean, default=False)
    status: Mapped[str] = mapped_column(String(16), default="active")
    monetization_plan: Mapped[str] = mapped_column(String(16), default="basic")
    payment_method: Mapped[str | None] = mapped_column(String(16))
    phone_number: Mapped[str | None] = mapped_column(String(32))
    total_tracks: Mapped[int] = mapped_column(Integer, default=0)
    total_revenue: Mapped[float] = mapped_column(Float, default=0.0)
    profile_image: Mapped[str | None] = mapped_column(String(1024))
    bio: Mapped[str | None] = mapped_column(Text)
    joined_date: Mapped[date | None] = mapped_column(Date)

    __table_args__ = (
        Index(None, "name"),
        Index(None, "status"),
    )


class DBAlbum(EiMusicDBBase):
    """Release grouping tracks of one artist."""

    __tablename__ = "albums"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    artist_id: Mapped[int | None] = mapped_column(
        ForeignKey("artists.id", ondelete="SET NULL"), index=True
    )
    artist_name: Mapped[str] = mapped_column(String(255), default="")
    track_count: Mapped[int] = mapped_column(Integer, default=0)
    total_duration: Mapped[int] = mapped_column(Integer, default=0)
    plays: Mapped[int] = mapped_column(Integer, default=0)
    revenue: Mapped[float] = mapped_column(Float, default=0.0)
    release_date: Mapped[date | None] = mapped_column(Date)
    status: Mapped[str] = mapped_column(String(16), default="draft")
    cover_art: Mapped[str | None] = mapped_column(String(1024))


class DBTrack(EiMusicDBBase):
    """Single audio recording."""

    __tablename__ = "tracks"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    artist_id: Mapped[int | None] = mapped_column(
        ForeignKey("artists.id", ondelete="SET NULL"), index=True
    )
    artist_name: Mapped[str] = mapped_column(String(255), default="")
    album_id: Mapped[int | None] = mapped_column(
        ForeignKey("albums.id", ondelete="SET NULL"), index=True
    )
    album_title: Mapped[str | None] = mapped_column(String(255))
    duration: Mapped[int] = mapped_column(Integer, default=0)
    plays: Mapped[int] = mapped_column(Integer, default=0)
    streams: Mapped[int] = mapped_column(Integer, default=0)
    revenue: Mapped[float] = mapped_column(Float, default=0.0)
    status: Mapped[str] = mapped_column(String(16), default="draft")
    upload_date: Mapped[date | None] = mapped_column(Date)
    release_date: Mapped[date | None] = mapped_column(Date)
    cover_art: Mapped[str | None] = mapped_column(String(1024))
    file_url: Mapped[str | None] = mapped_column(String(1024))

    __table_args__ = (
        Index(None, "title"),
        Index(None, "plays"),
    )


class DBVideo(EiMusicDBBase):
    """Music video."""

    __tablename__ = "videos"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    artist_id: Mapped[int | None] = mapped_column(
        ForeignKey("artists.id", ondelete="SET NULL"), index=True
    )
    artist_name: Mapped[str] = mapped_column(String(255), default="")
    duration: Mapped[int] = mapped_column(Integer, default=0)
    views: Mapped[int] = mapped_column(Integer, default=0)
    revenue: Mapped[float] = mapped_column(Float, default=0.0)
    status: Mapped[str] = mapped_column(String(16), default="draft")
    upload_date: Mapped[date | None] = mapped_column(Date)
    thumbnail_url: Mapped[str | None] = mapped_column(String(1024))
    video_url: Mapped[str | None] = mapped_column(String(1024))


class DBUser(EiMusicDBBase):
    """Listener account."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    plan: Mapped[str] = mapped_column(String(16), default="free")
    status: Mapped[str] = mapped_column(String(16), default="active")
    total_spent: Mapped[float] = mapped_column(Float, default=0.0)
    payment_method: Mapped[str | None] = mapped_column(String(16))
    phone_number: Mapped[str | None] = mapped_column(String(32))
    has_active_subscription: Mapped[bool] = mapped_column(Boolean, default=False)
    joined_date: Mapped[date | None] = mapped_column(Date)
    last_active: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    # Uniqueness among active users is checked by the content use case
    __table_args__ = (Index(None, "email"),)


class DBRevenueTransaction(EiMusicDBBase):
    """Payment, renewal or refund."""

    __tablename__ = "revenue_transactions"

    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True
    )
    user_name: Mapped[str] = mapped_column(String(255), default="")
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    plan_name: Mapped[str | None] = mapped_column(String(64))
    transaction_date: Mapped[date | None] = mapped_column(Date, index=True)
    status: Mapped[str] = mapped_column(String(16), default="pending")
    payment_method: Mapped[str] = mapped_column(String(16), nullable=False)
    transaction_fee: Mapped[float | None] = mapped_column(Float)


class DBMonetizationPlan(EiMusicDBBase):
    """Subscription tier."""

    __tablename__ = "monetization_plans"

    name: Mapped[str] = mapped_column(String(64), nullable=False)
    price: Mapped[float] = mapped_column(Float, default=0.0)
    subscribers: Mapped[int] = mapped_column(Integer, default=0)
    monthly_revenue: Mapped[float] = mapped_column(Float, default=0.0)
    features: Mapped[list[Any]] = mapped_column(JSON, default=list)
    status: Mapped[str] = mapped_column(String(16), default="active")


async def init_db() -> None:
    """Initialize database schema.

    Creates all tables if they don't exist.
    This is a safe operation that won't affect existing data.
    """
    from sqlalchemy import inspect

    from eimusic.infrastructure.persistence.database.db_connection import get_engine

    engine = get_engine()

    try:
        # First check if tables exist (for informational purposes)
        async with engine.connect() as conn:
            existing_tables = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).get_table_names()
            )
            if existing_tables:
                logger.info(f"Found existing tables: {existing_tables}")

        # Create tables - SQLAlchemy will skip tables that already exist
        async with engine.begin() as conn:
            await conn.run_sync(EiMusicDBBase.metadata.create_all)
            logger.info("Database schema verified - all tables exist")

    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
    else:
        logger.info("Database schema initialization complete")
