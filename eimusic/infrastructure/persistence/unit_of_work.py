"""Database Unit of Work implementation for transaction boundary management.

This module provides the concrete implementation of the UnitOfWork pattern,
handling transaction management and repository creation using a shared
database session.
"""

from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from typing import Any, Self

from sqlalchemy.ext.asyncio import AsyncSession

from eimusic.domain.errors import ValidationError
from eimusic.domain.repositories.interfaces import (
    AlbumRepositoryProtocol,
    ArtistRepositoryProtocol,
    PlanRepositoryProtocol,
    RecordRepositoryProtocol,
    TrackRepositoryProtocol,
    TransactionRepositoryProtocol,
    UnitOfWorkProtocol,
    UserRepositoryProtocol,
    VideoRepositoryProtocol,
)
from eimusic.infrastructure.persistence.database.db_connection import get_session
from eimusic.infrastructure.persistence.repositories import (
    AlbumRepository,
    ArtistRepository,
    PlanRepository,
    TrackRepository,
    TransactionRepository,
    UserRepository,
    VideoRepository,
)


class DatabaseUnitOfWork:
    """Database implementation of the Unit of Work pattern.

    Manages one database transaction and provides access to all repositories
    sharing it. Commits on successful exit and rolls back on exceptions, but
    also allows explicit commit/rollback control.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with database session.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session
        self._committed = False

    async def __aenter__(self) -> Self:
        """Enter async context manager."""
        self._committed = False
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit async context manager with automatic commit/rollback."""
        if exc_type is not None:
            await self.rollback()
        elif not self._committed:
            await self.commit()

    async def commit(self) -> None:
        """Explicitly commit the current transaction."""
        await self._session.commit()
        self._committed = True

    async def rollback(self) -> None:
        """Explicitly rollback the current transaction."""
        await self._session.rollback()

    def get_artist_repository(self) -> ArtistRepositoryProtocol:
        return ArtistRepository(self._session)

    def get_album_repository(self) -> AlbumRepositoryProtocol:
        return AlbumRepository(self._session)

    def get_track_repository(self) -> TrackRepositoryProtocol:
        return TrackRepository(self._session)

    def get_video_repository(self) -> VideoRepositoryProtocol:
        return VideoRepository(self._session)

    def get_user_repository(self) -> UserRepositoryProtocol:
        return UserRepository(self._session)

    def get_transaction_repository(self) -> TransactionRepositoryProtocol:
        return TransactionRepository(self._session)

    def get_plan_repository(self) -> PlanRepositoryProtocol:
        return PlanRepository(self._session)

    def get_repository(self, kind: str) -> RecordRepositoryProtocol[Any]:
        """Repository for a record kind such as ``"tracks"``.

        Raises:
            ValidationError: If the kind is unknown
        """
        factories: dict[str, Callable[[], RecordRepositoryProtocol[Any]]] = {
            "artists": self.get_artist_repository,
            "albums": self.get_album_repository,
            "tracks": self.get_track_repository,
            "videos": self.get_video_repository,
            "users": self.get_user_repository,
            "transactions": self.get_transaction_repository,
            "plans": self.get_plan_repository,
        }
        try:
            return factories[kind]()
        except KeyError:
            raise ValidationError(f"Unknown record kind {kind!r}") from None


def get_unit_of_work(session: AsyncSession) -> UnitOfWorkProtocol:
    """Create a unit of work bound to an existing session."""
    return DatabaseUnitOfWork(session)


@asynccontextmanager
async def unit_of_work() -> AsyncGenerator[UnitOfWorkProtocol]:
    """Open a session from the global factory and wrap it in a unit of work."""
    async with get_session() as session:
        yield DatabaseUnitOfWork(session)
