"""Domain repository interfaces.

These interfaces define the contracts for data access without depending on
infrastructure implementations. Use cases depend on these protocols; the
SQLAlchemy repositories in the infrastructure layer satisfy them.
"""

from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any, Protocol, Self, TypeVar

if TYPE_CHECKING:
    from eimusic.domain.entities import (
        Album,
        Artist,
        MonetizationPlan,
        RevenueTransaction,
        Track,
        User,
        Video,
    )


T = TypeVar("T")


class RecordRepositoryProtocol(Protocol[T]):
    """Persistence operations shared by every entity kind."""

    def list_active(
        self, order_by: tuple[str, str] | None = None, limit: int | None = None
    ) -> Awaitable[list[T]]:
        """List entities that are not soft-deleted.

        Args:
            order_by: Optional ``(field, "asc"|"desc")`` ordering
            limit: Optional maximum number of entities
        """
        ...

    def get_by_id(self, entity_id: int) -> Awaitable[T]:
        """Get an entity by ID; raises ``NotFoundError`` if absent."""
        ...

    def find_by_id(self, entity_id: int) -> Awaitable[T | None]:
        """Get an entity by ID or None."""
        ...

    def create(self, entity: T) -> Awaitable[T]:
        """Persist a new entity and return it with its assigned ID."""
        ...

    def update(self, entity_id: int, changes: dict[str, Any]) -> Awaitable[T]:
        """Apply field changes to an existing entity."""
        ...

    def soft_delete(self, entity_id: int) -> Awaitable[int]:
        """Mark an entity deleted; returns the number of rows affected."""
        ...

    def count(self) -> Awaitable[int]:
        """Count active entities."""
        ...


class ArtistRepositoryProtocol(RecordRepositoryProtocol["Artist"], Protocol):
    """Repository interface for artists."""


class AlbumRepositoryProtocol(RecordRepositoryProtocol["Album"], Protocol):
    """Repository interface for albums."""


class TrackRepositoryProtocol(RecordRepositoryProtocol["Track"], Protocol):
    """Repository interface for tracks."""

    def list_top_by_plays(self, limit: int) -> Awaitable[list["Track"]]:
        """Most played active tracks, highest first."""
        ...


class VideoRepositoryProtocol(RecordRepositoryProtocol["Video"], Protocol):
    """Repository interface for videos."""


class UserRepositoryProtocol(RecordRepositoryProtocol["User"], Protocol):
    """Repository interface for listener accounts."""


class TransactionRepositoryProtocol(
    RecordRepositoryProtocol["RevenueTransaction"], Protocol
):
    """Repository interface for revenue transactions."""


class PlanRepositoryProtocol(RecordRepositoryProtocol["MonetizationPlan"], Protocol):
    """Repository interface for subscription plans."""


class UnitOfWorkProtocol(Protocol):
    """Unit of Work interface for transaction boundary management.

    Each UnitOfWork instance manages a single database transaction and
    provides access to all repositories sharing that transaction.
    """

    async def __aenter__(self) -> Self:
        """Enter async context manager."""
        ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit async context manager with automatic commit/rollback."""
        ...

    async def commit(self) -> None:
        """Explicitly commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Explicitly rollback the current transaction."""
        ...

    def get_artist_repository(self) -> ArtistRepositoryProtocol: ...

    def get_album_repository(self) -> AlbumRepositoryProtocol: ...

    def get_track_repository(self) -> TrackRepositoryProtocol: ...

    def get_video_repository(self) -> VideoRepositoryProtocol: ...

    def get_user_repository(self) -> UserRepositoryProtocol: ...

    def get_transaction_repository(self) -> TransactionRepositoryProtocol: ...

    def get_plan_repository(self) -> PlanRepositoryProtocol: ...

    def get_repository(self, kind: str) -> RecordRepositoryProtocol[Any]:
        """Repository for a record kind such as ``"tracks"``."""
        ...
