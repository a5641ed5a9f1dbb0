"""Repository contracts implemented by the persistence layer."""

from .interfaces import (
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

__all__ = [
    "AlbumRepositoryProtocol",
    "ArtistRepositoryProtocol",
    "PlanRepositoryProtocol",
    "RecordRepositoryProtocol",
    "TrackRepositoryProtocol",
    "TransactionRepositoryProtocol",
    "UnitOfWorkProtocol",
    "UserRepositoryProtocol",
    "VideoRepositoryProtocol",
]
