"""Repository layer for database operations with SQLAlchemy 2.0."""

from eimusic.infrastructure.persistence.repositories.accounts import (
    PlanRepository,
    TransactionRepository,
    UserRepository,
)
from eimusic.infrastructure.persistence.repositories.base_repo import (
    BaseModelMapper,
    BaseRepository,
    filter_active,
)
from eimusic.infrastructure.persistence.repositories.catalog import (
    AlbumRepository,
    ArtistRepository,
    TrackRepository,
    VideoRepository,
)
from eimusic.infrastructure.persistence.repositories.repo_decorator import db_operation

__all__ = [
    "AlbumRepository",
    "ArtistRepository",
    "BaseModelMapper",
    "BaseRepository",
    "PlanRepository",
    "TrackRepository",
    "TransactionRepository",
    "UserRepository",
    "VideoRepository",
    "db_operation",
    "filter_active",
]
