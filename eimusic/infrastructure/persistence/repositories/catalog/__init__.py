"""Catalog repositories: artists, albums, tracks and videos."""

from eimusic.infrastructure.persistence.repositories.catalog.core import (
    AlbumRepository,
    ArtistRepository,
    TrackRepository,
    VideoRepository,
)
from eimusic.infrastructure.persistence.repositories.catalog.mapper import (
    AlbumMapper,
    ArtistMapper,
    TrackMapper,
    VideoMapper,
)

__all__ = [
    "AlbumMapper",
    "AlbumRepository",
    "ArtistMapper",
    "ArtistRepository",
    "TrackMapper",
    "TrackRepository",
    "VideoMapper",
    "VideoRepository",
]
