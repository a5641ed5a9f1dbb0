"""Catalog mappers for domain-persistence conversions."""

from eimusic.domain.entities import Album, Artist, Track, Video
from eimusic.infrastructure.persistence.database.db_models import (
    DBAlbum,
    DBArtist,
    DBTrack,
    DBVideo,
)
from eimusic.infrastructure.persistence.repositories.base_repo import BaseModelMapper


class ArtistMapper(BaseModelMapper[DBArtist, Artist]):
    """Bidirectional mapper between artists and their table."""

    db_model = DBArtist
    domain_model = Artist


class AlbumMapper(BaseModelMapper[DBAlbum, Album]):
    db_model = DBAlbum
    domain_model = Album


class TrackMapper(BaseModelMapper[DBTrack, Track]):
    db_model = DBTrack
    domain_model = Track


class VideoMapper(BaseModelMapper[DBVideo, Video]):
    db_model = DBVideo
    domain_model = Video
