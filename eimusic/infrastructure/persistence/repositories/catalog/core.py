"""Repositories for artists and the content they publish."""

from sqlalchemy.ext.asyncio import AsyncSession

from eimusic.domain.entities import Album, Artist, Track, Video
from eimusic.infrastructure.persistence.database.db_models import (
    DBAlbum,
    DBArtist,
    DBTrack,
    DBVideo,
)
from eimusic.infrastructure.persistence.repositories.base_repo import BaseRepository
from eimusic.infrastructure.persistence.repositories.catalog.mapper import (
    AlbumMapper,
    ArtistMapper,
    TrackMapper,
    VideoMapper,
)
from eimusic.infrastructure.persistence.repositories.repo_decorator import db_operation


class ArtistRepository(BaseRepository[DBArtist, Artist]):
    """Repository for artist persistence operations."""

    entity_name = "Artist"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=DBArtist, mapper=ArtistMapper)


class AlbumRepository(BaseRepository[DBAlbum, Album]):
    """Repository for album persistence operations."""

    entity_name = "Album"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=DBAlbum, mapper=AlbumMapper)


class TrackRepository(BaseRepository[DBTrack, Track]):
    """Repository for track persistence operations."""

    entity_name = "Track"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=DBTrack, mapper=TrackMapper)

    @db_operation("list_top_by_plays")
    async def list_top_by_plays(self, limit: int) -> list[Track]:
        """Most played active tracks, highest first."""
        stmt = self.select().order_by(DBTrack.plays.desc(), DBTrack.id).limit(limit)
        return await self.mapper.map_collection(await self._execute_query(stmt))


class VideoRepository(BaseRepository[DBVideo, Video]):
    """Repository for video persistence operations."""

    entity_name = "Video"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=DBVideo, mapper=VideoMapper)
