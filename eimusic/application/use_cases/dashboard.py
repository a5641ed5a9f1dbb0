"""Dashboard use case: headline numbers, top content and recent activity.

Everything is computed from the active records in the store. The pure
helpers (``compute_smart_stats``, ``build_recent_activity``,
``top_tracks``, ``recent_artists``) take plain entity lists so they can be
exercised without a database.
"""

from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from typing import Literal

from attrs import define, field

from eimusic.config import get_logger, settings
from eimusic.domain.entities import Artist, Track, User
from eimusic.domain.entities.shared import ensure_utc
from eimusic.domain.formatting import relative_time
from eimusic.domain.repositories import UnitOfWorkProtocol

logger = get_logger(__name__)

ActivityKind = Literal["user", "track", "artist"]

# Per-source cap before the merged feed is cut to its own limit
_ACTIVITY_PER_SOURCE = {"user": 5, "track": 5, "artist": 3}


@define(frozen=True, slots=True)
class SmartStats:
    """Headline numbers of the dashboard."""

    total_users: int
    total_artists: int
    total_tracks: int
    total_streams: int
    verified_artists: int
    active_subscriptions: int
    total_revenue: int
    new_users_today: int
    avg_streams_per_track: int
    top_genre: str


@define(frozen=True, slots=True)
class ActivityItem:
    """One entry of the recent activity feed."""

    kind: ActivityKind
    title: str
    description: str
    occurred_at: datetime
    time_label: str


@define(frozen=True, slots=True)
class DashboardCommand:
    now: datetime | None = None
    top_tracks_limit: int = field(factory=lambda: settings.listing.top_tracks_limit)
    recent_artists_limit: int = 5
    activity_days: int = field(factory=lambda: settings.listing.recent_activity_days)
    activity_limit: int = field(factory=lambda: settings.listing.recent_activity_limit)


@define(frozen=True, slots=True)
class DashboardResult:
    stats: SmartStats
    top_tracks: list[Track]
    recent_artists: list[Artist]
    activity: list[ActivityItem]


def _created_at(entity: User | Track | Artist) -> datetime | None:
    return ensure_utc(entity.created_at)


def top_genre(artists: Sequence[Artist]) -> str:
    """Most common artist genre; ties go to the genre seen first."""
    genres = Counter(artist.genre for artist in artists if artist.genre)
    if not genres:
        return ""
    return genres.most_common(1)[0][0]


def compute_smart_stats(
    users: Sequence[User],
    artists: Sequence[Artist],
    tracks: Sequence[Track],
    now: datetime | None = None,
    revenue_per_stream: float | None = None,
) -> SmartStats:
    """Aggregate the dashboard's headline numbers."""
    now = ensure_utc(now) or datetime.now(UTC)
    rate = (
        settings.monetization.revenue_per_stream
        if revenue_per_stream is None
        else revenue_per_stream
    )
    total_streams = sum(track.streams for track in tracks)
    today = now.date()

    return SmartStats(
        total_users=len(users),
        total_artists=len(artists),
        total_tracks=len(tracks),
        total_streams=total_streams,
        verified_artists=sum(1 for artist in artists if artist.verified),
        active_subscriptions=sum(1 for user in users if user.has_active_subscription),
        total_revenue=round(total_streams * rate),
        new_users_today=sum(
            1
            for user in users
            if (created := _created_at(user)) is not None and created.date() == today
        ),
        avg_streams_per_track=round(total_streams / len(tracks)) if tracks else 0,
        top_genre=top_genre(artists),
    )


def top_tracks(tracks: Sequence[Track], limit: int = 5) -> list[Track]:
    """Most played tracks first."""
    return sorted(tracks, key=lambda track: track.plays, reverse=True)[:limit]


def recent_artists(artists: Sequence[Artist], limit: int = 5) -> list[Artist]:
    """Artists by joining date, newest first; artists without one go last."""
    dated = [a for a in artists if a.joined_date is not None]
    undated = [a for a in artists if a.joined_date is None]
    dated.sort(key=lambda artist: artist.joined_date, reverse=True)
    return (dated + undated)[:limit]


def build_recent_activity(
    users: Sequence[User],
    tracks: Sequence[Track],
    artists: Sequence[Artist],
    now: datetime | None = None,
    days: int = 3,
    limit: int = 10,
) -> list[ActivityItem]:
    """Signups and uploads of the last ``days`` days plus verified artists.

    Items are ordered newest first and cut to ``limit``.
    """
    now = ensure_utc(now) or datetime.now(UTC)
    since = now - timedelta(days=days)

    def recent(entities):
        return [
            e
            for e in entities
            if (created := _created_at(e)) is not None and created >= since
        ]

    def item(kind: ActivityKind, title: str, description: str, moment: datetime):
        return ActivityItem(kind, title, description, moment, relative_time(moment, now))

    items: list[ActivityItem] = []
    for user in recent(users)[: _ACTIVITY_PER_SOURCE["user"]]:
        items.append(
            item(
                "user",
                f"{user.name} se cadastrou",
                "Novo usuário na plataforma",
                _created_at(user),
            )
        )
    for track in recent(tracks)[: _ACTIVITY_PER_SOURCE["track"]]:
        items.append(
            item(
                "track",
                f"Nova faixa: {track.title}",
                "Upload de conteúdo",
                _created_at(track),
            )
        )
    verified = [a for a in artists if a.verified and a.created_at is not None]
    for artist in verified[: _ACTIVITY_PER_SOURCE["artist"]]:
        items.append(
            item(
                "artist",
                f"{artist.name} foi verificado",
                "Artista verificado oficialmente",
                _created_at(artist),
            )
        )

    items.sort(key=lambda entry: entry.occurred_at, reverse=True)
    return items[:limit]


@define(slots=True)
class DashboardUseCase:
    """Load users, artists and tracks once and derive every dashboard panel."""

    async def execute(
        self, command: DashboardCommand, uow: UnitOfWorkProtocol
    ) -> DashboardResult:
        now = ensure_utc(command.now) or datetime.now(UTC)

        async with uow:
            users = await uow.get_user_repository().list_active()
            artists = await uow.get_artist_repository().list_active()
            tracks = await uow.get_track_repository().list_active()

        result = DashboardResult(
            stats=compute_smart_stats(users, artists, tracks, now),
            top_tracks=top_tracks(tracks, command.top_tracks_limit),
            recent_artists=recent_artists(artists, command.recent_artists_limit),
            activity=build_recent_activity(
                users,
                tracks,
                artists,
                now,
                days=command.activity_days,
                limit=command.activity_limit,
            ),
        )

        logger.info(
            "Dashboard computed",
            users=result.stats.total_users,
            artists=result.stats.total_artists,
            tracks=result.stats.total_tracks,
            activity_items=len(result.activity),
        )
        return result
