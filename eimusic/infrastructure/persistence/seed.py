"""Demo catalog for local databases.

Loads a small, realistic data set (five artists with their albums, tracks
and videos, a handful of listeners, plans and transactions) so every screen
has something to show on a fresh install.
"""

from datetime import UTC, date, datetime

import attrs
from attrs import define

from eimusic.config import get_logger
from eimusic.domain.entities import (
    Album,
    Artist,
    MonetizationPlan,
    RevenueTransaction,
    Track,
    User,
    Video,
)
from eimusic.domain.repositories import UnitOfWorkProtocol

logger = get_logger(__name__)

DEMO_ARTISTS = [
    Artist(
        name="Lizha James",
        email="lizha@eimusic.co.mz",
        genre="pandza",
        verified=True,
        status="active",
        monetization_plan="premium",
        payment_method="mpesa",
        total_tracks=24,
        total_revenue=85600,
        joined_date=date(2023, 4, 15),
    ),
    Artist(
        name="MC Roger",
        email="mcroger@eimusic.co.mz",
        genre="marrabenta",
        verified=True,
        status="active",
        monetization_plan="premium",
        payment_method="mpesa",
        total_tracks=18,
        total_revenue=43200,
        joined_date=date(2023, 6, 10),
    ),
    Artist(
        name="Valter Artístico",
        email="valter@eimusic.co.mz",
        genre="hip-hop",
        verified=True,
        status="active",
        monetization_plan="basic",
        total_tracks=15,
        total_revenue=38750,
        joined_date=date(2023, 5, 22),
    ),
    Artist(
        name="Marllen",
        email="marllen@eimusic.co.mz",
        genre="pop",
        verified=False,
        status="inactive",
        monetization_plan="basic",
        total_tracks=8,
        total_revenue=17500,
        joined_date=date(2023, 8, 5),
    ),
    Artist(
        name="Ziqo",
        email="ziqo@eimusic.co.mz",
        genre="kizomba",
        verified=True,
        status="active",
        monetization_plan="premium",
        payment_method="visa",
        total_tracks=20,
        total_revenue=54300,
        joined_date=date(2023, 7, 12),
    ),
]

# (artist index, title, track count, total duration, plays, revenue, release date)
_ALBUM_ROWS = [
    (0, "Ngoma Yanga", 12, 2520, 120500, 35600, date(2023, 4, 10)),
    (1, "Moçambique Sempre", 8, 1740, 85000, 24200, date(2023, 6, 15)),
    (2, "Evolução", 10, 2100, 62400, 18750, date(2023, 8, 22)),
    (3, "Sonhos", 9, 1920, 48300, 14500, date(2023, 9, 30)),
    (4, "Raízes", 11, 2340, 95600, 28400, date(2023, 3, 15)),
]

# (artist index, title, duration, plays, revenue, upload date, status)
_TRACK_ROWS = [
    (0, "Nita Famba", 234, 45600, 12500, date(2023, 5, 18), "published"),
    (1, "Tsovani Wanga", 198, 32000, 8900, date(2023, 6, 22), "published"),
    (2, "Eparaka", 265, 28500, 7300, date(2023, 7, 10), "published"),
    (3, "Amor Proibido", 210, 18200, 4500, date(2023, 8, 5), "published"),
    (4, "Pobre Coração", 225, 35600, 9800, date(2023, 4, 30), "published"),
    (0, "Moçambicano", 212, 38900, 10200, date(2023, 9, 15), "published"),
    (1, "Xitchuketa", 189, 29500, 7800, date(2023, 10, 5), "published"),
    (2, "Vovó Malandrinha", 245, 25300, 6500, date(2023, 8, 22), "published"),
    (3, "Dança Sensual", 230, 22100, 5400, date(2023, 11, 18), "published"),
    (4, "Xitimela", 218, 31200, 8300, date(2023, 7, 28), "published"),
    (0, "Sorriso Lindo", 227, 19800, 5100, date(2023, 12, 10), "draft"),
    (1, "Amor e Paixão", 192, 15600, 4200, date(2024, 1, 5), "published"),
    (2, "Maputo Cidade", 253, 17900, 4800, date(2023, 9, 30), "published"),
    (3, "Celebração", 235, 13500, 3700, date(2023, 10, 22), "draft"),
    (4, "Felicidade", 240, 21800, 5900, date(2023, 11, 15), "published"),
    (0, "Nova Vida", 221, 16700, 4400, date(2024, 1, 20), "published"),
    (1, "Sonho Real", 204, 14200, 3800, date(2023, 8, 12), "removed"),
    (2, "Maningue Nice", 258, 19400, 5300, date(2023, 12, 28), "published"),
    (3, "Ritmo Africano", 216, 15300, 4100, date(2024, 1, 15), "published"),
    (4, "Terra Boa", 232, 18700, 5000, date(2023, 10, 8), "published"),
]

# (artist index, title, duration, views, revenue, upload date)
_VIDEO_ROWS = [
    (0, "Nita Famba (Clipe Oficial)", 285, 1250000, 42500, date(2023, 5, 25)),
    (1, "Tsovani Wanga (Vídeo Clipe)", 240, 980000, 35200, date(2023, 6, 30)),
    (2, "Eparaka (Official Video)", 312, 820000, 29800, date(2023, 7, 18)),
    (3, "Amor Proibido (Videoclipe)", 274, 560000, 19200, date(2023, 8, 12)),
    (4, "Vibe de Maputo (Official Video)", 298, 1450000, 48600, date(2023, 5, 5)),
]

DEMO_USERS = [
    User(
        name="João Machava",
        email="joao.machava@gmail.com",
        plan="premium",
        status="active",
        total_spent=2500,
        payment_method="mpesa",
        has_active_subscription=True,
        joined_date=date(2023, 5, 20),
        last_active=datetime(2023, 8, 15, tzinfo=UTC),
    ),
    User(
        name="Luísa Cossa",
        email="luisa.cossa@outlook.com",
        plan="free",
        status="active",
        joined_date=date(2023, 6, 15),
        last_active=datetime(2023, 8, 16, tzinfo=UTC),
    ),
    User(
        name="Carlos Tembe",
        email="carlos.tembe@gmail.com",
        plan="premium",
        status="active",
        total_spent=3500,
        payment_method="visa",
        has_active_subscription=True,
        joined_date=date(2023, 4, 10),
        last_active=datetime(2023, 7, 30, tzinfo=UTC),
    ),
    User(
        name="Fátima Sitoe",
        email="fatima.sitoe@hotmail.com",
        plan="free",
        status="inactive",
        joined_date=date(2023, 7, 1),
        last_active=datetime(2023, 7, 25, tzinfo=UTC),
    ),
    User(
        name="António Mundlovo",
        email="antonio.mundlovo@gmail.com",
        plan="premium",
        status="active",
        total_spent=4200,
        payment_method="mpesa",
        has_active_subscription=True,
        joined_date=date(2023, 3, 15),
        last_active=datetime(2023, 8, 17, tzinfo=UTC),
    ),
]

DEMO_PLANS = [
    MonetizationPlan(
        name="Free",
        price=0,
        subscribers=32450,
        monthly_revenue=0,
        features=[
            "Acesso a conteúdo com anúncios",
            "Qualidade de áudio padrão",
            "Reprodução aleatória",
            "Limite de reproduções diárias",
        ],
    ),
    MonetizationPlan(
        name="Premium",
        price=199,
        subscribers=8500,
        monthly_revenue=1691500,
        features=[
            "Sem anúncios",
            "Qualidade de áudio alta",
            "Downloads para offline",
            "Reprodução sob demanda",
            "Playlists ilimitadas",
        ],
    ),
    MonetizationPlan(
        name="VIP",
        price=299,
        subscribers=2200,
        monthly_revenue=657800,
        features=[
            "Todos os benefícios Premium",
            "Qualidade de áudio lossless",
            "Conteúdo exclusivo",
            "Acesso antecipado a lançamentos",
        ],
    ),
]

DEMO_TRANSACTIONS = [
    RevenueTransaction(
        user_name="João Machava",
        amount=199,
        type="subscription",
        plan_name="Premium",
        transaction_date=date(2023, 8, 15),
        status="completed",
        payment_method="mpesa",
        transaction_fee=1.99,
    ),
    RevenueTransaction(
        user_name="Carlos Tembe",
        amount=299,
        type="subscription",
        plan_name="VIP",
        transaction_date=date(2023, 8, 14),
        status="completed",
        payment_method="visa",
        transaction_fee=7.48,
    ),
    RevenueTransaction(
        user_name="Eduardo Mondlane",
        amount=199,
        type="subscription",
        plan_name="Premium",
        transaction_date=date(2023, 8, 13),
        status="completed",
        payment_method="mpesa",
        transaction_fee=1.99,
    ),
    RevenueTransaction(
        user_name="Ana Sitoe",
        amount=-199,
        type="refund",
        plan_name="Premium",
        transaction_date=date(2023, 8, 12),
        status="refunded",
        payment_method="visa",
        transaction_fee=-4.98,
    ),
    RevenueTransaction(
        user_name="Carlos Mundlovo",
        amount=199,
        type="subscription",
        plan_name="Premium",
        transaction_date=date(2023, 8, 11),
        status="pending",
        payment_method="paypal",
        transaction_fee=5.97,
    ),
]


@define(frozen=True, slots=True)
class SeedSummary:
    """How many records of each kind were inserted."""

    counts: dict[str, int]
    skipped: bool = False

    @property
    def total(self) -> int:
        return sum(self.counts.values())


async def seed_demo_data(uow: UnitOfWorkProtocol, force: bool = False) -> SeedSummary:
    """Insert the demo data set.

    Does nothing when artists already exist, unless ``force`` is set.
    """
    async with uow:
        artist_repo = uow.get_artist_repository()
        if not force and await artist_repo.count() > 0:
            logger.info("Database already has artists, skipping demo seed")
            return SeedSummary(counts={}, skipped=True)

        artists = [await artist_repo.create(artist) for artist in DEMO_ARTISTS]

        album_repo = uow.get_album_repository()
        albums = []
        for index, title, count, duration, plays, revenue, released in _ALBUM_ROWS:
            artist = artists[index]
            albums.append(
                await album_repo.create(
                    Album(
                        title=title,
                        artist_id=artist.id,
                        artist_name=artist.name,
                        track_count=count,
                        total_duration=duration,
                        plays=plays,
                        revenue=revenue,
                        release_date=released,
                        status="published",
                    )
                )
            )

        track_repo = uow.get_track_repository()
        tracks = []
        for index, title, duration, plays, revenue, uploaded, status in _TRACK_ROWS:
            artist, album = artists[index], albums[index]
            tracks.append(
                await track_repo.create(
                    Track(
                        title=title,
                        artist_id=artist.id,
                        artist_name=artist.name,
                        album_id=album.id,
                        album_title=album.title,
                        duration=duration,
                        plays=plays,
                        streams=plays,
                        revenue=revenue,
                        status=status,
                        upload_date=uploaded,
                        release_date=uploaded,
                    )
                )
            )

        video_repo = uow.get_video_repository()
        videos = []
        for index, title, duration, views, revenue, uploaded in _VIDEO_ROWS:
            artist = artists[index]
            videos.append(
                await video_repo.create(
                    Video(
                        title=title,
                        artist_id=artist.id,
                        artist_name=artist.name,
                        duration=duration,
                        views=views,
                        revenue=revenue,
                        status="published",
                        upload_date=uploaded,
                    )
                )
            )

        user_repo = uow.get_user_repository()
        users = [await user_repo.create(user) for user in DEMO_USERS]
        users_by_name = {user.name: user for user in users}

        transaction_repo = uow.get_transaction_repository()
        transactions = []
        for transaction in DEMO_TRANSACTIONS:
            user = users_by_name.get(transaction.user_name)
            if user is not None:
                transaction = attrs.evolve(transaction, user_id=user.id)
            transactions.append(await transaction_repo.create(transaction))

        plan_repo = uow.get_plan_repository()
        plans = [await plan_repo.create(plan) for plan in DEMO_PLANS]

        counts = {
            "artists": len(artists),
            "albums": len(albums),
            "tracks": len(tracks),
            "videos": len(videos),
            "users": len(users),
            "transactions": len(transactions),
            "plans": len(plans),
        }
        logger.info("Seeded demo data", **counts)
        return SeedSummary(counts=counts)
