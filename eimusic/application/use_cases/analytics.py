"""Analytics use case: period-over-period stats cards and a monthly series.

A period ends at ``now``; the previous period is the same span right before
it. Growth numbers come from ``calculate_change`` over records dated inside
each window.
"""

from collections.abc import Iterable, Sequence
from datetime import UTC, date, datetime, timedelta
from typing import Literal

from attrs import define, field, validators

from eimusic.config import get_logger
from eimusic.domain.entities import Artist, RevenueTransaction, Track, User
from eimusic.domain.entities.shared import ensure_utc
from eimusic.domain.formatting import calculate_change
from eimusic.domain.repositories import UnitOfWorkProtocol

logger = get_logger(__name__)

Period = Literal["day", "week", "month", "quarter", "year"]

PERIOD_LABELS: dict[str, str] = {
    "day": "Diário",
    "week": "Semanal",
    "month": "Mensal",
    "quarter": "Trimestral",
    "year": "Anual",
}

PERIOD_SPANS: dict[str, timedelta] = {
    "day": timedelta(days=1),
    "week": timedelta(weeks=1),
    "month": timedelta(days=30),
    "quarter": timedelta(days=90),
    "year": timedelta(days=365),
}

MONTH_ABBREVIATIONS = (
    "Jan", "Fev", "Mar", "Abr", "Mai", "Jun",
    "Jul", "Ago", "Set", "Out", "Nov", "Dez",
)  # fmt: skip


@define(frozen=True, slots=True)
class StatsCard:
    title: str
    value: float
    change: float
    icon: str
    prefix: str = ""

    @property
    def is_increase(self) -> bool:
        return self.change >= 0


@define(frozen=True, slots=True)
class MonthlyPoint:
    label: str
    month: str  # YYYY-MM
    users: int
    artists: int
    content: int
    revenue: float


@define(frozen=True, slots=True)
class AnalyticsCommand:
    period: Period = field(
        default="month", validator=validators.in_(tuple(PERIOD_SPANS))
    )
    now: datetime | None = None
    months: int = field(default=6, validator=validators.ge(1))


@define(frozen=True, slots=True)
class AnalyticsResult:
    period: Period
    cards: list[StatsCard]
    monthly: list[MonthlyPoint]


@define(frozen=True, slots=True)
class _Window:
    start: datetime
    end: datetime

    def contains(self, moment: datetime | None) -> bool:
        return moment is not None and self.start <= moment < self.end


def _created(entity) -> datetime | None:
    return ensure_utc(entity.created_at)


def _transaction_moment(transaction: RevenueTransaction) -> datetime | None:
    if transaction.transaction_date is not None:
        return datetime.combine(transaction.transaction_date, datetime.min.time(), UTC)
    return _created(transaction)


def _count(entities: Iterable, window: _Window) -> int:
    return sum(1 for entity in entities if window.contains(_created(entity)))


def _existing_at(entities: Iterable, moment_of: datetime) -> int:
    """Entities created before a moment (undated ones count as always there)."""
    return sum(
        1
        for entity in entities
        if (created := _created(entity)) is None or created < moment_of
    )


def _completed_revenue(
    transactions: Iterable[RevenueTransaction], window: _Window | None = None
) -> float:
    return sum(
        t.amount
        for t in transactions
        if t.status == "completed"
        and (window is None or window.contains(_transaction_moment(t)))
    )


def build_stats_cards(
    users: Sequence[User],
    artists: Sequence[Artist],
    tracks: Sequence[Track],
    transactions: Sequence[RevenueTransaction],
    period: Period = "month",
    now: datetime | None = None,
) -> list[StatsCard]:
    """Cards comparing the current period with the one before it."""
    now = ensure_utc(now) or datetime.now(UTC)
    span = PERIOD_SPANS[period]
    current = _Window(now - span, now)
    previous = _Window(now - 2 * span, now - span)

    new_users = _count(users, current)
    streams_now = sum(t.streams for t in tracks)
    streams_before = sum(
        t.streams for t in tracks if (c := _created(t)) is None or c < current.start
    )

    return [
        StatsCard(
            "Total de Usuários",
            len(users),
            calculate_change(len(users), _existing_at(users, current.start)),
            "Users",
        ),
        StatsCard(
            "Novos Usuários",
            new_users,
            calculate_change(new_users, _count(users, previous)),
            "Users",
        ),
        StatsCard(
            "Total de Artistas",
            len(artists),
            calculate_change(len(artists), _existing_at(artists, current.start)),
            "Music",
        ),
        StatsCard(
            "Total de Reproduções",
            streams_now,
            calculate_change(streams_now, streams_before),
            "PlayCircle",
        ),
        StatsCard(
            "Receita Total",
            _completed_revenue(transactions),
            calculate_change(
                _completed_revenue(transactions, current),
                _completed_revenue(transactions, previous),
            ),
            "DollarSign",
            prefix="MT ",
        ),
    ]


def _month_start(moment: date, back: int) -> date:
    index = moment.year * 12 + (moment.month - 1) - back
    return date(index // 12, index % 12 + 1, 1)


def build_monthly_series(
    users: Sequence[User],
    artists: Sequence[Artist],
    tracks: Sequence[Track],
    transactions: Sequence[RevenueTransaction],
    now: datetime | None = None,
    months: int = 6,
) -> list[MonthlyPoint]:
    """Per-month counts for the last ``months`` months, oldest first."""
    now = ensure_utc(now) or datetime.now(UTC)
    points = []
    for back in range(months - 1, -1, -1):
        first = _month_start(now.date(), back)
        following = _month_start(now.date(), back - 1)
        window = _Window(
            datetime.combine(first, datetime.min.time(), UTC),
            datetime.combine(following, datetime.min.time(), UTC),
        )
        points.append(
            MonthlyPoint(
                label=MONTH_ABBREVIATIONS[first.month - 1],
                month=first.strftime("%Y-%m"),
                users=_count(users, window),
                artists=_count(artists, window),
                content=_count(tracks, window),
                revenue=_completed_revenue(transactions, window),
            )
        )
    return points


@define(slots=True)
class AnalyticsUseCase:
    async def execute(
        self, command: AnalyticsCommand, uow: UnitOfWorkProtocol
    ) -> AnalyticsResult:
        now = ensure_utc(command.now) or datetime.now(UTC)

        async with uow:
            users = await uow.get_user_repository().list_active()
            artists = await uow.get_artist_repository().list_active()
            tracks = await uow.get_track_repository().list_active()
            transactions = await uow.get_transaction_repository().list_active()

        result = AnalyticsResult(
            period=command.period,
            cards=build_stats_cards(
                users, artists, tracks, transactions, command.period, now
            ),
            monthly=build_monthly_series(
                users, artists, tracks, transactions, now, command.months
            ),
        )
        logger.info("Analytics computed", period=command.period, months=command.months)
        return result
