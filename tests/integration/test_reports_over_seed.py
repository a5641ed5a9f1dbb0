"""Browsing, dashboard, monetization and analytics over the demo data set."""

import pytest

from eimusic.application.use_cases import (
    AnalyticsCommand,
    AnalyticsUseCase,
    BrowseRecordsCommand,
    BrowseRecordsUseCase,
    DashboardCommand,
    DashboardUseCase,
    MonetizationUseCase,
)
from eimusic.domain.listing import FilterState, SortState

SEEDED_STREAMS = 479800


class TestBrowse:
    async def test_published_tracks_matching_nita(self, seeded_uow):
        result = await BrowseRecordsUseCase().execute(
            BrowseRecordsCommand(
                "tracks", filters=FilterState({"status": "published"}, "nita")
            ),
            seeded_uow,
        )

        assert result.total == 20
        assert [r["title"] for r in result.table.visible_rows] == ["Nita Famba"]
        assert result.table.caption == "Mostrando 1 até 1 de 1 resultado"

    async def test_sorted_first_page(self, seeded_uow):
        result = await BrowseRecordsUseCase().execute(
            BrowseRecordsCommand(
                "tracks", sort=SortState("streams", "desc"), page_size=5
            ),
            seeded_uow,
        )

        assert [r["title"] for r in result.table.visible_rows] == [
            "Nita Famba",
            "Moçambicano",
            "Pobre Coração",
            "Tsovani Wanga",
            "Xitimela",
        ]
        assert result.table.total_pages == 4

    async def test_drafts_only(self, seeded_uow):
        result = await BrowseRecordsUseCase().execute(
            BrowseRecordsCommand("tracks", filters=FilterState({"status": "draft"})),
            seeded_uow,
        )
        assert sorted(r["title"] for r in result.records if r["status"] == "draft") == [
            "Celebração",
            "Sorriso Lindo",
        ]
        assert result.filtered == 2

    async def test_page_past_the_end_is_clamped(self, seeded_uow):
        result = await BrowseRecordsUseCase().execute(
            BrowseRecordsCommand("artists", page=9), seeded_uow
        )
        assert result.table.current_page == 1
        assert len(result.table.visible_rows) == 5


async def test_dashboard(seeded_uow):
    result = await DashboardUseCase().execute(DashboardCommand(), seeded_uow)

    assert result.stats.total_users == 5
    assert result.stats.total_artists == 5
    assert result.stats.total_tracks == 20
    assert result.stats.total_streams == SEEDED_STREAMS
    assert result.stats.avg_streams_per_track == SEEDED_STREAMS // 20
    assert [t.title for t in result.top_tracks][:2] == ["Nita Famba", "Moçambicano"]
    assert len(result.recent_artists) == 5
    assert 0 < len(result.activity) <= 10


async def test_monetization(seeded_uow):
    result = await MonetizationUseCase().execute(seeded_uow)

    assert [p.name for p in result.plans] == ["Free", "Premium", "VIP"]
    assert result.plan_stats.total_subscribers == 43150
    assert result.plan_stats.conversion_rate == pytest.approx(24.797, abs=0.001)

    summary = result.transaction_summary
    assert summary.completed_revenue == 697
    assert summary.pending_amount == 199
    assert summary.refunded_amount == 199
    assert summary.fees_by_method == {"mpesa": 3.98, "visa": 7.48}
    assert summary.net_revenue == pytest.approx(685.54)

    # Newest transaction first
    assert result.transactions[0].user_name == "João Machava"


async def test_analytics(seeded_uow):
    result = await AnalyticsUseCase().execute(
        AnalyticsCommand(period="week", months=3), seeded_uow
    )

    cards = {card.title: card for card in result.cards}
    assert cards["Novos Usuários"].value == 5
    assert cards["Receita Total"].value == 697
    assert len(result.monthly) == 3
    assert result.monthly[-1].users == 5
    assert result.monthly[-1].content == 20
