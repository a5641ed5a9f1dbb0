"""Tests for dashboard, monetization and analytics aggregations."""

import pytest

from eimusic.application.use_cases.analytics import (
    build_monthly_series,
    build_stats_cards,
)
from eimusic.application.use_cases.dashboard import (
    build_recent_activity,
    compute_smart_stats,
    recent_artists,
    top_genre,
    top_tracks,
)
from eimusic.application.use_cases.monetization import (
    compute_plan_stats,
    fee_rate,
    summarize_transactions,
    transaction_fee,
)
from eimusic.domain.entities import MonetizationPlan, RevenueTransaction


class TestDashboard:
    def test_smart_stats(self, users, artists, tracks, fixed_now):
        stats = compute_smart_stats(
            users, artists, tracks, fixed_now, revenue_per_stream=0.125
        )

        assert stats.total_users == 3
        assert stats.total_artists == 3
        assert stats.total_tracks == 3
        assert stats.total_streams == 106100
        assert stats.total_revenue == round(106100 * 0.125)
        assert stats.verified_artists == 2
        assert stats.active_subscriptions == 2
        assert stats.new_users_today == 1
        assert stats.avg_streams_per_track == 35367
        assert stats.top_genre == "pandza"

    def test_empty_catalog(self, fixed_now):
        stats = compute_smart_stats([], [], [], fixed_now)
        assert stats.avg_streams_per_track == 0
        assert stats.top_genre == ""

    def test_top_genre_ties_go_to_first_seen(self, artists):
        assert top_genre(artists[1:]) == "marrabenta"

    def test_top_tracks_by_plays(self, tracks):
        assert [t.title for t in top_tracks(list(reversed(tracks)), 2)] == [
            "Nita Famba",
            "Tsovani Wanga",
        ]

    def test_recent_artists_undated_last(self, artists):
        assert [a.name for a in recent_artists(artists)] == [
            "MC Roger",
            "Lizha James",
            "Marllen",
        ]

    def test_recent_activity_newest_first(self, users, tracks, artists, fixed_now):
        activity = build_recent_activity(users, tracks, artists, fixed_now, days=3)

        assert [item.title for item in activity] == [
            "Nova faixa: Nita Famba",
            "João Machava se cadastrou",
            "Lizha James foi verificado",
            "Luísa Cossa se cadastrou",
            "MC Roger foi verificado",
        ]
        assert [item.time_label for item in activity[:3]] == ["há 1h", "há 3h", "há 1 dia"]
        assert activity[-1].time_label == "01/02/2024"

    def test_recent_activity_limit(self, users, tracks, artists, fixed_now):
        activity = build_recent_activity(users, tracks, artists, fixed_now, limit=2)
        assert [item.kind for item in activity] == ["track", "user"]


class TestMonetization:
    def test_plan_stats(self):
        plans = [
            MonetizationPlan(name="Free", price=0, subscribers=32450),
            MonetizationPlan(
                name="Premium", price=199, subscribers=8500, monthly_revenue=1691500
            ),
            MonetizationPlan(name="VIP", price=299, subscribers=2200, monthly_revenue=657800),
        ]
        stats = compute_plan_stats(plans)

        assert stats.total_subscribers == 43150
        assert stats.paid_subscribers == 10700
        assert stats.conversion_rate == pytest.approx(24.797, abs=0.001)
        assert stats.total_monthly_revenue == 2349300

    def test_no_subscribers(self):
        assert compute_plan_stats([]).conversion_rate == 0.0

    def test_transaction_summary(self, transactions):
        summary = summarize_transactions(transactions)

        assert summary.completed_revenue == 498
        assert summary.pending_amount == 199
        assert summary.refunded_amount == 199
        assert summary.fees_by_method == {"mpesa": 1.99, "visa": 7.48}
        assert summary.total_fees == pytest.approx(9.47)
        assert summary.net_revenue == pytest.approx(488.53)
        assert summary.count_by_status == {"completed": 2, "refunded": 1, "pending": 1}

    @pytest.mark.parametrize(
        ("method", "expected"),
        [("mpesa", 2.0), ("visa", 5.0), ("paypal", 6.0)],
    )
    def test_fee_falls_back_to_configured_rate(self, method, expected):
        payment = RevenueTransaction(
            user_name="João", amount=200, type="one_time", payment_method=method
        )
        assert transaction_fee(payment) == pytest.approx(expected)

    def test_unknown_method_has_no_fee(self):
        assert fee_rate("cash") == 0.0


class TestAnalytics:
    def test_monthly_cards(self, users, artists, tracks, transactions, fixed_now):
        cards = {
            card.title: card
            for card in build_stats_cards(
                users, artists, tracks, transactions, "month", fixed_now
            )
        }

        assert cards["Total de Usuários"].value == 3
        assert cards["Total de Usuários"].change == pytest.approx(200.0)
        assert cards["Novos Usuários"].value == 2
        assert cards["Novos Usuários"].change == pytest.approx(100.0)
        assert cards["Total de Artistas"].change == pytest.approx(50.0)
        assert cards["Total de Reproduções"].value == 106100
        assert cards["Total de Reproduções"].change == pytest.approx(75.37, abs=0.01)

        revenue = cards["Receita Total"]
        assert revenue.value == 498
        assert revenue.prefix == "MT "
        assert revenue.change == pytest.approx(-33.44, abs=0.01)
        assert not revenue.is_increase

    def test_monthly_series(self, users, artists, tracks, transactions, fixed_now):
        series = build_monthly_series(
            users, artists, tracks, transactions, fixed_now, months=3
        )

        assert [p.label for p in series] == ["Jan", "Fev", "Mar"]
        assert [p.month for p in series] == ["2024-01", "2024-02", "2024-03"]
        assert [p.users for p in series] == [1, 0, 2]
        assert [p.artists for p in series] == [0, 1, 1]
        assert [p.content for p in series] == [1, 1, 1]
        assert [p.revenue for p in series] == [0, 299, 199]

    def test_series_crosses_year_boundary(self, fixed_now):
        series = build_monthly_series([], [], [], [], fixed_now, months=4)
        assert [p.month for p in series] == ["2023-12", "2024-01", "2024-02", "2024-03"]
