"""Tests for catalog and account entities."""

from datetime import UTC, date, datetime

import attrs
import pytest

from eimusic.domain.entities import (
    MonetizationPlan,
    RevenueTransaction,
    Track,
    User,
    to_record,
)
from eimusic.domain.entities.shared import ensure_utc


class TestArtist:
    def test_entities_are_immutable(self, artist):
        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            artist.name = "Other"

    def test_with_changes_returns_copy(self, artist):
        renamed = artist.with_changes(name="Lizha")
        assert renamed.name == "Lizha"
        assert artist.name == "Lizha James"

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError, match="must not be blank"):
            attrs.evolve(Track(title="x"), title="  ")


class TestRecords:
    def test_to_record_flattens_values(self, artist):
        record = artist.to_record()
        assert record["name"] == "Lizha James"
        assert record["joined_date"] == "2023-04-15"
        assert record["verified"] is True

    def test_list_fields_are_joined(self):
        plan = MonetizationPlan(name="VIP", price=299, features=["Sem anúncios", "Lossless"])
        assert to_record(plan)["features"] == "Sem anúncios, Lossless"


class TestAccounts:
    def test_user_email_must_contain_at(self):
        with pytest.raises(ValueError, match="Invalid email"):
            User(name="João", email="joao.machava")

    def test_refund_carries_negative_amount(self):
        refund = RevenueTransaction(
            user_name="Ana Sitoe",
            amount=-199,
            type="refund",
            payment_method="visa",
            status="refunded",
            transaction_fee=-4.98,
        )
        assert refund.net_amount == pytest.approx(-194.02)

    def test_transaction_defaults_to_pending(self):
        payment = RevenueTransaction(
            user_name="João", amount=199, type="subscription", payment_method="mpesa"
        )
        assert payment.status == "pending"
        assert payment.net_amount == 199

    def test_unknown_payment_method_rejected(self):
        with pytest.raises(ValueError):
            RevenueTransaction(
                user_name="João", amount=1, type="one_time", payment_method="cash"
            )

    def test_free_plan_is_not_paid(self):
        assert not MonetizationPlan(name="Free", price=0).is_paid
        assert MonetizationPlan(name="Premium", price=199).is_paid


def test_ensure_utc():
    naive = datetime(2024, 1, 1, 10, 0)
    assert ensure_utc(naive).tzinfo is UTC
    assert ensure_utc(None) is None
    assert date(2024, 1, 1) == ensure_utc(naive).date()
