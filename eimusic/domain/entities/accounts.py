"""Listener accounts and the money they move."""

from datetime import date, datetime
from typing import Literal, Self

import attrs
from attrs import define, field, validators

from .catalog import PAYMENT_METHODS, PaymentMethod
from .shared import RecordValue, not_blank, to_record

UserPlan = Literal["free", "premium", "vip"]
UserStatus = Literal["active", "inactive", "suspended"]
TransactionType = Literal["subscription", "one_time", "refund"]
TransactionStatus = Literal["completed", "pending", "failed", "refunded"]
PlanStatus = Literal["active", "deprecated", "coming_soon"]

USER_PLANS: tuple[str, ...] = ("free", "premium", "vip")
USER_STATUSES: tuple[str, ...] = ("active", "inactive", "suspended")
TRANSACTION_TYPES: tuple[str, ...] = ("subscription", "one_time", "refund")
TRANSACTION_STATUSES: tuple[str, ...] = ("completed", "pending", "failed", "refunded")
PLAN_STATUSES: tuple[str, ...] = ("active", "deprecated", "coming_soon")

_amount = [validators.instance_of((int, float)), validators.ge(0)]


@define(frozen=True, slots=True)
class User:
    """A listener account."""

    name: str = field(validator=[validators.instance_of(str), not_blank])
    email: str = field(validator=[validators.instance_of(str), not_blank])
    plan: UserPlan = field(default="free", validator=validators.in_(USER_PLANS))
    status: UserStatus = field(default="active", validator=validators.in_(USER_STATUSES))
    total_spent: float = field(default=0.0, validator=_amount)
    payment_method: PaymentMethod | None = field(
        default=None, validator=validators.optional(validators.in_(PAYMENT_METHODS))
    )
    phone_number: str | None = None
    has_active_subscription: bool = False
    joined_date: date | None = None
    last_active: datetime | None = None

    id: int | None = None
    created_at: datetime | None = None

    @email.validator
    def _check_email(self, _attribute: attrs.Attribute, value: str) -> None:
        if "@" not in value:
            raise ValueError(f"Invalid email address: {value!r}")

    def to_record(self) -> dict[str, RecordValue]:
        """Flatten into a record for listing screens."""
        return to_record(self)

    def with_changes(self, **changes) -> Self:
        """Create a new user with the given fields replaced."""
        return attrs.evolve(self, **changes)


@define(frozen=True, slots=True)
class RevenueTransaction:
    """A payment, subscription renewal or refund."""

    user_name: str
    # Refunds carry negative amounts and fees
    amount: float = field(validator=validators.instance_of((int, float)))
    type: TransactionType = field(validator=validators.in_(TRANSACTION_TYPES))
    payment_method: PaymentMethod = field(validator=validators.in_(PAYMENT_METHODS))
    status: TransactionStatus = field(
        default="pending", validator=validators.in_(TRANSACTION_STATUSES)
    )
    user_id: int | None = None
    plan_name: str | None = None
    transaction_date: date | None = None
    transaction_fee: float | None = None

    id: int | None = None
    created_at: datetime | None = None

    @property
    def net_amount(self) -> float:
        """Amount left after the payment provider's fee."""
        return self.amount - (self.transaction_fee or 0.0)

    def to_record(self) -> dict[str, RecordValue]:
        """Flatten into a record for listing screens."""
        return to_record(self)


@define(frozen=True, slots=True)
class MonetizationPlan:
    """A subscription tier offered to listeners."""

    name: str = field(validator=[validators.instance_of(str), not_blank])
    price: float = field(validator=_amount)
    subscribers: int = field(default=0, validator=[validators.instance_of(int), validators.ge(0)])
    monthly_revenue: float = field(default=0.0, validator=_amount)
    features: list[str] = field(factory=list)
    status: PlanStatus = field(default="active", validator=validators.in_(PLAN_STATUSES))

    id: int | None = None
    created_at: datetime | None = None

    @property
    def is_paid(self) -> bool:
        return self.price > 0

    def to_record(self) -> dict[str, RecordValue]:
        """Flatten into a record for listing screens."""
        return to_record(self)
