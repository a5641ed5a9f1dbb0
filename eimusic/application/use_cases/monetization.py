"""Monetization use case: subscription plan figures and transaction totals."""

from collections.abc import Sequence

from attrs import define, field

from eimusic.config import get_logger, settings
from eimusic.domain.entities import MonetizationPlan, RevenueTransaction
from eimusic.domain.repositories import UnitOfWorkProtocol

logger = get_logger(__name__)


def fee_rate(payment_method: str) -> float:
    """Provider fee rate for a payment method (0 when unknown)."""
    rates = {
        "mpesa": settings.monetization.mpesa_fee_rate,
        "visa": settings.monetization.visa_fee_rate,
        "paypal": settings.monetization.paypal_fee_rate,
    }
    return rates.get(payment_method, 0.0)


def transaction_fee(transaction: RevenueTransaction) -> float:
    """Recorded fee, or the configured rate applied to the amount."""
    if transaction.transaction_fee is not None:
        return transaction.transaction_fee
    return round(transaction.amount * fee_rate(transaction.payment_method), 2)


@define(frozen=True, slots=True)
class PlanStats:
    total_subscribers: int
    paid_subscribers: int
    conversion_rate: float
    total_monthly_revenue: float


@define(frozen=True, slots=True)
class TransactionSummary:
    """Totals over revenue transactions, in meticais."""

    completed_revenue: float
    pending_amount: float
    refunded_amount: float
    total_fees: float
    net_revenue: float
    fees_by_method: dict[str, float] = field(factory=dict)
    count_by_status: dict[str, int] = field(factory=dict)


@define(frozen=True, slots=True)
class MonetizationResult:
    plans: list[MonetizationPlan]
    plan_stats: PlanStats
    transactions: list[RevenueTransaction]
    transaction_summary: TransactionSummary


def compute_plan_stats(plans: Sequence[MonetizationPlan]) -> PlanStats:
    """Subscriber counts and conversion across all plans.

    Conversion rate is the share of subscribers on paid plans, in percent.
    """
    total = sum(plan.subscribers for plan in plans)
    paid = sum(plan.subscribers for plan in plans if plan.is_paid)
    return PlanStats(
        total_subscribers=total,
        paid_subscribers=paid,
        conversion_rate=(paid / total * 100) if total else 0.0,
        total_monthly_revenue=sum(plan.monthly_revenue for plan in plans),
    )


def summarize_transactions(
    transactions: Sequence[RevenueTransaction],
) -> TransactionSummary:
    completed = [t for t in transactions if t.status == "completed"]
    fees_by_method: dict[str, float] = {}
    count_by_status: dict[str, int] = {}

    for transaction in transactions:
        status = transaction.status
        count_by_status[status] = count_by_status.get(status, 0) + 1
    for transaction in completed:
        method = transaction.payment_method
        fees_by_method[method] = round(
            fees_by_method.get(method, 0.0) + transaction_fee(transaction), 2
        )

    completed_revenue = sum(t.amount for t in completed)
    total_fees = round(sum(fees_by_method.values()), 2)
    return TransactionSummary(
        completed_revenue=completed_revenue,
        pending_amount=sum(t.amount for t in transactions if t.status == "pending"),
        refunded_amount=sum(
            abs(t.amount) for t in transactions if t.status == "refunded"
        ),
        total_fees=total_fees,
        net_revenue=round(completed_revenue - total_fees, 2),
        fees_by_method=fees_by_method,
        count_by_status=count_by_status,
    )


@define(slots=True)
class MonetizationUseCase:
    """Load plans and transactions and aggregate them."""

    async def execute(self, uow: UnitOfWorkProtocol) -> MonetizationResult:
        async with uow:
            plans = await uow.get_plan_repository().list_active()
            transactions = await uow.get_transaction_repository().list_active(
                order_by=("transaction_date", "desc")
            )

        result = MonetizationResult(
            plans=plans,
            plan_stats=compute_plan_stats(plans),
            transactions=transactions,
            transaction_summary=summarize_transactions(transactions),
        )
        logger.info(
            "Monetization summary computed",
            plans=len(plans),
            transactions=len(transactions),
            completed_revenue=result.transaction_summary.completed_revenue,
        )
        return result
