"""Account repositories: users, transactions and monetization plans."""

from eimusic.infrastructure.persistence.repositories.accounts.core import (
    PlanRepository,
    TransactionRepository,
    UserRepository,
)
from eimusic.infrastructure.persistence.repositories.accounts.mapper import (
    MonetizationPlanMapper,
    RevenueTransactionMapper,
    UserMapper,
)

__all__ = [
    "MonetizationPlanMapper",
    "PlanRepository",
    "RevenueTransactionMapper",
    "TransactionRepository",
    "UserMapper",
    "UserRepository",
]
