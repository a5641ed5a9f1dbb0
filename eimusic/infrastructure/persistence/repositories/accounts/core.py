"""Repositories for listener accounts, transactions and plans."""

from sqlalchemy.ext.asyncio import AsyncSession

from eimusic.domain.entities import MonetizationPlan, RevenueTransaction, User
from eimusic.infrastructure.persistence.database.db_models import (
    DBMonetizationPlan,
    DBRevenueTransaction,
    DBUser,
)
from eimusic.infrastructure.persistence.repositories.accounts.mapper import (
    MonetizationPlanMapper,
    RevenueTransactionMapper,
    UserMapper,
)
from eimusic.infrastructure.persistence.repositories.base_repo import BaseRepository


class UserRepository(BaseRepository[DBUser, User]):
    """Repository for listener accounts."""

    entity_name = "User"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session=session, model_class=DBUser, mapper=UserMapper)


class TransactionRepository(BaseRepository[DBRevenueTransaction, RevenueTransaction]):
    """Repository for revenue transactions."""

    entity_name = "Transaction"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(
            session=session,
            model_class=DBRevenueTransaction,
            mapper=RevenueTransactionMapper,
        )


class PlanRepository(BaseRepository[DBMonetizationPlan, MonetizationPlan]):
    """Repository for subscription plans."""

    entity_name = "Plan"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(
            session=session, model_class=DBMonetizationPlan, mapper=MonetizationPlanMapper
        )
