"""Account and revenue mappers for domain-persistence conversions."""

from eimusic.domain.entities import MonetizationPlan, RevenueTransaction, User, ensure_utc
from eimusic.infrastructure.persistence.database.db_models import (
    DBMonetizationPlan,
    DBRevenueTransaction,
    DBUser,
)
from eimusic.infrastructure.persistence.repositories.base_repo import BaseModelMapper


class UserMapper(BaseModelMapper[DBUser, User]):
    """Bidirectional mapper between listener accounts and their table."""

    db_model = DBUser
    domain_model = User

    @classmethod
    async def to_domain(cls, db_model: DBUser) -> User:
        user = await super().to_domain(db_model)
        # SQLite drops tzinfo on the way back
        return user.with_changes(last_active=ensure_utc(user.last_active))


class RevenueTransactionMapper(BaseModelMapper[DBRevenueTransaction, RevenueTransaction]):
    db_model = DBRevenueTransaction
    domain_model = RevenueTransaction


class MonetizationPlanMapper(BaseModelMapper[DBMonetizationPlan, MonetizationPlan]):
    db_model = DBMonetizationPlan
    domain_model = MonetizationPlan

    @classmethod
    def to_db(cls, domain_model: MonetizationPlan) -> DBMonetizationPlan:
        db_plan = super().to_db(domain_model)
        db_plan.features = list(domain_model.features)
        return db_plan
