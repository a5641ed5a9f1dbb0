"""Repository layer for database operations with SQLAlchemy 2.0 best practices."""

from datetime import UTC, datetime
from typing import Any, ClassVar, Generic, TypeVar

import attrs
from sqlalchemy import Select, func, inspect, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from eimusic.config import get_logger
from eimusic.domain.entities.shared import ensure_utc
from eimusic.domain.errors import NotFoundError
from eimusic.infrastructure.persistence.database.db_models import EiMusicDBBase
from eimusic.infrastructure.persistence.repositories.repo_decorator import db_operation

logger = get_logger(__name__)

TDBModel = TypeVar("TDBModel", bound=EiMusicDBBase)
TDomainModel = TypeVar("TDomainModel")

# Columns managed by the database, never copied from domain entities
_MANAGED_COLUMNS = frozenset({"id", "created_at", "updated_at", "is_deleted", "deleted_at"})


def filter_active(model_class: type[EiMusicDBBase]) -> ColumnElement:
    """Return a filter expression for active (non-deleted) entities."""
    return model_class.is_deleted == False  # noqa: E712


class BaseModelMapper(Generic[TDBModel, TDomainModel]):
    """Bidirectional mapping between an attrs entity and its table.

    Entity fields and table columns share names, so the default mapping
    copies every field that exists on both sides. Subclasses declare the two
    classes and override ``to_domain``/``to_db`` only for fields that need
    conversion.

    Usage:
        class ArtistMapper(BaseModelMapper[DBArtist, Artist]):
            db_model = DBArtist
            domain_model = Artist
    """

    db_model: ClassVar[type]
    domain_model: ClassVar[type]

    @classmethod
    def _shared_fields(cls) -> list[str]:
        columns = {c.key for c in inspect(cls.db_model).columns}
        return [f.name for f in attrs.fields(cls.domain_model) if f.name in columns]

    @classmethod
    async def to_domain(cls, db_model: TDBModel) -> TDomainModel:
        """Convert database model to domain model."""
        values = {name: getattr(db_model, name) for name in cls._shared_fields()}
        if "created_at" in values:
            values["created_at"] = ensure_utc(values["created_at"])
        return cls.domain_model(**values)

    @classmethod
    def to_db(cls, domain_model: TDomainModel) -> TDBModel:
        """Convert domain model to database model."""
        values = {
            name: getattr(domain_model, name)
            for name in cls._shared_fields()
            if name not in _MANAGED_COLUMNS
        }
        return cls.db_model(**values)

    @classmethod
    def to_columns(cls, changes: dict[str, Any]) -> dict[str, Any]:
        """Column values for a partial update given domain field changes."""
        columns = {c.key for c in inspect(cls.db_model).columns} - _MANAGED_COLUMNS
        return {k: v for k, v in changes.items() if k in columns}

    @classmethod
    async def map_collection(cls, db_models: list[TDBModel]) -> list[TDomainModel]:
        """Map a collection of DB models to domain models."""
        if not db_models:
            return []
        return [await cls.to_domain(db_model) for db_model in db_models]


class BaseRepository(Generic[TDBModel, TDomainModel]):
    """Base repository for database operations with SQLAlchemy 2.0 best practices."""

    # Human readable entity name used in NotFoundError messages
    entity_name: ClassVar[str] = "Entity"

    def __init__(
        self,
        session: AsyncSession,
        model_class: type[TDBModel],
        mapper: type[BaseModelMapper[TDBModel, TDomainModel]],
    ) -> None:
        """Initialize repository with session and model mappings."""
        self.session = session
        self.model_class = model_class
        self.mapper = mapper
        logger.debug(
            f"Initialized {self.__class__.__name__} for {model_class.__name__}",
        )

    # -------------------------------------------------------------------------
    # SELECT STATEMENT BUILDERS
    # -------------------------------------------------------------------------

    def select(self, *columns: Any) -> Select[Any]:
        """Create select statement for active records."""
        stmt = select(*columns) if columns else select(self.model_class)
        return stmt.where(filter_active(self.model_class))

    def select_by_id(self, id_: int) -> Select[tuple[TDBModel]]:
        """Create select statement for a record by ID."""
        return select(self.model_class).where(
            self.model_class.id == id_,
            filter_active(self.model_class),
        )

    def order_by(
        self, stmt: Select[Any], field: str, ascending: bool = True
    ) -> Select[Any]:
        """Add ordering to a select statement."""
        order_col = getattr(self.model_class, field)
        return stmt.order_by(order_col if ascending else order_col.desc())

    def count_statement(
        self, conditions: dict[str, Any] | list[ColumnElement] | None = None
    ) -> Select[Any]:
        """Create a count statement for records matching conditions."""
        stmt = select(func.count(self.model_class.id)).where(
            filter_active(self.model_class)
        )

        if conditions:
            match conditions:
                case dict():
                    for field, value in conditions.items():
                        stmt = stmt.where(getattr(self.model_class, field) == value)
                case list():
                    for condition in conditions:
                        stmt = stmt.where(condition)

        return stmt

    # -------------------------------------------------------------------------
    # DIRECT DATABASE OPERATIONS (non-decorated helpers)
    # -------------------------------------------------------------------------

    async def _execute_query(self, stmt: Select[Any]) -> list[TDBModel]:
        """Execute a query and return all results directly."""
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def _get_active(self, id_: int) -> TDBModel | None:
        result = await self.session.execute(self.select_by_id(id_))
        return result.scalar_one_or_none()

    # -------------------------------------------------------------------------
    # CORE CRUD OPERATIONS
    # -------------------------------------------------------------------------

    @db_operation("list_active")
    async def list_active(
        self,
        order_by: tuple[str, str] | None = None,
        limit: int | None = None,
    ) -> list[TDomainModel]:
        """List active entities, by default in insertion order."""
        stmt = self.select()
        if order_by is not None:
            field, direction = order_by
            stmt = self.order_by(stmt, field, ascending=direction != "desc")
        stmt = stmt.order_by(self.model_class.id)
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self.mapper.map_collection(await self._execute_query(stmt))

    @db_operation("find_by")
    async def find_by(
        self,
        conditions: dict[str, Any],
        limit: int | None = None,
    ) -> list[TDomainModel]:
        """Find active entities whose columns equal the given values."""
        stmt = self.select()
        for field, value in conditions.items():
            stmt = stmt.where(getattr(self.model_class, field) == value)
        stmt = stmt.order_by(self.model_class.id)
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self.mapper.map_collection(await self._execute_query(stmt))

    @db_operation("find_by_id")
    async def find_by_id(self, entity_id: int) -> TDomainModel | None:
        """Get entity by ID, or None when missing or deleted."""
        db_entity = await self._get_active(entity_id)
        return await self.mapper.to_domain(db_entity) if db_entity else None

    @db_operation("get_by_id")
    async def get_by_id(self, entity_id: int) -> TDomainModel:
        """Get entity by ID.

        Raises:
            NotFoundError: If the entity is missing or soft-deleted
        """
        db_entity = await self._get_active(entity_id)
        if db_entity is None:
            raise NotFoundError(self.entity_name, entity_id)
        return await self.mapper.to_domain(db_entity)

    @db_operation("create")
    async def create(self, entity: TDomainModel) -> TDomainModel:
        """Create new entity and return it with its generated ID."""
        db_entity = self.mapper.to_db(entity)
        self.session.add(db_entity)

        # Flush to get the ID
        await self.session.flush()

        if db_entity.id is None:
            logger.error(f"Failed to generate ID for entity: {entity}")
            raise ValueError("Failed to create entity: No ID was generated")

        await self.session.refresh(db_entity)
        return await self.mapper.to_domain(db_entity)

    @db_operation("update")
    async def update(self, entity_id: int, changes: dict[str, Any]) -> TDomainModel:
        """Apply field changes to an active entity.

        Raises:
            NotFoundError: If the entity is missing or soft-deleted
        """
        db_entity = await self._get_active(entity_id)
        if db_entity is None:
            raise NotFoundError(self.entity_name, entity_id)

        for column, value in self.mapper.to_columns(changes).items():
            setattr(db_entity, column, value)
        db_entity.updated_at = datetime.now(UTC)

        await self.session.flush()
        await self.session.refresh(db_entity)
        return await self.mapper.to_domain(db_entity)

    @db_operation("soft_delete")
    async def soft_delete(self, entity_id: int) -> int:
        """Mark an entity deleted.

        Raises:
            NotFoundError: If the entity is missing or already deleted
        """
        stmt = (
            update(self.model_class)
            .where(
                self.model_class.id == entity_id,
                filter_active(self.model_class),
            )
            .values(
                is_deleted=True,
                deleted_at=datetime.now(UTC),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)

        if result.rowcount == 0:
            raise NotFoundError(self.entity_name, entity_id)

        return result.rowcount

    @db_operation("count")
    async def count(
        self, conditions: dict[str, Any] | list[ColumnElement] | None = None
    ) -> int:
        """Count active entities matching the given conditions."""
        count = await self.session.scalar(self.count_statement(conditions))
        return count or 0
