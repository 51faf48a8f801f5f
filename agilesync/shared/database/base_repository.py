# agilesync/shared/database/base_repository.py
"""
Generic entity store: the repository contract plus its SQLAlchemy implementation.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import (
    Any,
    AsyncIterator,
    Callable,
    Dict,
    Generic,
    List,
    Optional,
    Protocol,
    Type,
    TypeVar,
    runtime_checkable,
)

from sqlalchemy import delete, select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy import update as sa_update
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from agilesync.shared.database.base_model import Base
from agilesync.shared.domain.base_entity import BaseEntity, utcnow
from agilesync.shared.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    StaleEntityError,
    StoreUnavailableError,
)
from agilesync.shared.logging import get_logger

logger = get_logger(__name__)

# ---- Type constraints -------------------------------------------------------
ModelType = TypeVar("ModelType", bound=Base)
EntityType = TypeVar("EntityType", bound=BaseEntity)


class Mapper(Protocol[ModelType, EntityType]):
    def to_domain(self, model: ModelType) -> EntityType: ...
    def to_orm(self, entity: EntityType) -> ModelType: ...


@runtime_checkable
class Repository(Protocol[EntityType]):
    """
    Store contract shared by every entity kind.

    - get_by_id returns None for a missing id, never raises for it.
    - create stamps both timestamps at call time.
    - update refreshes updated_at and fails with NotFoundError for a missing id,
      StaleEntityError when the row moved past the version the entity was read at.
    - delete is idempotent.
    """

    async def get_by_id(self, id_value: str) -> Optional[EntityType]: ...
    async def get_all(self) -> List[EntityType]: ...
    async def find(self, predicate: Callable[[EntityType], bool]) -> List[EntityType]: ...
    async def find_by(self, **filters: Any) -> List[EntityType]: ...
    async def create(self, entity: EntityType) -> EntityType: ...
    async def update(self, entity: EntityType) -> EntityType: ...
    async def delete(self, id_value: str) -> None: ...


class SqlAlchemyRepository(Generic[ModelType, EntityType]):
    """
    Repository over one table. Every call runs in its own session and
    transaction, so each operation is atomic on its own and nothing spans
    several entities.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model_class: Type[ModelType],
        mapper: Mapper[ModelType, EntityType],
    ) -> None:
        self._session_factory = session_factory
        self._model_class = model_class
        self._mapper = mapper

    @property
    def entity_name(self) -> str:
        return self._model_class.__name__.removesuffix("Model")

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    yield session
        except DomainError:
            raise
        except IntegrityError as e:
            logger.warning("Integrity error", entity=self.entity_name, error=str(e.orig))
            raise ConflictError(
                f"{self.entity_name} violates a uniqueness constraint",
                details={"entity": self.entity_name},
            ) from e
        except (OperationalError, InterfaceError, PoolTimeoutError, OSError) as e:
            logger.error("Backing store unreachable", entity=self.entity_name, error=str(e))
            raise StoreUnavailableError(
                "Backing store is unavailable",
                details={"entity": self.entity_name},
            ) from e

    # --- reads ----------------------------------------------------------------
    async def get_by_id(self, id_value: str) -> Optional[EntityType]:
        async with self._transaction() as session:
            model = await session.get(self._model_class, id_value)
            return self._mapper.to_domain(model) if model is not None else None

    async def get_all(self) -> List[EntityType]:
        async with self._transaction() as session:
            result = await session.execute(select(self._model_class))
            return [self._mapper.to_domain(m) for m in result.scalars().all()]

    async def find(self, predicate: Callable[[EntityType], bool]) -> List[EntityType]:
        """Full scan, predicate evaluated in memory over domain entities."""
        return [entity for entity in await self.get_all() if predicate(entity)]

    async def find_by(self, **filters: Any) -> List[EntityType]:
        """Equality filters on mapped columns, evaluated by the database."""
        stmt = select(self._model_class)
        for key, value in filters.items():
            column = self._model_class.__table__.columns.get(key)
            if column is None:
                raise DomainError(
                    f"Unknown filter field '{key}' for {self.entity_name}",
                    code="invalid_request",
                )
            stmt = stmt.where(column == value)
        async with self._transaction() as session:
            result = await session.execute(stmt)
            return [self._mapper.to_domain(m) for m in result.scalars().all()]

    async def first_by(self, **filters: Any) -> Optional[EntityType]:
        found = await self.find_by(**filters)
        return found[0] if found else None

    # --- writes ---------------------------------------------------------------
    async def create(self, entity: EntityType) -> EntityType:
        entity.mark_created(utcnow())
        async with self._transaction() as session:
            session.add(self._mapper.to_orm(entity))
        logger.debug("Entity created", entity=self.entity_name, id=entity.id)
        return entity

    async def update(self, entity: EntityType) -> EntityType:
        """
        Replace the stored row, provided it is still at ``entity.version``.

        One conditional UPDATE does the check and the write, so of two writers
        that read the same revision exactly one wins; the other gets
        StaleEntityError and must re-read before retrying.
        """
        expected = entity.version
        entity.mark_updated(utcnow())
        values = self._column_values(self._mapper.to_orm(entity))
        values["version"] = expected + 1

        table = self._model_class.__table__
        stmt = (
            sa_update(table)
            .where(table.c.id == entity.id, table.c.version == expected)
            .values(**values)
        )
        async with self._transaction() as session:
            result = await session.execute(stmt)
            if result.rowcount == 0:
                current = await session.scalar(select(table.c.version).where(table.c.id == entity.id))
                if current is None:
                    raise NotFoundError(
                        f"{self.entity_name} not found for update",
                        details={"id": entity.id},
                    )
                logger.warning(
                    "Stale update rejected",
                    entity=self.entity_name,
                    id=entity.id,
                    expected_version=expected,
                    stored_version=current,
                )
                raise StaleEntityError(
                    f"{self.entity_name} was modified concurrently",
                    details={"id": entity.id, "version": expected},
                )
        entity.bump_version()
        logger.debug("Entity updated", entity=self.entity_name, id=entity.id, version=entity.version)
        return entity

    async def delete(self, id_value: str) -> None:
        async with self._transaction() as session:
            await session.execute(delete(self._model_class).where(self._model_class.id == id_value))

    @staticmethod
    def _column_values(model: Base) -> Dict[str, Any]:
        mapper = sa_inspect(type(model))
        return {attr.columns[0].name: getattr(model, attr.key) for attr in mapper.column_attrs}
