"""
SiteCMS Backend: Generic Collection Repository
===============================================

What:  List / count / create / update / delete for one ORM model.
Who:   Subclassed by the per-collection repositories.

Semantics shared by every collection:
    - list_all():  all rows in id order
    - create():    inserts and flushes so the new id is available at once
    - update():    overwrites the given columns; returns the affected row count
    - delete():    unconditional removal; returns the affected row count

An update or delete that matches no row is not an error. The row count is
returned to the caller, which reports success either way.
"""

import logging
from typing import Any, Dict, Generic, List, Type, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.database import Base
from sitecms.exceptions import SiteCMSError, StorageError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """
    Base repository bound to a single AsyncSession.

    Subclasses set `model` and `resource_name` (used in error messages,
    e.g. "Failed to create service").
    """

    model: Type[ModelT]
    resource_name: str = "record"

    def __init__(self, session: AsyncSession):
        self.session = session

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_all(self) -> List[ModelT]:
        try:
            result = await self.session.execute(
                select(self.model).order_by(self.model.id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._storage_error("list", e)

    async def count(self) -> int:
        try:
            result = await self.session.execute(select(func.count(self.model.id)))
            return result.scalar() or 0
        except SQLAlchemyError as e:
            raise self._storage_error("count", e)

    # ── Writes ────────────────────────────────────────────────────────────

    async def create(self, **values: Any) -> ModelT:
        record = self.model(**values)
        self.session.add(record)
        try:
            # flush assigns the AUTOINCREMENT id without committing
            await self.session.flush()
        except IntegrityError as e:
            raise self._integrity_error("create", e)
        except SQLAlchemyError as e:
            raise self._storage_error("create", e)
        logger.info("Created %s id=%s", self.resource_name, record.id)
        return record

    async def update(self, record_id: int, values: Dict[str, Any]) -> int:
        statement = (
            update(self.model)
            .where(self.model.id == record_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(statement)
        except IntegrityError as e:
            raise self._integrity_error("update", e)
        except SQLAlchemyError as e:
            raise self._storage_error("update", e)
        if result.rowcount == 0:
            logger.debug("Update of %s id=%s matched no row", self.resource_name, record_id)
        return result.rowcount

    async def delete(self, record_id: int) -> int:
        statement = (
            delete(self.model)
            .where(self.model.id == record_id)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise self._storage_error("delete", e)
        if result.rowcount == 0:
            logger.debug("Delete of %s id=%s matched no row", self.resource_name, record_id)
        return result.rowcount

    # ── Error Translation ─────────────────────────────────────────────────

    def _integrity_error(self, action: str, exc: IntegrityError) -> SiteCMSError:
        """Hook for collections with constraints worth reporting to the client."""
        return self._storage_error(action, exc)

    def _storage_error(self, action: str, exc: Exception) -> StorageError:
        logger.error(
            "Database error on %s %s: %s", action, self.resource_name, str(exc)
        )
        return StorageError(
            message=f"Failed to {action} {self.resource_name}",
            context={"error_type": type(exc).__name__},
        )
