"""Record store seam between the import engine and the database.

The batch runner and job ledger only talk to a ``RecordStore``. Production
code wraps the request's ``AsyncSession``; tests pass an in-memory fake.
Every write commits on its own, so a rejected row never rolls back rows
written before it.
"""
import logging
import uuid
from typing import Any, Protocol

from sqlalchemy import delete, inspect, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auvora.db.base import Base
from auvora.importer.errors import RecordStoreError
from auvora.models import ClassSession, ImportJob, Lead, Member, StaffMember, Tenant

logger = logging.getLogger(__name__)

TABLE_MODELS: dict[str, type[Base]] = {
    model.__tablename__: model
    for model in (Tenant, Member, Lead, StaffMember, ClassSession, ImportJob)
}


class RecordStore(Protocol):
    async def insert(self, table: str, values: dict[str, Any]) -> dict[str, Any]:
        """Persist one row and return it with its ``id``."""
        ...

    async def update(self, table: str, record_id: uuid.UUID, values: dict[str, Any]) -> None:
        ...

    async def get(self, table: str, record_id: uuid.UUID) -> dict[str, Any] | None:
        ...

    async def delete_for_tenant(self, table: str, tenant_id: uuid.UUID) -> int:
        """Delete every row of ``table`` owned by ``tenant_id``; return the count."""
        ...


def _describe(exc: SQLAlchemyError) -> str:
    # DBAPI errors carry the driver's message on .orig; prefer it over the
    # statement dump SQLAlchemy adds.
    return str(getattr(exc, "orig", None) or exc)


class SqlAlchemyRecordStore:
    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    def _model(self, table: str) -> type[Base]:
        try:
            return TABLE_MODELS[table]
        except KeyError:
            raise RecordStoreError(f"Unknown table: {table}") from None

    async def _commit(self, action: str, table: str) -> None:
        try:
            await self._db.commit()
        except SQLAlchemyError as exc:
            await self._db.rollback()
            logger.warning("Record store %s on %s failed: %s", action, table, exc)
            raise RecordStoreError(_describe(exc)) from exc

    async def insert(self, table: str, values: dict[str, Any]) -> dict[str, Any]:
        model = self._model(table)
        row = {"id": uuid.uuid4(), **values}
        self._db.add(model(**row))
        await self._commit("insert", table)
        return row

    async def update(self, table: str, record_id: uuid.UUID, values: dict[str, Any]) -> None:
        model = self._model(table)
        try:
            result = await self._db.execute(
                update(model).where(model.id == record_id).values(**values)
            )
        except SQLAlchemyError as exc:
            await self._db.rollback()
            raise RecordStoreError(_describe(exc)) from exc
        if result.rowcount == 0:
            await self._db.rollback()
            raise RecordStoreError(f"{table} row {record_id} not found")
        await self._commit("update", table)

    async def get(self, table: str, record_id: uuid.UUID) -> dict[str, Any] | None:
        model = self._model(table)
        try:
            obj = await self._db.get(model, record_id)
        except SQLAlchemyError as exc:
            raise RecordStoreError(_describe(exc)) from exc
        if obj is None:
            return None
        return {attr.key: getattr(obj, attr.key) for attr in inspect(model).column_attrs}

    async def delete_for_tenant(self, table: str, tenant_id: uuid.UUID) -> int:
        model = self._model(table)
        try:
            result = await self._db.execute(delete(model).where(model.tenant_id == tenant_id))
        except SQLAlchemyError as exc:
            await self._db.rollback()
            raise RecordStoreError(_describe(exc)) from exc
        await self._commit("delete", table)
        return result.rowcount
