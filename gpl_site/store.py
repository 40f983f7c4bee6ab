"""Persistence gateway.

``Store`` wraps one ``AsyncSession`` and is the only place that talks to the
database. It is built per request from the SQLAlchemy plugin's session
(see ``provide_store``); the engine itself is opened and disposed by the
plugin with the application lifespan.

Every driver or SQLAlchemy failure leaves this module as ``PersistenceError``.
"""

import logging
import uuid
from typing import Any, List, NoReturn, Optional, Type, TypeVar

from sqlalchemy import Select, func, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gpl_site.errors import DuplicateRecordError, PersistenceError
from gpl_site.models import Base

logger = logging.getLogger("GPL.store")

ModelT = TypeVar("ModelT", bound=Base)

# asyncpg raises plain OSError subclasses when the server cannot be reached
STORE_ERRORS = (SQLAlchemyError, OSError)


class Store:
    """Typed insert/select operations over the site's tables."""
    
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
    
    async def _fail(self, exc: BaseException, action: str) -> NoReturn:
        try:
            await self.session.rollback()
        except STORE_ERRORS as rollback_exc:
            logger.warning(f"Rollback after failed {action} also failed: {rollback_exc}")
        if isinstance(exc, IntegrityError):
            raise DuplicateRecordError(f"Could not {action}: constraint violated", {"action": action}) from exc
        raise PersistenceError(f"Could not {action}: {type(exc).__name__}", {"action": action}) from exc
    
    async def insert(self, record: ModelT) -> ModelT:
        """Add a new row and commit. Returns the row with its generated id and timestamps."""
        self.session.add(record)
        try:
            await self.session.commit()
            await self.session.refresh(record)
        except STORE_ERRORS as exc:
            await self._fail(exc, f"insert into {record.__tablename__}")
        return record
    
    async def save(self, record: ModelT) -> ModelT:
        """Commit pending changes to an already loaded row."""
        try:
            await self.session.commit()
            await self.session.refresh(record)
        except STORE_ERRORS as exc:
            await self._fail(exc, f"update {record.__tablename__}")
        return record
    
    async def delete(self, record: Base) -> None:
        try:
            await self.session.delete(record)
            await self.session.commit()
        except STORE_ERRORS as exc:
            await self._fail(exc, f"delete from {record.__tablename__}")
    
    async def get(self, model: Type[ModelT], record_id: uuid.UUID) -> Optional[ModelT]:
        try:
            return await self.session.get(model, record_id)
        except STORE_ERRORS as exc:
            await self._fail(exc, f"read {model.__tablename__}")
    
    async def fetch_all(self, stmt: Select) -> List[Any]:
        """Run a select and return its scalar rows."""
        try:
            result = await self.session.execute(stmt)
            return list(result.scalars().all())
        except STORE_ERRORS as exc:
            await self._fail(exc, "run query")
    
    async def fetch_one(self, stmt: Select) -> Optional[Any]:
        try:
            result = await self.session.execute(stmt)
            return result.scalars().first()
        except STORE_ERRORS as exc:
            await self._fail(exc, "run query")
    
    async def count(self, stmt: Select) -> int:
        """Count the rows a select would return."""
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        try:
            result = await self.session.execute(count_stmt)
            return result.scalar() or 0
        except STORE_ERRORS as exc:
            await self._fail(exc, "count rows")
    
    async def ping(self) -> bool:
        """Round-trip to the database. Never raises."""
        try:
            await self.session.execute(text("SELECT 1"))
            return True
        except STORE_ERRORS as exc:
            logger.warning(f"Database ping failed: {type(exc).__name__}: {exc}")
            return False


def provide_store(session: AsyncSession) -> Store:
    """Litestar dependency: a Store bound to the request's session."""
    return Store(session)
