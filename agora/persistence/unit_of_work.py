"""PostgreSQL unit of work.

One unit of work is one database transaction. The ledger write and the
score updates it causes are committed together or not at all.
"""

from types import TracebackType
from typing import Optional

import logfire
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from agora.domain.error import (
    ConcurrencyConflictError,
    DomainError,
    PersistenceFailureError,
)
from agora.domain.repository.unit_of_work import UnitOfWork, UnitOfWorkFactory
from agora.persistence.repository import (
    PostgresUserRepository,
    PostgresVotableRepository,
)

# serialization_failure, deadlock_detected, unique_violation
_RETRYABLE_SQLSTATES = {"40001", "40P01", "23505"}


def translate_error(error: SQLAlchemyError) -> DomainError:
    """Map a database error onto the domain error taxonomy."""
    if isinstance(error, DBAPIError):
        orig = error.orig
        sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
        if sqlstate in _RETRYABLE_SQLSTATES:
            return ConcurrencyConflictError(f"Concurrent write detected: {sqlstate}")
    return PersistenceFailureError(f"Database operation failed: {error}")


class PostgresUnitOfWork(UnitOfWork):
    """Unit of work backed by one SQLAlchemy async session."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize unit of work.

        Args:
            session_factory: Factory for database sessions
        """
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = None

    async def begin(self) -> None:
        self.session = self.session_factory()
        self.items = PostgresVotableRepository(self.session)
        self.users = PostgresUserRepository(self.session)

    async def commit(self) -> None:
        assert self.session is not None
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            logfire.warn("Commit failed, rolling back", error=str(e))
            await self._rollback_session()
            raise translate_error(e) from e
        finally:
            await self.session.close()

    async def rollback(self) -> None:
        assert self.session is not None
        try:
            await self._rollback_session()
        finally:
            await self.session.close()

    async def _rollback_session(self) -> None:
        assert self.session is not None
        try:
            await self.session.rollback()
        except SQLAlchemyError as e:
            logfire.error("Rollback failed", error=str(e))
            raise translate_error(e) from e

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if exc_type is None:
            await self.commit()
            return

        logfire.warn("Session rollback", error=str(exc))
        await self.rollback()
        if isinstance(exc, SQLAlchemyError):
            raise translate_error(exc) from exc


class PostgresUnitOfWorkFactory(UnitOfWorkFactory):
    """Creates PostgreSQL units of work from a session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    def create(self) -> UnitOfWork:
        return PostgresUnitOfWork(self.session_factory)
