"""Unit tests for PostgreSQL unit of work error handling."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from agora.domain.error import (
    ConcurrencyConflictError,
    ItemNotFoundError,
    PersistenceFailureError,
)
from agora.persistence.unit_of_work import PostgresUnitOfWork


class SerializationFailure(Exception):
    sqlstate = "40001"


def _db_error(orig: Exception) -> OperationalError:
    return OperationalError("COMMIT", {}, orig)


@pytest.fixture
def session():
    return AsyncMock()


@pytest.fixture
def uow(session) -> PostgresUnitOfWork:
    return PostgresUnitOfWork(MagicMock(return_value=session))


class TestPostgresUnitOfWorkErrors:
    """Database errors surface as domain errors and the session is closed."""

    @pytest.mark.asyncio
    async def test_failed_rollback_is_persistence_failure(self, uow, session):
        session.rollback.side_effect = _db_error(ConnectionError("connection closed"))

        with pytest.raises(PersistenceFailureError):
            async with uow:
                raise ItemNotFoundError("Post", "missing")

        session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_rollback_after_domain_error_keeps_the_error(self, uow, session):
        with pytest.raises(ItemNotFoundError):
            async with uow:
                raise ItemNotFoundError("Post", "missing")

        session.rollback.assert_awaited_once()
        session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_serialization_failure_on_commit_is_conflict(self, uow, session):
        session.commit.side_effect = _db_error(SerializationFailure())

        with pytest.raises(ConcurrencyConflictError):
            async with uow:
                pass

        session.rollback.assert_awaited_once()
        session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_commit_and_rollback_both_failing(self, uow, session):
        session.commit.side_effect = _db_error(SerializationFailure())
        session.rollback.side_effect = _db_error(ConnectionError("connection closed"))

        with pytest.raises(PersistenceFailureError):
            async with uow:
                pass

        session.close.assert_awaited_once()
