"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from agora.config import Settings
from agora.domain.repository import (
    UnitOfWorkFactory,
    UserRepository,
    VotableRepository,
)
from agora.persistence.database import (
    begin_read_snapshot,
    create_engine,
    create_session_factory,
)
from agora.persistence.repository import (
    PostgresUserRepository,
    PostgresVotableRepository,
)
from agora.persistence.unit_of_work import PostgresUnitOfWorkFactory
from agora.util.di.base import ProviderBase
from agora.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_unit_of_work_factory(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> UnitOfWorkFactory:
        """Provide unit of work factory.

        Writes go through units of work, each one its own transaction.
        """
        return PostgresUnitOfWorkFactory(session_factory)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide read session for request scope.

        Listings and the leaderboard read through this session, all
        from one REPEATABLE READ snapshot. It is rolled back if an
        exception was raised.
        """
        async with session_factory() as session:
            await begin_read_snapshot(session)
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_votable_repository(self, session: AsyncSession) -> VotableRepository:
        """Provide votable item repository."""
        return PostgresVotableRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)
