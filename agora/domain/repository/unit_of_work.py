"""Unit of work interface.

A unit of work groups the ledger write and the score deltas it causes
into one atomic commit. Either both become visible or neither does.
"""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Optional

from agora.domain.repository.user import UserRepository
from agora.domain.repository.votable import VotableRepository


class UnitOfWork(ABC):
    """Transactional scope over the votable and user repositories.

    Usage:
        async with factory.create() as uow:
            item = await uow.items.find_by_ref(ref)
            ...
        # committed here, or rolled back if the block raised
    """

    items: VotableRepository
    users: UserRepository

    @abstractmethod
    async def begin(self) -> None:
        """Open the transaction and bind repositories to it."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Make all staged changes visible atomically.

        Raises:
            ConcurrencyConflictError: If a concurrent writer got there first
            PersistenceFailureError: If the commit did not durably succeed
        """
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Discard all staged changes."""
        pass

    async def __aenter__(self) -> "UnitOfWork":
        await self.begin()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if exc_type is None:
            await self.commit()
        else:
            await self.rollback()


class UnitOfWorkFactory(ABC):
    """Creates a fresh unit of work for each attempt of an operation."""

    @abstractmethod
    def create(self) -> UnitOfWork:
        pass
