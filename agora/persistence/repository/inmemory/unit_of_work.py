"""In-memory unit of work for testing."""

from agora.domain.error import ConcurrencyConflictError, ItemNotFoundError
from agora.domain.model.votable import VotableItem
from agora.domain.repository.unit_of_work import UnitOfWork, UnitOfWorkFactory
from agora.domain.value import ItemRef, UserId

from .store import InMemoryStore
from .user import InMemoryUserRepository
from .votable import InMemoryVotableRepository


class InMemoryUnitOfWork(UnitOfWork):
    """Stages ledger writes and score deltas, then commits them together.

    Commit re-checks every staged item's version under the store lock,
    so two units of work that read the same version cannot both commit.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._staged_items: dict[ItemRef, VotableItem] = {}
        self._staged_deltas: list[tuple[UserId, int]] = []

    async def begin(self) -> None:
        self._staged_items = {}
        self._staged_deltas = []
        self.items = InMemoryVotableRepository(self._store, self._staged_items)
        self.users = InMemoryUserRepository(self._store, self._staged_deltas)

    async def commit(self) -> None:
        async with self._store.lock:
            for ref, updated in self._staged_items.items():
                current = self._store.items.get(ref)
                if current is None:
                    raise ItemNotFoundError(
                        ref.votable_type.value.capitalize(), str(ref.votable_id)
                    )
                if current.version != updated.version - 1:
                    raise ConcurrencyConflictError(
                        f"{ref} changed before commit (version {current.version})"
                    )

            # No awaits below: the whole batch lands in one step
            for ref, updated in self._staged_items.items():
                self._store.items[ref] = updated
            for user_id, amount in self._staged_deltas:
                user = self._store.users[user_id]
                self._store.users[user_id] = user.model_copy(
                    update={"score": user.score + amount}
                )

        self._staged_items.clear()
        self._staged_deltas.clear()

    async def rollback(self) -> None:
        self._staged_items.clear()
        self._staged_deltas.clear()


class InMemoryUnitOfWorkFactory(UnitOfWorkFactory):
    """Creates in-memory units of work over a shared store."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def create(self) -> UnitOfWork:
        return InMemoryUnitOfWork(self.store)
