"""In-memory user repository for testing."""

from typing import Optional

from agora.domain.error import UserNotFoundError
from agora.domain.model.user import User
from agora.domain.repository.user import UserRepository
from agora.domain.service.ranking_service import paginate, rank_users
from agora.domain.value import UserId

from .store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    When given a staging list (by a unit of work), score deltas are
    staged there and only reach the store on commit.
    """

    def __init__(
        self,
        store: InMemoryStore,
        staged: Optional[list[tuple[UserId, int]]] = None,
    ) -> None:
        self._store = store
        self._staged = staged

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID, including any staged score changes."""
        user = self._store.users.get(user_id)
        if user is None or not self._staged:
            return user
        pending = sum(amount for uid, amount in self._staged if uid == user_id)
        return user.model_copy(update={"score": user.score + pending})

    async def save(self, user: User) -> User:
        """Save or replace a user."""
        self._store.users[user.id] = user
        return user

    async def apply_score_delta(self, user_id: UserId, amount: int) -> None:
        """Add amount to the user's score."""
        user = self._store.users.get(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))

        if self._staged is not None:
            self._staged.append((user_id, amount))
        else:
            self._store.users[user_id] = user.model_copy(
                update={"score": user.score + amount}
            )

    async def find_leaderboard(self, offset: int = 0, limit: int = 10) -> list[User]:
        """Find users in leaderboard order."""
        return paginate(rank_users(self._store.users.values()), offset, limit)

    async def count(self) -> int:
        """Count all users."""
        return len(self._store.users)

    async def average_score(self) -> float:
        """Average score across all users."""
        users = list(self._store.users.values())
        if not users:
            return 0.0
        return sum(u.score for u in users) / len(users)
