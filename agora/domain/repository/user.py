"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from agora.domain.model.user import User
from agora.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def apply_score_delta(self, user_id: UserId, amount: int) -> None:
        """Atomically add amount to the user's score.

        No bounds are enforced; the score may go negative.

        Args:
            user_id: The user's unique identifier
            amount: Points to add (negative to debit)

        Raises:
            UserNotFoundError: If the user does not exist
        """
        pass

    @abstractmethod
    async def find_leaderboard(self, offset: int = 0, limit: int = 10) -> list[User]:
        """Find users ordered by score (desc), then join date (asc).

        Args:
            offset: Number of users to skip
            limit: Maximum number of users to return

        Returns:
            One page of the leaderboard
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all users."""
        pass

    @abstractmethod
    async def average_score(self) -> float:
        """Average score across all users (0 when there are none)."""
        pass
