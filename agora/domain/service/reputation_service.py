"""Reputation domain service."""

from collections.abc import Iterable

import logfire

from agora.domain.repository import UserRepository
from agora.domain.value import ScoreDelta, UserId

from .base import Service


class ReputationService(Service):
    """Applies score deltas to users.

    Deltas are plain additions, so deltas on the same user commute and
    may be applied in any order. A missing user fails the whole batch;
    callers run this inside the same unit of work as the ledger write so
    the failure rolls both back.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize reputation service.

        Args:
            user_repository: User repository (bound to the caller's transaction)
        """
        self.user_repository = user_repository

    async def apply_delta(self, user_id: UserId, amount: int) -> None:
        """Add amount to a user's score.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        await self.user_repository.apply_score_delta(user_id, amount)

    async def apply_deltas(self, deltas: Iterable[ScoreDelta]) -> list[ScoreDelta]:
        """Apply each delta in turn.

        Args:
            deltas: Pending deltas from a vote transition

        Returns:
            The deltas that were applied

        Raises:
            UserNotFoundError: If any target user does not exist
        """
        applied: list[ScoreDelta] = []
        for delta in deltas:
            with logfire.span(
                "reputation_service.apply_delta",
                user_id=str(delta.user_id),
                amount=delta.amount,
                reason=delta.reason.value,
            ):
                await self.apply_delta(delta.user_id, delta.amount)
            applied.append(delta)
        return applied
