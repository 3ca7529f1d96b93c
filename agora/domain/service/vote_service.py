"""Vote domain service."""

import asyncio
from typing import Any

import logfire

from agora.domain.error import (
    ConcurrencyConflictError,
    InvalidVoteValueError,
    ItemNotFoundError,
    UserNotFoundError,
)
from agora.domain.model.votable import VotableItem
from agora.domain.repository import UnitOfWorkFactory
from agora.domain.value import ItemRef, UserId, VoteValue
from agora.domain.value.common import ValueObject

from .base import Service
from .reputation_service import ReputationService
from .vote_toggle import VoteToggle, VoteTransition


class CastVoteResult(ValueObject):
    """Item after the vote was applied, and the transition that got it there."""

    item: VotableItem
    transition: VoteTransition


class VoteService(Service):
    """Domain service for casting votes.

    Each cast is one read-decide-write cycle inside a single unit of
    work: load the item, let the toggle controller decide the transition,
    compare-and-swap the ledger, and apply the score deltas. If another
    writer changed the item in between, the unit of work rolls back and
    the whole cycle is retried a bounded number of times.
    """

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        vote_toggle: VoteToggle,
        max_attempts: int = 3,
        retry_backoff_seconds: float = 0.05,
    ) -> None:
        """Initialize vote service.

        Args:
            unit_of_work_factory: Creates one transaction per attempt
            vote_toggle: Vote state transition controller
            max_attempts: Attempts before a lost race is surfaced
            retry_backoff_seconds: Base delay between attempts
        """
        self.unit_of_work_factory = unit_of_work_factory
        self.vote_toggle = vote_toggle
        self.max_attempts = max(1, max_attempts)
        self.retry_backoff_seconds = retry_backoff_seconds

    async def cast_vote(self, ref: ItemRef, voter_id: UserId, value: Any) -> CastVoteResult:
        """Cast a vote on a post or comment.

        Casting the same value twice removes the vote; casting the
        opposite value switches it.

        Args:
            ref: Item being voted on
            voter_id: The voter
            value: +1 (upvote) or -1 (downvote)

        Returns:
            Updated item and the applied transition

        Raises:
            InvalidVoteValueError: If value is not +1 or -1
            ItemNotFoundError: If the item does not exist
            UserNotFoundError: If the voter or the item's owner does not exist
            ConcurrencyConflictError: If every attempt lost the race
            PersistenceFailureError: If the commit failed
        """
        with logfire.span(
            "vote_service.cast_vote",
            votable_type=ref.votable_type.value,
            votable_id=str(ref.votable_id),
            voter_id=str(voter_id),
            value=repr(value),
        ):
            try:
                requested = VoteValue.parse(value)
            except InvalidVoteValueError:
                logfire.warn("Invalid vote value", value=repr(value))
                raise

            for attempt in range(1, self.max_attempts + 1):
                try:
                    result = await self._attempt(ref, voter_id, requested)
                except ConcurrencyConflictError as e:
                    logfire.warn(
                        "Vote lost concurrent update",
                        item=str(ref),
                        voter_id=str(voter_id),
                        attempt=attempt,
                    )
                    if attempt == self.max_attempts:
                        raise ConcurrencyConflictError(
                            f"Gave up voting on {ref} after {attempt} attempts"
                        ) from e
                    await asyncio.sleep(self.retry_backoff_seconds * attempt)
                    continue

                logfire.info(
                    "Vote cast",
                    item=str(ref),
                    voter_id=str(voter_id),
                    previous_state=result.transition.previous_state.value,
                    new_state=result.transition.new_state.value,
                    aggregate_count=result.item.aggregate_count,
                    attempt=attempt,
                )
                return result

        # Unreachable: the loop either returns or raises
        raise ConcurrencyConflictError(f"Gave up voting on {ref}")

    async def _attempt(
        self, ref: ItemRef, voter_id: UserId, requested: VoteValue
    ) -> CastVoteResult:
        """Run one read-decide-write cycle in its own unit of work."""
        async with self.unit_of_work_factory.create() as uow:
            item = await uow.items.find_by_ref(ref)
            if item is None:
                logfire.warn("Vote on non-existent item", item=str(ref))
                raise ItemNotFoundError(
                    ref.votable_type.value.capitalize(), str(ref.votable_id)
                )

            voter = await uow.users.find_by_id(voter_id)
            if voter is None:
                logfire.warn("Vote by non-existent user", voter_id=str(voter_id))
                raise UserNotFoundError(str(voter_id))

            transition = self.vote_toggle.decide(item, voter_id, requested)
            updated = await uow.items.update_ledger(item, transition.ledger)
            await ReputationService(uow.users).apply_deltas(transition.deltas)

        return CastVoteResult(item=updated, transition=transition)
