"""Cast vote use case."""

from typing import Any
from uuid import UUID

import logfire
from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.domain.service import VoteService
from agora.domain.value import (
    ItemRef,
    ScoreReason,
    UserId,
    VotableType,
    VoteState,
)


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    voter_id: str  # User ID supplied by the authentication layer
    value: Any  # Validated by the domain so bad values map to one error


class VoteItem(BaseModel):
    """One vote in the item's ledger."""

    voter_id: str
    value: int


class ScoreDeltaItem(BaseModel):
    """One score change caused by the vote."""

    user_id: str
    amount: int
    reason: ScoreReason


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    votable_type: VotableType
    votable_id: str
    state: VoteState
    votes: list[VoteItem]
    aggregate_count: int
    deltas: list[ScoreDeltaItem]


class CastVoteUseCase(BaseUseCase):
    """Use case for casting, switching or retracting a vote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            The voter's new state and the item's full ledger

        Raises:
            InvalidVoteValueError: If value is not +1 or -1
            ItemNotFoundError: If the item does not exist
            UserNotFoundError: If the voter or owner does not exist
            ConcurrencyConflictError: If the vote kept losing races
            PersistenceFailureError: If the commit failed
        """
        ref = ItemRef(
            votable_type=request.votable_type,
            votable_id=UUID(request.votable_id),
        )
        voter_id = UserId(UUID(request.voter_id))

        result = await self.vote_service.cast_vote(ref, voter_id, request.value)

        logfire.info(
            "Vote recorded",
            item=str(ref),
            state=result.transition.new_state.value,
            deltas=len(result.transition.deltas),
        )

        return CastVoteResponse(
            votable_type=ref.votable_type,
            votable_id=str(ref.votable_id),
            state=result.transition.new_state,
            votes=[
                VoteItem(voter_id=str(vote.voter_id), value=int(vote.value))
                for vote in result.item.ledger.sorted_votes()
            ],
            aggregate_count=result.item.aggregate_count,
            deltas=[
                ScoreDeltaItem(
                    user_id=str(delta.user_id),
                    amount=delta.amount,
                    reason=delta.reason,
                )
                for delta in result.transition.deltas
            ],
        )
