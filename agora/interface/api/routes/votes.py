"""Vote routes."""

from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header
from pydantic import BaseModel

from agora.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from agora.domain.value import VotableType
from agora.interface.error import AuthenticationRequiredError

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for casting a vote.

    value is checked by the domain, so anything other than 1 or -1 is
    answered with 400 rather than a schema error.
    """

    value: Any = None


def _require_voter(x_user_id: UUID | None) -> str:
    if x_user_id is None:
        raise AuthenticationRequiredError("X-User-Id header is required to vote")
    return str(x_user_id)


@router.post("/posts/{post_id}/vote", response_model=CastVoteResponse)
async def vote_on_post(
    post_id: UUID,
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    x_user_id: UUID | None = Header(default=None),
) -> CastVoteResponse:
    """Upvote or downvote a post.

    Repeating the current vote removes it; the opposite value switches it.

    Args:
        post_id: Post UUID
        request: Vote value (1 or -1)
        cast_vote_use_case: Cast vote use case from DI
        x_user_id: Voter ID set by the authentication layer

    Returns:
        The voter's new state and the post's ledger
    """
    return await cast_vote_use_case.execute(
        CastVoteRequest(
            votable_type=VotableType.POST,
            votable_id=str(post_id),
            voter_id=_require_voter(x_user_id),
            value=request.value,
        )
    )


@router.post("/comments/{comment_id}/vote", response_model=CastVoteResponse)
async def vote_on_comment(
    comment_id: UUID,
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    x_user_id: UUID | None = Header(default=None),
) -> CastVoteResponse:
    """Upvote or downvote a comment.

    Args:
        comment_id: Comment UUID
        request: Vote value (1 or -1)
        cast_vote_use_case: Cast vote use case from DI
        x_user_id: Voter ID set by the authentication layer

    Returns:
        The voter's new state and the comment's ledger
    """
    return await cast_vote_use_case.execute(
        CastVoteRequest(
            votable_type=VotableType.COMMENT,
            votable_id=str(comment_id),
            voter_id=_require_voter(x_user_id),
            value=request.value,
        )
    )
