"""Vote use cases."""

from .cast_vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    ScoreDeltaItem,
    VoteItem,
)

__all__ = [
    "CastVoteRequest",
    "CastVoteResponse",
    "CastVoteUseCase",
    "ScoreDeltaItem",
    "VoteItem",
]
