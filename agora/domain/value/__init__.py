"""Domain value objects for Agora."""

from agora.domain.value.identifiers import CommentId, PostId, UserId
from agora.domain.value.scoring import ScoreDelta, ScoreReason, ScoringPolicy
from agora.domain.value.types import (
    ItemRef,
    ItemSortKey,
    SortDirection,
    VotableType,
    VoteState,
    VoteValue,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    # Types
    "ItemRef",
    "ItemSortKey",
    "SortDirection",
    "VotableType",
    "VoteState",
    "VoteValue",
    # Scoring
    "ScoreDelta",
    "ScoreReason",
    "ScoringPolicy",
]
