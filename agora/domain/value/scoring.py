"""Scoring policy and score deltas.

The scoring policy is the fixed table that maps vote events to point
deltas. It is built once from settings at startup and passed to the
vote toggle controller.
"""

from enum import Enum

from pydantic import Field

from agora.domain.value.common import ValueObject
from agora.domain.value.identifiers import UserId
from agora.domain.value.types import VotableType


class ScoringPolicy(ValueObject):
    """Point values credited or debited by votes.

    Attributes:
        post_upvote_owner_credit: Credited to a post's owner per upvote
        comment_upvote_owner_credit: Credited to a comment's owner per upvote
        giver_upvote_credit: Credited to the voter for each upvote given
        received_downvote_credit: Applied to the owner per downvote (usually negative)
    """

    post_upvote_owner_credit: int = 10
    comment_upvote_owner_credit: int = 5
    giver_upvote_credit: int = 2
    received_downvote_credit: int = -2

    def upvote_credit(self, votable_type: VotableType) -> int:
        """Owner credit for an upvote on the given kind of item."""
        if votable_type == VotableType.POST:
            return self.post_upvote_owner_credit
        return self.comment_upvote_owner_credit


class ScoreReason(str, Enum):
    """Why a score delta was produced."""

    UPVOTE_RECEIVED = "upvote_received"
    UPVOTE_GIVEN = "upvote_given"
    DOWNVOTE_RECEIVED = "downvote_received"


class ScoreDelta(ValueObject):
    """A pending change to one user's score."""

    user_id: UserId
    amount: int
    reason: ScoreReason
    reversal: bool = Field(default=False)

    def inverse(self) -> "ScoreDelta":
        """Delta that exactly cancels this one."""
        return ScoreDelta(
            user_id=self.user_id,
            amount=-self.amount,
            reason=self.reason,
            reversal=not self.reversal,
        )
