"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

from agora.domain.model import User, VotableItem, Vote, VoteLedger
from agora.domain.value import (
    CommentId,
    ItemRef,
    PostId,
    UserId,
    VotableType,
    VoteValue,
)

BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


def make_user(handle: str = "alice", score: int = 0, minutes: int = 0) -> User:
    """Helper to build a user who joined `minutes` after BASE_TIME."""
    return User(
        id=UserId(uuid4()),
        handle=handle,
        score=score,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


def make_ledger(votes: dict[UserId, int] | None = None) -> VoteLedger:
    """Helper to build a ledger from {voter_id: +1/-1}."""
    return VoteLedger(
        votes={
            voter_id: Vote(voter_id=voter_id, value=VoteValue(value))
            for voter_id, value in (votes or {}).items()
        }
    )


def make_post(
    owner: User,
    minutes: int = 0,
    votes: dict[UserId, int] | None = None,
) -> VotableItem:
    """Helper to build a post created `minutes` after BASE_TIME."""
    return VotableItem(
        ref=ItemRef(votable_type=VotableType.POST, votable_id=PostId(uuid4())),
        owner_id=owner.id,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        ledger=make_ledger(votes),
    )


def make_comment(
    owner: User,
    post: VotableItem,
    minutes: int = 0,
    votes: dict[UserId, int] | None = None,
) -> VotableItem:
    """Helper to build a comment on a post."""
    return VotableItem(
        ref=ItemRef(votable_type=VotableType.COMMENT, votable_id=CommentId(uuid4())),
        owner_id=owner.id,
        post_id=PostId(post.ref.votable_id),
        created_at=BASE_TIME + timedelta(minutes=minutes),
        ledger=make_ledger(votes),
    )
