"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Iterable
from uuid import UUID

from agora.domain.model import User, VotableItem, Vote, VoteLedger
from agora.domain.value import ItemRef, PostId, UserId, VotableType, VoteValue


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        handle=row["handle"],
        avatar_url=row.get("avatar_url"),
        score=row["score"],
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return user.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert a votes row to a Vote."""
    return Vote(voter_id=UserId(_uuid(row["voter_id"])), value=VoteValue(row["value"]))


def row_to_item(
    row: Dict[str, Any],
    votable_type: VotableType,
    vote_rows: Iterable[Dict[str, Any]] = (),
) -> VotableItem:
    """Convert a post or comment row plus its vote rows to a VotableItem.

    Args:
        row: Post or comment row as dict
        votable_type: Which table the row came from
        vote_rows: The item's rows from the votes table

    Returns:
        VotableItem domain model
    """
    votes = [row_to_vote(v) for v in vote_rows]
    post_id = row.get("post_id")
    return VotableItem(
        ref=ItemRef(votable_type=votable_type, votable_id=_uuid(row["id"])),
        owner_id=UserId(_uuid(row["author_id"])),
        post_id=PostId(_uuid(post_id)) if post_id is not None else None,
        created_at=row["created_at"],
        ledger=VoteLedger(votes={v.voter_id: v for v in votes}),
        version=row["version"],
    )


def item_to_dict(item: VotableItem) -> Dict[str, Any]:
    """Convert VotableItem to a post or comment row dict (without votes).

    Args:
        item: VotableItem domain model

    Returns:
        Dict suitable for database insertion/update
    """
    values: Dict[str, Any] = {
        "id": item.ref.votable_id,
        "author_id": item.owner_id,
        "vote_count": item.aggregate_count,
        "version": item.version,
        "created_at": item.created_at,
    }
    if item.votable_type == VotableType.COMMENT:
        values["post_id"] = item.post_id
    return values


def vote_to_dict(ref: ItemRef, vote: Vote) -> Dict[str, Any]:
    """Convert a Vote on an item to a votes row dict."""
    return {
        "votable_type": ref.votable_type.value,
        "votable_id": ref.votable_id,
        "voter_id": vote.voter_id,
        "value": int(vote.value),
    }
