"""Domain value objects for Agora.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum
from typing import Any
from uuid import UUID

from agora.domain.error import InvalidVoteValueError
from agora.domain.value.common import ValueObject


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class VoteValue(int, Enum):
    """A voter's stance on an item."""

    UP = 1
    DOWN = -1

    @classmethod
    def parse(cls, value: Any) -> "VoteValue":
        """Validate a raw vote value.

        Accepts 1 and -1 as JSON numbers, so 1.0 and -1.0 count too.
        Booleans and strings are rejected even when they compare equal.

        Raises:
            InvalidVoteValueError: If value is not +1 or -1
        """
        if isinstance(value, cls):
            return value
        number = value
        if type(value) is float and value.is_integer():
            number = int(value)
        if type(number) is not int or number not in (1, -1):
            raise InvalidVoteValueError(value)
        return cls(number)


class VoteState(str, Enum):
    """State of a single (voter, item) pair."""

    NO_VOTE = "no_vote"
    UPVOTED = "upvoted"
    DOWNVOTED = "downvoted"

    @classmethod
    def of(cls, value: VoteValue | None) -> "VoteState":
        """State implied by the voter's current vote value (None for no vote)."""
        if value is None:
            return cls.NO_VOTE
        return cls.UPVOTED if value == VoteValue.UP else cls.DOWNVOTED


class ItemRef(ValueObject):
    """Reference to a votable item (post or comment)."""

    votable_type: VotableType
    votable_id: UUID

    def __str__(self) -> str:
        return f"{self.votable_type.value}:{self.votable_id}"


class ItemSortKey(str, Enum):
    """Primary ordering for item listings."""

    VOTES = "votes"
    CREATED_AT = "created_at"


class SortDirection(str, Enum):
    """Direction of the primary sort key."""

    ASC = "asc"
    DESC = "desc"
