"""User aggregate root.

Users accumulate score through votes on their content and through the
upvotes they give.
"""

from datetime import datetime

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import UserId


class User(DomainModel):
    """User aggregate root.

    Score has no floor; downvotes can take it below zero.
    """

    id: UserId
    handle: str = Field(min_length=1, max_length=255)
    avatar_url: str | None = None
    score: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
