"""Votable item aggregate.

Posts and comments are owned by the content layer; the voting engine
only sees them as votable items: an identity, an owner, a creation time
and a vote ledger.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.model.vote import VoteLedger
from agora.domain.value import ItemRef, PostId, UserId, VotableType


class VotableItem(DomainModel):
    """A post or comment as seen by the voting engine.

    The version is bumped on every ledger change and is used as the
    compare-and-swap token when the ledger is written back.
    """

    ref: ItemRef
    owner_id: UserId
    post_id: Optional[PostId] = None  # Parent post for comments
    created_at: datetime = Field(default_factory=datetime.now)
    ledger: VoteLedger = Field(default_factory=VoteLedger)
    version: int = Field(default=0, ge=0)

    @property
    def votable_type(self) -> VotableType:
        return self.ref.votable_type

    @property
    def aggregate_count(self) -> int:
        """Sum of all vote values on this item."""
        return self.ledger.aggregate_count

    def with_ledger(self, ledger: VoteLedger) -> "VotableItem":
        """Return the next version of this item holding the given ledger."""
        return self.model_copy(update={"ledger": ledger, "version": self.version + 1})
