"""Votable item repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import Field

from agora.domain.model.votable import VotableItem
from agora.domain.model.vote import VoteLedger
from agora.domain.value import (
    ItemRef,
    ItemSortKey,
    PostId,
    SortDirection,
    UserId,
    VotableType,
    VoteValue,
)
from agora.domain.value.common import ValueObject


class ItemQuery(ValueObject):
    """Listing query over votable items of one type."""

    votable_type: VotableType = VotableType.POST
    post_id: Optional[PostId] = None  # Restrict comments to one post
    sort: ItemSortKey = ItemSortKey.CREATED_AT
    direction: SortDirection = SortDirection.DESC
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=20, ge=1)


class VotableRepository(ABC):
    """Repository for votable items (posts and comments) and their ledgers.

    Defines the contract for ledger persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_ref(self, ref: ItemRef) -> Optional[VotableItem]:
        """Find an item with its full vote ledger.

        Args:
            ref: Item reference

        Returns:
            The item if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, item: VotableItem) -> VotableItem:
        """Save an item (create or replace) together with its ledger.

        Args:
            item: The item to save

        Returns:
            The saved item
        """
        pass

    @abstractmethod
    async def update_ledger(self, item: VotableItem, ledger: VoteLedger) -> VotableItem:
        """Replace an item's ledger if nobody else has changed it.

        The write succeeds only if the stored version still equals
        item.version; the stored aggregate count is rewritten in the
        same step.

        Args:
            item: The item as it was read
            ledger: The new ledger

        Returns:
            The item at its next version

        Raises:
            ConcurrencyConflictError: If the stored version has moved on
            ItemNotFoundError: If the item no longer exists
        """
        pass

    @abstractmethod
    async def find_ranked(self, query: ItemQuery) -> list[VotableItem]:
        """Find one page of items in ranking order.

        Args:
            query: Filter, ordering and pagination

        Returns:
            Items for the requested page
        """
        pass

    @abstractmethod
    async def count(self, query: ItemQuery) -> int:
        """Count items matching the query filters (pagination ignored)."""
        pass

    @abstractmethod
    async def find_votes_by_voter(
        self, voter_id: UserId, refs: list[ItemRef]
    ) -> dict[ItemRef, VoteValue]:
        """Find a voter's stance on several items (batch query).

        Args:
            voter_id: The voter
            refs: Items to check

        Returns:
            Mapping of item reference to vote value, for items voted on
        """
        pass
