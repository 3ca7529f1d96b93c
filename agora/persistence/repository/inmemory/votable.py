"""In-memory votable item repository for testing."""

from typing import Optional

from agora.domain.error import ConcurrencyConflictError, ItemNotFoundError
from agora.domain.model.votable import VotableItem
from agora.domain.model.vote import VoteLedger
from agora.domain.repository.votable import ItemQuery, VotableRepository
from agora.domain.service.ranking_service import paginate, rank_items
from agora.domain.value import ItemRef, UserId, VoteValue

from .store import InMemoryStore


class InMemoryVotableRepository(VotableRepository):
    """In-memory implementation of VotableRepository for testing.

    When given a staging dict (by a unit of work), ledger updates are
    staged there and only reach the store on commit.
    """

    def __init__(
        self,
        store: InMemoryStore,
        staged: Optional[dict[ItemRef, VotableItem]] = None,
    ) -> None:
        self._store = store
        self._staged = staged

    def _current(self, ref: ItemRef) -> Optional[VotableItem]:
        if self._staged is not None and ref in self._staged:
            return self._staged[ref]
        return self._store.items.get(ref)

    async def find_by_ref(self, ref: ItemRef) -> Optional[VotableItem]:
        """Find an item by reference."""
        return self._current(ref)

    async def save(self, item: VotableItem) -> VotableItem:
        """Save or replace an item."""
        self._store.items[item.ref] = item
        return item

    async def update_ledger(self, item: VotableItem, ledger: VoteLedger) -> VotableItem:
        """Replace the ledger if the version has not moved on."""
        current = self._current(item.ref)
        if current is None:
            raise ItemNotFoundError(
                item.votable_type.value.capitalize(), str(item.ref.votable_id)
            )
        if current.version != item.version:
            raise ConcurrencyConflictError(
                f"{item.ref} changed (version {item.version} -> {current.version})"
            )

        updated = item.with_ledger(ledger)
        if self._staged is not None:
            self._staged[item.ref] = updated
        else:
            self._store.items[item.ref] = updated
        return updated

    def _matching(self, query: ItemQuery) -> list[VotableItem]:
        items = [
            i for i in self._store.items.values() if i.votable_type == query.votable_type
        ]
        if query.post_id is not None:
            items = [i for i in items if i.post_id == query.post_id]
        return items

    async def find_ranked(self, query: ItemQuery) -> list[VotableItem]:
        """Find one page of items in ranking order."""
        ordered = rank_items(self._matching(query), query.sort, query.direction)
        return paginate(ordered, query.offset, query.limit)

    async def count(self, query: ItemQuery) -> int:
        """Count items matching the query filters."""
        return len(self._matching(query))

    async def find_votes_by_voter(
        self, voter_id: UserId, refs: list[ItemRef]
    ) -> dict[ItemRef, VoteValue]:
        """Find a voter's stance on several items."""
        stances: dict[ItemRef, VoteValue] = {}
        for ref in refs:
            item = self._store.items.get(ref)
            vote = item.ledger.get(voter_id) if item else None
            if vote is not None:
                stances[ref] = vote.value
        return stances
