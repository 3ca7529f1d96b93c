"""PostgreSQL implementation of Votable repository."""

from collections import defaultdict
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import Table, and_, delete, func, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.error import ConcurrencyConflictError, ItemNotFoundError
from agora.domain.model import VotableItem, VoteLedger
from agora.domain.repository import ItemQuery, VotableRepository
from agora.domain.value import (
    ItemRef,
    ItemSortKey,
    SortDirection,
    UserId,
    VotableType,
    VoteValue,
)
from agora.persistence.mappers import item_to_dict, row_to_item, vote_to_dict
from agora.persistence.tables import comments_table, posts_table, votes_table


def _table_for(votable_type: VotableType) -> Table:
    return posts_table if votable_type == VotableType.POST else comments_table


class PostgresVotableRepository(VotableRepository):
    """PostgreSQL implementation of VotableRepository.

    Posts and comments live in their own tables; their votes share the
    votes table, keyed by (votable_type, votable_id, voter_id).
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _load_votes(
        self, votable_type: VotableType, ids: list[UUID]
    ) -> dict[UUID, list[dict[str, Any]]]:
        """Load vote rows for many items at once (avoids N+1)."""
        if not ids:
            return {}

        stmt = select(votes_table).where(
            and_(
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id.in_(ids),
            )
        )
        result = await self.session.execute(stmt)
        grouped: dict[UUID, list[dict[str, Any]]] = defaultdict(list)
        for row in result.mappings().all():
            grouped[row["votable_id"]].append(dict(row))
        return grouped

    async def find_by_ref(self, ref: ItemRef) -> Optional[VotableItem]:
        """Find an item with its vote ledger."""
        table = _table_for(ref.votable_type)
        stmt = select(table).where(table.c.id == ref.votable_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None

        votes = await self._load_votes(ref.votable_type, [ref.votable_id])
        return row_to_item(dict(row), ref.votable_type, votes.get(row["id"], []))

    async def save(self, item: VotableItem) -> VotableItem:
        """Save an item (create or replace) and its full ledger."""
        table = _table_for(item.votable_type)
        values = item_to_dict(item)
        stmt = (
            insert(table)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[table.c.id],
                set_={k: v for k, v in values.items() if k != "id"},
            )
        )
        await self.session.execute(stmt)

        await self.session.execute(
            delete(votes_table).where(
                and_(
                    votes_table.c.votable_type == item.votable_type.value,
                    votes_table.c.votable_id == item.ref.votable_id,
                )
            )
        )
        if len(item.ledger):
            await self.session.execute(
                insert(votes_table),
                [vote_to_dict(item.ref, v) for v in item.ledger.sorted_votes()],
            )

        await self.session.flush()
        return item

    async def update_ledger(self, item: VotableItem, ledger: VoteLedger) -> VotableItem:
        """Compare-and-swap the ledger on the item's version.

        The version bump and the aggregate count are written in one
        statement; vote rows are then synced to the new ledger.
        """
        table = _table_for(item.votable_type)
        stmt = (
            update(table)
            .where(and_(table.c.id == item.ref.votable_id, table.c.version == item.version))
            .values(version=table.c.version + 1, vote_count=ledger.aggregate_count)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:  # type: ignore[attr-defined]
            exists = await self.session.execute(
                select(table.c.id).where(table.c.id == item.ref.votable_id)
            )
            if exists.first() is None:
                raise ItemNotFoundError(
                    item.votable_type.value.capitalize(), str(item.ref.votable_id)
                )
            raise ConcurrencyConflictError(
                f"{item.ref} changed since version {item.version}"
            )

        old_votes = item.ledger.votes
        removed = [voter for voter in old_votes if voter not in ledger.votes]
        changed = [
            vote for voter, vote in ledger.votes.items() if old_votes.get(voter) != vote
        ]

        if removed:
            await self.session.execute(
                delete(votes_table).where(
                    and_(
                        votes_table.c.votable_type == item.votable_type.value,
                        votes_table.c.votable_id == item.ref.votable_id,
                        votes_table.c.voter_id.in_(removed),
                    )
                )
            )

        for vote in changed:
            upsert = insert(votes_table).values(**vote_to_dict(item.ref, vote))
            upsert = upsert.on_conflict_do_update(
                constraint="pk_votes",
                set_={"value": upsert.excluded.value, "updated_at": func.now()},
            )
            await self.session.execute(upsert)

        await self.session.flush()
        return item.with_ledger(ledger)

    def _filtered(self, query: ItemQuery):
        table = _table_for(query.votable_type)
        conditions = []
        if query.post_id is not None and query.votable_type == VotableType.COMMENT:
            conditions.append(table.c.post_id == query.post_id)
        return table, conditions

    async def find_ranked(self, query: ItemQuery) -> list[VotableItem]:
        """Find one page of items in ranking order."""
        table, conditions = self._filtered(query)
        descending = query.direction == SortDirection.DESC

        if query.sort == ItemSortKey.VOTES:
            # Ties: oldest first regardless of direction, then ID
            order_by = [
                table.c.vote_count.desc() if descending else table.c.vote_count.asc(),
                table.c.created_at.asc(),
                table.c.id.asc(),
            ]
        elif descending:
            order_by = [table.c.created_at.desc(), table.c.id.desc()]
        else:
            order_by = [table.c.created_at.asc(), table.c.id.asc()]

        stmt = (
            select(table)
            .where(*conditions)
            .order_by(*order_by)
            .offset(query.offset)
            .limit(query.limit)
        )
        result = await self.session.execute(stmt)
        rows = [dict(r) for r in result.mappings().all()]

        votes = await self._load_votes(query.votable_type, [r["id"] for r in rows])
        return [row_to_item(r, query.votable_type, votes.get(r["id"], [])) for r in rows]

    async def count(self, query: ItemQuery) -> int:
        """Count items matching the query filters."""
        table, conditions = self._filtered(query)
        stmt = select(func.count()).select_from(table).where(*conditions)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_votes_by_voter(
        self, voter_id: UserId, refs: list[ItemRef]
    ) -> dict[ItemRef, VoteValue]:
        """Find a voter's stance on several items (batch query)."""
        if not refs:
            return {}

        by_type: dict[VotableType, list[UUID]] = defaultdict(list)
        for ref in refs:
            by_type[ref.votable_type].append(ref.votable_id)

        stances: dict[ItemRef, VoteValue] = {}
        for votable_type, ids in by_type.items():
            stmt = select(votes_table.c.votable_id, votes_table.c.value).where(
                and_(
                    votes_table.c.voter_id == voter_id,
                    votes_table.c.votable_type == votable_type.value,
                    votes_table.c.votable_id.in_(ids),
                )
            )
            result = await self.session.execute(stmt)
            for row in result.all():
                ref = ItemRef(votable_type=votable_type, votable_id=row.votable_id)
                stances[ref] = VoteValue(row.value)
        return stances
