"""Ranking domain service.

Orders items by aggregate vote count or creation time, and users by
score, with tie-breaks that make every ordering total. A total order
means an offset/limit page always yields the same slice for the same
snapshot, no matter which pages were requested before.

Tie-break rules:
- Items by votes: vote count (asc or desc), then oldest first, then ID
- Items by time: creation time and ID, both in the requested direction
- Users: score descending, then earliest join date, then ID
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

import logfire

from agora.domain.model.user import User
from agora.domain.model.votable import VotableItem
from agora.domain.repository import ItemQuery, UserRepository, VotableRepository
from agora.domain.value import ItemRef, ItemSortKey, SortDirection, UserId, VoteValue

from .base import Service

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of an ordered listing."""

    items: list[T]
    total: int
    offset: int
    limit: int


@dataclass
class LeaderboardStats:
    """Summary statistics over all users."""

    total_users: int
    top_user: Optional[User]
    average_score: float


def _item_tiebreak(item: VotableItem) -> tuple:
    return (item.created_at, str(item.ref.votable_id))


def rank_items(
    items: Iterable[VotableItem],
    sort: ItemSortKey = ItemSortKey.VOTES,
    direction: SortDirection = SortDirection.DESC,
) -> list[VotableItem]:
    """Sort items into ranking order.

    Args:
        items: Items to rank
        sort: Primary key (vote count or creation time)
        direction: Direction of the primary key

    Returns:
        Items in ranking order
    """
    descending = direction == SortDirection.DESC
    if sort == ItemSortKey.VOTES:
        # Stable sort: the oldest-first pre-sort survives as the tie-break
        oldest_first = sorted(items, key=_item_tiebreak)
        return sorted(oldest_first, key=lambda i: i.aggregate_count, reverse=descending)
    return sorted(items, key=_item_tiebreak, reverse=descending)


def rank_users(users: Iterable[User]) -> list[User]:
    """Sort users into leaderboard order."""
    return sorted(users, key=lambda u: (-u.score, u.created_at, str(u.id)))


def paginate(ordered: list[T], offset: int, limit: int) -> list[T]:
    """Slice one page out of an ordered list."""
    return ordered[offset : offset + limit]


class RankingService(Service):
    """Domain service for ranked listings and the user leaderboard."""

    def __init__(
        self,
        votable_repository: VotableRepository,
        user_repository: UserRepository,
    ) -> None:
        """Initialize ranking service.

        Args:
            votable_repository: Votable item repository
            user_repository: User repository
        """
        self.votable_repository = votable_repository
        self.user_repository = user_repository

    async def list_items(self, query: ItemQuery) -> Page[VotableItem]:
        """Get one page of ranked items.

        Args:
            query: Filter, ordering and pagination

        Returns:
            Page of items with the total count
        """
        with logfire.span(
            "ranking_service.list_items",
            votable_type=query.votable_type.value,
            sort=query.sort.value,
            direction=query.direction.value,
            offset=query.offset,
            limit=query.limit,
        ):
            total = await self.votable_repository.count(query)
            items = await self.votable_repository.find_ranked(query)
            logfire.info("Items ranked", count=len(items), total=total)
            return Page(items=items, total=total, offset=query.offset, limit=query.limit)

    async def stances_of(
        self, voter_id: UserId, items: list[VotableItem]
    ) -> dict[ItemRef, VoteValue]:
        """Get a voter's stance on each of the given items.

        Args:
            voter_id: The voter
            items: Items to check

        Returns:
            Mapping of item reference to vote value, for items voted on
        """
        if not items:
            return {}

        # Batch query to avoid N+1
        return await self.votable_repository.find_votes_by_voter(
            voter_id, [item.ref for item in items]
        )

    async def leaderboard(self, offset: int = 0, limit: int = 10) -> Page[User]:
        """Get one page of the user leaderboard.

        Args:
            offset: Number of users to skip
            limit: Maximum number of users

        Returns:
            Page of users ordered by score
        """
        with logfire.span("ranking_service.leaderboard", offset=offset, limit=limit):
            total = await self.user_repository.count()
            users = await self.user_repository.find_leaderboard(offset=offset, limit=limit)
            return Page(items=users, total=total, offset=offset, limit=limit)

    async def leaderboard_stats(self) -> LeaderboardStats:
        """Get summary statistics for the leaderboard."""
        with logfire.span("ranking_service.leaderboard_stats"):
            total = await self.user_repository.count()
            top = await self.user_repository.find_leaderboard(offset=0, limit=1)
            average = await self.user_repository.average_score()
            return LeaderboardStats(
                total_users=total,
                top_user=top[0] if top else None,
                average_score=average,
            )
