"""List items use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from agora.application.usecase.base import BaseUseCase
from agora.domain.error import ItemNotFoundError
from agora.domain.repository import ItemQuery, VotableRepository
from agora.domain.service import RankingService
from agora.domain.value import (
    ItemRef,
    ItemSortKey,
    PostId,
    SortDirection,
    UserId,
    VotableType,
)


class ListedItem(BaseModel):
    """Post or comment in a listing."""

    votable_type: VotableType
    votable_id: str
    owner_id: str
    post_id: str | None
    aggregate_count: int
    created_at: datetime
    my_vote: int | None  # Caller's stance, None if not voted or anonymous


class ListItemsRequest(BaseModel):
    """List items request."""

    votable_type: VotableType = VotableType.POST
    post_id: str | None = None  # Required for comments
    sort: ItemSortKey = ItemSortKey.CREATED_AT
    order: SortDirection = SortDirection.DESC
    limit: int = Field(default=20, ge=1)
    offset: int = Field(default=0, ge=0)
    user_id: str | None = None  # Current user ID (if known)


class ListItemsResponse(BaseModel):
    """List items response."""

    items: list[ListedItem]
    total: int
    offset: int
    limit: int


class ListItemsUseCase(BaseUseCase):
    """Use case for listing posts, or one post's comments, in ranking order."""

    def __init__(
        self,
        ranking_service: RankingService,
        votable_repository: VotableRepository,
    ) -> None:
        """Initialize list items use case.

        Args:
            ranking_service: Ranking domain service
            votable_repository: Votable item repository
        """
        self.ranking_service = ranking_service
        self.votable_repository = votable_repository

    async def execute(self, request: ListItemsRequest) -> ListItemsResponse:
        """Execute list items flow.

        Args:
            request: List items request with ordering and pagination

        Returns:
            One page of items and the total count

        Raises:
            ItemNotFoundError: If listing comments of a post that does not exist
        """
        post_id = PostId(UUID(request.post_id)) if request.post_id else None

        if request.votable_type == VotableType.COMMENT and post_id is not None:
            parent = await self.votable_repository.find_by_ref(
                ItemRef(votable_type=VotableType.POST, votable_id=post_id)
            )
            if parent is None:
                logfire.warn("Comments requested for missing post", post_id=str(post_id))
                raise ItemNotFoundError("Post", str(post_id))

        query = ItemQuery(
            votable_type=request.votable_type,
            post_id=post_id,
            sort=request.sort,
            direction=request.order,
            offset=request.offset,
            limit=request.limit,
        )
        page = await self.ranking_service.list_items(query)

        my_votes = {}
        if request.user_id:
            voter_id = UserId(UUID(request.user_id))
            my_votes = await self.ranking_service.stances_of(voter_id, page.items)

        return ListItemsResponse(
            items=[
                ListedItem(
                    votable_type=item.votable_type,
                    votable_id=str(item.ref.votable_id),
                    owner_id=str(item.owner_id),
                    post_id=str(item.post_id) if item.post_id else None,
                    aggregate_count=item.aggregate_count,
                    created_at=item.created_at,
                    my_vote=int(my_votes[item.ref]) if item.ref in my_votes else None,
                )
                for item in page.items
            ],
            total=page.total,
            offset=page.offset,
            limit=page.limit,
        )
