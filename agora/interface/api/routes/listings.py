"""Listing routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query

from agora.application.usecase.listing import (
    ListItemsRequest,
    ListItemsResponse,
    ListItemsUseCase,
)
from agora.config import ListingSettings
from agora.domain.value import ItemSortKey, SortDirection, VotableType

router = APIRouter(tags=["listings"], route_class=DishkaRoute)


def clamp_limit(limit: int | None, settings: ListingSettings) -> int:
    """Apply the default page size and cap it at the configured maximum."""
    if limit is None:
        return settings.default_limit
    return min(limit, settings.max_limit)


@router.get("/posts", response_model=ListItemsResponse)
async def list_posts(
    list_items_use_case: FromDishka[ListItemsUseCase],
    listing_settings: FromDishka[ListingSettings],
    sort: ItemSortKey = Query(default=ItemSortKey.CREATED_AT),
    order: SortDirection = Query(default=SortDirection.DESC),
    offset: int = Query(default=0, ge=0),
    limit: int | None = Query(default=None, ge=1),
    x_user_id: UUID | None = Header(default=None),
) -> ListItemsResponse:
    """List posts by vote count or creation time.

    Args:
        list_items_use_case: List items use case from DI
        listing_settings: Page size settings
        sort: "votes" or "created_at"
        order: "asc" or "desc"
        offset: Number of posts to skip
        limit: Page size, capped at the configured maximum
        x_user_id: Optional caller ID, used to report the caller's votes

    Returns:
        One page of posts and the total count
    """
    return await list_items_use_case.execute(
        ListItemsRequest(
            votable_type=VotableType.POST,
            sort=sort,
            order=order,
            offset=offset,
            limit=clamp_limit(limit, listing_settings),
            user_id=str(x_user_id) if x_user_id else None,
        )
    )


@router.get("/posts/{post_id}/comments", response_model=ListItemsResponse)
async def list_comments(
    post_id: UUID,
    list_items_use_case: FromDishka[ListItemsUseCase],
    listing_settings: FromDishka[ListingSettings],
    sort: ItemSortKey = Query(default=ItemSortKey.CREATED_AT),
    order: SortDirection = Query(default=SortDirection.DESC),
    offset: int = Query(default=0, ge=0),
    limit: int | None = Query(default=None, ge=1),
    x_user_id: UUID | None = Header(default=None),
) -> ListItemsResponse:
    """List one post's comments by vote count or creation time."""
    return await list_items_use_case.execute(
        ListItemsRequest(
            votable_type=VotableType.COMMENT,
            post_id=str(post_id),
            sort=sort,
            order=order,
            offset=offset,
            limit=clamp_limit(limit, listing_settings),
            user_id=str(x_user_id) if x_user_id else None,
        )
    )
