"""Leaderboard routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from agora.application.usecase.leaderboard import (
    GetLeaderboardRequest,
    GetLeaderboardResponse,
    GetLeaderboardStatsResponse,
    GetLeaderboardStatsUseCase,
    GetLeaderboardUseCase,
)
from agora.config import ListingSettings

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"], route_class=DishkaRoute)


@router.get("", response_model=GetLeaderboardResponse)
async def get_leaderboard(
    get_leaderboard_use_case: FromDishka[GetLeaderboardUseCase],
    listing_settings: FromDishka[ListingSettings],
    offset: int = Query(default=0, ge=0),
    limit: int | None = Query(default=None, ge=1),
) -> GetLeaderboardResponse:
    """Get users ordered by score.

    Args:
        get_leaderboard_use_case: Get leaderboard use case from DI
        listing_settings: Page size settings
        offset: Number of users to skip
        limit: Page size, capped at the configured maximum

    Returns:
        One page of ranked users and the total count
    """
    if limit is None:
        limit = listing_settings.leaderboard_default_limit
    return await get_leaderboard_use_case.execute(
        GetLeaderboardRequest(
            offset=offset, limit=min(limit, listing_settings.max_limit)
        )
    )


@router.get("/stats", response_model=GetLeaderboardStatsResponse)
async def get_leaderboard_stats(
    get_leaderboard_stats_use_case: FromDishka[GetLeaderboardStatsUseCase],
) -> GetLeaderboardStatsResponse:
    """Get user count, top user and average score."""
    return await get_leaderboard_stats_use_case.execute()
