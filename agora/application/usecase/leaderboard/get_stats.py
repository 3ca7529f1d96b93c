"""Get leaderboard stats use case."""

from pydantic import BaseModel

from agora.application.usecase.base import BaseUseCase
from agora.domain.service import RankingService

from .get_leaderboard import LeaderboardEntry


class GetLeaderboardStatsResponse(BaseModel):
    """Leaderboard statistics."""

    total_users: int
    top_user: LeaderboardEntry | None
    average_score: float


class GetLeaderboardStatsUseCase(BaseUseCase):
    """Use case for leaderboard summary statistics."""

    def __init__(self, ranking_service: RankingService) -> None:
        self.ranking_service = ranking_service

    async def execute(self, request: None = None) -> GetLeaderboardStatsResponse:
        stats = await self.ranking_service.leaderboard_stats()
        return GetLeaderboardStatsResponse(
            total_users=stats.total_users,
            top_user=(
                LeaderboardEntry.from_user(stats.top_user, rank=1)
                if stats.top_user
                else None
            ),
            average_score=round(stats.average_score, 2),
        )
