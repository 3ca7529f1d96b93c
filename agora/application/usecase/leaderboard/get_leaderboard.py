"""Get leaderboard use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from agora.application.usecase.base import BaseUseCase
from agora.domain.model.user import User
from agora.domain.service import RankingService


class LeaderboardEntry(BaseModel):
    """User on the leaderboard."""

    rank: int  # 1-based position across all pages
    user_id: str
    handle: str
    avatar_url: str | None
    score: int
    created_at: datetime

    @classmethod
    def from_user(cls, user: User, rank: int) -> "LeaderboardEntry":
        return cls(
            rank=rank,
            user_id=str(user.id),
            handle=user.handle,
            avatar_url=user.avatar_url,
            score=user.score,
            created_at=user.created_at,
        )


class GetLeaderboardRequest(BaseModel):
    """Get leaderboard request."""

    limit: int = Field(default=10, ge=1)
    offset: int = Field(default=0, ge=0)


class GetLeaderboardResponse(BaseModel):
    """Get leaderboard response."""

    users: list[LeaderboardEntry]
    total: int
    offset: int
    limit: int


class GetLeaderboardUseCase(BaseUseCase):
    """Use case for the user leaderboard."""

    def __init__(self, ranking_service: RankingService) -> None:
        self.ranking_service = ranking_service

    async def execute(self, request: GetLeaderboardRequest) -> GetLeaderboardResponse:
        """Execute get leaderboard flow.

        Args:
            request: Pagination parameters

        Returns:
            One page of users ordered by score, with their ranks
        """
        page = await self.ranking_service.leaderboard(
            offset=request.offset, limit=request.limit
        )
        return GetLeaderboardResponse(
            users=[
                LeaderboardEntry.from_user(user, rank=page.offset + idx + 1)
                for idx, user in enumerate(page.items)
            ],
            total=page.total,
            offset=page.offset,
            limit=page.limit,
        )
