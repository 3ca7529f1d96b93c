"""Application layer DI providers."""

from dishka import Scope, provide

from agora.application.usecase.leaderboard import (
    GetLeaderboardStatsUseCase,
    GetLeaderboardUseCase,
)
from agora.application.usecase.listing import ListItemsUseCase
from agora.application.usecase.vote import CastVoteUseCase
from agora.domain.repository import VotableRepository
from agora.domain.service import RankingService, VoteService
from agora.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    # Listing use cases
    @provide(scope=Scope.REQUEST)
    def get_list_items_use_case(
        self,
        ranking_service: RankingService,
        votable_repository: VotableRepository,
    ) -> ListItemsUseCase:
        """Provide list items use case."""
        return ListItemsUseCase(
            ranking_service=ranking_service,
            votable_repository=votable_repository,
        )

    # Leaderboard use cases
    @provide(scope=Scope.REQUEST)
    def get_leaderboard_use_case(
        self, ranking_service: RankingService
    ) -> GetLeaderboardUseCase:
        """Provide get leaderboard use case."""
        return GetLeaderboardUseCase(ranking_service=ranking_service)

    @provide(scope=Scope.REQUEST)
    def get_leaderboard_stats_use_case(
        self, ranking_service: RankingService
    ) -> GetLeaderboardStatsUseCase:
        """Provide get leaderboard stats use case."""
        return GetLeaderboardStatsUseCase(ranking_service=ranking_service)
