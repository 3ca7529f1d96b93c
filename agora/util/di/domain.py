"""Domain layer DI providers."""

from dishka import Scope, provide

from agora.config import VotingSettings
from agora.domain.repository import (
    UnitOfWorkFactory,
    UserRepository,
    VotableRepository,
)
from agora.domain.service import RankingService, VoteService, VoteToggle
from agora.domain.value import ScoringPolicy
from agora.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    The vote toggle is stateless and lives for the whole process. Services
    that hold repositories are REQUEST-scoped to align with the session
    lifecycle; the vote service opens its own unit of work per attempt.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_vote_toggle(self, policy: ScoringPolicy) -> VoteToggle:
        """Provide vote toggle controller."""
        return VoteToggle(policy=policy)

    @provide
    def get_vote_service(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        vote_toggle: VoteToggle,
        voting_settings: VotingSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            unit_of_work_factory=unit_of_work_factory,
            vote_toggle=vote_toggle,
            max_attempts=voting_settings.max_attempts,
            retry_backoff_seconds=voting_settings.retry_backoff_seconds,
        )

    @provide
    def get_ranking_service(
        self,
        votable_repository: VotableRepository,
        user_repository: UserRepository,
    ) -> RankingService:
        """Provide ranking domain service."""
        return RankingService(
            votable_repository=votable_repository,
            user_repository=user_repository,
        )
