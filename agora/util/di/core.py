"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from agora.config import ListingSettings, Settings, VotingSettings
from agora.domain.value import ScoringPolicy
from agora.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_scoring_policy(self, settings: Settings) -> ScoringPolicy:
        """Provide the scoring policy, fixed for the life of the process."""
        return settings.scoring.to_policy()

    @provide(scope=Scope.APP)
    def provide_voting_settings(self, settings: Settings) -> VotingSettings:
        """Provide voting settings."""
        return settings.voting

    @provide(scope=Scope.APP)
    def provide_listing_settings(self, settings: Settings) -> ListingSettings:
        """Provide listing settings."""
        return settings.listing
