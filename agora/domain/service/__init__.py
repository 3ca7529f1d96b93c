"""Domain services."""

from .base import Service
from .ranking_service import (
    LeaderboardStats,
    Page,
    RankingService,
    paginate,
    rank_items,
    rank_users,
)
from .reputation_service import ReputationService
from .vote_service import CastVoteResult, VoteService
from .vote_toggle import VoteToggle, VoteTransition

__all__ = [
    "CastVoteResult",
    "LeaderboardStats",
    "Page",
    "RankingService",
    "ReputationService",
    "Service",
    "VoteService",
    "VoteToggle",
    "VoteTransition",
    "paginate",
    "rank_items",
    "rank_users",
]
