"""Leaderboard use cases."""

from .get_leaderboard import (
    GetLeaderboardRequest,
    GetLeaderboardResponse,
    GetLeaderboardUseCase,
    LeaderboardEntry,
)
from .get_stats import (
    GetLeaderboardStatsResponse,
    GetLeaderboardStatsUseCase,
)

__all__ = [
    "GetLeaderboardRequest",
    "GetLeaderboardResponse",
    "GetLeaderboardStatsResponse",
    "GetLeaderboardStatsUseCase",
    "GetLeaderboardUseCase",
    "LeaderboardEntry",
]
