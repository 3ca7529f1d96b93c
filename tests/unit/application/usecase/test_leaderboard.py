"""Unit tests for the leaderboard use cases."""

import pytest

from agora.application.usecase.leaderboard import (
    GetLeaderboardRequest,
    GetLeaderboardStatsUseCase,
    GetLeaderboardUseCase,
)
from agora.domain.repository import UserRepository
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _seed_users(unit_env):
    user_repo = await unit_env.get(UserRepository)
    for handle, score, minutes in [("ann", 30, 0), ("bo", 10, 1), ("cy", 10, 2), ("di", 0, 3)]:
        await user_repo.save(make_user(handle, score=score, minutes=minutes))


class TestGetLeaderboardUseCase:
    """Tests for GetLeaderboardUseCase."""

    @pytest.mark.asyncio
    async def test_ranks_continue_across_pages(self, unit_env):
        await _seed_users(unit_env)
        use_case = await unit_env.get(GetLeaderboardUseCase)

        first = await use_case.execute(GetLeaderboardRequest(offset=0, limit=2))
        second = await use_case.execute(GetLeaderboardRequest(offset=2, limit=2))

        assert [(u.rank, u.handle) for u in first.users] == [(1, "ann"), (2, "bo")]
        assert [(u.rank, u.handle) for u in second.users] == [(3, "cy"), (4, "di")]
        assert first.total == second.total == 4


class TestGetLeaderboardStatsUseCase:
    """Tests for GetLeaderboardStatsUseCase."""

    @pytest.mark.asyncio
    async def test_stats(self, unit_env):
        await _seed_users(unit_env)
        use_case = await unit_env.get(GetLeaderboardStatsUseCase)

        stats = await use_case.execute()

        assert stats.total_users == 4
        assert stats.top_user.handle == "ann"
        assert stats.top_user.rank == 1
        assert stats.average_score == 12.5

    @pytest.mark.asyncio
    async def test_stats_empty(self, unit_env):
        use_case = await unit_env.get(GetLeaderboardStatsUseCase)

        stats = await use_case.execute()

        assert stats.total_users == 0
        assert stats.top_user is None
        assert stats.average_score == 0
