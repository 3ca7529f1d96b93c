"""End-to-end tests for the leaderboard and health endpoints."""

from tests.conftest import make_post, make_user


class TestLeaderboard:
    """GET /leaderboard"""

    def test_votes_move_users_up(self, client, seed):
        alice = make_user("alice", minutes=0)
        bob = make_user("bob", minutes=1)
        carol = make_user("carol", minutes=2)
        post = make_post(carol)
        seed(alice, bob, carol, post)

        client.post(
            f"/posts/{post.ref.votable_id}/vote",
            json={"value": 1},
            headers={"X-User-Id": str(alice.id)},
        )
        data = client.get("/leaderboard").json()

        assert [(u["rank"], u["handle"], u["score"]) for u in data["users"]] == [
            (1, "carol", 10),
            (2, "alice", 2),
            (3, "bob", 0),
        ]
        assert data["total"] == 3
        assert data["limit"] == 10

    def test_rank_includes_offset(self, client, seed):
        seed(*[make_user(f"u{i}", score=100 - i, minutes=i) for i in range(5)])

        data = client.get("/leaderboard", params={"offset": 3, "limit": 2}).json()

        assert [(u["rank"], u["handle"]) for u in data["users"]] == [(4, "u3"), (5, "u4")]


class TestLeaderboardStats:
    """GET /leaderboard/stats"""

    def test_empty(self, client):
        data = client.get("/leaderboard/stats").json()

        assert data == {"total_users": 0, "top_user": None, "average_score": 0}

    def test_with_users(self, client, seed):
        seed(make_user("a", score=9), make_user("b", score=-3), make_user("c", score=0))

        data = client.get("/leaderboard/stats").json()

        assert data["total_users"] == 3
        assert data["top_user"]["handle"] == "a"
        assert data["average_score"] == 2


class TestHealth:
    """GET /health"""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
