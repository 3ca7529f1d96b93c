"""End-to-end tests for the vote endpoints."""

from uuid import uuid4

from tests.conftest import make_comment, make_post, make_user


def _vote(client, path, voter, value):
    return client.post(path, json={"value": value}, headers={"X-User-Id": str(voter.id)})


class TestVoteOnPost:
    """POST /posts/{post_id}/vote"""

    def test_upvote(self, client, seed, store):
        owner, voter = make_user("owner"), make_user("voter")
        post = make_post(owner)
        seed(owner, voter, post)

        response = _vote(client, f"/posts/{post.ref.votable_id}/vote", voter, 1)

        assert response.status_code == 200
        data = response.json()
        assert data["votable_type"] == "post"
        assert data["votable_id"] == str(post.ref.votable_id)
        assert data["state"] == "upvoted"
        assert data["aggregate_count"] == 1
        assert data["votes"] == [{"voter_id": str(voter.id), "value": 1}]
        assert sorted(d["amount"] for d in data["deltas"]) == [2, 10]
        assert store.users[owner.id].score == 10
        assert store.users[voter.id].score == 2

    def test_toggle_then_downvote(self, client, seed, store):
        owner, voter = make_user("owner"), make_user("voter")
        post = make_post(owner)
        seed(owner, voter, post)
        path = f"/posts/{post.ref.votable_id}/vote"

        _vote(client, path, voter, 1)
        toggled = _vote(client, path, voter, 1).json()
        down = _vote(client, path, voter, -1).json()

        assert toggled["state"] == "no_vote"
        assert toggled["votes"] == []
        assert down["state"] == "downvoted"
        assert down["votes"] == [{"voter_id": str(voter.id), "value": -1}]
        assert store.users[owner.id].score == -2
        assert store.users[voter.id].score == 0

    def test_switch_reports_reversal_and_new_effect(self, client, seed):
        owner, voter = make_user("owner"), make_user("voter")
        post = make_post(owner, votes={voter.id: -1})
        seed(owner, voter, post)

        data = _vote(client, f"/posts/{post.ref.votable_id}/vote", voter, 1).json()

        assert data["state"] == "upvoted"
        assert [(d["amount"], d["reason"]) for d in data["deltas"]] == [
            (2, "downvote_received"),
            (10, "upvote_received"),
            (2, "upvote_given"),
        ]

    def test_whole_number_float_counts_as_vote(self, client, seed, store):
        owner, voter = make_user("owner"), make_user("voter")
        post = make_post(owner)
        seed(owner, voter, post)

        response = _vote(client, f"/posts/{post.ref.votable_id}/vote", voter, -1.0)

        assert response.status_code == 200
        assert response.json()["state"] == "downvoted"
        assert response.json()["aggregate_count"] == -1
        assert store.users[owner.id].score == -2


class TestVoteOnComment:
    """POST /comments/{comment_id}/vote"""

    def test_upvote_comment(self, client, seed, store):
        owner, voter = make_user("owner"), make_user("voter")
        post = make_post(owner)
        comment = make_comment(owner, post)
        seed(owner, voter, post, comment)

        response = _vote(client, f"/comments/{comment.ref.votable_id}/vote", voter, 1)

        assert response.status_code == 200
        assert response.json()["votable_type"] == "comment"
        assert store.users[owner.id].score == 5


class TestVoteErrors:
    """Error responses carry {"detail": ...}."""

    def test_invalid_value_is_400(self, client, seed, store):
        owner, voter = make_user("owner"), make_user("voter")
        post = make_post(owner)
        seed(owner, voter, post)

        for value in [0, 2, "1", 1.5, None, True]:
            response = _vote(client, f"/posts/{post.ref.votable_id}/vote", voter, value)

            assert response.status_code == 400
            assert "Vote value must be 1" in response.json()["detail"]

        assert len(store.items[post.ref].ledger) == 0

    def test_missing_body_value_is_400(self, client, seed):
        owner, voter = make_user("owner"), make_user("voter")
        post = make_post(owner)
        seed(owner, voter, post)

        response = client.post(
            f"/posts/{post.ref.votable_id}/vote",
            json={},
            headers={"X-User-Id": str(voter.id)},
        )

        assert response.status_code == 400

    def test_missing_voter_header_is_401(self, client):
        response = client.post(f"/posts/{uuid4()}/vote", json={"value": 1})

        assert response.status_code == 401
        assert "X-User-Id" in response.json()["detail"]

    def test_unknown_post_is_404(self, client, seed):
        voter = make_user("voter")
        seed(voter)

        response = _vote(client, f"/posts/{uuid4()}/vote", voter, 1)

        assert response.status_code == 404
        assert response.json()["detail"].startswith("Post not found")

    def test_unknown_voter_is_404(self, client, seed):
        owner = make_user("owner")
        post = make_post(owner)
        seed(owner, post)

        response = _vote(client, f"/posts/{post.ref.votable_id}/vote", make_user("x"), 1)

        assert response.status_code == 404
        assert response.json()["detail"].startswith("User not found")

    def test_malformed_ids_are_422(self, client):
        response = client.post(
            "/posts/not-a-uuid/vote", json={"value": 1}, headers={"X-User-Id": "nope"}
        )

        assert response.status_code == 422
