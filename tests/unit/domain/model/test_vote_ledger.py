"""Unit tests for VoteLedger."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from agora.domain.model import Vote, VoteLedger
from agora.domain.value import UserId, VoteValue


def _voter() -> UserId:
    return UserId(uuid4())


class TestVoteLedger:
    """Tests for the per-item vote ledger."""

    def test_empty_ledger_has_zero_count(self):
        ledger = VoteLedger()

        assert len(ledger) == 0
        assert ledger.aggregate_count == 0

    def test_get_returns_none_for_unknown_voter(self):
        assert VoteLedger().get(_voter()) is None

    def test_upsert_inserts_vote(self):
        voter = _voter()

        ledger = VoteLedger().upsert(voter, VoteValue.UP)

        assert ledger.get(voter) == Vote(voter_id=voter, value=VoteValue.UP)
        assert ledger.aggregate_count == 1

    def test_upsert_replaces_existing_vote_instead_of_adding(self):
        """A voter switching stance still holds exactly one vote."""
        voter = _voter()

        ledger = VoteLedger().upsert(voter, VoteValue.UP).upsert(voter, VoteValue.DOWN)

        assert len(ledger) == 1
        assert ledger.get(voter).value == VoteValue.DOWN
        assert ledger.aggregate_count == -1

    def test_remove_drops_vote(self):
        voter = _voter()
        ledger = VoteLedger().upsert(voter, VoteValue.DOWN)

        ledger = ledger.remove(voter)

        assert ledger.get(voter) is None
        assert ledger.aggregate_count == 0

    def test_remove_unknown_voter_is_noop(self):
        voter = _voter()
        ledger = VoteLedger().upsert(voter, VoteValue.UP)

        assert ledger.remove(_voter()) == ledger

    def test_mutations_do_not_change_original(self):
        """Readers holding an old ledger keep their snapshot."""
        voter = _voter()
        original = VoteLedger()

        original.upsert(voter, VoteValue.UP)

        assert len(original) == 0

    def test_aggregate_count_is_sum_of_values(self):
        ups = [_voter() for _ in range(3)]
        downs = [_voter() for _ in range(5)]
        ledger = VoteLedger()
        for voter in ups:
            ledger = ledger.upsert(voter, VoteValue.UP)
        for voter in downs:
            ledger = ledger.upsert(voter, VoteValue.DOWN)

        assert ledger.aggregate_count == -2
        assert ledger.aggregate_count == sum(int(v.value) for v in ledger.votes.values())

    def test_vote_stored_under_other_voter_is_rejected(self):
        a, b = _voter(), _voter()

        with pytest.raises(ValidationError):
            VoteLedger(votes={a: Vote(voter_id=b, value=VoteValue.UP)})

    def test_sorted_votes_is_deterministic(self):
        voters = [_voter() for _ in range(4)]
        ledger = VoteLedger()
        for voter in voters:
            ledger = ledger.upsert(voter, VoteValue.UP)

        ordered = ledger.sorted_votes()

        assert [str(v.voter_id) for v in ordered] == sorted(str(v) for v in voters)

    def test_ledger_is_frozen(self):
        with pytest.raises(ValidationError):
            VoteLedger().votes = {}
