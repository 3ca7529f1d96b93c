"""Vote entity and the per-item vote ledger.

A ledger holds every voter's stance on one post or comment. It is keyed
by voter, so at most one vote per voter per item can exist. Ledgers are
immutable: every mutation returns a new ledger, and readers holding the
old one keep a consistent snapshot.
"""

from pydantic import Field, computed_field, model_validator

from agora.domain.model.common import DomainModel
from agora.domain.value import UserId, VoteValue


class Vote(DomainModel):
    """A single voter's stance on an item."""

    voter_id: UserId
    value: VoteValue


class VoteLedger(DomainModel):
    """Set of votes on one item, keyed by voter.

    Business rules:
    - One vote per voter (structural: the map key is the voter)
    - aggregate_count is always the sum of the current vote values
    """

    votes: dict[UserId, Vote] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_keys_match_voters(self) -> "VoteLedger":
        """Every entry must be stored under its own voter's key."""
        for voter_id, vote in self.votes.items():
            if vote.voter_id != voter_id:
                raise ValueError(
                    f"Vote by {vote.voter_id} stored under voter {voter_id}"
                )
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def aggregate_count(self) -> int:
        """Sum of all vote values."""
        return sum(int(vote.value) for vote in self.votes.values())

    def get(self, voter_id: UserId) -> Vote | None:
        """Return the voter's vote, or None if they have not voted."""
        return self.votes.get(voter_id)

    def upsert(self, voter_id: UserId, value: VoteValue) -> "VoteLedger":
        """Return a ledger where the voter's stance is value."""
        votes = dict(self.votes)
        votes[voter_id] = Vote(voter_id=voter_id, value=value)
        return VoteLedger(votes=votes)

    def remove(self, voter_id: UserId) -> "VoteLedger":
        """Return a ledger without the voter's vote."""
        votes = {k: v for k, v in self.votes.items() if k != voter_id}
        return VoteLedger(votes=votes)

    def sorted_votes(self) -> list[Vote]:
        """Votes ordered by voter ID (for deterministic output)."""
        return [self.votes[k] for k in sorted(self.votes, key=str)]

    def __len__(self) -> int:
        return len(self.votes)
