"""Vote toggle controller.

Decides what happens when a voter casts a stance on an item:

    current    requested   result
    ---------  ---------   ---------
    no vote    +1 / -1     vote inserted
    upvoted    +1          vote removed (toggle-off)
    downvoted  -1          vote removed (toggle-off)
    upvoted    -1          switched to downvote
    downvoted  +1          switched to upvote

Score effects are never computed as a net difference. A prior vote is
always undone with the exact inverse of the deltas it would produce, and
a new vote is then applied in full. Toggling twice therefore returns
every score to where it started.

The controller is pure: it returns the new ledger and the pending score
deltas, and the caller applies both inside one transaction.
"""

from agora.domain.model.votable import VotableItem
from agora.domain.model.vote import VoteLedger
from agora.domain.value import (
    ItemRef,
    ScoreDelta,
    ScoreReason,
    ScoringPolicy,
    UserId,
    VoteState,
    VoteValue,
)
from agora.domain.value.common import ValueObject

from .base import Service


class VoteTransition(ValueObject):
    """Outcome of one cast: the new ledger and the score deltas it implies."""

    ref: ItemRef
    voter_id: UserId
    previous_state: VoteState
    new_state: VoteState
    ledger: VoteLedger
    deltas: list[ScoreDelta]


class VoteToggle(Service):
    """Computes vote state transitions using a fixed scoring policy."""

    def __init__(self, policy: ScoringPolicy) -> None:
        """Initialize the controller.

        Args:
            policy: Point values for vote events
        """
        self.policy = policy

    def effects(
        self, item: VotableItem, voter_id: UserId, value: VoteValue
    ) -> list[ScoreDelta]:
        """Score deltas produced by a vote of the given value on item."""
        if value == VoteValue.UP:
            return [
                ScoreDelta(
                    user_id=item.owner_id,
                    amount=self.policy.upvote_credit(item.votable_type),
                    reason=ScoreReason.UPVOTE_RECEIVED,
                ),
                ScoreDelta(
                    user_id=voter_id,
                    amount=self.policy.giver_upvote_credit,
                    reason=ScoreReason.UPVOTE_GIVEN,
                ),
            ]
        # Downvotes cost the voter nothing
        return [
            ScoreDelta(
                user_id=item.owner_id,
                amount=self.policy.received_downvote_credit,
                reason=ScoreReason.DOWNVOTE_RECEIVED,
            )
        ]

    def decide(
        self, item: VotableItem, voter_id: UserId, requested: VoteValue | int
    ) -> VoteTransition:
        """Compute the transition for a voter casting requested on item.

        Args:
            item: Item as currently stored
            voter_id: The voter
            requested: +1 or -1

        Returns:
            The resulting ledger and the deltas to apply

        Raises:
            InvalidVoteValueError: If requested is not +1 or -1
        """
        value = VoteValue.parse(requested)
        current = item.ledger.get(voter_id)
        previous_state = VoteState.of(current.value if current else None)

        deltas: list[ScoreDelta] = []
        if current is not None:
            deltas.extend(
                delta.inverse()
                for delta in self.effects(item, voter_id, current.value)
            )

        if current is not None and current.value == value:
            ledger = item.ledger.remove(voter_id)
            new_state = VoteState.NO_VOTE
        else:
            ledger = item.ledger.upsert(voter_id, value)
            deltas.extend(self.effects(item, voter_id, value))
            new_state = VoteState.of(value)

        return VoteTransition(
            ref=item.ref,
            voter_id=voter_id,
            previous_state=previous_state,
            new_state=new_state,
            ledger=ledger,
            deltas=deltas,
        )
