"""Domain model entities for Agora."""

from agora.domain.model.user import User
from agora.domain.model.votable import VotableItem
from agora.domain.model.vote import Vote, VoteLedger

__all__ = [
    "User",
    "VotableItem",
    "Vote",
    "VoteLedger",
]
