"""Shared state for the in-memory repositories."""

import asyncio

from agora.domain.model.user import User
from agora.domain.model.votable import VotableItem
from agora.domain.value import ItemRef, UserId


class InMemoryStore:
    """Committed state shared by in-memory repositories and units of work.

    Commits take the lock and replace whole (immutable) items and users,
    so readers always see either the state before a commit or after it.
    """

    def __init__(self) -> None:
        self.items: dict[ItemRef, VotableItem] = {}
        self.users: dict[UserId, User] = {}
        self.lock = asyncio.Lock()
