"""In-memory repository implementations for testing."""

from .store import InMemoryStore
from .unit_of_work import InMemoryUnitOfWork, InMemoryUnitOfWorkFactory
from .user import InMemoryUserRepository
from .votable import InMemoryVotableRepository

__all__ = [
    "InMemoryStore",
    "InMemoryUnitOfWork",
    "InMemoryUnitOfWorkFactory",
    "InMemoryUserRepository",
    "InMemoryVotableRepository",
]
