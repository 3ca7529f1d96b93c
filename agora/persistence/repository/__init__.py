"""PostgreSQL repository implementations."""

from agora.persistence.repository.user import PostgresUserRepository
from agora.persistence.repository.votable import PostgresVotableRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresVotableRepository",
]
