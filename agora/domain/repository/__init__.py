"""Repository interfaces for Agora domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from agora.domain.repository.unit_of_work import UnitOfWork, UnitOfWorkFactory
from agora.domain.repository.user import UserRepository
from agora.domain.repository.votable import ItemQuery, VotableRepository

__all__ = [
    "ItemQuery",
    "UnitOfWork",
    "UnitOfWorkFactory",
    "UserRepository",
    "VotableRepository",
]
