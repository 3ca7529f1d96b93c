"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.error import UserNotFoundError
from agora.domain.model import User
from agora.domain.repository import UserRepository
from agora.domain.value import UserId
from agora.persistence.mappers import row_to_user, user_to_dict
from agora.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        # Check if user exists
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        if existing:
            # Update
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
            await self.session.execute(stmt)
        else:
            # Insert
            stmt = users_table.insert().values(**user_dict)
            await self.session.execute(stmt)

        await self.session.flush()
        return user

    async def apply_score_delta(self, user_id: UserId, amount: int) -> None:
        """Atomically add amount to the user's score.

        Args:
            user_id: User ID to update
            amount: Points to add (may be negative)

        Raises:
            UserNotFoundError: If no such user exists
        """
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(score=users_table.c.score + amount)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise UserNotFoundError(str(user_id))
        await self.session.flush()

    async def find_leaderboard(self, offset: int = 0, limit: int = 10) -> list[User]:
        """Find users by score desc, then join date asc."""
        stmt = (
            select(users_table)
            .order_by(
                users_table.c.score.desc(),
                users_table.c.created_at.asc(),
                users_table.c.id.asc(),
            )
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def count(self) -> int:
        """Count all users."""
        result = await self.session.execute(select(func.count()).select_from(users_table))
        return result.scalar_one()

    async def average_score(self) -> float:
        """Average score across all users (0 when there are none)."""
        stmt = select(func.coalesce(func.avg(users_table.c.score), 0))
        result = await self.session.execute(stmt)
        return float(result.scalar_one())
