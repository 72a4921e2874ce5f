"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.model import User
from quill.domain.repository import UserRepository
from quill.domain.value import UserId
from quill.persistence.database import storage_guard
from quill.persistence.mappers import row_to_user, user_to_dict
from quill.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession, timeout_seconds: float = 5.0) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            timeout_seconds: Upper bound for each repository call
        """
        self.session = session
        self.timeout_seconds = timeout_seconds

    async def _find_one(self, operation: str, stmt) -> Optional[User]:
        async with storage_guard(operation, self.timeout_seconds):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        return await self._find_one("users.find_by_id", stmt)

    async def find_by_handle(self, handle_key: str) -> Optional[User]:
        """Find a user by the lower-cased form of their handle.

        Matches the functional unique index on ``lower(handle)``.
        """
        stmt = select(users_table).where(func.lower(users_table.c.handle) == handle_key)
        return await self._find_one("users.find_by_handle", stmt)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        stmt = select(users_table).where(users_table.c.email == email)
        return await self._find_one("users.find_by_email", stmt)

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Unique violations on email or handle surface as ConflictError, which
        covers two registrations racing past the service-level checks.

        Args:
            user: User to save

        Returns:
            Saved user
        """
        existing = await self.find_by_id(user.id)
        user_dict = user_to_dict(user)

        async with storage_guard(
            "users.save",
            self.timeout_seconds,
            conflict_message="Email or handle already in use",
        ):
            if existing:
                stmt = (
                    users_table.update()
                    .where(users_table.c.id == user.id)
                    .values(**user_dict)
                )
            else:
                stmt = users_table.insert().values(**user_dict)
            await self.session.execute(stmt)
            await self.session.flush()
        return user
