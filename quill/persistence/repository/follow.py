"""PostgreSQL implementation of Follow repository."""

from sqlalchemy import and_, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.model import Follow
from quill.domain.repository import FollowRepository
from quill.domain.value import UserId
from quill.persistence.database import storage_guard
from quill.persistence.tables import follows_table


class PostgresFollowRepository(FollowRepository):
    """PostgreSQL implementation of FollowRepository."""

    def __init__(self, session: AsyncSession, timeout_seconds: float = 5.0) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            timeout_seconds: Upper bound for each repository call
        """
        self.session = session
        self.timeout_seconds = timeout_seconds

    def _edge(self, follower_id: UserId, followee_id: UserId):
        return and_(
            follows_table.c.follower_id == follower_id,
            follows_table.c.followee_id == followee_id,
        )

    async def add(self, follow: Follow) -> None:
        """Insert an edge, ignoring an existing one."""
        stmt = (
            insert(follows_table)
            .values(
                follower_id=follow.follower_id,
                followee_id=follow.followee_id,
                created_at=follow.created_at,
            )
            .on_conflict_do_nothing(constraint="uq_follows_pair")
        )
        async with storage_guard("follows.add", self.timeout_seconds):
            await self.session.execute(stmt)
            await self.session.flush()

    async def remove(self, follower_id: UserId, followee_id: UserId) -> None:
        """Delete an edge if present."""
        stmt = follows_table.delete().where(self._edge(follower_id, followee_id))
        async with storage_guard("follows.remove", self.timeout_seconds):
            await self.session.execute(stmt)
            await self.session.flush()

    async def exists(self, follower_id: UserId, followee_id: UserId) -> bool:
        """Check whether an edge exists."""
        stmt = select(follows_table.c.follower_id).where(
            self._edge(follower_id, followee_id)
        )
        async with storage_guard("follows.exists", self.timeout_seconds):
            result = await self.session.execute(stmt)
            return result.first() is not None

    async def _count(self, operation: str, condition) -> int:
        stmt = select(func.count()).select_from(follows_table).where(condition)
        async with storage_guard(operation, self.timeout_seconds):
            result = await self.session.execute(stmt)
            return result.scalar_one()

    async def count_followers(self, user_id: UserId) -> int:
        """Count users following ``user_id``."""
        return await self._count(
            "follows.count_followers", follows_table.c.followee_id == user_id
        )

    async def count_following(self, user_id: UserId) -> int:
        """Count users ``user_id`` follows."""
        return await self._count(
            "follows.count_following", follows_table.c.follower_id == user_id
        )
