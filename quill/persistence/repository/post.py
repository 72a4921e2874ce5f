"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.model import Post
from quill.domain.repository import PostRepository
from quill.domain.value import PostId, UserId
from quill.persistence.database import storage_guard
from quill.persistence.mappers import post_to_dict, row_to_post
from quill.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession, timeout_seconds: float = 5.0) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            timeout_seconds: Upper bound for each repository call
        """
        self.session = session
        self.timeout_seconds = timeout_seconds

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        async with storage_guard("posts.find_by_id", self.timeout_seconds):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_post(dict(row)) if row else None

    async def find_all(self) -> List[Post]:
        """Find all posts, newest first."""
        stmt = select(posts_table).order_by(posts_table.c.created_at.desc())
        async with storage_guard("posts.find_all", self.timeout_seconds):
            result = await self.session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_post(dict(row)) for row in rows]

    async def find_by_author(self, author_id: UserId) -> List[Post]:
        """Find posts by one author, newest first."""
        stmt = (
            select(posts_table)
            .where(posts_table.c.author_id == author_id)
            .order_by(posts_table.c.created_at.desc())
        )
        async with storage_guard("posts.find_by_author", self.timeout_seconds):
            result = await self.session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_post(dict(row)) for row in rows]

    async def count_by_author(self, author_id: UserId) -> int:
        """Count posts by one author."""
        stmt = (
            select(func.count())
            .select_from(posts_table)
            .where(posts_table.c.author_id == author_id)
        )
        async with storage_guard("posts.count_by_author", self.timeout_seconds):
            result = await self.session.execute(stmt)
            return result.scalar_one()

    async def save(self, post: Post) -> Post:
        """Insert a post (posts are immutable once written)."""
        async with storage_guard("posts.save", self.timeout_seconds):
            await self.session.execute(posts_table.insert().values(**post_to_dict(post)))
            await self.session.flush()
        return post

    async def delete(self, post_id: PostId) -> None:
        """Delete a post (hard delete)."""
        async with storage_guard("posts.delete", self.timeout_seconds):
            await self.session.execute(
                posts_table.delete().where(posts_table.c.id == post_id)
            )
            await self.session.flush()
