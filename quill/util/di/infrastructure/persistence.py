"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from quill.config import Settings
from quill.domain.repository import FollowRepository, PostRepository, UserRepository
from quill.persistence.database import create_engine, create_session_factory
from quill.persistence.repository import (
    PostgresFollowRepository,
    PostgresPostRepository,
    PostgresUserRepository,
)
from quill.util.di.base import ProviderBase
from quill.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if one was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(
        self, session: AsyncSession, settings: Settings
    ) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session, settings.database.timeout_seconds)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(
        self, session: AsyncSession, settings: Settings
    ) -> PostRepository:
        """Provide Post repository."""
        return PostgresPostRepository(session, settings.database.timeout_seconds)

    @provide(scope=Scope.REQUEST)
    def get_follow_repository(
        self, session: AsyncSession, settings: Settings
    ) -> FollowRepository:
        """Provide Follow repository."""
        return PostgresFollowRepository(session, settings.database.timeout_seconds)
