"""Database connection and session management.

Provides the async engine, the session factory, and ``storage_guard``,
which bounds each storage call and maps driver failures to StorageError.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from quill.config import Settings
from quill.domain.error import ConflictError, StorageError


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database.url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,  # Repositories flush explicitly
    )


@asynccontextmanager
async def storage_guard(
    operation: str, timeout_seconds: float, conflict_message: str | None = None
) -> AsyncIterator[None]:
    """Run a block of storage calls under a timeout with mapped failures.

    Args:
        operation: Name recorded in logs, e.g. ``"users.save"``
        timeout_seconds: Upper bound for the whole block
        conflict_message: When set, unique-constraint violations raise
            ConflictError with this message instead of StorageError

    Raises:
        ConflictError: On an integrity violation when ``conflict_message`` is set
        StorageError: On timeout or any other database error
    """
    try:
        async with asyncio.timeout(timeout_seconds):
            yield
    except IntegrityError as e:
        if conflict_message is not None:
            logfire.warn("Storage conflict", operation=operation, error=str(e.orig))
            raise ConflictError(conflict_message) from e
        logfire.error("Storage integrity error", operation=operation, error=str(e))
        raise StorageError(f"{operation} failed") from e
    except TimeoutError as e:
        logfire.error(
            "Storage call timed out", operation=operation, timeout=timeout_seconds
        )
        raise StorageError(f"{operation} timed out") from e
    except SQLAlchemyError as e:
        logfire.error("Storage error", operation=operation, error=str(e))
        raise StorageError(f"{operation} failed") from e
