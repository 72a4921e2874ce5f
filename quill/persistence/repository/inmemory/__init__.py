"""In-memory repository implementations for testing."""

from .follow import InMemoryFollowRepository
from .post import InMemoryPostRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryFollowRepository",
    "InMemoryPostRepository",
    "InMemoryUserRepository",
]
