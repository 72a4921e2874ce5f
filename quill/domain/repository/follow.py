"""Follow repository interface."""

from abc import ABC, abstractmethod

from quill.domain.model.follow import Follow
from quill.domain.value import UserId


class FollowRepository(ABC):
    """Repository for follow edges.

    At most one edge exists per ordered (follower, followee) pair.
    """

    @abstractmethod
    async def add(self, follow: Follow) -> None:
        """Insert an edge; inserting an existing edge is a no-op.

        Args:
            follow: Edge to insert
        """
        pass

    @abstractmethod
    async def remove(self, follower_id: UserId, followee_id: UserId) -> None:
        """Delete the edge if present; a missing edge is a no-op.

        Args:
            follower_id: Following user
            followee_id: Followed user
        """
        pass

    @abstractmethod
    async def exists(self, follower_id: UserId, followee_id: UserId) -> bool:
        """Check whether an edge exists."""
        pass

    @abstractmethod
    async def count_followers(self, user_id: UserId) -> int:
        """Count users following ``user_id``."""
        pass

    @abstractmethod
    async def count_following(self, user_id: UserId) -> int:
        """Count users ``user_id`` follows."""
        pass
