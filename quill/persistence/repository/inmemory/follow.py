"""In-memory follow repository for testing."""

from quill.domain.model.follow import Follow
from quill.domain.repository.follow import FollowRepository
from quill.domain.value import UserId


class InMemoryFollowRepository(FollowRepository):
    """In-memory implementation of FollowRepository for testing."""

    def __init__(self) -> None:
        self._edges: dict[tuple[UserId, UserId], Follow] = {}

    async def add(self, follow: Follow) -> None:
        """Insert an edge, keeping the existing one if present."""
        self._edges.setdefault((follow.follower_id, follow.followee_id), follow)

    async def remove(self, follower_id: UserId, followee_id: UserId) -> None:
        """Delete an edge if present."""
        self._edges.pop((follower_id, followee_id), None)

    async def exists(self, follower_id: UserId, followee_id: UserId) -> bool:
        """Check whether an edge exists."""
        return (follower_id, followee_id) in self._edges

    async def count_followers(self, user_id: UserId) -> int:
        """Count users following ``user_id``."""
        return sum(1 for _, followee in self._edges if followee == user_id)

    async def count_following(self, user_id: UserId) -> int:
        """Count users ``user_id`` follows."""
        return sum(1 for follower, _ in self._edges if follower == user_id)

    def edges(self) -> set[tuple[UserId, UserId]]:
        """Snapshot of all (follower, followee) pairs."""
        return set(self._edges)
