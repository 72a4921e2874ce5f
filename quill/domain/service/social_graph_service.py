"""Social graph domain service."""

import logfire

from quill.domain.error import SelfFollowError
from quill.domain.model import Follow
from quill.domain.repository import FollowRepository
from quill.domain.value import UserId

from .base import Service


class SocialGraphService(Service):
    """Follow/unfollow and follower counts.

    Both follow and unfollow are idempotent.
    """

    def __init__(self, follow_repository: FollowRepository) -> None:
        """Initialize social graph service.

        Args:
            follow_repository: Follow repository
        """
        self.follow_repository = follow_repository

    async def follow(self, follower_id: UserId, followee_id: UserId) -> None:
        """Make ``follower_id`` follow ``followee_id``.

        Raises:
            SelfFollowError: If both IDs are the same
        """
        if follower_id == followee_id:
            raise SelfFollowError()
        with logfire.span(
            "social_graph.follow",
            follower_id=str(follower_id),
            followee_id=str(followee_id),
        ):
            await self.follow_repository.add(
                Follow(follower_id=follower_id, followee_id=followee_id)
            )

    async def unfollow(self, follower_id: UserId, followee_id: UserId) -> None:
        """Remove the edge if present."""
        with logfire.span(
            "social_graph.unfollow",
            follower_id=str(follower_id),
            followee_id=str(followee_id),
        ):
            await self.follow_repository.remove(follower_id, followee_id)

    async def follower_count(self, user_id: UserId) -> int:
        return await self.follow_repository.count_followers(user_id)

    async def following_count(self, user_id: UserId) -> int:
        return await self.follow_repository.count_following(user_id)

    async def is_following(self, follower_id: UserId, followee_id: UserId) -> bool:
        return await self.follow_repository.exists(follower_id, followee_id)
