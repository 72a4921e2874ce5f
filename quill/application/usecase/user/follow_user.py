"""Follow and unfollow use cases."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from quill.domain.service import SocialGraphService, UserService
from quill.domain.value import UserId


class FollowRequest(BaseModel):
    """Follow/unfollow request."""

    follower_id: str  # Authenticated user
    handle: str  # Target user's handle


class FollowResponse(BaseModel):
    """Target's follower count after the change."""

    follower_count: int
    following: bool


class FollowUserUseCase:
    """Use case for following a user by handle."""

    def __init__(
        self, user_service: UserService, social_graph_service: SocialGraphService
    ) -> None:
        self.user_service = user_service
        self.social_graph_service = social_graph_service

    async def execute(self, request: FollowRequest) -> FollowResponse:
        """Follow the user with ``request.handle``.

        Raises:
            NotFoundError: If no user has this handle
            SelfFollowError: If the target is the requester
        """
        target = await self.user_service.get_by_handle(request.handle)
        follower_id = UserId(UUID(request.follower_id))
        await self.social_graph_service.follow(follower_id, target.id)
        logfire.info("User followed", follower_id=request.follower_id, followee_id=str(target.id))
        return FollowResponse(
            follower_count=await self.social_graph_service.follower_count(target.id),
            following=True,
        )


class UnfollowUserUseCase:
    """Use case for unfollowing a user by handle."""

    def __init__(
        self, user_service: UserService, social_graph_service: SocialGraphService
    ) -> None:
        self.user_service = user_service
        self.social_graph_service = social_graph_service

    async def execute(self, request: FollowRequest) -> FollowResponse:
        """Unfollow the user with ``request.handle``; a missing edge is fine.

        Raises:
            NotFoundError: If no user has this handle
        """
        target = await self.user_service.get_by_handle(request.handle)
        await self.social_graph_service.unfollow(
            UserId(UUID(request.follower_id)), target.id
        )
        return FollowResponse(
            follower_count=await self.social_graph_service.follower_count(target.id),
            following=False,
        )
