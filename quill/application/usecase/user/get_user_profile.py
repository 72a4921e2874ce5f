"""Get user profile use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from quill.application.usecase.common import PostView
from quill.domain.service import PostService, SocialGraphService, UserService
from quill.domain.value import Handle, UserId


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    handle: str  # With or without the leading @
    viewer_id: str | None = None  # Authenticated viewer, if any


class UserProfileResponse(BaseModel):
    """Public profile with counts and posts."""

    user_id: str
    handle: Handle
    nickname: str | None
    avatar_url: str | None
    created_at: datetime
    follower_count: int
    following_count: int
    post_count: int
    is_following: bool | None  # None when the viewer is anonymous or self
    posts: list[PostView]


class GetUserProfileUseCase:
    """Use case for viewing a user's public profile."""

    def __init__(
        self,
        user_service: UserService,
        post_service: PostService,
        social_graph_service: SocialGraphService,
    ) -> None:
        """Initialize get user profile use case.

        Args:
            user_service: User domain service
            post_service: Post domain service
            social_graph_service: Social graph domain service
        """
        self.user_service = user_service
        self.post_service = post_service
        self.social_graph_service = social_graph_service

    async def execute(self, request: GetUserProfileRequest) -> UserProfileResponse:
        """Load profile, counts and posts for a handle.

        Raises:
            NotFoundError: If no user has this handle
        """
        user = await self.user_service.get_by_handle(request.handle)
        posts = await self.post_service.list_by_user(user.id)

        is_following = None
        if request.viewer_id and request.viewer_id != str(user.id):
            is_following = await self.social_graph_service.is_following(
                UserId(UUID(request.viewer_id)), user.id
            )

        return UserProfileResponse(
            user_id=str(user.id),
            handle=user.handle,
            nickname=user.nickname,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
            follower_count=await self.social_graph_service.follower_count(user.id),
            following_count=await self.social_graph_service.following_count(user.id),
            post_count=len(posts),
            is_following=is_following,
            posts=[PostView.from_post(p) for p in posts],
        )
