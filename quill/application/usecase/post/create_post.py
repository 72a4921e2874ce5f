"""Create post use case."""

from uuid import UUID

from pydantic import BaseModel

from quill.application.usecase.common import PostView
from quill.domain.service import PostService, UserService
from quill.domain.value import UserId


class CreatePostRequest(BaseModel):
    """Create post request."""

    author_id: str  # User ID from authenticated user
    title: str
    content: str


class CreatePostUseCase:
    """Use case for creating a new post."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: CreatePostRequest) -> PostView:
        """Execute create post flow.

        Steps:
        1. Load the author (the post snapshots their handle and nickname)
        2. Create and save the post via PostService

        Args:
            request: Create post request

        Returns:
            The created post

        Raises:
            NotFoundError: If the author no longer exists
            ProfileIncompleteError: If the author has not finished profile setup
            ValidationError: If title or content is out of range
        """
        author = await self.user_service.get_by_id(UserId(UUID(request.author_id)))
        post = await self.post_service.create_post(author, request.title, request.content)
        return PostView.from_post(post)
