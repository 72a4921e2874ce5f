"""Get post use case."""

from uuid import UUID

from pydantic import BaseModel

from quill.application.usecase.common import PostView
from quill.domain.error import ValidationError
from quill.domain.service import PostService
from quill.domain.value import PostId


class GetPostRequest(BaseModel):
    """Get post request; the id is raw path input."""

    post_id: str


class GetPostUseCase:
    """Use case for reading a single post."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: GetPostRequest) -> PostView:
        """Load one post.

        Raises:
            ValidationError: If the id is not a canonical UUID
            NotFoundError: If no post has this id
        """
        try:
            post_id = PostId(UUID(request.post_id))
        except ValueError:
            raise ValidationError("Invalid post ID format")
        if str(post_id) != request.post_id.lower():
            # UUID() also accepts braces, URNs and missing hyphens
            raise ValidationError("Invalid post ID format")

        post = await self.post_service.get_post(post_id)
        return PostView.from_post(post)
