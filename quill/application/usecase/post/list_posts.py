"""List posts use case."""

from pydantic import BaseModel

from quill.application.usecase.common import PostView
from quill.domain.service import PostService


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostView]


class ListPostsUseCase:
    """Use case for the global post feed."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self) -> ListPostsResponse:
        """All posts, newest first."""
        posts = await self.post_service.list_all()
        return ListPostsResponse(posts=[PostView.from_post(p) for p in posts])
