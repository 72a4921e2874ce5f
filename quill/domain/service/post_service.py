"""Post domain service."""

from uuid import uuid4

import logfire

from quill.domain.error import NotFoundError, ProfileIncompleteError, ValidationError
from quill.domain.model import Post, User, make_excerpt
from quill.domain.model.post import (
    CONTENT_MAX_LENGTH,
    CONTENT_MIN_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
)
from quill.domain.repository import PostRepository
from quill.domain.value import PostId, UserId

from .base import Service


def sanitize_text(value: str) -> str:
    """Strip surrounding whitespace and NUL characters."""
    return value.replace("\0", "").strip()


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def create_post(self, author: User, title: str, content: str) -> Post:
        """Create a post attributed to ``author``.

        The author's current handle and nickname are copied onto the post.

        Args:
            author: Authenticated author
            title: Raw title
            content: Raw content

        Returns:
            Saved post

        Raises:
            ProfileIncompleteError: If the author has no handle or nickname
            ValidationError: If title or content length is out of range
        """
        with logfire.span("post_service.create_post", author_id=str(author.id)):
            if not author.profile_complete or author.handle is None:
                raise ProfileIncompleteError()

            title = sanitize_text(title)
            content = sanitize_text(content)
            if not TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
                raise ValidationError(
                    f"Title must be between {TITLE_MIN_LENGTH} and "
                    f"{TITLE_MAX_LENGTH} characters"
                )
            if not CONTENT_MIN_LENGTH <= len(content) <= CONTENT_MAX_LENGTH:
                raise ValidationError(
                    f"Content must be between {CONTENT_MIN_LENGTH} and "
                    f"{CONTENT_MAX_LENGTH} characters"
                )

            post = Post(
                id=PostId(uuid4()),
                title=title,
                content=content,
                excerpt=make_excerpt(content),
                author_id=author.id,
                author_handle=author.handle,
                author_nickname=author.nickname,
            )
            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=str(saved.id), author_id=str(author.id))
            return saved

    async def get_post(self, post_id: PostId) -> Post:
        """Get a post by ID.

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span("post_service.get_post", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if not post:
                logfire.warn("Post not found", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))
            return post

    async def list_all(self) -> list[Post]:
        """All posts, newest first."""
        with logfire.span("post_service.list_all"):
            return await self.post_repository.find_all()

    async def list_by_user(self, user_id: UserId) -> list[Post]:
        """Posts by one author, newest first."""
        with logfire.span("post_service.list_by_user", user_id=str(user_id)):
            return await self.post_repository.find_by_author(user_id)

    async def count_by_user(self, user_id: UserId) -> int:
        """Number of posts by one author."""
        return await self.post_repository.count_by_author(user_id)
