"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from quill.domain.model.post import Post
from quill.domain.value import PostId, UserId


class PostRepository(ABC):
    """Repository for Post aggregate."""

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[Post]:
        """Find all posts, newest first."""
        pass

    @abstractmethod
    async def find_by_author(self, author_id: UserId) -> List[Post]:
        """Find posts by a specific author, newest first.

        Args:
            author_id: The author's user ID

        Returns:
            List of posts by the author
        """
        pass

    @abstractmethod
    async def count_by_author(self, author_id: UserId) -> int:
        """Count posts by a specific author."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post.

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> None:
        """Delete a post (hard delete).

        No route exposes this; it exists for administrative cleanup.

        Args:
            post_id: The post ID to delete
        """
        pass
