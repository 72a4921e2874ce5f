"""In-memory post repository for testing."""

from typing import List, Optional

from quill.domain.model.post import Post
from quill.domain.repository.post import PostRepository
from quill.domain.value import PostId, UserId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    def _newest_first(self, posts) -> List[Post]:
        # Stable sort then reverse, so equal timestamps list the later save first
        return sorted(posts, key=lambda p: p.created_at)[::-1]

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_all(self) -> List[Post]:
        """Find all posts, newest first."""
        return self._newest_first(self._posts.values())

    async def find_by_author(self, author_id: UserId) -> List[Post]:
        """Find posts by one author, newest first."""
        return self._newest_first(
            p for p in self._posts.values() if p.author_id == author_id
        )

    async def count_by_author(self, author_id: UserId) -> int:
        """Count posts by one author."""
        return sum(1 for p in self._posts.values() if p.author_id == author_id)

    async def save(self, post: Post) -> Post:
        """Save a post."""
        self._posts[post.id] = post
        return post

    async def delete(self, post_id: PostId) -> None:
        """Delete a post."""
        self._posts.pop(post_id, None)
