"""Post aggregate root.

Posts carry a snapshot of the author's handle and nickname taken at
creation time. The snapshot is never synced with later profile edits.
"""

from datetime import datetime, timezone

from pydantic import Field

from quill.domain.model.common import DomainModel
from quill.domain.value import Handle, PostId, UserId

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
CONTENT_MIN_LENGTH = 10
CONTENT_MAX_LENGTH = 50_000
EXCERPT_LENGTH = 150
EXCERPT_MARKER = "..."


def make_excerpt(content: str) -> str:
    """Derive the listing excerpt from post content.

    Args:
        content: Full post content

    Returns:
        The content itself when it fits, otherwise the first 150 code
        points followed by "..."
    """
    if len(content) <= EXCERPT_LENGTH:
        return content
    return content[:EXCERPT_LENGTH] + EXCERPT_MARKER


class Post(DomainModel):
    """Post aggregate root."""

    id: PostId
    title: str = Field(min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    content: str = Field(min_length=CONTENT_MIN_LENGTH, max_length=CONTENT_MAX_LENGTH)
    excerpt: str
    author_id: UserId
    author_handle: Handle
    author_nickname: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
