"""Response models shared across use cases."""

from datetime import datetime

from pydantic import BaseModel

from quill.domain.model import Post, User
from quill.domain.value import Handle


class AccountInfo(BaseModel):
    """The signed-in user's own account."""

    user_id: str
    email: str
    display_name: str
    handle: Handle | None
    nickname: str | None
    avatar_url: str | None
    profile_complete: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "AccountInfo":
        return cls(
            user_id=str(user.id),
            email=user.email,
            display_name=user.display_name,
            handle=user.handle,
            nickname=user.nickname,
            avatar_url=user.avatar_url,
            profile_complete=user.profile_complete,
            created_at=user.created_at,
        )


class PostView(BaseModel):
    """A post as returned by the API."""

    post_id: str
    title: str
    content: str
    excerpt: str
    author_id: str
    author_handle: Handle
    author_nickname: str
    created_at: datetime

    @classmethod
    def from_post(cls, post: Post) -> "PostView":
        return cls(
            post_id=str(post.id),
            title=post.title,
            content=post.content,
            excerpt=post.excerpt,
            author_id=str(post.author_id),
            author_handle=post.author_handle,
            author_nickname=post.author_nickname,
            created_at=post.created_at,
        )
