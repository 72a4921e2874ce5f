"""Mappers for converting between database rows and domain models."""

from typing import Any, Dict
from uuid import UUID

from quill.domain.model import Credential, NoCredential, PasswordHash, Post, User
from quill.domain.value import Handle, PostId, UserId


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def credential_from_column(password_hash: str | None) -> Credential:
    """Map the nullable password_hash column to a Credential variant."""
    if password_hash:
        return PasswordHash(value=password_hash)
    return NoCredential()


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        email=row["email"],
        display_name=row["display_name"],
        handle=Handle(row["handle"]) if row.get("handle") else None,
        nickname=row.get("nickname"),
        avatar_url=row.get("avatar_url"),
        credential=credential_from_column(row.get("password_hash")),
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": user.id,
        "email": user.email,
        "display_name": user.display_name,
        "handle": user.handle.root if user.handle else None,
        "nickname": user.nickname,
        "avatar_url": user.avatar_url,
        "password_hash": (
            user.credential.value if isinstance(user.credential, PasswordHash) else None
        ),
        "created_at": user.created_at,
    }


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model."""
    return Post(
        id=PostId(_uuid(row["id"])),
        title=row["title"],
        content=row["content"],
        excerpt=row["excerpt"],
        author_id=UserId(_uuid(row["author_id"])),
        author_handle=Handle(row["author_handle"]),
        author_nickname=row["author_nickname"],
        created_at=row["created_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    return {
        "id": post.id,
        "title": post.title,
        "content": post.content,
        "excerpt": post.excerpt,
        "author_id": post.author_id,
        "author_handle": post.author_handle.root,
        "author_nickname": post.author_nickname,
        "created_at": post.created_at,
    }
