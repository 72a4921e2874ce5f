"""Repository interfaces for Quill domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from quill.domain.repository.follow import FollowRepository
from quill.domain.repository.post import PostRepository
from quill.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "PostRepository",
    "FollowRepository",
]
