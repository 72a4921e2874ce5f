"""In-memory user repository for testing."""

from typing import Optional

from quill.domain.error import ConflictError
from quill.domain.model.user import User
from quill.domain.repository.user import UserRepository
from quill.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Enforces the same uniqueness rules as the database constraints.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_by_handle(self, handle_key: str) -> Optional[User]:
        """Find a user by the lower-cased form of their handle."""
        for user in self._users.values():
            if user.handle is not None and user.handle.key == handle_key:
                return user
        return None

    async def save(self, user: User) -> User:
        """Save or update a user."""
        for other in self._users.values():
            if other.id == user.id:
                continue
            if other.email == user.email:
                raise ConflictError("Email or handle already in use")
            if (
                user.handle is not None
                and other.handle is not None
                and other.handle.key == user.handle.key
            ):
                raise ConflictError("Email or handle already in use")
        self._users[user.id] = user
        return user
