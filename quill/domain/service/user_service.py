"""User domain service."""

import re
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from quill.domain.error import (
    ConflictError,
    NotFoundError,
    ProfileAlreadyCompleteError,
    ValidationError,
)
from quill.domain.model import Credential, NoCredential, User
from quill.domain.model.user import NICKNAME_MAX_LENGTH, NICKNAME_MIN_LENGTH
from quill.domain.repository import UserRepository
from quill.domain.value import Handle, UserId

from .base import Service

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(email: str) -> str:
    """Validate and lower-case an email address.

    Raises:
        ValidationError: If the address is not syntactically valid
    """
    email = email.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email address")
    return email


def parse_handle(raw: str) -> Handle:
    """Build a Handle from user input.

    Raises:
        ValidationError: If the handle is malformed
    """
    try:
        return Handle(raw.strip())
    except PydanticValidationError:
        raise ValidationError(
            "Handle must start with @ and contain 3-31 letters, numbers or underscores"
        )


def parse_nickname(raw: str) -> str:
    """Trim and length-check a nickname.

    Raises:
        ValidationError: If the nickname is too short or too long
    """
    nickname = raw.strip()
    if not NICKNAME_MIN_LENGTH <= len(nickname) <= NICKNAME_MAX_LENGTH:
        raise ValidationError(
            f"Nickname must be between {NICKNAME_MIN_LENGTH} and "
            f"{NICKNAME_MAX_LENGTH} characters"
        )
    return nickname


class UserService(Service):
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def find_by_email(self, email: str) -> User | None:
        """Get user by email, or None."""
        with logfire.span("user_service.find_by_email"):
            return await self.user_repository.find_by_email(email.strip().lower())

    async def find_by_handle(self, handle: str) -> User | None:
        """Get user by handle, with or without the leading @, any case.

        Args:
            handle: Handle as typed by a user or taken from a URL

        Returns:
            User if found, None otherwise
        """
        key = Handle.normalize(handle)
        with logfire.span("user_service.find_by_handle", handle=key):
            return await self.user_repository.find_by_handle(key)

    async def get_by_handle(self, handle: str) -> User:
        """Get user by handle.

        Raises:
            NotFoundError: If no user has this handle
        """
        user = await self.find_by_handle(handle)
        if not user:
            raise NotFoundError("User", handle)
        return user

    async def is_handle_available(self, handle: str) -> bool:
        """Check whether a handle is well-formed and unclaimed.

        Args:
            handle: Candidate handle

        Returns:
            False for malformed handles, otherwise whether no user holds it
        """
        try:
            parsed = parse_handle(handle)
        except ValidationError:
            return False
        if parsed.reserved:
            return False
        return await self.user_repository.find_by_handle(parsed.key) is None

    async def create_user(
        self,
        email: str,
        display_name: str,
        handle: Handle | None = None,
        nickname: str | None = None,
        credential: Credential | None = None,
        avatar_url: str | None = None,
        allow_reserved: bool = False,
    ) -> User:
        """Create a new user.

        Args:
            email: Normalized email
            display_name: Name shown before a nickname exists
            handle: Handle, or None when profile setup is pending
            nickname: Nickname, or None when profile setup is pending
            credential: Stored credential (defaults to NoCredential)
            avatar_url: Optional avatar URL
            allow_reserved: Permit system handles such as @admin

        Returns:
            Saved user

        Raises:
            ConflictError: If email or handle is already in use
        """
        with logfire.span("user_service.create_user", handle=str(handle) if handle else None):
            if await self.user_repository.find_by_email(email):
                raise ConflictError("Email already in use")
            if handle and handle.reserved and not allow_reserved:
                raise ConflictError("Handle already taken")
            if handle and await self.user_repository.find_by_handle(handle.key):
                raise ConflictError("Handle already taken")

            user = User(
                id=UserId(uuid4()),
                email=email,
                display_name=display_name,
                handle=handle,
                nickname=nickname,
                avatar_url=avatar_url,
                credential=credential or NoCredential(),
            )
            saved = await self.user_repository.save(user)
            logfire.info(
                "User created",
                user_id=str(saved.id),
                handle=str(saved.handle) if saved.handle else None,
                has_password=saved.credential.kind == "password",
            )
            return saved

    async def complete_profile(self, user: User, handle: Handle, nickname: str) -> User:
        """Set handle and nickname on a pending profile (one time only).

        Args:
            user: User completing setup
            handle: Chosen handle
            nickname: Chosen nickname

        Returns:
            Updated user

        Raises:
            ProfileAlreadyCompleteError: If the user already has a handle
            ConflictError: If the handle is taken
        """
        with logfire.span(
            "user_service.complete_profile", user_id=str(user.id), handle=str(handle)
        ):
            if user.handle is not None:
                raise ProfileAlreadyCompleteError()
            if handle.reserved or await self.user_repository.find_by_handle(handle.key):
                raise ConflictError("Handle already taken")

            updated = user.model_copy(update={"handle": handle, "nickname": nickname})
            saved = await self.user_repository.save(updated)
            logfire.info("Profile setup completed", user_id=str(saved.id), handle=str(handle))
            return saved
