"""Unit tests for UserService."""

import pytest

from quill.domain.error import (
    ConflictError,
    NotFoundError,
    ProfileAlreadyCompleteError,
    ValidationError,
)
from quill.domain.model import PasswordHash
from quill.domain.service import UserService
from quill.domain.service.user_service import (
    normalize_email,
    parse_handle,
    parse_nickname,
)
from quill.domain.value import Handle
from quill.persistence.repository.inmemory import InMemoryUserRepository


def make_service() -> UserService:
    return UserService(InMemoryUserRepository())


class TestParsing:
    """Tests for the input parsing helpers."""

    def test_normalize_email_lowercases_and_trims(self):
        assert normalize_email("  Alice@Example.COM ") == "alice@example.com"

    @pytest.mark.parametrize("raw", ["", "alice", "alice@", "a b@c.d", "alice@example"])
    def test_normalize_email_rejects_malformed(self, raw):
        with pytest.raises(ValidationError):
            normalize_email(raw)

    def test_parse_handle_rejects_missing_marker(self):
        with pytest.raises(ValidationError):
            parse_handle("alice")

    def test_parse_nickname_bounds(self):
        assert parse_nickname("  Al ") == "Al"
        with pytest.raises(ValidationError):
            parse_nickname("A")
        with pytest.raises(ValidationError):
            parse_nickname("x" * 51)


class TestCreateUser:
    """Tests for UserService.create_user()."""

    @pytest.mark.asyncio
    async def test_creates_user_with_password(self):
        # Arrange
        service = make_service()

        # Act
        user = await service.create_user(
            email="alice@example.com",
            display_name="Alice",
            handle=Handle("@Alice"),
            nickname="Alice",
            credential=PasswordHash(value="hash"),
        )

        # Assert
        assert user.profile_complete is True
        assert (await service.get_by_id(user.id)).email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self):
        # Arrange
        service = make_service()
        await service.create_user(email="a@example.com", display_name="A")

        # Act / Assert
        with pytest.raises(ConflictError, match="Email already in use"):
            await service.create_user(email="a@example.com", display_name="B")

    @pytest.mark.asyncio
    async def test_handles_differing_only_in_case_conflict(self):
        # Arrange
        service = make_service()
        await service.create_user(
            email="a@example.com", display_name="A", handle=Handle("@Alice"), nickname="A1"
        )

        # Act / Assert
        with pytest.raises(ConflictError, match="Handle already taken"):
            await service.create_user(
                email="b@example.com",
                display_name="B",
                handle=Handle("@ALICE"),
                nickname="B1",
            )

    @pytest.mark.asyncio
    async def test_reserved_handle_conflicts_unless_allowed(self):
        # Arrange
        service = make_service()

        # Act / Assert
        with pytest.raises(ConflictError):
            await service.create_user(
                email="x@example.com", display_name="X", handle=Handle("@admin"), nickname="X1"
            )
        admin = await service.create_user(
            email="admin@example.com",
            display_name="Admin",
            handle=Handle("@admin"),
            nickname="Admin",
            allow_reserved=True,
        )
        assert admin.handle == Handle("@admin")

    @pytest.mark.asyncio
    async def test_federated_user_has_pending_profile(self):
        service = make_service()

        user = await service.create_user(email="g@example.com", display_name="G")

        assert user.handle is None
        assert user.profile_complete is False
        assert user.credential.kind == "none"


class TestLookup:
    """Tests for handle lookups."""

    @pytest.mark.asyncio
    async def test_find_by_handle_ignores_case_and_marker(self):
        # Arrange
        service = make_service()
        user = await service.create_user(
            email="a@example.com", display_name="A", handle=Handle("@Alice"), nickname="Al"
        )

        # Act / Assert
        assert (await service.find_by_handle("alice")).id == user.id
        assert (await service.find_by_handle("@ALICE")).id == user.id

    @pytest.mark.asyncio
    async def test_get_by_handle_raises_when_missing(self):
        with pytest.raises(NotFoundError):
            await make_service().get_by_handle("@nobody")

    @pytest.mark.asyncio
    async def test_is_handle_available(self):
        # Arrange
        service = make_service()
        await service.create_user(
            email="a@example.com", display_name="A", handle=Handle("@taken"), nickname="Al"
        )

        # Act / Assert
        assert await service.is_handle_available("@free") is True
        assert await service.is_handle_available("@TAKEN") is False
        assert await service.is_handle_available("no-marker") is False
        assert await service.is_handle_available("@admin") is False


class TestCompleteProfile:
    """Tests for UserService.complete_profile()."""

    @pytest.mark.asyncio
    async def test_sets_handle_and_nickname_once(self):
        # Arrange
        service = make_service()
        user = await service.create_user(email="g@example.com", display_name="G")

        # Act
        updated = await service.complete_profile(user, Handle("@gina"), "Gina")

        # Assert
        assert updated.profile_complete is True
        with pytest.raises(ProfileAlreadyCompleteError):
            await service.complete_profile(updated, Handle("@other"), "Other")

    @pytest.mark.asyncio
    async def test_rejects_taken_handle(self):
        # Arrange
        service = make_service()
        await service.create_user(
            email="a@example.com", display_name="A", handle=Handle("@gina"), nickname="Al"
        )
        user = await service.create_user(email="g@example.com", display_name="G")

        # Act / Assert
        with pytest.raises(ConflictError, match="Handle already taken"):
            await service.complete_profile(user, Handle("@Gina"), "Gina")
