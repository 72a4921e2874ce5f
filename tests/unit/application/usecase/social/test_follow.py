"""Unit tests for follow, unfollow and profile viewing."""

from dishka import AsyncContainer
import pytest

from quill.application.usecase.post import CreatePostRequest, CreatePostUseCase
from quill.application.usecase.user import (
    FollowRequest,
    FollowUserUseCase,
    GetUserProfileRequest,
    GetUserProfileUseCase,
    UnfollowUserUseCase,
)
from quill.domain.error import NotFoundError, SelfFollowError
from quill.domain.repository import UserRepository
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def seed_users(container: AsyncContainer):
    user_repo = await container.get(UserRepository)
    alice = await user_repo.save(make_user("@alice", "Alice"))
    bob = await user_repo.save(make_user("@bob_b", "Bob"))
    return alice, bob


class TestFollowUseCases:
    """Tests for FollowUserUseCase and UnfollowUserUseCase."""

    @pytest.mark.asyncio
    async def test_follow_is_idempotent(self, unit_env: AsyncContainer):
        # Arrange
        alice, _ = await seed_users(unit_env)
        use_case = await unit_env.get(FollowUserUseCase)
        request = FollowRequest(follower_id=str(alice.id), handle="bob_b")

        # Act
        first = await use_case.execute(request)
        second = await use_case.execute(request)

        # Assert
        assert first.follower_count == 1
        assert second.follower_count == 1
        assert second.following is True

    @pytest.mark.asyncio
    async def test_self_follow_is_rejected(self, unit_env: AsyncContainer):
        alice, _ = await seed_users(unit_env)
        use_case = await unit_env.get(FollowUserUseCase)

        with pytest.raises(SelfFollowError):
            await use_case.execute(FollowRequest(follower_id=str(alice.id), handle="@ALICE"))

    @pytest.mark.asyncio
    async def test_unknown_target_is_not_found(self, unit_env: AsyncContainer):
        alice, _ = await seed_users(unit_env)
        use_case = await unit_env.get(FollowUserUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(FollowRequest(follower_id=str(alice.id), handle="@nobody"))

    @pytest.mark.asyncio
    async def test_unfollow_without_edge_succeeds(self, unit_env: AsyncContainer):
        # Arrange
        alice, _ = await seed_users(unit_env)
        follow = await unit_env.get(FollowUserUseCase)
        unfollow = await unit_env.get(UnfollowUserUseCase)
        request = FollowRequest(follower_id=str(alice.id), handle="@bob_b")
        await follow.execute(request)

        # Act
        first = await unfollow.execute(request)
        second = await unfollow.execute(request)

        # Assert
        assert first.follower_count == 0
        assert second.follower_count == 0
        assert second.following is False


class TestGetUserProfileUseCase:
    """Tests for GetUserProfileUseCase."""

    @pytest.mark.asyncio
    async def test_profile_includes_counts_and_posts(self, unit_env: AsyncContainer):
        # Arrange
        alice, bob = await seed_users(unit_env)
        await (await unit_env.get(FollowUserUseCase)).execute(
            FollowRequest(follower_id=str(alice.id), handle="@bob_b")
        )
        await (await unit_env.get(CreatePostUseCase)).execute(
            CreatePostRequest(
                author_id=str(bob.id),
                title="Bob writes",
                content="Some words from Bob for the profile page.",
            )
        )
        use_case = await unit_env.get(GetUserProfileUseCase)

        # Act
        profile = await use_case.execute(
            GetUserProfileRequest(handle="BOB_B", viewer_id=str(alice.id))
        )

        # Assert
        assert str(profile.handle) == "@bob_b"
        assert profile.follower_count == 1
        assert profile.following_count == 0
        assert profile.post_count == 1
        assert profile.posts[0].title == "Bob writes"
        assert profile.is_following is True

    @pytest.mark.asyncio
    async def test_is_following_is_unset_for_anonymous_and_self(
        self, unit_env: AsyncContainer
    ):
        alice, _ = await seed_users(unit_env)
        use_case = await unit_env.get(GetUserProfileUseCase)

        anonymous = await use_case.execute(GetUserProfileRequest(handle="@alice"))
        own = await use_case.execute(
            GetUserProfileRequest(handle="@alice", viewer_id=str(alice.id))
        )

        assert anonymous.is_following is None
        assert own.is_following is None

    @pytest.mark.asyncio
    async def test_unknown_handle_is_not_found(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(GetUserProfileUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetUserProfileRequest(handle="@ghost"))
