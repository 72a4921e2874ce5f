"""Unit tests for post use cases."""

from uuid import uuid4

from dishka import AsyncContainer
import pytest

from quill.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsUseCase,
)
from quill.domain.error import NotFoundError, ProfileIncompleteError, ValidationError
from quill.domain.repository import UserRepository
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

CONTENT = "A first post with enough content to pass validation."


class TestCreatePostUseCase:
    """Tests for CreatePostUseCase."""

    @pytest.mark.asyncio
    async def test_post_snapshots_author_identity(self, unit_env: AsyncContainer):
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        author = await user_repo.save(make_user("@alice", "Alice"))
        use_case = await unit_env.get(CreatePostUseCase)

        # Act
        post = await use_case.execute(
            CreatePostRequest(author_id=str(author.id), title="  Hello  ", content=CONTENT)
        )

        # Assert
        assert post.title == "Hello"
        assert post.author_id == str(author.id)
        assert str(post.author_handle) == "@alice"
        assert post.author_nickname == "Alice"
        assert post.excerpt == CONTENT

    @pytest.mark.asyncio
    async def test_pending_profile_cannot_post(self, unit_env: AsyncContainer):
        user_repo = await unit_env.get(UserRepository)
        author = await user_repo.save(make_user(handle=None, nickname=None, email="p@example.com"))
        use_case = await unit_env.get(CreatePostUseCase)

        with pytest.raises(ProfileIncompleteError):
            await use_case.execute(
                CreatePostRequest(author_id=str(author.id), title="Hello", content=CONTENT)
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("title", "content"),
        [("Hi", CONTENT), ("Hello", "too short"), ("x" * 201, CONTENT)],
    )
    async def test_out_of_range_fields_are_rejected(
        self, unit_env: AsyncContainer, title, content
    ):
        user_repo = await unit_env.get(UserRepository)
        author = await user_repo.save(make_user())
        use_case = await unit_env.get(CreatePostUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(
                CreatePostRequest(author_id=str(author.id), title=title, content=content)
            )


class TestReadPosts:
    """Tests for GetPostUseCase and ListPostsUseCase."""

    @pytest.mark.asyncio
    async def test_get_post_round_trips(self, unit_env: AsyncContainer):
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        author = await user_repo.save(make_user())
        created = await (await unit_env.get(CreatePostUseCase)).execute(
            CreatePostRequest(author_id=str(author.id), title="Hello", content=CONTENT)
        )
        use_case = await unit_env.get(GetPostUseCase)

        # Act
        post = await use_case.execute(GetPostRequest(post_id=created.post_id.upper()))

        # Assert
        assert post.post_id == created.post_id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "post_id",
        ["not-a-uuid", "{12345678-1234-5678-1234-567812345678}", "12345678123456781234567812345678"],
    )
    async def test_non_canonical_ids_are_rejected(self, unit_env: AsyncContainer, post_id):
        use_case = await unit_env.get(GetPostUseCase)

        with pytest.raises(ValidationError, match="Invalid post ID format"):
            await use_case.execute(GetPostRequest(post_id=post_id))

    @pytest.mark.asyncio
    async def test_unknown_post_is_not_found(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(GetPostUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetPostRequest(post_id=str(uuid4())))

    @pytest.mark.asyncio
    async def test_feed_is_newest_first(self, unit_env: AsyncContainer):
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        author = await user_repo.save(make_user())
        create = await unit_env.get(CreatePostUseCase)
        for title in ("First", "Second", "Third"):
            await create.execute(
                CreatePostRequest(author_id=str(author.id), title=title, content=CONTENT)
            )
        use_case = await unit_env.get(ListPostsUseCase)

        # Act
        result = await use_case.execute()

        # Assert
        assert [p.title for p in result.posts] == ["Third", "Second", "First"]

    @pytest.mark.asyncio
    async def test_empty_feed(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(ListPostsUseCase)

        result = await use_case.execute()

        assert result.posts == []
