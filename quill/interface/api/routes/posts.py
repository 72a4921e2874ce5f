"""Post routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, status

from quill.application.usecase.auth import GetCurrentUserUseCase
from quill.application.usecase.common import PostView
from quill.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsResponse,
    ListPostsUseCase,
)
from quill.domain.error import (
    NotFoundError,
    ProfileIncompleteError,
    StorageError,
    ValidationError,
)
from quill.interface.api.errors import storage_failure
from quill.interface.api.forms import FormBody
from quill.interface.api.session import require_user

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(FormBody):
    """API request for creating a post.

    Lengths are checked after trimming, in the domain layer.
    """

    title: str = ""
    content: str = ""


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
) -> ListPostsResponse:
    """List all posts, newest first."""
    try:
        return await list_posts_use_case.execute()
    except StorageError as e:
        raise storage_failure(e, "list_posts")


@router.post("", response_model=PostView, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> PostView:
    """Create a new post.

    Requires authentication and a completed profile.

    Raises:
        HTTPException: 400 bad title or content, 401 not signed in,
            403 profile setup pending
    """
    try:
        user = await require_user(auth_token, get_current_user_use_case)
        return await create_post_use_case.execute(
            CreatePostRequest(
                author_id=user.user_id,
                title=request.title,
                content=request.content,
            )
        )
    except ValidationError as e:
        logfire.warn("Post creation validation error", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ProfileIncompleteError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
        )
    except StorageError as e:
        raise storage_failure(e, "create_post")


@router.get("/{post_id}", response_model=PostView)
async def get_post(
    post_id: str,
    get_post_use_case: FromDishka[GetPostUseCase],
) -> PostView:
    """Get a single post.

    Raises:
        HTTPException: 400 if the id is not a UUID, 404 if no such post
    """
    try:
        return await get_post_use_case.execute(GetPostRequest(post_id=post_id))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    except StorageError as e:
        raise storage_failure(e, "get_post")
