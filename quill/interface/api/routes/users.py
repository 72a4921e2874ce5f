"""User profile and follow routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, status

from quill.application.usecase.auth import GetCurrentUserUseCase
from quill.application.usecase.user import (
    FollowRequest,
    FollowResponse,
    FollowUserUseCase,
    GetUserProfileRequest,
    GetUserProfileUseCase,
    UnfollowUserUseCase,
    UserProfileResponse,
)
from quill.domain.error import NotFoundError, StorageError, ValidationError
from quill.interface.api.errors import storage_failure
from quill.interface.api.session import optional_user, require_user

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/{handle}", response_model=UserProfileResponse)
async def get_user_profile(
    handle: str,
    get_user_profile_use_case: FromDishka[GetUserProfileUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> UserProfileResponse:
    """Get a public profile by handle, with counts and posts.

    Args:
        handle: Handle with or without the leading "@", any case

    Example:
        GET /users/alice

        Response:
        {
            "user_id": "123e4567-e89b-12d3-a456-426614174000",
            "handle": "@alice",
            "nickname": "Alice",
            "follower_count": 3,
            "following_count": 1,
            "post_count": 2,
            "is_following": null,
            "posts": [...]
        }
    """
    try:
        viewer = await optional_user(auth_token, get_current_user_use_case)
        return await get_user_profile_use_case.execute(
            GetUserProfileRequest(
                handle=handle,
                viewer_id=viewer.user_id if viewer else None,
            )
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User with handle '{handle}' not found",
        )
    except StorageError as e:
        raise storage_failure(e, "get_user_profile")


@router.post("/{handle}/follow", response_model=FollowResponse)
async def follow_user(
    handle: str,
    follow_user_use_case: FromDishka[FollowUserUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> FollowResponse:
    """Follow a user. Following twice is not an error.

    Raises:
        HTTPException: 400 self-follow, 401 not signed in, 404 unknown handle
    """
    try:
        user = await require_user(auth_token, get_current_user_use_case)
        return await follow_user_use_case.execute(
            FollowRequest(follower_id=user.user_id, handle=handle)
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User with handle '{handle}' not found",
        )
    except StorageError as e:
        raise storage_failure(e, "follow_user")


@router.delete("/{handle}/follow", response_model=FollowResponse)
async def unfollow_user(
    handle: str,
    unfollow_user_use_case: FromDishka[UnfollowUserUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> FollowResponse:
    """Unfollow a user. Unfollowing someone not followed is not an error.

    Raises:
        HTTPException: 401 not signed in, 404 unknown handle
    """
    try:
        user = await require_user(auth_token, get_current_user_use_case)
        return await unfollow_user_use_case.execute(
            FollowRequest(follower_id=user.user_id, handle=handle)
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User with handle '{handle}' not found",
        )
    except StorageError as e:
        raise storage_failure(e, "unfollow_user")
