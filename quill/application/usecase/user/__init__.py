"""User use cases."""

from .follow_user import (
    FollowRequest,
    FollowResponse,
    FollowUserUseCase,
    UnfollowUserUseCase,
)
from .get_user_profile import (
    GetUserProfileRequest,
    GetUserProfileUseCase,
    UserProfileResponse,
)

__all__ = [
    "FollowRequest",
    "FollowResponse",
    "FollowUserUseCase",
    "GetUserProfileRequest",
    "GetUserProfileUseCase",
    "UnfollowUserUseCase",
    "UserProfileResponse",
]
