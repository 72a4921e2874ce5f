"""Profile setup routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, status

from quill.application.usecase.auth import GetCurrentUserUseCase
from quill.application.usecase.common import AccountInfo
from quill.application.usecase.profile import (
    CheckHandleRequest,
    CheckHandleResponse,
    CheckHandleUseCase,
    SetupProfileRequest,
    SetupProfileUseCase,
)
from quill.domain.error import (
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from quill.interface.api.errors import storage_failure
from quill.interface.api.forms import FormBody
from quill.interface.api.session import require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"], route_class=DishkaRoute)


class SetupProfileAPIRequest(FormBody):
    """API request for choosing a handle and nickname."""

    handle: str = ""
    nickname: str = ""


@router.post("/setup", response_model=AccountInfo)
async def setup_profile(
    request: SetupProfileAPIRequest,
    setup_profile_use_case: FromDishka[SetupProfileUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AccountInfo:
    """Complete a pending profile created by federated sign-in.

    Requires authentication. The new handle is visible on the next
    /auth/me call without signing in again.

    Raises:
        HTTPException: 400 malformed input, 401 not signed in,
            409 handle taken or profile already complete
    """
    try:
        user = await require_user(auth_token, get_current_user_use_case)
        return await setup_profile_use_case.execute(
            SetupProfileRequest(
                user_id=user.user_id,
                handle=request.handle,
                nickname=request.nickname,
            )
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
        )
    except StorageError as e:
        raise storage_failure(e, "setup_profile")


@router.get("/check-handle", response_model=CheckHandleResponse)
async def check_handle(
    handle: str,
    check_handle_use_case: FromDishka[CheckHandleUseCase],
) -> CheckHandleResponse:
    """Report whether a handle can still be claimed.

    Example:
        GET /profile/check-handle?handle=@alice

        Response:
        {"available": false}
    """
    try:
        return await check_handle_use_case.execute(CheckHandleRequest(handle=handle))
    except StorageError as e:
        raise storage_failure(e, "check_handle")
