"""Profile setup use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from quill.application.usecase.base import BaseUseCase
from quill.application.usecase.common import AccountInfo
from quill.domain.service import UserService
from quill.domain.service.user_service import parse_handle, parse_nickname
from quill.domain.value import UserId


class SetupProfileRequest(BaseModel):
    """Profile setup request."""

    user_id: str  # From the authenticated session
    handle: str
    nickname: str


class SetupProfileUseCase(BaseUseCase):
    """Use case for the one-time choice of handle and nickname."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: SetupProfileRequest) -> AccountInfo:
        """Complete a pending profile.

        Args:
            request: Chosen handle and nickname

        Returns:
            Updated account

        Raises:
            ValidationError: If handle or nickname is malformed
            NotFoundError: If the session user no longer exists
            ProfileAlreadyCompleteError: If the profile was already set up
            ConflictError: If the handle is taken
        """
        handle = parse_handle(request.handle)
        nickname = parse_nickname(request.nickname)

        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))
        with logfire.span("setup_profile.execute", user_id=request.user_id):
            updated = await self.user_service.complete_profile(user, handle, nickname)
            return AccountInfo.from_user(updated)
