"""Get current user use case."""

from pydantic import BaseModel

from quill.application.usecase.common import AccountInfo
from quill.domain.error import NotFoundError
from quill.domain.service import JWTService, UserService


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token


class GetCurrentUserUseCase:
    """Use case for materializing the session's user."""

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> AccountInfo:
        """Resolve the token to the user's current profile.

        The user is re-read by email on every call, so a profile completed
        after sign-in shows up without a new token.

        Args:
            request: Request with JWT token

        Returns:
            Current account information

        Raises:
            JWTError: If token is invalid or expired
            NotFoundError: If the user no longer exists
        """
        payload = self.jwt_service.verify_token(request.token)

        user = await self.user_service.find_by_email(payload.email)
        if user is None:
            raise NotFoundError("User", payload.email)

        return AccountInfo.from_user(user)
