"""Handle availability use case."""

from pydantic import BaseModel

from quill.domain.service import UserService


class CheckHandleRequest(BaseModel):
    """Check handle request."""

    handle: str


class CheckHandleResponse(BaseModel):
    """Check handle response."""

    available: bool


class CheckHandleUseCase:
    """Use case for checking whether a handle can be claimed."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: CheckHandleRequest) -> CheckHandleResponse:
        """Report availability; malformed handles are reported as unavailable."""
        available = await self.user_service.is_handle_available(request.handle)
        return CheckHandleResponse(available=available)
