"""Logout use case."""

from uuid import UUID

from pydantic import BaseModel

from quill.domain.model import AuditEvent
from quill.domain.security import AuditLog
from quill.domain.service import JWTService
from quill.domain.value import AuditEventKind, UserId


class LogoutRequest(BaseModel):
    """Logout request; the token may be missing or stale."""

    token: str | None = None
    client_address: str = "unknown"
    user_agent: str | None = None


class LogoutUseCase:
    """Use case for recording a logout.

    Clearing the cookie is the route's job; this only audits sessions that
    were still valid.
    """

    def __init__(self, jwt_service: JWTService, audit_log: AuditLog) -> None:
        self.jwt_service = jwt_service
        self.audit_log = audit_log

    async def execute(self, request: LogoutRequest) -> bool:
        """Audit the logout.

        Returns:
            True if a valid session was logged out
        """
        payload = self.jwt_service.get_payload(request.token)
        if payload is None:
            return False

        self.audit_log.append(
            AuditEvent(
                event=AuditEventKind.LOGOUT,
                success=True,
                user_id=UserId(UUID(payload.user_id)),
                email=payload.email,
                client_address=request.client_address,
                user_agent=request.user_agent,
            )
        )
        return True
