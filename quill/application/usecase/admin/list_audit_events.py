"""Audit log inspection use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from quill.application.usecase.base import BaseUseCase
from quill.application.usecase.common import AccountInfo
from quill.domain.error import AuthorizationError, ValidationError
from quill.domain.model import AuditLogEntry
from quill.domain.security import AuditLog
from quill.domain.value import UserId

from .ensure_admin import ADMIN_HANDLE


class ListAuditEventsRequest(BaseModel):
    """List audit events request."""

    requester: AccountInfo
    limit: int = Field(default=50, ge=1, le=1000)
    user_id: str | None = None  # Filter to one user


class ListAuditEventsResponse(BaseModel):
    """Audit events, most recent first."""

    events: list[AuditLogEntry]


class ListAuditEventsUseCase(BaseUseCase):
    """Use case for the administrator's view of the audit log."""

    def __init__(self, audit_log: AuditLog) -> None:
        self.audit_log = audit_log

    async def execute(self, request: ListAuditEventsRequest) -> ListAuditEventsResponse:
        """Return recent audit events.

        Raises:
            AuthorizationError: If the requester is not the administrator
            ValidationError: If ``user_id`` is not a UUID
        """
        handle = request.requester.handle
        if handle is None or handle.key != ADMIN_HANDLE:
            raise AuthorizationError("Administrator access required")

        if request.user_id:
            try:
                user_id = UserId(UUID(request.user_id))
            except ValueError:
                raise ValidationError("Invalid user ID format")
            events = self.audit_log.for_user(user_id, request.limit)
        else:
            events = self.audit_log.recent(request.limit)
        return ListAuditEventsResponse(events=events)
