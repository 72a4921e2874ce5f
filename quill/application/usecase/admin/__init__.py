"""Administration use cases."""

from .ensure_admin import ADMIN_HANDLE, EnsureAdminUseCase
from .list_audit_events import (
    ListAuditEventsRequest,
    ListAuditEventsResponse,
    ListAuditEventsUseCase,
)

__all__ = [
    "ADMIN_HANDLE",
    "EnsureAdminUseCase",
    "ListAuditEventsRequest",
    "ListAuditEventsResponse",
    "ListAuditEventsUseCase",
]
