"""Audit log entries for security events."""

from datetime import datetime
from typing import Any

from pydantic import Field

from quill.domain.model.common import DomainModel
from quill.domain.value import AuditEventKind, UserId


class AuditEvent(DomainModel):
    """Security event as reported by the caller, before it is stored."""

    event: AuditEventKind
    success: bool
    client_address: str = "unknown"
    user_agent: str | None = None
    user_id: UserId | None = None
    handle: str | None = None
    email: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class AuditLogEntry(AuditEvent):
    """Stored audit record with its synthetic id and timestamp."""

    id: str
    timestamp: datetime
