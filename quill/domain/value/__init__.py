"""Domain value objects for Quill."""

from quill.domain.value.identifiers import PostId, UserId
from quill.domain.value.types import (
    AuditEventKind,
    AuthProvider,
    Handle,
    OAuthProviderInfo,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    # Types
    "AuditEventKind",
    "AuthProvider",
    "Handle",
    "OAuthProviderInfo",
]
