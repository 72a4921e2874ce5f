"""Domain model entities for Quill."""

from quill.domain.model.audit import AuditEvent, AuditLogEntry
from quill.domain.model.credential import Credential, NoCredential, PasswordHash
from quill.domain.model.follow import Follow
from quill.domain.model.post import Post, make_excerpt
from quill.domain.model.user import User

__all__ = [
    "AuditEvent",
    "AuditLogEntry",
    "Credential",
    "Follow",
    "NoCredential",
    "PasswordHash",
    "Post",
    "User",
    "make_excerpt",
]
