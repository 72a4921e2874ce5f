"""Process-local login security state.

The rate limiter, lockout guard and audit log are owned objects created
once per DI container and injected where needed.
"""

from quill.domain.security.audit_log import AuditLog
from quill.domain.security.lockout import LockoutGuard, LockStatus
from quill.domain.security.rate_limiter import RateLimiter

__all__ = [
    "AuditLog",
    "LockoutGuard",
    "LockStatus",
    "RateLimiter",
]
