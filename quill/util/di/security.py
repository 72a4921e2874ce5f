"""Login security state providers.

The rate limiter, lockout guard and audit log hold process-wide state, so
they are APP-scoped: one instance per container, shared by every request.
"""

from dishka import Scope, provide

from quill.config import SecuritySettings
from quill.domain.security import AuditLog, LockoutGuard, RateLimiter
from quill.util.clock import Clock
from quill.util.di.base import ProviderBase


class ProdSecurityProvider(ProviderBase):
    """Security state provider - concrete, no mocks needed."""

    scope = Scope.APP

    @provide
    def get_rate_limiter(self, clock: Clock) -> RateLimiter:
        """Provide the shared rate limiter."""
        return RateLimiter(clock=clock)

    @provide
    def get_lockout_guard(self, clock: Clock, security: SecuritySettings) -> LockoutGuard:
        """Provide the shared lockout guard."""
        return LockoutGuard(
            clock=clock,
            threshold=security.lockout_threshold,
            duration_seconds=security.lockout_duration_seconds,
            retention_seconds=security.lockout_retention_seconds,
            idle_seconds=security.lockout_idle_seconds,
        )

    @provide
    def get_audit_log(self, clock: Clock, security: SecuritySettings) -> AuditLog:
        """Provide the shared audit log."""
        return AuditLog(clock=clock, capacity=security.audit_capacity)
