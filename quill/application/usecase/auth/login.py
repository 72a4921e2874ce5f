"""Credentials login use case."""

import logfire
from pydantic import BaseModel

from quill.application.usecase.base import BaseUseCase
from quill.application.usecase.common import AccountInfo
from quill.config import Settings
from quill.domain.error import (
    AccountLockedError,
    InvalidCredentialsError,
    RateLimitedError,
)
from quill.domain.model import AuditEvent, PasswordHash, User
from quill.domain.security import AuditLog, LockoutGuard, RateLimiter
from quill.domain.service import JWTService, PasswordHasher, UserService
from quill.domain.value import AuditEventKind, Handle


class LoginRequest(BaseModel):
    """Credentials login attempt."""

    handle: str
    password: str
    client_address: str = "unknown"
    user_agent: str | None = None


class LoginResponse(BaseModel):
    """Successful login: a session token plus the account."""

    token: str
    user: AccountInfo


class LoginUseCase(BaseUseCase):
    """Use case for handle/password login.

    Composes the lockout guard, rate limiter, password hasher and audit log.
    Every failure reaches the client as one of three generic errors, while
    the audit log records the precise reason.
    """

    def __init__(
        self,
        user_service: UserService,
        password_hasher: PasswordHasher,
        jwt_service: JWTService,
        rate_limiter: RateLimiter,
        lockout_guard: LockoutGuard,
        audit_log: AuditLog,
        settings: Settings,
    ) -> None:
        """Initialize login use case.

        Args:
            user_service: User domain service
            password_hasher: Password hashing primitive
            jwt_service: JWT token domain service
            rate_limiter: Shared rate limiter
            lockout_guard: Shared lockout guard
            audit_log: Shared audit log
            settings: Application settings
        """
        self.user_service = user_service
        self.password_hasher = password_hasher
        self.jwt_service = jwt_service
        self.rate_limiter = rate_limiter
        self.lockout_guard = lockout_guard
        self.audit_log = audit_log
        self.settings = settings

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute credentials login.

        Steps:
        1. Reject if the handle is locked out
        2. Reject if the client address exceeded its login budget
        3. Look up the user; unknown handles and password-less accounts fail
        4. Verify the password; failures count toward lockout
        5. On success reset the failure counter and issue a session token

        Args:
            request: Login attempt

        Returns:
            Session token and account

        Raises:
            AccountLockedError: If the handle is (or just became) locked
            RateLimitedError: If the client address is over budget
            InvalidCredentialsError: For an unknown handle or wrong password
        """
        identifier = Handle.normalize(request.handle)
        security = self.settings.security

        with logfire.span("login.execute", handle=identifier):
            status = self.lockout_guard.is_account_locked(identifier)
            if status.locked:
                self._audit(
                    request,
                    AuditEventKind.ACCOUNT_LOCKED,
                    identifier,
                    remaining_seconds=status.remaining_seconds,
                )
                raise AccountLockedError(retry_after=status.remaining_seconds or 1)

            rate_key = f"login:{request.client_address}"
            if self.rate_limiter.check(
                rate_key, security.login_rate_limit, security.login_rate_window_seconds
            ):
                self._audit(
                    request, AuditEventKind.FAILED_LOGIN, identifier, reason="rate_limited"
                )
                raise RateLimitedError(
                    "Too many login attempts. Try again later.",
                    retry_after=self.rate_limiter.retry_after(rate_key),
                )

            user = await self.user_service.find_by_handle(identifier)
            if user is None or not isinstance(user.credential, PasswordHash):
                if self.lockout_guard.record_failed_login(identifier):
                    self._raise_locked(request, identifier, user)
                self._audit(
                    request,
                    AuditEventKind.FAILED_LOGIN,
                    identifier,
                    user=user,
                    reason="user_not_found",
                )
                raise InvalidCredentialsError()

            if not self.password_hasher.verify(request.password, user.credential.value):
                if self.lockout_guard.record_failed_login(identifier):
                    self._raise_locked(request, identifier, user)
                self._audit(
                    request,
                    AuditEventKind.FAILED_LOGIN,
                    identifier,
                    user=user,
                    reason="invalid_password",
                )
                raise InvalidCredentialsError()

            self.lockout_guard.reset_failed_logins(identifier)
            self._audit(request, AuditEventKind.LOGIN, identifier, user=user, success=True)

            token = self.jwt_service.create_token(user_id=str(user.id), email=user.email)
            logfire.info("User logged in", user_id=str(user.id))
            return LoginResponse(token=token, user=AccountInfo.from_user(user))

    def _raise_locked(self, request: LoginRequest, identifier: str, user: User | None):
        status = self.lockout_guard.is_account_locked(identifier)
        remaining = status.remaining_seconds or int(
            self.lockout_guard.duration_seconds
        )
        self._audit(
            request,
            AuditEventKind.ACCOUNT_LOCKED,
            identifier,
            user=user,
            remaining_seconds=remaining,
        )
        raise AccountLockedError(retry_after=remaining)

    def _audit(
        self,
        request: LoginRequest,
        event: AuditEventKind,
        identifier: str,
        user: User | None = None,
        success: bool = False,
        **metadata,
    ) -> None:
        self.audit_log.append(
            AuditEvent(
                event=event,
                success=success,
                user_id=user.id if user else None,
                handle=str(user.handle) if user and user.handle else identifier,
                email=user.email if user else None,
                client_address=request.client_address,
                user_agent=request.user_agent,
                metadata=metadata,
            )
        )
