"""Register use case."""

import logfire
from pydantic import BaseModel

from quill.application.usecase.base import BaseUseCase
from quill.application.usecase.common import AccountInfo
from quill.config import Settings
from quill.domain.error import RateLimitedError, ValidationError
from quill.domain.model import AuditEvent, PasswordHash
from quill.domain.security import AuditLog, RateLimiter
from quill.domain.service import PasswordHasher, UserService, check_password_policy
from quill.domain.service.user_service import (
    normalize_email,
    parse_handle,
    parse_nickname,
)
from quill.domain.value import AuditEventKind


class RegisterRequest(BaseModel):
    """Credentials registration request."""

    email: str
    password: str
    handle: str
    nickname: str
    client_address: str = "unknown"
    user_agent: str | None = None


class RegisterUseCase(BaseUseCase):
    """Use case for registering an account with email and password."""

    def __init__(
        self,
        user_service: UserService,
        password_hasher: PasswordHasher,
        rate_limiter: RateLimiter,
        audit_log: AuditLog,
        settings: Settings,
    ) -> None:
        """Initialize register use case.

        Args:
            user_service: User domain service
            password_hasher: Password hashing primitive
            rate_limiter: Shared rate limiter
            audit_log: Shared audit log
            settings: Application settings
        """
        self.user_service = user_service
        self.password_hasher = password_hasher
        self.rate_limiter = rate_limiter
        self.audit_log = audit_log
        self.settings = settings

    async def execute(self, request: RegisterRequest) -> AccountInfo:
        """Execute registration.

        Steps:
        1. Count the attempt against the per-address registration budget
        2. Reject empty fields, then validate email, password, handle and nickname before any lookup
        3. Create the user (duplicate email and taken handle are conflicts)
        4. Record a register audit event

        Registration deliberately reports which of email or handle is taken.

        Args:
            request: Registration form plus client metadata

        Returns:
            The new account

        Raises:
            RateLimitedError: If the address exceeded its registration budget
            ValidationError: If any field is malformed
            ConflictError: If the email or handle is already in use
        """
        security = self.settings.security
        key = f"register:{request.client_address}"
        if self.rate_limiter.check(
            key, security.register_rate_limit, security.register_rate_window_seconds
        ):
            logfire.warn("Registration rate limited", client_address=request.client_address)
            raise RateLimitedError(
                "Too many registration attempts. Try again later.",
                retry_after=self.rate_limiter.retry_after(key),
            )

        if not all((request.email, request.password, request.handle, request.nickname)):
            raise ValidationError("All fields are required")

        email = normalize_email(request.email)
        check_password_policy(request.password)
        handle = parse_handle(request.handle)
        nickname = parse_nickname(request.nickname)

        with logfire.span("register.execute", handle=str(handle)):
            user = await self.user_service.create_user(
                email=email,
                display_name=nickname,
                handle=handle,
                nickname=nickname,
                credential=PasswordHash(value=self.password_hasher.hash(request.password)),
            )

            self.audit_log.append(
                AuditEvent(
                    event=AuditEventKind.REGISTER,
                    success=True,
                    user_id=user.id,
                    handle=str(handle),
                    email=email,
                    client_address=request.client_address,
                    user_agent=request.user_agent,
                )
            )
            return AccountInfo.from_user(user)
