"""Federated (identity provider) login use case."""

import logfire
from pydantic import BaseModel

from quill.domain.model import AuditEvent
from quill.domain.security import AuditLog
from quill.domain.service import AuthService, JWTService, UserService
from quill.domain.value import AuditEventKind, AuthProvider


class OAuthLoginRequest(BaseModel):
    """OAuth callback parameters plus client metadata."""

    provider: AuthProvider
    code: str
    state: str
    client_address: str = "unknown"
    user_agent: str | None = None


class OAuthLoginResponse(BaseModel):
    """Session token for a federated sign-in."""

    token: str
    user_id: str
    is_new_user: bool
    profile_complete: bool


class OAuthLoginUseCase:
    """Use case for signing in through an identity provider."""

    def __init__(
        self,
        auth_service: AuthService,
        user_service: UserService,
        jwt_service: JWTService,
        audit_log: AuditLog,
    ) -> None:
        """Initialize OAuth login use case.

        Args:
            auth_service: Authentication domain service (dispatches to providers)
            user_service: User domain service
            jwt_service: JWT token domain service
            audit_log: Shared audit log
        """
        self.auth_service = auth_service
        self.user_service = user_service
        self.jwt_service = jwt_service
        self.audit_log = audit_log

    async def execute(self, request: OAuthLoginRequest) -> OAuthLoginResponse:
        """Execute federated login.

        Steps:
        1. Complete the OAuth exchange with the provider
        2. Resolve the user by email, creating a pending-profile user if new
        3. Record a login audit event and issue a session token

        Args:
            request: OAuth callback parameters

        Returns:
            Session token and whether profile setup is still required

        Raises:
            ProviderError: If the provider exchange fails
        """
        info = await self.auth_service.complete_login(
            request.provider, request.code, request.state
        )

        with logfire.span("oauth_login.execute", provider=info.provider.value):
            user = await self.user_service.find_by_email(info.email)
            is_new_user = user is None
            if user is None:
                user = await self.user_service.create_user(
                    email=info.email.lower(),
                    display_name=info.display_name or info.email.split("@")[0],
                    avatar_url=info.avatar_url,
                )

            self.audit_log.append(
                AuditEvent(
                    event=AuditEventKind.LOGIN,
                    success=True,
                    user_id=user.id,
                    handle=str(user.handle) if user.handle else None,
                    email=user.email,
                    client_address=request.client_address,
                    user_agent=request.user_agent,
                    metadata={"provider": info.provider.value, "new_user": is_new_user},
                )
            )

            token = self.jwt_service.create_token(user_id=str(user.id), email=user.email)
            return OAuthLoginResponse(
                token=token,
                user_id=str(user.id),
                is_new_user=is_new_user,
                profile_complete=user.profile_complete,
            )
