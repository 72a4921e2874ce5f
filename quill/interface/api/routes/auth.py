"""Authentication routes."""

import logging
import secrets
from urllib.parse import quote

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from quill.adapter.error import ProviderError
from quill.application.usecase.auth import (
    GetCurrentUserUseCase,
    LoginUseCase,
    LogoutUseCase,
    OAuthLoginUseCase,
    RegisterUseCase,
)
from quill.application.usecase.auth.login import LoginRequest
from quill.application.usecase.auth.logout import LogoutRequest
from quill.application.usecase.auth.oauth_login import OAuthLoginRequest
from quill.application.usecase.auth.register import RegisterRequest
from quill.application.usecase.common import AccountInfo
from quill.config import Settings
from quill.domain.error import (
    AccountLockedError,
    ConflictError,
    InvalidCredentialsError,
    RateLimitedError,
    StorageError,
    ValidationError,
)
from quill.domain.service import AuthService
from quill.domain.value import AuthProvider
from quill.interface.api.errors import storage_failure, too_many_requests
from quill.interface.api.forms import FormBody
from quill.interface.api.session import (
    clear_auth_cookie,
    client_address,
    optional_user,
    set_auth_cookie,
    user_agent,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)

# Binds an OAuth callback to the browser that started the flow
OAUTH_STATE_COOKIE = "oauth_state"
OAUTH_STATE_MAX_AGE = 600


class RegisterAPIRequest(FormBody):
    """API request for credentials registration.

    Empty fields are rejected by the use case, after the attempt has been
    counted against the registration budget.
    """

    email: str = ""
    password: str = ""
    handle: str = ""
    nickname: str = ""


class LoginAPIRequest(FormBody):
    """API request for credentials login."""

    handle: str = ""
    password: str = ""


class LoginAPIResponse(BaseModel):
    """Login response; the token itself travels in the cookie."""

    user: AccountInfo


class InitiateLoginResponse(BaseModel):
    """Initiate login response."""

    authorization_url: str


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


class AuthStatusResponse(BaseModel):
    """Response for checking authentication status.

    Used by /auth/me to return current user if authenticated,
    or indicate unauthenticated state without raising an error.
    """

    authenticated: bool
    user: AccountInfo | None = None


@router.post("/register", response_model=AccountInfo, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterAPIRequest,
    request: Request,
    register_use_case: FromDishka[RegisterUseCase],
) -> AccountInfo:
    """Register an account with email, password, handle and nickname.

    Raises:
        HTTPException: 400 malformed input, 409 email or handle taken,
            429 too many registrations from this address
    """
    try:
        return await register_use_case.execute(
            RegisterRequest(
                email=body.email,
                password=body.password,
                handle=body.handle,
                nickname=body.nickname,
                client_address=client_address(request),
                user_agent=user_agent(request),
            )
        )
    except RateLimitedError as e:
        raise too_many_requests(e)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except StorageError as e:
        raise storage_failure(e, "register")


@router.post("/login", response_model=LoginAPIResponse)
async def login(
    body: LoginAPIRequest,
    request: Request,
    response: Response,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
) -> LoginAPIResponse:
    """Sign in with handle and password.

    Example:
        POST /auth/login
        {"handle": "@alice", "password": "Secret123"}

        Sets cookie: auth_token

    Raises:
        HTTPException: 400 missing fields, 401 bad credentials,
            429 locked out or rate limited
    """
    if not body.handle or not body.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Handle and password are required",
        )

    try:
        result = await login_use_case.execute(
            LoginRequest(
                handle=body.handle,
                password=body.password,
                client_address=client_address(request),
                user_agent=user_agent(request),
            )
        )
    except (AccountLockedError, RateLimitedError) as e:
        raise too_many_requests(e)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except StorageError as e:
        raise storage_failure(e, "login")

    set_auth_cookie(response, result.token, settings)
    return LoginAPIResponse(user=result.user)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    request: Request,
    response: Response,
    logout_use_case: FromDishka[LogoutUseCase],
    settings: FromDishka[Settings],
    auth_token: str | None = Cookie(default=None),
) -> LogoutResponse:
    """Logout user by clearing authentication cookie."""
    await logout_use_case.execute(
        LogoutRequest(
            token=auth_token,
            client_address=client_address(request),
            user_agent=user_agent(request),
        )
    )
    clear_auth_cookie(response, settings)
    return LogoutResponse(success=True, message="Successfully logged out")


@router.get("/me", response_model=AuthStatusResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AuthStatusResponse:
    """Get current user if authenticated, or return unauthenticated status.

    Safe to call without a session: a missing, stale or orphaned token
    yields ``authenticated=false`` rather than an error.

    Examples:
        Authenticated:
        {
            "authenticated": true,
            "user": {"user_id": "...", "handle": "@alice", ...}
        }

        Unauthenticated:
        {
            "authenticated": false,
            "user": null
        }
    """
    try:
        user = await optional_user(auth_token, get_current_user_use_case)
    except StorageError as e:
        raise storage_failure(e, "me")
    return AuthStatusResponse(authenticated=user is not None, user=user)


@router.get("/login/google", response_model=InitiateLoginResponse)
async def initiate_google_login(
    response: Response,
    auth_service: FromDishka[AuthService],
    settings: FromDishka[Settings],
) -> InitiateLoginResponse:
    """Start the Google sign-in flow.

    Returns the provider authorization URL and pins the generated state to
    this browser with a short-lived cookie.
    """
    state = secrets.token_urlsafe(32)
    try:
        auth_url = await auth_service.initiate_login(AuthProvider.GOOGLE, state)
    except ProviderError as e:
        logger.error(f"Failed to initiate Google login: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to initiate login",
        )

    response.set_cookie(
        key=OAUTH_STATE_COOKIE,
        value=state,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/auth",
        max_age=OAUTH_STATE_MAX_AGE,
    )
    return InitiateLoginResponse(authorization_url=auth_url)


@router.get("/callback/google")
async def google_callback(
    code: str,
    state: str,
    request: Request,
    oauth_login_use_case: FromDishka[OAuthLoginUseCase],
    settings: FromDishka[Settings],
    oauth_state: str | None = Cookie(default=None),
):
    """Handle the Google OAuth callback and complete login.

    Issues the session cookie and redirects to the frontend, or to profile
    setup when the account has no handle yet. Failures redirect to the
    frontend error page instead of rendering JSON.

    Example:
        GET /auth/callback/google?code=abc123&state=xyz789

        Redirects to: http://localhost:3000/
        Sets cookie: auth_token
    """
    frontend_url = settings.api.frontend_url

    if not oauth_state or not secrets.compare_digest(oauth_state, state):
        logger.warning("OAuth callback state mismatch")
        return _error_redirect(frontend_url, "state_mismatch", "Sign-in session expired")

    try:
        result = await oauth_login_use_case.execute(
            OAuthLoginRequest(
                provider=AuthProvider.GOOGLE,
                code=code,
                state=state,
                client_address=client_address(request),
                user_agent=user_agent(request),
            )
        )
    except ProviderError as e:
        logger.error(f"Google OAuth error during callback: {e}")
        return _error_redirect(frontend_url, "auth_failed", "Sign-in failed")
    except (ConflictError, StorageError) as e:
        logger.error(f"Could not complete Google sign-in: {e}")
        return _error_redirect(frontend_url, "unexpected", "Sign-in failed")

    logger.info(f"Google login successful for user: {result.user_id}")

    target = frontend_url if result.profile_complete else f"{frontend_url}/setup-profile"
    redirect_response = RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)
    set_auth_cookie(redirect_response, result.token, settings)
    redirect_response.delete_cookie(key=OAUTH_STATE_COOKIE, path="/auth")
    return redirect_response


def _error_redirect(frontend_url: str, error: str, message: str) -> RedirectResponse:
    return RedirectResponse(
        url=f"{frontend_url}/auth/error?error={error}&message={quote(message)}",
        status_code=status.HTTP_302_FOUND,
    )
