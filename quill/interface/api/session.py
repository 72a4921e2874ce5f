"""Session cookie and client metadata helpers shared by routes."""

from fastapi import HTTPException, Request, Response, status

from quill.application.usecase.auth import GetCurrentUserUseCase
from quill.application.usecase.auth.get_current_user import GetCurrentUserRequest
from quill.application.usecase.common import AccountInfo
from quill.config import Settings
from quill.domain.error import NotFoundError
from quill.util.jwt import JWTError

AUTH_COOKIE = "auth_token"


def client_address(request: Request) -> str:
    """Best-effort client address.

    Prefers the first hop of X-Forwarded-For, then X-Real-IP, then the
    socket peer. Falls back to "unknown".
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def user_agent(request: Request) -> str | None:
    return request.headers.get("user-agent")


def set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the session cookie.

    Production serves the frontend from another origin, so the cookie must
    be ``SameSite=None; Secure`` there. Development stays on ``Lax`` over HTTP.
    """
    is_production = settings.is_production
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        secure=is_production,
        samesite="none" if is_production else "lax",
        domain=settings.auth.cookie_domain,
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )


def clear_auth_cookie(response: Response, settings: Settings) -> None:
    # Domain and path must match what set_auth_cookie used
    response.delete_cookie(
        key=AUTH_COOKIE,
        domain=settings.auth.cookie_domain,
        path="/",
    )


async def require_user(
    auth_token: str | None, get_current_user_use_case: GetCurrentUserUseCase
) -> AccountInfo:
    """Resolve the signed-in user or fail with 401.

    Args:
        auth_token: JWT from the session cookie
        get_current_user_use_case: Get current user use case

    Returns:
        The current account, freshly loaded from storage

    Raises:
        HTTPException: 401 if the cookie is missing, invalid, or orphaned
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    try:
        return await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=auth_token)
        )
    except (JWTError, NotFoundError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
        )


async def optional_user(
    auth_token: str | None, get_current_user_use_case: GetCurrentUserUseCase
) -> AccountInfo | None:
    """Resolve the signed-in user, or None for anonymous callers."""
    if not auth_token:
        return None
    try:
        return await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=auth_token)
        )
    except (JWTError, NotFoundError):
        return None
