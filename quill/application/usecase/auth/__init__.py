"""Authentication use cases."""

from .get_current_user import GetCurrentUserRequest, GetCurrentUserUseCase
from .login import LoginRequest, LoginResponse, LoginUseCase
from .logout import LogoutRequest, LogoutUseCase
from .oauth_login import OAuthLoginRequest, OAuthLoginResponse, OAuthLoginUseCase
from .register import RegisterRequest, RegisterUseCase

__all__ = [
    "GetCurrentUserRequest",
    "GetCurrentUserUseCase",
    "LoginRequest",
    "LoginResponse",
    "LoginUseCase",
    "LogoutRequest",
    "LogoutUseCase",
    "OAuthLoginRequest",
    "OAuthLoginResponse",
    "OAuthLoginUseCase",
    "RegisterRequest",
    "RegisterUseCase",
]
