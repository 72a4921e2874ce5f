"""Domain services."""

from .auth_service import AuthService, OAuthClient
from .base import Service
from .jwt_service import JWTService
from .password_service import PasswordHasher, check_password_policy
from .post_service import PostService
from .social_graph_service import SocialGraphService
from .user_service import UserService

__all__ = [
    "AuthService",
    "JWTService",
    "OAuthClient",
    "PasswordHasher",
    "PostService",
    "Service",
    "SocialGraphService",
    "UserService",
    "check_password_policy",
]
