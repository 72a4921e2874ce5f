"""Application layer DI providers."""

from dishka import Scope, provide

from quill.config import Settings
from quill.util.di.base import ProviderBase
from quill.application.usecase.admin import EnsureAdminUseCase, ListAuditEventsUseCase
from quill.application.usecase.auth import (
    GetCurrentUserUseCase,
    LoginUseCase,
    LogoutUseCase,
    OAuthLoginUseCase,
    RegisterUseCase,
)
from quill.application.usecase.post import (
    CreatePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
)
from quill.application.usecase.profile import CheckHandleUseCase, SetupProfileUseCase
from quill.application.usecase.user import (
    FollowUserUseCase,
    GetUserProfileUseCase,
    UnfollowUserUseCase,
)
from quill.domain.security import AuditLog, LockoutGuard, RateLimiter
from quill.domain.service import (
    AuthService,
    JWTService,
    PasswordHasher,
    PostService,
    SocialGraphService,
    UserService,
)


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_register_use_case(
        self,
        user_service: UserService,
        password_hasher: PasswordHasher,
        rate_limiter: RateLimiter,
        audit_log: AuditLog,
        settings: Settings,
    ) -> RegisterUseCase:
        """Provide registration use case."""
        return RegisterUseCase(
            user_service=user_service,
            password_hasher=password_hasher,
            rate_limiter=rate_limiter,
            audit_log=audit_log,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        user_service: UserService,
        password_hasher: PasswordHasher,
        jwt_service: JWTService,
        rate_limiter: RateLimiter,
        lockout_guard: LockoutGuard,
        audit_log: AuditLog,
        settings: Settings,
    ) -> LoginUseCase:
        """Provide credentials login use case."""
        return LoginUseCase(
            user_service=user_service,
            password_hasher=password_hasher,
            jwt_service=jwt_service,
            rate_limiter=rate_limiter,
            lockout_guard=lockout_guard,
            audit_log=audit_log,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_oauth_login_use_case(
        self,
        auth_service: AuthService,
        user_service: UserService,
        jwt_service: JWTService,
        audit_log: AuditLog,
    ) -> OAuthLoginUseCase:
        """Provide federated login use case."""
        return OAuthLoginUseCase(
            auth_service=auth_service,
            user_service=user_service,
            jwt_service=jwt_service,
            audit_log=audit_log,
        )

    @provide(scope=Scope.REQUEST)
    def get_logout_use_case(
        self, jwt_service: JWTService, audit_log: AuditLog
    ) -> LogoutUseCase:
        """Provide logout use case."""
        return LogoutUseCase(jwt_service=jwt_service, audit_log=audit_log)

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(jwt_service=jwt_service, user_service=user_service)

    # Profile use cases
    @provide(scope=Scope.REQUEST)
    def get_setup_profile_use_case(self, user_service: UserService) -> SetupProfileUseCase:
        """Provide profile setup use case."""
        return SetupProfileUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_check_handle_use_case(self, user_service: UserService) -> CheckHandleUseCase:
        """Provide handle availability use case."""
        return CheckHandleUseCase(user_service=user_service)

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_post_use_case(self, post_service: PostService) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(self, post_service: PostService) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(post_service=post_service)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_user_profile_use_case(
        self,
        user_service: UserService,
        post_service: PostService,
        social_graph_service: SocialGraphService,
    ) -> GetUserProfileUseCase:
        """Provide public user profile use case."""
        return GetUserProfileUseCase(
            user_service=user_service,
            post_service=post_service,
            social_graph_service=social_graph_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_follow_user_use_case(
        self, user_service: UserService, social_graph_service: SocialGraphService
    ) -> FollowUserUseCase:
        """Provide follow use case."""
        return FollowUserUseCase(
            user_service=user_service, social_graph_service=social_graph_service
        )

    @provide(scope=Scope.REQUEST)
    def get_unfollow_user_use_case(
        self, user_service: UserService, social_graph_service: SocialGraphService
    ) -> UnfollowUserUseCase:
        """Provide unfollow use case."""
        return UnfollowUserUseCase(
            user_service=user_service, social_graph_service=social_graph_service
        )

    # Admin use cases
    @provide(scope=Scope.REQUEST)
    def get_ensure_admin_use_case(
        self,
        user_service: UserService,
        password_hasher: PasswordHasher,
        settings: Settings,
    ) -> EnsureAdminUseCase:
        """Provide administrator bootstrap use case."""
        return EnsureAdminUseCase(
            user_service=user_service,
            password_hasher=password_hasher,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_audit_events_use_case(self, audit_log: AuditLog) -> ListAuditEventsUseCase:
        """Provide audit log listing use case."""
        return ListAuditEventsUseCase(audit_log=audit_log)
