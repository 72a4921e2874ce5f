"""Administrator bootstrap use case."""

import logfire

from quill.config import Settings
from quill.domain.model import PasswordHash
from quill.domain.service import PasswordHasher, UserService
from quill.domain.value import Handle

ADMIN_HANDLE = "@admin"


class EnsureAdminUseCase:
    """Create the administrator account once, at startup.

    Runs only when ``AUTH__ADMIN_PASSWORD`` is set. An existing ``@admin``
    account is left untouched, including its password.
    """

    def __init__(
        self,
        user_service: UserService,
        password_hasher: PasswordHasher,
        settings: Settings,
    ) -> None:
        self.user_service = user_service
        self.password_hasher = password_hasher
        self.settings = settings

    async def execute(self) -> bool:
        """Create the admin account if configured and missing.

        Returns:
            True if an account was created
        """
        password = self.settings.auth.admin_password
        if not password:
            return False

        with logfire.span("ensure_admin.execute"):
            if await self.user_service.find_by_handle(ADMIN_HANDLE):
                logfire.info("Admin account already exists")
                return False

            await self.user_service.create_user(
                email=self.settings.auth.admin_email.lower(),
                display_name="Admin",
                handle=Handle(ADMIN_HANDLE),
                nickname="Admin",
                credential=PasswordHash(value=self.password_hasher.hash(password)),
                allow_reserved=True,
            )
            logfire.info("Admin account created", handle=ADMIN_HANDLE)
            return True
