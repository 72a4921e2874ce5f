"""Adapter DI providers."""

from dishka import Scope, provide

from quill.adapter.password import BcryptPasswordHasher
from quill.config import AuthSettings
from quill.domain.service import PasswordHasher
from quill.util.di.base import ProviderBase


class ProdAdapterProvider(ProviderBase):
    """Local adapters with no external calls - concrete, no mocks needed."""

    scope = Scope.APP

    @provide
    def get_password_hasher(self, auth_settings: AuthSettings) -> PasswordHasher:
        """Provide bcrypt password hasher."""
        return BcryptPasswordHasher(rounds=auth_settings.bcrypt_rounds)
