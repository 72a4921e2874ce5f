"""OAuth infrastructure provider for federated authentication."""

from dishka import Scope, provide

from quill.adapter.google import GoogleOAuthClient
from quill.domain.service.auth_service import OAuthClient
from quill.domain.value import AuthProvider
from quill.util.di.base import ProviderBase


class OAuthAggregatorProvider(ProviderBase):
    """Provider that aggregates all OAuth clients into a dictionary."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self, google_oauth_client: GoogleOAuthClient
    ) -> dict[AuthProvider, OAuthClient]:
        """Provide dictionary of all OAuth clients by provider.

        Args:
            google_oauth_client: Google OAuth client (specific type)

        Returns:
            Dictionary mapping AuthProvider to OAuthClient
        """
        return {AuthProvider.GOOGLE: google_oauth_client}
