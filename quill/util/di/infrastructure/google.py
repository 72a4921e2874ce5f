"""Google infrastructure providers."""

from dishka import Scope, provide

from quill.adapter.google import GoogleOAuthClient, RealGoogleOAuthClient
from quill.config import Settings
from quill.util.di.base import ProviderBase


class GoogleProvider(ProviderBase):
    """Google component base."""

    __mock_component__ = "google"


class ProdGoogleProvider(GoogleProvider):
    """Production Google provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_google_oauth_client(self, settings: Settings) -> GoogleOAuthClient:
        """Provide Google OAuth client.

        Returns:
            Google OAuth 2.0 client

        Raises:
            ValueError: If Google OAuth credentials are not configured
        """
        if not settings.auth.google.client_id:
            raise ValueError("Google OAuth client ID must be configured")
        if not settings.auth.google.client_secret:
            raise ValueError("Google OAuth client secret must be configured")

        return RealGoogleOAuthClient(
            client_id=settings.auth.google.client_id,
            client_secret=settings.auth.google.client_secret,
            redirect_uri=settings.auth.google_callback_url,
        )
