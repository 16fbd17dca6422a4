"""Google infrastructure providers."""

from dishka import Scope, provide

from quest.adapter.google import GoogleOAuthClient, RealGoogleOAuthClient
from quest.config import Settings
from quest.util.di.base import ProviderBase


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
            Google OAuth client using the configured app credentials
        """
        google = settings.auth.google
        return RealGoogleOAuthClient(
            client_id=google.client_id,
            client_secret=google.client_secret,
            redirect_uri=google.callback_url,
            timeout=google.timeout_seconds,
        )
