"""Google OAuth 2.0 client implementation.

Implements the authorization code flow against Google's OAuth 2.0 and
userinfo endpoints.
"""

from urllib.parse import urlencode

import httpx
import logfire

from quest.domain.error import IdentityExchangeFailedError
from quest.domain.service.auth_service import OAuthClient
from quest.domain.value.types import AuthProvider, OAuthProviderInfo


class GoogleOAuthClient(OAuthClient):
    """Base class for Google OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealGoogleOAuthClient(GoogleOAuthClient):
    """Google OAuth 2.0 client.

    Makes a single attempt per call; authorization codes are single-use and
    short-lived, so retrying an exchange is never correct.
    """

    authorize_url = "https://accounts.google.com/o/oauth2/v2/auth"
    token_url = "https://oauth2.googleapis.com/token"
    user_info_url = "https://www.googleapis.com/oauth2/v2/userinfo"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Google OAuth client.

        Args:
            client_id: Google OAuth client ID
            client_secret: Google OAuth client secret
            redirect_uri: Callback URL registered with Google
            timeout: Timeout in seconds for each provider request
            transport: Optional httpx transport (used by tests)
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self._transport = transport

    async def initiate_authorization(self, state: str) -> str:
        """Build the Google consent screen URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": "openid email profile",
            "access_type": "online",
            "prompt": "select_account",
            "state": state,
        }

        logfire.info(
            "Google OAuth authorization initiated", redirect_uri=self.redirect_uri
        )

        return f"{self.authorize_url}?{urlencode(params)}"

    async def complete_authorization(self, code: str, state: str) -> OAuthProviderInfo:
        """Exchange the code and fetch the user's Google profile.

        Args:
            code: Authorization code from Google callback
            state: State parameter (verified by the caller)

        Returns:
            User information from Google

        Raises:
            IdentityExchangeFailedError: If the exchange or profile fetch fails
        """
        _ = state  # Verified against the state cookie by the route
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self._transport
        ) as client:
            access_token = await self._exchange_code_for_token(client, code)
            user_info = await self._get_user_info(client, access_token)

        subject = user_info.get("id")
        if not subject:
            logfire.error("Google userinfo response missing id")
            raise IdentityExchangeFailedError(
                AuthProvider.GOOGLE.value, "userinfo response missing id"
            )

        logfire.info("Google OAuth completed", provider_user_id=str(subject))

        return OAuthProviderInfo(
            provider=AuthProvider.GOOGLE,
            provider_user_id=str(subject),
            email=user_info.get("email"),
            display_name=user_info.get("name"),
            avatar_url=user_info.get("picture"),
        )

    async def _exchange_code_for_token(
        self, client: httpx.AsyncClient, code: str
    ) -> str:
        """Exchange authorization code for access token.

        Args:
            client: HTTP client
            code: Authorization code from callback

        Returns:
            Access token

        Raises:
            IdentityExchangeFailedError: If token exchange fails
        """
        data = {
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "grant_type": "authorization_code",
        }

        try:
            response = await client.post(
                self.token_url,
                data=data,
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            logfire.error("Google token exchange HTTP error", error=str(e))
            raise IdentityExchangeFailedError(
                AuthProvider.GOOGLE.value, f"HTTP error during token exchange: {e}"
            ) from e

        if response.status_code != 200:
            logfire.error(
                "Google token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise IdentityExchangeFailedError(
                AuthProvider.GOOGLE.value,
                f"token exchange failed: {response.status_code}",
            )

        try:
            access_token = response.json()["access_token"]
        except (ValueError, KeyError, TypeError) as e:
            logfire.error("Google token response malformed", error=str(e))
            raise IdentityExchangeFailedError(
                AuthProvider.GOOGLE.value, "token response missing access_token"
            ) from e

        if not isinstance(access_token, str) or not access_token:
            logfire.error(
                "Google token response malformed", error="access_token not a string"
            )
            raise IdentityExchangeFailedError(
                AuthProvider.GOOGLE.value, "token response missing access_token"
            )

        return access_token

    async def _get_user_info(self, client: httpx.AsyncClient, access_token: str) -> dict:
        """Get user information from Google.

        Args:
            client: HTTP client
            access_token: OAuth access token

        Returns:
            User information dictionary

        Raises:
            IdentityExchangeFailedError: If API request fails
        """
        try:
            response = await client.get(
                self.user_info_url,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            logfire.error("Google userinfo HTTP error", error=str(e))
            raise IdentityExchangeFailedError(
                AuthProvider.GOOGLE.value, f"HTTP error fetching user info: {e}"
            ) from e

        if response.status_code != 200:
            logfire.error(
                "Google userinfo request failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise IdentityExchangeFailedError(
                AuthProvider.GOOGLE.value,
                f"user info request failed: {response.status_code}",
            )

        try:
            user_info = response.json()
        except ValueError as e:
            raise IdentityExchangeFailedError(
                AuthProvider.GOOGLE.value, "user info response is not JSON"
            ) from e

        if not isinstance(user_info, dict):
            logfire.error("Google userinfo response is not an object")
            raise IdentityExchangeFailedError(
                AuthProvider.GOOGLE.value, "user info response is not an object"
            )

        return user_info


class MockGoogleOAuthClient(GoogleOAuthClient):
    """Mock Google OAuth client for testing.

    Returns deterministic identities without making real API calls. Codes
    starting with ``invalid`` are rejected the way an expired code would be.
    """

    DEFAULT_IDENTITY = OAuthProviderInfo(
        provider=AuthProvider.GOOGLE,
        provider_user_id="mockgoogle123",
        email="mock@example.com",
        display_name="Mock Google User",
        avatar_url="https://example.com/avatar.jpg",
    )

    def __init__(self, identities: dict[str, OAuthProviderInfo] | None = None):
        """Initialize mock client.

        Args:
            identities: Optional map of authorization code to identity;
                unknown codes resolve to DEFAULT_IDENTITY
        """
        self.identities = identities or {}
        self.exchanged_codes: list[str] = []

    async def initiate_authorization(self, state: str) -> str:
        """Return mock authorization URL."""
        return f"{RealGoogleOAuthClient.authorize_url}?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> OAuthProviderInfo:
        """Return mock user information."""
        self.exchanged_codes.append(code)
        if code.startswith("invalid"):
            raise IdentityExchangeFailedError(
                AuthProvider.GOOGLE.value, "invalid_grant"
            )
        return self.identities.get(code, self.DEFAULT_IDENTITY)
