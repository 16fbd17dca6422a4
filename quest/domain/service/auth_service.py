"""Authentication domain service."""

import logfire

from quest.domain.error import UnsupportedProviderError
from quest.domain.value.types import AuthProvider, OAuthProviderInfo

from .base import Service


class OAuthClient:
    """Generic OAuth client interface for all providers."""

    async def initiate_authorization(self, state: str) -> str:
        """Initiate OAuth authorization flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def complete_authorization(self, code: str, state: str) -> OAuthProviderInfo:
        """Exchange an authorization code for a verified identity.

        Called exactly once per code: codes are single-use, so a failed
        exchange is never retried.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter echoed by the provider

        Returns:
            Provider user information

        Raises:
            IdentityExchangeFailedError: If the code is rejected or the
                provider cannot be reached
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for multi-provider authentication operations."""

    def __init__(self, oauth_clients: dict[AuthProvider, OAuthClient]) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of provider to OAuth client implementation
        """
        self.oauth_clients = oauth_clients

    def _get_client(self, provider: AuthProvider) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if not client:
            logfire.warn("No OAuth client registered", provider=provider.value)
            raise UnsupportedProviderError(provider.value)
        return client

    async def initiate_login(self, provider: AuthProvider, state: str) -> str:
        """Initiate OAuth login flow for any provider.

        Args:
            provider: Authentication provider to use
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to

        Raises:
            UnsupportedProviderError: If provider not supported
        """
        return await self._get_client(provider).initiate_authorization(state)

    async def complete_login(
        self, provider: AuthProvider, code: str, state: str
    ) -> OAuthProviderInfo:
        """Complete OAuth login flow for any provider.

        Args:
            provider: Authentication provider used
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            User authentication information from provider

        Raises:
            UnsupportedProviderError: If provider not supported
            IdentityExchangeFailedError: If the provider rejects the code
        """
        client = self._get_client(provider)
        with logfire.span("auth_service.complete_login", provider=provider.value):
            return await client.complete_authorization(code, state)
