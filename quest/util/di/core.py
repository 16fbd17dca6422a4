"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from quest.config import AccountSettings, AuthSettings, Settings, load_settings
from quest.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file; missing
    required values raise ConfigurationError when the container first
    resolves them.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return load_settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_account_settings(self, settings: Settings) -> AccountSettings:
        """Provide new-account defaults."""
        return settings.account
