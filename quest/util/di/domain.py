"""Domain layer DI providers."""

from dishka import Scope, provide

from quest.config import AccountSettings, AuthSettings
from quest.domain.repository import (
    AccountRegistrationRepository,
    UserIdentityRepository,
    UserRepository,
)
from quest.domain.service import (
    AuthService,
    JWTService,
    OAuthClient,
    RegistrationService,
    UserIdentityService,
    UserService,
)
from quest.domain.value import AuthProvider
from quest.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self, oauth_clients: dict[AuthProvider, OAuthClient]
    ) -> AuthService:
        """Provide multi-provider authentication domain service.

        Args:
            oauth_clients: Dictionary mapping providers to their OAuth clients

        Returns:
            AuthService configured with all available OAuth clients
        """
        return AuthService(oauth_clients=oauth_clients)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_user_identity_service(
        self,
        user_identity_repository: UserIdentityRepository,
        user_repository: UserRepository,
    ) -> UserIdentityService:
        """Provide user identity domain service."""
        return UserIdentityService(
            user_identity_repository=user_identity_repository,
            user_repository=user_repository,
        )

    @provide
    def get_registration_service(
        self,
        registration_repository: AccountRegistrationRepository,
        account_settings: AccountSettings,
    ) -> RegistrationService:
        """Provide account bootstrap domain service."""
        return RegistrationService(
            registration_repository=registration_repository,
            account_settings=account_settings,
        )
