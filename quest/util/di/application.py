"""Application layer DI providers."""

from dishka import Scope, provide

from quest.application.usecase.auth import GetCurrentUserUseCase, LoginUseCase
from quest.domain.service import (
    AuthService,
    JWTService,
    RegistrationService,
    UserIdentityService,
    UserService,
)
from quest.interface.api.security import SessionGuard
from quest.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        user_identity_service: UserIdentityService,
        registration_service: RegistrationService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            auth_service=auth_service,
            jwt_service=jwt_service,
            user_identity_service=user_identity_service,
            registration_service=registration_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self,
        user_service: UserService,
        user_identity_service: UserIdentityService,
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(
            user_service=user_service,
            user_identity_service=user_identity_service,
        )

    # Request authentication
    @provide(scope=Scope.REQUEST)
    def get_session_guard(self, jwt_service: JWTService) -> SessionGuard:
        """Provide bearer session guard."""
        return SessionGuard(jwt_service=jwt_service)
