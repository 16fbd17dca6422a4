"""Login use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from quest.application.usecase.base import BaseUseCase
from quest.domain.error import AccountProvisioningFailedError
from quest.domain.model import AccountConflict, AccountCreated, User
from quest.domain.service import (
    AuthService,
    JWTService,
    RegistrationService,
    UserIdentityService,
)
from quest.domain.value import AuthProvider, OAuthProviderInfo


class LoginRequest(BaseModel):
    """Login request from OAuth callback.

    These parameters come from the OAuth provider in the callback URL.
    """

    provider: AuthProvider  # Which provider is handling this login
    code: str  # OAuth authorization code (single-use)
    state: str  # State parameter echoed by the provider


class UserSummary(BaseModel):
    """Public user fields returned after login."""

    id: str
    email: str | None
    name: str | None
    avatar_url: str | None
    created_at: datetime


class LoginResponse(BaseModel):
    """Login response."""

    token: str
    user_id: str
    is_new_account: bool
    user: UserSummary


class LoginUseCase(BaseUseCase):
    """Use case for signing in with an external identity provider."""

    def __init__(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        user_identity_service: UserIdentityService,
        registration_service: RegistrationService,
    ) -> None:
        """Initialize login use case.

        Args:
            auth_service: Authentication domain service (handles all providers)
            jwt_service: JWT token domain service
            user_identity_service: Resolves identities to existing accounts
            registration_service: Bootstraps accounts for unlinked identities
        """
        self.auth_service = auth_service
        self.jwt_service = jwt_service
        self.user_identity_service = user_identity_service
        self.registration_service = registration_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute the login flow.

        Steps:
        1. Exchange the authorization code for a verified identity
        2. Resolve the identity to an existing account
        3. If linked: use that account
        4. If not linked: bootstrap a new account; if a concurrent login
           bootstrapped it first, resolve once more and use that account
        5. Issue a session token

        Only the re-resolve in step 4 is ever retried. The authorization
        code is single-use, so a failed exchange is never repeated.

        Args:
            request: Login request with OAuth callback parameters

        Returns:
            Login response with session token and user summary

        Raises:
            IdentityExchangeFailedError: If the provider rejects the code
            AccountProvisioningFailedError: If a new account cannot be created
        """
        provider_info = await self.auth_service.complete_login(
            request.provider, request.code, request.state
        )

        logfire.info(
            "OAuth completed",
            provider=provider_info.provider.value,
            provider_user_id=provider_info.provider_user_id,
        )

        with logfire.span(
            "login_user",
            provider=provider_info.provider.value,
            provider_user_id=provider_info.provider_user_id,
        ):
            linked = await self.user_identity_service.resolve(
                provider_info.provider, provider_info.provider_user_id
            )

            if linked:
                user = linked.user
                is_new_account = False
                logfire.info("Existing user logged in", user_id=str(user.id))
            else:
                user, is_new_account = await self._bootstrap(provider_info)

            token = self.jwt_service.create_token(user.id)

            return LoginResponse(
                token=token,
                user_id=str(user.id),
                is_new_account=is_new_account,
                user=UserSummary(
                    id=str(user.id),
                    email=user.email,
                    name=user.name,
                    avatar_url=user.avatar_url,
                    created_at=user.created_at,
                ),
            )

    async def _bootstrap(self, provider_info: OAuthProviderInfo) -> tuple[User, bool]:
        """Create the account, recovering from a lost registration race.

        Args:
            provider_info: Verified identity from the provider

        Returns:
            The user and whether this call created it

        Raises:
            AccountProvisioningFailedError: If the account cannot be created
        """
        provider = provider_info.provider
        provider_user_id = provider_info.provider_user_id

        try:
            outcome = await self.registration_service.bootstrap(provider_info)
        except Exception as e:
            logfire.error(
                "Account bootstrap failed",
                provider=provider.value,
                provider_user_id=provider_user_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise AccountProvisioningFailedError(
                provider.value, provider_user_id, type(e).__name__
            ) from e

        if isinstance(outcome, AccountCreated):
            return outcome.user, True

        if isinstance(outcome, AccountConflict):
            # The concurrent writer has committed by the time our insert
            # conflicted, so a single re-resolve must find it.
            linked = await self.user_identity_service.resolve(
                provider, provider_user_id
            )
            if linked:
                logfire.info(
                    "Recovered from registration race", user_id=str(linked.user.id)
                )
                return linked.user, False

            logfire.error(
                "Identity conflict but no linked account found",
                provider=provider.value,
                provider_user_id=provider_user_id,
            )
            raise AccountProvisioningFailedError(
                provider.value, provider_user_id, "conflict without linked account"
            )

        raise AccountProvisioningFailedError(
            provider.value, provider_user_id, f"unexpected outcome {outcome!r}"
        )
