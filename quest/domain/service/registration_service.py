"""Account registration domain service."""

from uuid import uuid4

import logfire

from quest.config import AccountSettings
from quest.domain.model import (
    AccountConflict,
    AccountCreated,
    BootstrapOutcome,
    User,
    UserCharacter,
    UserIdentity,
)
from quest.domain.model.common import utcnow
from quest.domain.repository import AccountRegistrationRepository
from quest.domain.value import (
    CharacterCode,
    OAuthProviderInfo,
    UserCharacterId,
    UserId,
    UserIdentityId,
)

from .base import Service


class RegistrationService(Service):
    """Domain service that bootstraps new accounts.

    A new account is a user, the identity it signed in with and an active
    starter character. All three are handed to the repository at once so
    they are committed (or rejected) together.
    """

    def __init__(
        self,
        registration_repository: AccountRegistrationRepository,
        account_settings: AccountSettings,
    ) -> None:
        """Initialize registration service.

        Args:
            registration_repository: Atomic account registration repository
            account_settings: Defaults for newly created accounts
        """
        self.registration_repository = registration_repository
        self.account_settings = account_settings

    async def bootstrap(self, provider_info: OAuthProviderInfo) -> BootstrapOutcome:
        """Create a user, its linked identity and its starter character.

        Must only be called after the identity failed to resolve. A
        concurrent login for the same identity may win the race, in which
        case AccountConflict is returned and nothing is written.

        Args:
            provider_info: Verified identity from the provider

        Returns:
            AccountCreated or AccountConflict

        Raises:
            Exception: Any storage failure other than the identity conflict
        """
        now = utcnow()
        user_id = UserId(uuid4())

        user = User(
            id=user_id,
            email=provider_info.email,
            name=provider_info.display_name,
            avatar_url=provider_info.avatar_url,
            created_at=now,
            updated_at=now,
        )
        identity = UserIdentity(
            id=UserIdentityId(uuid4()),
            user_id=user_id,
            provider=provider_info.provider,
            provider_user_id=provider_info.provider_user_id,
            provider_email=provider_info.email,
            created_at=now,
            updated_at=now,
        )
        character = UserCharacter(
            id=UserCharacterId(uuid4()),
            user_id=user_id,
            character_code=CharacterCode(self.account_settings.default_character_code),
            nickname=self.account_settings.default_character_nickname,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

        with logfire.span(
            "registration_service.bootstrap",
            provider=provider_info.provider.value,
            provider_user_id=provider_info.provider_user_id,
        ):
            outcome = await self.registration_repository.register(
                user, identity, character
            )

            if isinstance(outcome, AccountConflict):
                logfire.warn(
                    "Account already registered by concurrent login",
                    provider=outcome.provider.value,
                    provider_user_id=outcome.provider_user_id,
                )
            elif isinstance(outcome, AccountCreated):
                logfire.info(
                    "New account created",
                    user_id=str(outcome.user.id),
                    provider=outcome.identity.provider.value,
                    character_code=outcome.character.character_code.value,
                )
            return outcome
