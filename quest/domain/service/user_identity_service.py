"""User identity domain service."""

import logfire

from quest.domain.error import NotFoundError
from quest.domain.model import LinkedAccount, UserIdentity
from quest.domain.repository import UserIdentityRepository, UserRepository
from quest.domain.value import AuthProvider, UserId


class UserIdentityService:
    """Domain service for user identity operations."""

    def __init__(
        self,
        user_identity_repository: UserIdentityRepository,
        user_repository: UserRepository,
    ) -> None:
        """Initialize user identity service.

        Args:
            user_identity_repository: User identity repository
            user_repository: User repository
        """
        self.user_identity_repository = user_identity_repository
        self.user_repository = user_repository

    async def resolve(
        self, provider: AuthProvider, provider_user_id: str
    ) -> LinkedAccount | None:
        """Find the account an external identity is linked to.

        Looks up by (provider, provider_user_id) only. Email is never used
        for matching since it can be missing or shared across providers.

        Args:
            provider: Authentication provider
            provider_user_id: Provider-specific user ID

        Returns:
            The linked identity and its user, or None if not linked

        Raises:
            NotFoundError: If the identity points at a missing user
        """
        with logfire.span(
            "user_identity_service.resolve",
            provider=provider.value,
            provider_user_id=provider_user_id,
        ):
            identity = await self.user_identity_repository.find_by_provider(
                provider, provider_user_id
            )
            if not identity:
                logfire.info(
                    "Identity not linked",
                    provider=provider.value,
                    provider_user_id=provider_user_id,
                )
                return None

            user = await self.user_repository.find_by_id(identity.user_id)
            if not user:
                logfire.error(
                    "Identity points at missing user",
                    provider=provider.value,
                    provider_user_id=provider_user_id,
                    user_id=str(identity.user_id),
                )
                raise NotFoundError("User", str(identity.user_id))

            logfire.info(
                "Identity resolved",
                provider=provider.value,
                provider_user_id=provider_user_id,
                user_id=str(user.id),
            )
            return LinkedAccount(identity=identity, user=user)

    async def get_all_identities_for_user(self, user_id: UserId) -> list[UserIdentity]:
        """Get all identities linked to a user.

        Args:
            user_id: User ID

        Returns:
            List of identities (may be empty)
        """
        with logfire.span(
            "user_identity_service.get_all_identities_for_user", user_id=str(user_id)
        ):
            identities = await self.user_identity_repository.find_all_by_user_id(
                user_id
            )
            logfire.info(
                "Identities retrieved for user",
                user_id=str(user_id),
                count=len(identities),
            )
            return identities
