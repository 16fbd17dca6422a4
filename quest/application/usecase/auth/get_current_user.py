"""Get current user use case."""

from datetime import datetime

from pydantic import BaseModel

from quest.application.usecase.base import BaseUseCase
from quest.domain.service import UserIdentityService, UserService
from quest.domain.value import AuthProvider, UserId


class UserIdentityInfo(BaseModel):
    """Linked identity information for response."""

    provider: AuthProvider
    provider_email: str | None


class CurrentUserResponse(BaseModel):
    """Public profile of the authenticated user."""

    id: str
    email: str | None
    name: str | None
    avatar_url: str | None
    created_at: datetime
    identities: list[UserIdentityInfo]


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for loading the authenticated user's profile."""

    def __init__(
        self,
        user_service: UserService,
        user_identity_service: UserIdentityService,
    ) -> None:
        """Initialize get current user use case.

        Args:
            user_service: User domain service
            user_identity_service: User identity domain service
        """
        self.user_service = user_service
        self.user_identity_service = user_identity_service

    async def execute(self, user_id: UserId) -> CurrentUserResponse:
        """Load the profile of a user whose session was already verified.

        Args:
            user_id: User ID taken from a verified session token

        Returns:
            User profile

        Raises:
            NotFoundError: If user not found
        """
        user = await self.user_service.get_by_id(user_id)
        identities = await self.user_identity_service.get_all_identities_for_user(
            user.id
        )

        return CurrentUserResponse(
            id=str(user.id),
            email=user.email,
            name=user.name,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
            identities=[
                UserIdentityInfo(
                    provider=identity.provider,
                    provider_email=identity.provider_email,
                )
                for identity in identities
            ],
        )
