"""User identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from quest.domain.model.user_identity import UserIdentity
from quest.domain.value import AuthProvider, UserId


class UserIdentityRepository(ABC):
    """Read access to the links between users and provider subjects.

    Links are only ever created by AccountRegistrationRepository, together
    with the user they point at.
    """

    @abstractmethod
    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[UserIdentity]:
        """Return the link for a provider subject, or None if unlinked."""
        pass

    @abstractmethod
    async def find_all_by_user_id(self, user_id: UserId) -> list[UserIdentity]:
        """Return every link owned by a user (may be empty)."""
        pass
