"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from quest.domain.model.user import User
from quest.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Read-only by contract: users are written only through
    AccountRegistrationRepository.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass
