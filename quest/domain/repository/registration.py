"""Account registration repository interface."""

from abc import ABC, abstractmethod

from quest.domain.model import BootstrapOutcome, User, UserCharacter, UserIdentity


class AccountRegistrationRepository(ABC):
    """Writes a brand-new account as a single atomic unit.

    Implementations must persist the user, its identity and its character
    together or not at all, and must rely on the uniqueness of
    (provider, provider_user_id) to detect a concurrent registration of the
    same identity.
    """

    @abstractmethod
    async def register(
        self, user: User, identity: UserIdentity, character: UserCharacter
    ) -> BootstrapOutcome:
        """Persist a new account.

        Args:
            user: The user to create
            identity: The identity linking the provider subject to the user
            character: The user's starter character

        Returns:
            AccountCreated when all three rows were committed, or
            AccountConflict when the identity is already linked

        Raises:
            Exception: Any storage failure other than the identity conflict
        """
        pass
