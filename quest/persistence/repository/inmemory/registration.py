"""In-memory account registration repository for testing."""

from quest.domain.model import (
    AccountConflict,
    AccountCreated,
    BootstrapOutcome,
    User,
    UserCharacter,
    UserIdentity,
)
from quest.domain.repository import AccountRegistrationRepository

from .store import InMemoryStore


class InMemoryAccountRegistrationRepository(AccountRegistrationRepository):
    """In-memory implementation of AccountRegistrationRepository for testing.

    The uniqueness check and the three writes run without awaiting, so no
    other coroutine can interleave: the same guarantee the unique constraint
    and transaction give in PostgreSQL.
    """

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def register(
        self, user: User, identity: UserIdentity, character: UserCharacter
    ) -> BootstrapOutcome:
        """Register a new account, or report the identity as taken."""
        for existing in self._store.identities:
            if (
                existing.provider == identity.provider
                and existing.provider_user_id == identity.provider_user_id
            ):
                return AccountConflict(
                    provider=identity.provider,
                    provider_user_id=identity.provider_user_id,
                )

        if user.id in self._store.users:
            raise ValueError(f"User {user.id} already exists")

        self._store.users[user.id] = user
        self._store.identities.append(identity)
        self._store.characters.append(character)
        return AccountCreated(user=user, identity=identity, character=character)
