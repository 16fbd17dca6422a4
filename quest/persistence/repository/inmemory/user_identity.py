"""In-memory user identity repository for testing."""

from typing import Optional

from quest.domain.model import UserIdentity
from quest.domain.repository import UserIdentityRepository
from quest.domain.value import AuthProvider, UserId

from .store import InMemoryStore


class InMemoryUserIdentityRepository(UserIdentityRepository):
    """In-memory implementation of UserIdentityRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[UserIdentity]:
        """Find user identity by provider and provider user ID."""
        for identity in self._store.identities:
            if (
                identity.provider == provider
                and identity.provider_user_id == provider_user_id
            ):
                return identity
        return None

    async def find_all_by_user_id(self, user_id: UserId) -> list[UserIdentity]:
        """Find all identities for a user."""
        matches = [i for i in self._store.identities if i.user_id == user_id]
        matches.sort(key=lambda i: i.created_at)
        return matches
