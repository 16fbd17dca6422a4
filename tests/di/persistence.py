"""Mock persistence providers for testing."""

from dishka import Scope, provide

from quest.domain.repository import (
    AccountRegistrationRepository,
    UserIdentityRepository,
    UserRepository,
)
from quest.persistence.repository.inmemory import (
    InMemoryAccountRegistrationRepository,
    InMemoryStore,
    InMemoryUserIdentityRepository,
    InMemoryUserRepository,
)
from quest.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The store is APP-scoped so that every request against one container
    sees the same rows; each test builds its own container, so tests stay
    isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_store(self) -> InMemoryStore:
        """Provide the shared in-memory store."""
        return InMemoryStore()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, store: InMemoryStore) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_user_identity_repository(
        self, store: InMemoryStore
    ) -> UserIdentityRepository:
        """Provide in-memory user identity repository."""
        return InMemoryUserIdentityRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_registration_repository(
        self, store: InMemoryStore
    ) -> AccountRegistrationRepository:
        """Provide in-memory account registration repository."""
        return InMemoryAccountRegistrationRepository(store)
