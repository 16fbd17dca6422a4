"""In-memory repository implementations for testing."""

from .registration import InMemoryAccountRegistrationRepository
from .store import InMemoryStore
from .user import InMemoryUserRepository
from .user_identity import InMemoryUserIdentityRepository

__all__ = [
    "InMemoryAccountRegistrationRepository",
    "InMemoryStore",
    "InMemoryUserRepository",
    "InMemoryUserIdentityRepository",
]
