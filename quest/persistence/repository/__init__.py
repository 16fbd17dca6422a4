"""PostgreSQL repository implementations."""

from quest.persistence.repository.registration import (
    PostgresAccountRegistrationRepository,
)
from quest.persistence.repository.user import PostgresUserRepository
from quest.persistence.repository.user_identity_repository import (
    PostgresUserIdentityRepository,
)

__all__ = [
    "PostgresAccountRegistrationRepository",
    "PostgresUserRepository",
    "PostgresUserIdentityRepository",
]
