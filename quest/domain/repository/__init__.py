"""Repository interfaces for the Quest domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from quest.domain.repository.registration import AccountRegistrationRepository
from quest.domain.repository.user import UserRepository
from quest.domain.repository.user_identity import UserIdentityRepository

__all__ = [
    "AccountRegistrationRepository",
    "UserRepository",
    "UserIdentityRepository",
]
