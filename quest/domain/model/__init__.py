"""Domain model entities for Quest."""

from quest.domain.model.account import (
    AccountConflict,
    AccountCreated,
    BootstrapOutcome,
    LinkedAccount,
)
from quest.domain.model.user import User
from quest.domain.model.user_character import UserCharacter
from quest.domain.model.user_identity import UserIdentity

__all__ = [
    "User",
    "UserIdentity",
    "UserCharacter",
    "LinkedAccount",
    "AccountCreated",
    "AccountConflict",
    "BootstrapOutcome",
]
