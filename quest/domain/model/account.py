"""Results of resolving and bootstrapping accounts.

Bootstrap returns one of these values instead of raising, so the login flow
can tell "someone else just created this account" apart from a real failure.
"""

from quest.domain.model.common import DomainModel
from quest.domain.model.user import User
from quest.domain.model.user_character import UserCharacter
from quest.domain.model.user_identity import UserIdentity
from quest.domain.value import AuthProvider


class LinkedAccount(DomainModel):
    """An external identity that is already linked to a user."""

    identity: UserIdentity
    user: User


class AccountCreated(DomainModel):
    """Bootstrap committed a new user, identity and character."""

    user: User
    identity: UserIdentity
    character: UserCharacter


class AccountConflict(DomainModel):
    """Bootstrap lost the race: the identity was linked by a concurrent login."""

    provider: AuthProvider
    provider_user_id: str


BootstrapOutcome = AccountCreated | AccountConflict
