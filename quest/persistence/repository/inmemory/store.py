"""Shared state for the in-memory repositories."""

from quest.domain.model import User, UserCharacter, UserIdentity
from quest.domain.value import UserId


class InMemoryStore:
    """Rows shared by the in-memory repositories of one test environment.

    Registration writes here and the read repositories read from here, the
    same way the PostgreSQL repositories share one database.
    """

    def __init__(self) -> None:
        self.users: dict[UserId, User] = {}
        self.identities: list[UserIdentity] = []
        self.characters: list[UserCharacter] = []
