"""Account registration repository implementation using PostgreSQL."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from quest.domain.model import (
    AccountConflict,
    AccountCreated,
    BootstrapOutcome,
    User,
    UserCharacter,
    UserIdentity,
)
from quest.domain.repository import AccountRegistrationRepository
from quest.persistence.mappers import (
    user_character_to_dict,
    user_identity_to_dict,
    user_to_dict,
)
from quest.persistence.tables import (
    PROVIDER_IDENTITY_CONSTRAINT,
    user_characters_table,
    user_identities_table,
    users_table,
)


def is_provider_identity_violation(error: IntegrityError) -> bool:
    """Whether an IntegrityError comes from the provider identity constraint."""
    return PROVIDER_IDENTITY_CONSTRAINT in str(error.orig)


class PostgresAccountRegistrationRepository(AccountRegistrationRepository):
    """PostgreSQL implementation of AccountRegistrationRepository.

    Runs in its own short transaction, separate from the request session,
    so the new account is committed before any token is issued and a
    concurrent registration blocks only for the three inserts.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory for short-lived registration sessions
        """
        self.session_factory = session_factory

    async def register(
        self, user: User, identity: UserIdentity, character: UserCharacter
    ) -> BootstrapOutcome:
        """Insert user, identity and character in one transaction.

        Args:
            user: The user to create
            identity: The identity linking the provider subject to the user
            character: The user's starter character

        Returns:
            AccountCreated, or AccountConflict if the identity already exists

        Raises:
            IntegrityError: For constraint violations other than the identity
            SQLAlchemyError: For any other database failure
        """
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    await session.execute(
                        users_table.insert().values(**user_to_dict(user))
                    )
                    await session.execute(
                        user_identities_table.insert().values(
                            **user_identity_to_dict(identity)
                        )
                    )
                    await session.execute(
                        user_characters_table.insert().values(
                            **user_character_to_dict(character)
                        )
                    )
        except IntegrityError as e:
            if is_provider_identity_violation(e):
                return AccountConflict(
                    provider=identity.provider,
                    provider_user_id=identity.provider_user_id,
                )
            raise

        return AccountCreated(user=user, identity=identity, character=character)
