"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from quest.config import Settings
from quest.domain.repository import (
    AccountRegistrationRepository,
    UserIdentityRepository,
    UserRepository,
)
from quest.persistence.database import create_engine, create_session_factory
from quest.persistence.repository import (
    PostgresAccountRegistrationRepository,
    PostgresUserIdentityRepository,
    PostgresUserRepository,
)
from quest.util.di.base import ProviderBase
from quest.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the app container closes."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide the read session for one request.

        Request-scoped repositories only read; writes go through the
        registration repository's own transaction. Whatever the session
        left open is rolled back when the request ends.
        """
        async with session_factory() as session:
            yield session
            if session.in_transaction():
                await session.rollback()
                logfire.debug("Read session closed")

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_user_identity_repository(
        self, session: AsyncSession
    ) -> UserIdentityRepository:
        """Provide UserIdentity repository."""
        return PostgresUserIdentityRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_registration_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AccountRegistrationRepository:
        """Provide account registration repository.

        Uses the session factory rather than the request session: each
        registration commits in its own transaction.
        """
        return PostgresAccountRegistrationRepository(session_factory)
