"""UserIdentity repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from quest.domain.model import UserIdentity
from quest.domain.repository import UserIdentityRepository
from quest.domain.value import AuthProvider, UserId
from quest.persistence.mappers import row_to_user_identity
from quest.persistence.tables import user_identities_table as identities


class PostgresUserIdentityRepository(UserIdentityRepository):
    """Reads identity links from ``user_identities``.

    Lookups by (provider, provider_user_id) hit the unique index behind
    ``uq_provider_identity``, so they return at most one row.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _fetch(self, stmt: Select) -> list[UserIdentity]:
        result = await self.session.execute(stmt)
        return [row_to_user_identity(dict(row)) for row in result.mappings()]

    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[UserIdentity]:
        """Get the identity for one provider subject, if linked."""
        matches = await self._fetch(
            select(identities).where(
                identities.c.provider == provider.value,
                identities.c.provider_user_id == provider_user_id,
            )
        )
        return matches[0] if matches else None

    async def find_all_by_user_id(self, user_id: UserId) -> list[UserIdentity]:
        """Get a user's identities, oldest link first."""
        return await self._fetch(
            select(identities)
            .where(identities.c.user_id == user_id)
            .order_by(identities.c.created_at)
        )
