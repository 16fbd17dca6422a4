"""User identity entity.

Links external authentication providers to user accounts.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from quest.domain.model.common import DomainModel, utcnow
from quest.domain.value import AuthProvider, UserId, UserIdentityId


class UserIdentity(DomainModel):
    """External authentication identity linked to a user account.

    The pair (provider, provider_user_id) is globally unique. An identity
    always points at the user it was created for.
    """

    id: UserIdentityId
    user_id: UserId
    provider: AuthProvider
    provider_user_id: str  # Permanent subject id from the provider
    provider_email: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
