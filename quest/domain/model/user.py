"""User aggregate root.

Users sign in through an external identity provider; the account itself is
provider-agnostic and may have several linked identities.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from quest.domain.model.common import DomainModel, utcnow
from quest.domain.value import UserId


class User(DomainModel):
    """User aggregate root.

    Only created by account bootstrap, together with its first identity and
    its starter companion character.
    """

    id: UserId
    email: Optional[str] = None
    name: Optional[str] = None  # Display name from the provider
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
