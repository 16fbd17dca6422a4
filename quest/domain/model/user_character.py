"""User character entity.

The companion character a user levels up by completing goals. Level and
experience arithmetic live with the gamification features; this module only
describes the record created when an account is bootstrapped.
"""

from datetime import datetime

from pydantic import Field

from quest.domain.model.common import DomainModel, utcnow
from quest.domain.value import CharacterCode, UserCharacterId, UserId


class UserCharacter(DomainModel):
    """Character owned by a user."""

    id: UserCharacterId
    user_id: UserId
    character_code: CharacterCode
    nickname: str = Field(min_length=1, max_length=100)
    level: int = Field(default=1, ge=1)
    experience: int = Field(default=0, ge=0)
    is_active: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
